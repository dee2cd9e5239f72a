import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from app.database.models import Topic as TopicModel
from app.engine.schemas import Topic
from app.engine.topics import list_topics, slugify
from app.schemas.topic import TopicCreate, TopicUpdate

logger = logging.getLogger(__name__)


class TopicAlreadyExistsError(ValueError):
    pass


class TopicService:
    """기본 토픽 + 사용자 정의 토픽 관리"""

    def list_merged(self, db: Session) -> List[Topic]:
        """기본 토픽을 먼저 넣고, 같은 id의 사용자 정의 토픽이 있으면 덮어씁니다."""
        merged = {t.id: t for t in list_topics()}
        for row in db.query(TopicModel).order_by(TopicModel.name.asc()).all():
            merged[row.id] = Topic(id=row.id, name=row.name, description=row.description)
        return list(merged.values())

    def get(self, db: Session, topic_id: str) -> Optional[TopicModel]:
        return db.query(TopicModel).filter(TopicModel.id == topic_id).first()

    def create(self, db: Session, payload: TopicCreate) -> TopicModel:
        topic_id = slugify(payload.name)
        if not topic_id:
            raise ValueError("Name must contain letters or digits")
        if self.get(db, topic_id):
            raise TopicAlreadyExistsError("Topic already exists")

        topic = TopicModel(
            id=topic_id,
            name=payload.name.strip(),
            description=(payload.description or payload.name).strip(),
        )
        db.add(topic)
        db.commit()
        db.refresh(topic)
        logger.info(f"[TopicService] Created topic '{topic_id}'")
        return topic

    def update(self, db: Session, topic_id: str, payload: TopicUpdate) -> Optional[TopicModel]:
        topic = self.get(db, topic_id)
        if not topic:
            return None
        if payload.name:
            topic.name = payload.name.strip()
        if payload.description:
            topic.description = payload.description.strip()
        db.commit()
        db.refresh(topic)
        return topic

    def delete(self, db: Session, topic_id: str) -> bool:
        topic = self.get(db, topic_id)
        if not topic:
            return False
        db.delete(topic)
        db.commit()
        return True


topic_service = TopicService()
