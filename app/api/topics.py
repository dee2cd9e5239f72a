from fastapi import APIRouter, Depends, HTTPException, Security, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.security import verify_admin_token
from app.engine.schemas import Topic
from app.schemas.common import ApiResponse, MessageResponse
from app.schemas.topic import TopicCreate, TopicListResponse, TopicUpdate
from app.services.generation_service import GenerationService, get_generation_service
from app.services.topic_service import topic_service

router = APIRouter(prefix="/api/blog/topics", tags=["Topics"], dependencies=[Security(verify_admin_token)])

TOPIC_NOT_FOUND = "Topic not found"


@router.get(
    "",
    summary="토픽 목록",
    description="기본 토픽과 사용자 정의 토픽을 합쳐 반환합니다. 같은 id는 사용자 정의 토픽이 우선합니다.",
    response_model=TopicListResponse,
)
def list_topics(
    db: Session = Depends(get_db),
    generation: GenerationService = Depends(get_generation_service),
):
    return TopicListResponse(
        data=topic_service.list_merged(db),
        ai_available=generation.is_available(),
    )


@router.post(
    "",
    summary="토픽 생성",
    response_model=ApiResponse[Topic],
    status_code=status.HTTP_201_CREATED,
)
def create_topic(payload: TopicCreate, db: Session = Depends(get_db)):
    try:
        topic = topic_service.create(db, payload)
    except ValueError as e:
        # TopicAlreadyExistsError 포함
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return ApiResponse(data=Topic(id=topic.id, name=topic.name, description=topic.description))


@router.put("/{topic_id}", summary="토픽 수정", response_model=ApiResponse[Topic])
def update_topic(topic_id: str, payload: TopicUpdate, db: Session = Depends(get_db)):
    topic = topic_service.update(db, topic_id, payload)
    if not topic:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=TOPIC_NOT_FOUND)
    return ApiResponse(data=Topic(id=topic.id, name=topic.name, description=topic.description))


@router.delete("/{topic_id}", summary="토픽 삭제", response_model=MessageResponse)
def delete_topic(topic_id: str, db: Session = Depends(get_db)):
    if not topic_service.delete(db, topic_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=TOPIC_NOT_FOUND)
    return MessageResponse(message="Topic deleted successfully")
