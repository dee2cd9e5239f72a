import logging
from typing import List

from sqlalchemy.orm import Session

from app.database.models import Connection
from app.schemas.connection import ConnectionCreate

logger = logging.getLogger(__name__)


class ConnectionService:
    """문의/뉴스레터 신청 저장"""

    def create(self, db: Session, payload: ConnectionCreate) -> Connection:
        connection = Connection(
            type=payload.type,
            email=payload.email,
            name=payload.name.strip() if payload.name else None,
            message=payload.message.strip() if payload.message else None,
        )
        db.add(connection)
        db.commit()
        db.refresh(connection)
        logger.info(f"[ConnectionService] New {connection.type} submission ID {connection.id}")
        return connection

    def list_all(self, db: Session) -> List[Connection]:
        return db.query(Connection).order_by(Connection.created_at.desc(), Connection.id.desc()).all()

    def delete(self, db: Session, connection_id: int) -> bool:
        connection = db.query(Connection).filter(Connection.id == connection_id).first()
        if not connection:
            return False
        db.delete(connection)
        db.commit()
        return True


connection_service = ConnectionService()
