from typing import List
from fastapi import APIRouter, Depends, HTTPException, Security, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.security import verify_admin_token
from app.schemas.common import ApiResponse, MessageResponse
from app.schemas.connection import ConnectionCreate, ConnectionResponse
from app.services.connection_service import connection_service

router = APIRouter(prefix="/api/connections", tags=["Connections"])


@router.post(
    "",
    summary="문의/뉴스레터 신청",
    response_model=ApiResponse[ConnectionResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_connection(payload: ConnectionCreate, db: Session = Depends(get_db)):
    connection = connection_service.create(db, payload)
    return ApiResponse(
        data=ConnectionResponse.model_validate(connection),
        message="Successfully submitted",
    )


@router.get(
    "",
    summary="신청 목록 (관리자)",
    response_model=ApiResponse[List[ConnectionResponse]],
    dependencies=[Security(verify_admin_token)],
)
def list_connections(db: Session = Depends(get_db)):
    connections = connection_service.list_all(db)
    return ApiResponse(data=[ConnectionResponse.model_validate(c) for c in connections])


@router.delete(
    "/{connection_id}",
    summary="신청 삭제 (관리자)",
    response_model=MessageResponse,
    dependencies=[Security(verify_admin_token)],
)
def delete_connection(connection_id: int, db: Session = Depends(get_db)):
    if not connection_service.delete(db, connection_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Connection not found")
    return MessageResponse(message="Connection deleted")
