import logging
import secrets
from fastapi import HTTPException, Security
from fastapi.security.api_key import APIKeyHeader
from starlette import status
from app.core.config import settings

logger = logging.getLogger(__name__)

ADMIN_TOKEN_NAME = "X-ADMIN-TOKEN"
admin_token_header = APIKeyHeader(name=ADMIN_TOKEN_NAME, auto_error=False)


async def verify_admin_token(header_value: str = Security(admin_token_header)):
    """
    관리자 토큰을 검증하는 함수

    production 환경이 아니면 토큰 없이도 통과시킵니다.

    Args:
        header_value: X-ADMIN-TOKEN 헤더 값

    Returns:
        Optional[str]: 검증된 관리자 토큰

    Raises:
        HTTPException: 유효하지 않은 관리자 토큰
    """
    if header_value is not None and secrets.compare_digest(header_value, settings.ADMIN_SECRET_KEY):
        return header_value
    if not settings.is_production:
        return header_value

    logger.warning("[Security] Rejected admin request with missing or invalid token.")
    raise HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail="Admin access required"
    )
