import logging
from fastapi import Depends, HTTPException, Request
from redis.asyncio import Redis
from redis.exceptions import RedisError
from starlette import status

from app.core.config import settings
from app.core.redis import get_redis, incr_with_window

logger = logging.getLogger(__name__)

RATE_LIMIT_KEY_PREFIX = "rate_limit"


def _client_ip(request: Request) -> str:
    # 프록시(Cloudflare 등) 뒤에서는 첫 번째 X-Forwarded-For 값이 실제 클라이언트
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


async def enforce_rate_limit(request: Request, redis: Redis = Depends(get_redis)):
    """
    IP별 고정 윈도우 요청 제한

    윈도우(RATE_LIMIT_WINDOW_SECONDS) 내 요청 수가 RATE_LIMIT_MAX_REQUESTS를 넘으면 429를 반환합니다.
    Redis 장애 시에는 요청을 막지 않고 경고만 남깁니다.
    """
    key = f"{RATE_LIMIT_KEY_PREFIX}:{_client_ip(request)}"

    try:
        count = await incr_with_window(redis, key, settings.RATE_LIMIT_WINDOW_SECONDS)
    except RedisError as e:
        logger.warning(f"[RateLimit] Redis unavailable, skipping rate limit: {e}")
        return

    if count > settings.RATE_LIMIT_MAX_REQUESTS:
        logger.warning(f"[RateLimit] Limit exceeded for {key}: {count}/{settings.RATE_LIMIT_MAX_REQUESTS}")
        window_minutes = settings.RATE_LIMIT_WINDOW_SECONDS // 60
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=f"Too many requests from this IP, please try again after {window_minutes} minutes"
        )
