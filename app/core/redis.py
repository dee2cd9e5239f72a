import logging
from typing import Optional
from redis.asyncio import Redis

from app.core.config import settings

logger = logging.getLogger(__name__)

_client: Optional[Redis] = None


async def get_redis() -> Redis:
    """요청 제한 카운터용 Redis 클라이언트 (프로세스당 1개, 최초 요청 시 생성)"""
    global _client
    if _client is None:
        logger.info(f"[Redis] Connecting to {settings.REDIS_URL.rsplit('@', 1)[-1]}")
        _client = Redis.from_url(
            settings.REDIS_URL,
            decode_responses=True,
            socket_timeout=2.0,
            socket_connect_timeout=1.0,
            health_check_interval=30,
        )
    return _client


async def incr_with_window(redis: Redis, key: str, window_secs: int) -> int:
    """
    고정 윈도우 카운터를 1 증가시키고 현재 값을 반환합니다.
    윈도우의 첫 증가 시점에만 만료 시간을 설정합니다.
    """
    count = await redis.incr(key)
    if count == 1:
        await redis.expire(key, window_secs)
    return count


async def ping_redis():
    """Redis 응답 여부 확인 (실패 시 예외 전파)"""
    redis = await get_redis()
    try:
        await redis.ping()
    except Exception as e:
        logger.error(f"[Redis] Ping failed: {e}")
        raise


async def close_redis():
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None
        logger.info("[Redis] Connection closed.")
