import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.concurrency import run_in_threadpool

from app.core.config import settings
from app.core.database import check_db_connection, close_db_connection, init_db
from app.core.redis import close_redis, ping_redis
from app.engine.providers import ProviderRegistry

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """
    부팅: DB 연결 확인 및 테이블 생성, Redis 확인, 사용 가능한 AI 프로바이더 기록
    종료: Redis 연결과 DB 커넥션 풀 반환
    """
    await run_in_threadpool(check_db_connection)
    await run_in_threadpool(init_db)
    await ping_redis()

    providers = ProviderRegistry(settings).list_available_providers()
    if providers:
        logger.info(f"[Startup] AI providers in priority order: {', '.join(p.name for p in providers)}")
    else:
        logger.warning("[Startup] No AI provider configured. Generation endpoints will return 503.")
    logger.info(f"[Startup] {settings.PROJECT_NAME} ready ({settings.ENVIRONMENT})")

    yield

    await close_redis()
    await run_in_threadpool(close_db_connection)
