import logging
from datetime import datetime, timezone
from fastapi import APIRouter
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from starlette import status

from app.core.config import settings
from app.core.database import check_db_connection
from app.core.redis import ping_redis

logger = logging.getLogger(__name__)

router = APIRouter(tags=["System"])


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("/health")
@router.get("/api/health")
async def liveness_check():
    """프로세스가 살아 있는지만 확인 (외부 의존성은 보지 않음)"""
    return {
        "success": True,
        "status": "UP",
        "message": f"{settings.PROJECT_NAME} is running",
        "timestamp": _now(),
    }


@router.get("/health/ready")
async def readiness_check():
    """DB와 Redis 각각의 상태를 보고하고, 하나라도 실패하면 503"""
    checks = {}
    try:
        await run_in_threadpool(check_db_connection)
        checks["database"] = "UP"
    except Exception as e:
        checks["database"] = "DOWN"
        logger.warning(f"[Health] Database not ready: {e}")

    try:
        await ping_redis()
        checks["redis"] = "UP"
    except Exception as e:
        checks["redis"] = "DOWN"
        logger.warning(f"[Health] Redis not ready: {e}")

    ready = all(state == "UP" for state in checks.values())
    return JSONResponse(
        status_code=status.HTTP_200_OK if ready else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "success": ready,
            "status": "READY" if ready else "NOT_READY",
            "checks": checks,
            "timestamp": _now(),
        },
    )
