import sys
import logging
from typing import Optional
from uvicorn.logging import DefaultFormatter

from app.core.config import settings

# 요청/프로바이더 호출마다 찍히는 라이브러리 로그
NOISY_LOGGERS = ("httpx", "httpcore", "openai", "botocore", "aiobotocore", "urllib3")


def setup_logging(level: Optional[str] = None):
    """루트 로거에 stdout 핸들러를 달고 uvicorn 로거를 루트로 합칩니다."""
    formatter = DefaultFormatter(
        fmt="%(levelprefix)s %(asctime)s [%(name)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        use_colors=not settings.is_production,
    )
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    logging.basicConfig(level=(level or settings.LOG_LEVEL).upper(), handlers=[handler], force=True)

    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(name).handlers.clear()
        logging.getLogger(name).propagate = True

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
