import logging
from typing import Iterator
from sqlalchemy import create_engine, text
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker, declarative_base
from app.core.config import settings

logger = logging.getLogger(__name__)


def _engine_kwargs(db_url: str) -> dict:
    # SQLite(로컬/테스트)는 스레드풀에서 같은 커넥션을 쓰므로 스레드 검사를 끔
    if make_url(db_url).get_backend_name() == "sqlite":
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True, "pool_size": 5, "max_overflow": 10}


engine = create_engine(settings.DB_URL, **_engine_kwargs(settings.DB_URL))
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db() -> Iterator[Session]:
    """요청 단위 세션 (요청 종료 시 반환)"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """blog_post, topic, connection 테이블이 없으면 생성"""
    from app.database import models  # noqa: F401  (Base.metadata 등록용)

    Base.metadata.create_all(bind=engine)
    logger.info(f"[Database] Tables ready: {', '.join(sorted(Base.metadata.tables))}")


def check_db_connection():
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(f"[Database] Connection check failed ({engine.url.render_as_string(hide_password=True)}): {e}")
        raise


def close_db_connection():
    engine.dispose()
    logger.info("[Database] Connection pool disposed.")
