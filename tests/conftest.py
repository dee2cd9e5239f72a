"""Shared fixtures: in-memory SQLite session, FastAPI test client, fake generation service."""

import os

# app.core.config는 import 시점에 Settings()를 만들기 때문에 먼저 환경 변수를 채운다
os.environ.setdefault("ADMIN_SECRET_KEY", "test-admin-key")
os.environ.setdefault("DB_URL", "sqlite://")
os.environ.setdefault("AWS_S3_BUCKET", "test-bucket")
os.environ.setdefault("AWS_ACCESS_KEY_ID", "test-access-key")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "test-secret-key")
os.environ["ENVIRONMENT"] = "development"
for _key in ("GROQ_API_KEY", "GEMINI_API_KEY", "OPENROUTER_API_KEY"):
    os.environ[_key] = ""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import settings
from app.core.database import Base, get_db
from app.core.rate_limit import enforce_rate_limit
from app.database import models  # noqa: F401
from app.engine.schemas import GeneratedPost, GenerationOutcome
from app.main import app
from app.schemas.generation import GenerationResult
from app.services.generation_service import get_generation_service


# =============================================================================
# Helpers
# =============================================================================

def make_settings(**overrides):
    """기본 테스트 설정에 일부 값만 덮어쓴 Settings 사본"""
    return settings.model_copy(update=overrides)


def make_post(title="Getting Started with AI Tools", category="ai-tools", **overrides) -> GeneratedPost:
    data = dict(
        title=title,
        content="# Intro\n\n" + "Useful words about tooling. " * 10,
        excerpt="A short summary.",
        meta_title="AI Tools Guide",
        meta_description="Everything about AI tools.",
        keywords=["ai", "tools"],
        tags=["ai", "productivity"],
        category=category,
        reading_time=6,
        provider="Groq (Llama 3)",
    )
    data.update(overrides)
    return GeneratedPost(**data)


class FakeGenerationService:
    """API 테스트용 생성 서비스: 프로바이더 호출 없이 준비된 결과를 반환"""

    def __init__(self, available=True, preview_outcome=None, result=None):
        self.available = available
        self.preview_outcome = preview_outcome or GenerationOutcome.succeeded(make_post())
        self.result = result
        self.requests = []

    def is_available(self) -> bool:
        return self.available

    async def preview(self, topic, internal_links=()):
        self.requests.append(("preview", topic, list(internal_links)))
        return self.preview_outcome

    async def generate_and_save(self, db, request):
        self.requests.append(("generate", request.topic, request.count))
        return self.result or GenerationResult(generated=0, failed=0, posts=[])


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def fake_generation():
    return FakeGenerationService()


@pytest.fixture
def client(db_session, fake_generation):
    async def no_rate_limit():
        return None

    app.dependency_overrides[get_db] = lambda: db_session
    app.dependency_overrides[enforce_rate_limit] = no_rate_limit
    app.dependency_overrides[get_generation_service] = lambda: fake_generation

    # lifespan(DB/Redis 워밍업)은 실행하지 않도록 컨텍스트 매니저 없이 사용
    yield TestClient(app)

    app.dependency_overrides.clear()
