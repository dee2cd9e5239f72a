"""API and service tests for AI post generation."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from app.engine.batch import BatchGenerator
from app.engine.schemas import GenerationOutcome
from app.schemas.generation import GenerationRequest, GenerationResult
from app.services.blog_service import blog_service
from app.services.generation_service import GenerationService

from conftest import make_post


# =============================================================================
# API
# =============================================================================

class TestGenerateRoute:

    def test_returns_503_when_no_provider(self, client, fake_generation):
        fake_generation.available = False

        response = client.post("/api/blog/generate", json={"topic": "ai-tools"})

        assert response.status_code == 503
        assert "GROQ_API_KEY" in response.json()["error"]
        assert fake_generation.requests == []

    def test_reports_generated_count(self, client, fake_generation):
        fake_generation.result = GenerationResult(generated=2, failed=1, posts=[], errors=[{"error": "boom"}])

        response = client.post("/api/blog/generate", json={"topic": " ai-tools ", "count": 3})

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Generated 2 posts successfully"
        assert body["data"]["failed"] == 1
        assert body["data"]["errors"] == [{"title": None, "error": "boom"}]
        assert fake_generation.requests == [("generate", "ai-tools", 3)]

    @pytest.mark.parametrize("payload", [
        {"topic": "   "},
        {"topic": "ai-tools", "count": 0},
        {"topic": "ai-tools", "count": 11},
        {"topic": "x" * 101},
    ])
    def test_invalid_request_is_400(self, client, fake_generation, payload):
        response = client.post("/api/blog/generate", json=payload)

        assert response.status_code == 400
        assert response.json()["success"] is False
        assert fake_generation.requests == []


class TestPreviewRoute:

    def test_returns_generated_post_without_saving(self, client, fake_generation):
        links = [{"anchor": "JSON formatter", "url": "/tools/json"}]

        response = client.post("/api/blog/generate/preview", json={"topic": "ai-tools", "internalLinks": links})

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["title"] == "Getting Started with AI Tools"
        assert data["aiGenerated"] is True
        assert data["readingTime"] == 6
        assert client.get("/api/blog").json()["data"] == []

    def test_exhaustion_is_502(self, client, fake_generation):
        fake_generation.preview_outcome = GenerationOutcome.failed("All AI Providers failed. Last error: 429")

        response = client.post("/api/blog/generate/preview", json={"topic": "ai-tools"})

        assert response.status_code == 502
        assert response.json()["error"] == "All AI Providers failed. Last error: 429"


# =============================================================================
# Service
# =============================================================================

def _service(outcomes) -> GenerationService:
    orchestrator = MagicMock()
    orchestrator.is_available.return_value = True
    orchestrator.generate = AsyncMock(side_effect=outcomes)
    batch = BatchGenerator(orchestrator, sleep=AsyncMock(), request_delay_seconds=0, max_posts=10)
    return GenerationService(orchestrator=orchestrator, batch=batch)


@pytest.mark.asyncio
async def test_generate_and_save_persists_successes_as_drafts(db_session):
    service = _service([
        GenerationOutcome.succeeded(make_post(title="Post One")),
        GenerationOutcome.failed("All AI Providers failed. Last error: 500"),
        GenerationOutcome.succeeded(make_post(title="Post Two")),
    ])

    result = await service.generate_and_save(db_session, GenerationRequest(topic="ai-tools", count=3))

    assert result.generated == 2
    assert result.failed == 1
    assert [p.slug for p in result.posts] == ["post-one", "post-two"]
    assert all(p.status == "draft" and p.author_id == "ai-generator" for p in result.posts)
    assert result.errors[0].error == "All AI Providers failed. Last error: 500"


@pytest.mark.asyncio
async def test_generate_and_save_without_failures_has_no_errors(db_session):
    service = _service([GenerationOutcome.succeeded(make_post())])

    result = await service.generate_and_save(db_session, GenerationRequest(topic="ai-tools"))

    assert result.generated == 1
    assert result.errors is None


@pytest.mark.asyncio
async def test_non_positive_reading_time_is_saved_as_one_minute(db_session, client):
    service = _service([
        GenerationOutcome.succeeded(make_post(title="Zero Minutes", reading_time=0)),
        GenerationOutcome.succeeded(make_post(title="Second")),
    ])

    result = await service.generate_and_save(db_session, GenerationRequest(topic="ai-tools", count=2))

    assert result.generated == 2
    assert [p.reading_time for p in result.posts] == [1, 6]
    assert client.get("/api/blog").status_code == 200


@pytest.mark.asyncio
async def test_unreadable_saved_row_is_reported_and_batch_continues(db_session):
    service = _service([
        GenerationOutcome.succeeded(make_post(title="Broken")),
        GenerationOutcome.succeeded(make_post(title="Second")),
    ])
    real_save = blog_service.save_generated_post
    saves = iter([lambda db, post: object(), real_save])

    def save(db, post):
        return next(saves)(db, post)

    with patch.object(blog_service, "save_generated_post", side_effect=save):
        result = await service.generate_and_save(db_session, GenerationRequest(topic="ai-tools", count=2))

    assert result.generated == 1
    assert result.posts[0].title == "Second"
    assert result.failed == 1
    assert result.errors[0].title == "Broken"
