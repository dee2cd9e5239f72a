import logging
from typing import List, Optional, Sequence

from fastapi.concurrency import run_in_threadpool
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import Settings, settings
from app.engine.batch import BatchGenerator
from app.engine.orchestrator import GenerationOrchestrator
from app.engine.providers import ProviderRegistry
from app.engine.schemas import GenerationOutcome, InternalLink
from app.schemas.blog import BlogPostResponse
from app.schemas.generation import GenerationError, GenerationRequest, GenerationResult
from app.services.blog_service import blog_service

logger = logging.getLogger(__name__)


class GenerationService:
    """AI 글 생성 파이프라인 실행 및 결과 저장"""

    def __init__(
        self,
        app_settings: Settings = settings,
        orchestrator: Optional[GenerationOrchestrator] = None,
        batch: Optional[BatchGenerator] = None,
    ):
        self.orchestrator = orchestrator or GenerationOrchestrator(ProviderRegistry(app_settings))
        self.batch = batch or BatchGenerator(self.orchestrator)

    def is_available(self) -> bool:
        return self.orchestrator.is_available()

    async def preview(self, topic: str, internal_links: Sequence[InternalLink] = ()) -> GenerationOutcome:
        """글 1개를 생성만 하고 저장하지 않음"""
        logger.info(f"[Generation] Preview requested for topic '{topic}'")
        return await self.orchestrator.generate(topic, internal_links)

    async def generate_and_save(self, db: Session, request: GenerationRequest) -> GenerationResult:
        """
        요청된 수만큼 글을 생성하고 성공한 글은 초안으로 저장합니다.
        생성 실패와 저장 실패는 errors에 모아 함께 반환합니다.
        """
        outcomes = await self.batch.generate(request.topic, request.count, request.internal_links)

        saved: List[BlogPostResponse] = []
        errors: List[GenerationError] = []

        for outcome in outcomes:
            if not outcome.success:
                errors.append(GenerationError(error=outcome.error or "Unknown generation error"))
                continue
            try:
                post = await run_in_threadpool(blog_service.save_generated_post, db, outcome.post)
                saved.append(BlogPostResponse.model_validate(post))
            except (SQLAlchemyError, ValidationError) as e:
                logger.error(f"[Generation] Failed to save generated post '{outcome.post.title}': {e}")
                errors.append(GenerationError(title=outcome.post.title, error=str(e)))

        logger.info(f"[Generation] Saved {len(saved)} post(s), {len(errors)} error(s) for topic '{request.topic}'")
        return GenerationResult(
            generated=len(saved),
            failed=len(errors),
            posts=saved,
            errors=errors or None,
        )


generation_service = GenerationService()


def get_generation_service() -> GenerationService:
    return generation_service
