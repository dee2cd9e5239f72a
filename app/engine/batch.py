import asyncio
import logging
from typing import List, Optional, Sequence

from app.core.config import settings
from .nodes.generation import Sleep
from .orchestrator import GenerationOrchestrator
from .schemas import GenerationOutcome, InternalLink

logger = logging.getLogger(__name__)

NOT_CONFIGURED_MESSAGE = "AI API key not configured"


class BatchGenerator:
    """단일 글 생성을 N번 반복하고, 실패한 시도가 있어도 나머지를 계속 진행합니다."""

    def __init__(
        self,
        orchestrator: GenerationOrchestrator,
        sleep: Sleep = asyncio.sleep,
        request_delay_seconds: float = settings.AI_BATCH_REQUEST_DELAY_SECONDS,
        max_posts: int = settings.AI_BATCH_MAX_POSTS,
    ):
        self.orchestrator = orchestrator
        self.sleep = sleep
        self.request_delay_seconds = request_delay_seconds
        self.max_posts = max_posts

    async def generate(
        self,
        topic: str,
        count: int = 1,
        internal_links: Optional[Sequence[InternalLink]] = None,
    ) -> List[GenerationOutcome]:
        """
        count개의 글을 순차적으로 생성합니다.

        Args:
            topic: 토픽 ID 또는 자유 형식 토픽
            count: 생성할 글 수 (1 ~ max_posts)
            internal_links: 본문에 넣을 내부 링크 힌트

        Returns:
            시도 순서대로 정렬된 GenerationOutcome 리스트.
            프로바이더가 하나도 없으면 실패 결과 1개만 반환합니다.

        Raises:
            ValueError: topic이 비어 있거나 count가 범위를 벗어난 경우
        """
        if not topic or not topic.strip():
            raise ValueError("Topic is required")
        if count < 1 or count > self.max_posts:
            raise ValueError(f"Count must be between 1 and {self.max_posts}")

        if not self.orchestrator.is_available():
            logger.error(f"[Batch] {NOT_CONFIGURED_MESSAGE}")
            return [GenerationOutcome.failed(NOT_CONFIGURED_MESSAGE)]

        results: List[GenerationOutcome] = []
        for i in range(count):
            logger.info(f"[Batch] Generating post {i + 1}/{count} for topic '{topic}'")
            try:
                outcome = await self.orchestrator.generate(topic, internal_links)
            except Exception as e:
                logger.error(f"[Batch] Generation {i + 1}/{count} crashed: {e}", exc_info=True)
                outcome = GenerationOutcome.failed(str(e))
            results.append(outcome)

            # 마지막 요청 이후에는 대기하지 않음
            if i < count - 1:
                await self.sleep(self.request_delay_seconds)

        succeeded = sum(1 for r in results if r.success)
        logger.info(f"[Batch] Finished: {succeeded}/{count} succeeded for topic '{topic}'")
        return results
