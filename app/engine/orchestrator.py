import asyncio
import logging
from typing import Optional, Sequence

from app.core.config import settings
from .extractor import ResponseExtractor, response_extractor
from .graph import create_generation_graph, recursion_limit_for
from .nodes import GenerationNodes, NO_PROVIDERS_MESSAGE
from .nodes.generation import CallProvider, Sleep
from .prompts import PromptBuilder, prompt_builder
from .providers import ProviderRegistry
from .schemas import GenerationOutcome, InternalLink
from .state import GenerationState
from .tasks.completion import request_completion

logger = logging.getLogger(__name__)


class GenerationOrchestrator:
    """
    토픽 하나에 대해 블로그 글 1개를 생성합니다.

    프로바이더는 우선순위대로 하나씩만 시도하며, rate limit은 같은 프로바이더에서 고정 간격으로
    재시도하고 그 외 에러는 즉시 다음 프로바이더로 넘어갑니다. 결과는 항상 GenerationOutcome 하나입니다.
    """

    def __init__(
        self,
        registry: ProviderRegistry,
        call_provider: CallProvider = request_completion,
        extractor: ResponseExtractor = response_extractor,
        builder: PromptBuilder = prompt_builder,
        sleep: Sleep = asyncio.sleep,
        max_retries: int = settings.AI_RATE_LIMIT_MAX_RETRIES,
        retry_delay_seconds: float = settings.AI_RATE_LIMIT_RETRY_DELAY_SECONDS,
    ):
        self.registry = registry
        self.builder = builder
        self.max_retries = max_retries
        self.nodes = GenerationNodes(
            call_provider=call_provider,
            extractor=extractor,
            sleep=sleep,
            max_retries=max_retries,
            retry_delay_seconds=retry_delay_seconds,
        )
        self.graph = create_generation_graph(self.nodes)

    def is_available(self) -> bool:
        return self.registry.is_available()

    async def run(
        self,
        topic: str,
        internal_links: Optional[Sequence[InternalLink]] = None,
    ) -> GenerationState:
        """상태 머신을 끝까지 실행하고 최종 state(시도 기록 포함)를 반환"""
        providers = self.registry.list_available_providers()
        prompt = self.builder.build(topic, internal_links)

        initial_state: GenerationState = {
            "topic": topic,
            "messages": self.builder.to_messages(prompt),
            "providers": providers,
            "stage": "start",
            "provider_index": 0,
            "current_provider": None,
            "attempt": 0,
            "last_call": None,
            "last_error": None,
            "attempts": [],
            "outcome": None,
        }

        logger.info(f"[Orchestrator] Starting generation for topic '{topic}' with {len(providers)} provider(s)")
        return await self.graph.ainvoke(
            initial_state,
            config={"recursion_limit": recursion_limit_for(len(providers), self.max_retries)},
        )

    async def generate(
        self,
        topic: str,
        internal_links: Optional[Sequence[InternalLink]] = None,
    ) -> GenerationOutcome:
        if not self.is_available():
            logger.error(f"[Orchestrator] {NO_PROVIDERS_MESSAGE}")
            return GenerationOutcome.failed(NO_PROVIDERS_MESSAGE)

        final_state = await self.run(topic, internal_links)
        return final_state["outcome"]
