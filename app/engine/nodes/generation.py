import logging
from typing import Awaitable, Callable, Sequence

from langchain_core.messages import BaseMessage

from ..extractor import ResponseExtractor
from ..schemas import GenerationOutcome, ProviderAttempt, ProviderCallResult, ProviderConfig
from ..state import GenerationState

logger = logging.getLogger(__name__)

NO_PROVIDERS_MESSAGE = "No AI Providers configured (Check .env)"

CallProvider = Callable[[ProviderConfig, Sequence[BaseMessage]], Awaitable[ProviderCallResult]]
Sleep = Callable[[float], Awaitable[None]]


class GenerationNodes:
    """
    생성 상태 머신의 노드와 라우터 모음

    SelectProvider -> Pace -> Call -> (Backoff -> Call | Accept | SelectProvider) 순서로 진행하며,
    모든 분기는 예외가 아닌 state 값(last_call.status, attempt)으로 결정됩니다.
    """

    def __init__(
        self,
        call_provider: CallProvider,
        extractor: ResponseExtractor,
        sleep: Sleep,
        max_retries: int,
        retry_delay_seconds: float,
    ):
        self.call_provider = call_provider
        self.extractor = extractor
        self.sleep = sleep
        self.max_retries = max_retries
        self.retry_delay_seconds = retry_delay_seconds

    async def select_provider(self, state: GenerationState):
        """다음 프로바이더 선택"""
        index = state["provider_index"]
        providers = state["providers"]

        if index >= len(providers):
            return {"current_provider": None, "stage": "exhausted"}

        provider = providers[index]
        logger.info(f"[SelectProvider] Attempting generation with: {provider.name}...")
        return {
            "current_provider": provider,
            "provider_index": index + 1,
            "attempt": 0,
            "last_call": None,
            "stage": "select_provider",
        }

    async def pace(self, state: GenerationState):
        """호출 전 필수 대기 시간이 있는 프로바이더는 대기"""
        provider = state["current_provider"]
        delay = provider.pre_call_delay_seconds
        if delay > 0:
            logger.info(f"[Pace] Waiting {delay}s before calling {provider.name}...")
            await self.sleep(delay)
        return {"stage": "pace"}

    async def call(self, state: GenerationState):
        """프로바이더 호출 1회"""
        provider = state["current_provider"]
        attempt = state["attempt"] + 1

        result = await self.call_provider(provider, state["messages"])

        record = ProviderAttempt(
            provider=provider.name,
            attempt=attempt,
            status=result.status,
            error=result.error,
        )
        update = {
            "attempt": attempt,
            "last_call": result,
            "attempts": state["attempts"] + [record],
            "stage": "call",
        }

        if result.status == "error":
            logger.error(f"[Call] Failed with {provider.name}: {result.error}")
            update["last_error"] = result.error
        elif result.status == "rate_limited":
            update["last_error"] = result.error
            if attempt > self.max_retries:
                logger.error(f"[Call] Rate limit retries exhausted for {provider.name}: {result.error}")

        return update

    async def backoff(self, state: GenerationState):
        """Rate limit 발생 시 고정 간격 대기 후 같은 프로바이더 재시도"""
        provider = state["current_provider"]
        retries_left = self.max_retries - state["attempt"]
        logger.warning(
            f"[Backoff] Rate limit hit for {provider.name}. "
            f"Retrying in {self.retry_delay_seconds}s... ({retries_left} retries left)"
        )
        await self.sleep(self.retry_delay_seconds)
        return {"stage": "backoff"}

    async def accept(self, state: GenerationState):
        """응답 원문을 블로그 글로 해석하고 성공 결과로 확정"""
        provider = state["current_provider"]
        post = self.extractor.extract(state["last_call"].text, state["topic"], provider=provider.name)
        logger.info(f"[Accept] Success with {provider.name}!")
        return {"outcome": GenerationOutcome.succeeded(post), "stage": "done"}

    async def fail(self, state: GenerationState):
        """모든 프로바이더 실패"""
        if not state["providers"]:
            message = NO_PROVIDERS_MESSAGE
        else:
            message = f"All AI Providers failed. Last error: {state['last_error']}"
        logger.error(f"[Fail] {message}")
        return {"outcome": GenerationOutcome.failed(message), "stage": "done"}

    def route_after_select(self, state: GenerationState) -> str:
        return "exhausted" if state["current_provider"] is None else "pace"

    def route_after_call(self, state: GenerationState) -> str:
        result = state["last_call"]
        if result.status == "ok":
            return "accept"
        if result.status == "rate_limited" and state["attempt"] <= self.max_retries:
            return "retry"
        return "next_provider"
