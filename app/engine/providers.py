import logging
from typing import List

from app.core.config import Settings
from .schemas import ProviderConfig, ProviderKind

logger = logging.getLogger(__name__)


class ProviderRegistry:
    """
    설정된 API 키로부터 우선순위가 정해진 프로바이더 목록을 구성합니다.

    순서는 고정입니다.
    1. Groq: 가장 빠르고 저렴한 기본 프로바이더
    2. Gemini: 호출 전 필수 대기 시간이 있는 보조 프로바이더
    3. Backup: BACKUP_PROVIDER_KIND에 따라 OpenRouter 또는 OpenAI로 라우팅
    """

    def __init__(self, settings: Settings):
        self._settings = settings

    def list_available_providers(self) -> List[ProviderConfig]:
        """키가 존재하는 프로바이더만 우선순위 순서로 반환"""
        s = self._settings
        providers: List[ProviderConfig] = []

        if s.GROQ_API_KEY:
            providers.append(ProviderConfig(
                name="Groq (Llama 3)",
                kind=ProviderKind.GROQ,
                api_key=s.GROQ_API_KEY,
                base_url=s.GROQ_BASE_URL,
                model=s.GROQ_CHAT_MODEL,
            ))

        if s.GEMINI_API_KEY:
            providers.append(ProviderConfig(
                name="Gemini",
                kind=ProviderKind.GEMINI,
                api_key=s.GEMINI_API_KEY,
                base_url=s.GEMINI_BASE_URL,
                model=s.GEMINI_CHAT_MODEL,
                pre_call_delay_seconds=s.GEMINI_PRE_CALL_DELAY_SECONDS,
            ))

        if s.OPENROUTER_API_KEY:
            providers.append(self._backup_provider(s))

        if not providers:
            logger.warning("[ProviderRegistry] No AI provider credentials configured.")

        return providers

    def is_available(self) -> bool:
        s = self._settings
        return bool(s.GROQ_API_KEY or s.GEMINI_API_KEY or s.OPENROUTER_API_KEY)

    @staticmethod
    def _backup_provider(s: Settings) -> ProviderConfig:
        if s.BACKUP_PROVIDER_KIND == "openai":
            return ProviderConfig(
                name="OpenAI (Backup)",
                kind=ProviderKind.OPENAI,
                api_key=s.OPENROUTER_API_KEY,
                base_url=s.OPENAI_BASE_URL,
                model=s.OPENAI_CHAT_MODEL,
            )
        return ProviderConfig(
            name="OpenRouter (Backup)",
            kind=ProviderKind.OPENROUTER,
            api_key=s.OPENROUTER_API_KEY,
            base_url=s.OPENROUTER_BASE_URL,
            model=s.OPENROUTER_CHAT_MODEL,
            headers={"X-Title": s.OPENROUTER_APP_TITLE},
        )
