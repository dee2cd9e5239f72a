import logging
from typing import Any, Optional, Sequence

import openai
from langchain_core.messages import BaseMessage
from langchain_openai import ChatOpenAI

from app.core.config import settings
from ..schemas import ProviderCallResult, ProviderConfig

logger = logging.getLogger(__name__)

RATE_LIMIT_STATUS = 429


def get_chat_model(provider: ProviderConfig, temperature: Optional[float] = None) -> ChatOpenAI:
    """
    프로바이더 설정에 맞는 OpenAI 호환 Chat 모델 반환

    재시도는 오케스트레이터가 직접 관리하므로 클라이언트 자체 재시도는 끕니다.
    """
    return ChatOpenAI(
        model=provider.model,
        api_key=provider.api_key,
        base_url=provider.base_url,
        default_headers=provider.headers or None,
        temperature=settings.AI_GENERATION_TEMPERATURE if temperature is None else temperature,
        timeout=settings.AI_PROVIDER_TIMEOUT_SECONDS,
        max_retries=0,
    )


def _code_from_body(body: Any) -> Any:
    if not isinstance(body, dict):
        return None
    if "code" in body:
        return body["code"]
    error = body.get("error")
    if isinstance(error, dict):
        return error.get("code")
    return None


def is_rate_limit_error(error: BaseException) -> bool:
    """HTTP 429 또는 그에 준하는 코드가 담긴 에러인지 판별"""
    if isinstance(error, openai.RateLimitError):
        return True

    status_code = getattr(error, "status_code", None) or getattr(error, "status", None)
    if status_code is not None and str(status_code) == str(RATE_LIMIT_STATUS):
        return True

    for code in (getattr(error, "code", None), _code_from_body(getattr(error, "body", None))):
        if code is not None and str(code) == str(RATE_LIMIT_STATUS):
            return True
    return False


def _message_text(content: Any) -> str:
    # 일부 모델은 content를 파트 리스트로 반환
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and part.get("type") == "text":
                parts.append(part.get("text", ""))
        return "".join(parts)
    return str(content or "")


async def request_completion(
    provider: ProviderConfig,
    messages: Sequence[BaseMessage],
) -> ProviderCallResult:
    """프로바이더에 생성 요청 1회를 보내고 결과를 상태값으로 반환"""
    try:
        llm = get_chat_model(provider)
        response = await llm.ainvoke(list(messages))
    except Exception as e:
        if is_rate_limit_error(e):
            return ProviderCallResult.rate_limited(str(e))
        return ProviderCallResult.failed(str(e) or e.__class__.__name__)

    text = _message_text(response.content)
    if not text.strip():
        return ProviderCallResult.failed("Empty response from provider")
    return ProviderCallResult.ok(text)
