"""Tests for the provider call adapter and rate-limit classification."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import openai
import pytest
from langchain_core.messages import AIMessage, HumanMessage

from app.engine.schemas import ProviderConfig, ProviderKind
from app.engine.tasks.completion import get_chat_model, is_rate_limit_error, request_completion

PROVIDER = ProviderConfig(
    name="Groq (Llama 3)",
    kind=ProviderKind.GROQ,
    api_key="test-key",
    base_url="https://api.groq.com/openai/v1",
    model="llama-3.1-8b-instant",
)
MESSAGES = [HumanMessage(content="write")]


def _openai_rate_limit_error() -> openai.RateLimitError:
    request = httpx.Request("POST", "https://api.groq.com/openai/v1/chat/completions")
    response = httpx.Response(429, request=request)
    return openai.RateLimitError("Rate limit reached", response=response, body=None)


class StatusError(Exception):
    def __init__(self, message, status_code=None, code=None, body=None):
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.body = body


def _patched_model(ainvoke):
    llm = MagicMock()
    llm.ainvoke = ainvoke
    return patch("app.engine.tasks.completion.get_chat_model", return_value=llm)


class TestIsRateLimitError:

    def test_openai_rate_limit_error(self):
        assert is_rate_limit_error(_openai_rate_limit_error()) is True

    def test_status_code_429(self):
        assert is_rate_limit_error(StatusError("slow down", status_code=429)) is True

    def test_code_429_as_string(self):
        assert is_rate_limit_error(StatusError("slow down", code="429")) is True

    def test_code_inside_error_body(self):
        assert is_rate_limit_error(StatusError("slow down", body={"error": {"code": 429}})) is True

    def test_other_errors_are_not_rate_limits(self):
        assert is_rate_limit_error(StatusError("server error", status_code=500)) is False
        assert is_rate_limit_error(ValueError("bad")) is False


class TestRequestCompletion:

    @pytest.mark.asyncio
    async def test_returns_text_on_success(self):
        with _patched_model(AsyncMock(return_value=AIMessage(content="hello"))):
            result = await request_completion(PROVIDER, MESSAGES)

        assert result.status == "ok"
        assert result.text == "hello"

    @pytest.mark.asyncio
    async def test_joins_list_content_parts(self):
        content = [{"type": "text", "text": "hel"}, {"type": "text", "text": "lo"}]
        with _patched_model(AsyncMock(return_value=AIMessage(content=content))):
            result = await request_completion(PROVIDER, MESSAGES)

        assert result.text == "hello"

    @pytest.mark.asyncio
    async def test_empty_text_is_a_provider_error(self):
        with _patched_model(AsyncMock(return_value=AIMessage(content="   "))):
            result = await request_completion(PROVIDER, MESSAGES)

        assert result.status == "error"
        assert result.error == "Empty response from provider"

    @pytest.mark.asyncio
    async def test_rate_limit_exception_is_classified(self):
        with _patched_model(AsyncMock(side_effect=_openai_rate_limit_error())):
            result = await request_completion(PROVIDER, MESSAGES)

        assert result.status == "rate_limited"

    @pytest.mark.asyncio
    async def test_other_exception_is_an_error(self):
        with _patched_model(AsyncMock(side_effect=StatusError("upstream 500", status_code=500))):
            result = await request_completion(PROVIDER, MESSAGES)

        assert result.status == "error"
        assert result.error == "upstream 500"


def test_chat_model_disables_client_retries():
    llm = get_chat_model(PROVIDER)

    assert llm.max_retries == 0
    assert llm.model_name == "llama-3.1-8b-instant"
    assert llm.temperature == 0.7
