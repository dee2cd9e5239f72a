import json
import logging
import re
from typing import List, Optional

from pydantic import ValidationError, field_validator

from .schemas import CamelModel, GeneratedPost
from .topics import resolve_topic

logger = logging.getLogger(__name__)

MIN_CONTENT_LENGTH = 100
DEFAULT_READING_TIME = 5

_LEADING_FENCE_JSON = re.compile(r"^```json\s*")
_LEADING_FENCE = re.compile(r"^```\s*")
_TRAILING_FENCE = re.compile(r"```$")
# \n, \t, \r 을 제외한 제어 문자
_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")
_FIRST_INT = re.compile(r"\d+")


class ResponseParseError(ValueError):
    """구조화된 응답 복원 실패"""


class ParsedPostPayload(CamelModel):
    """모델 응답 JSON에서 읽어들이는 필드"""
    title: Optional[str] = None
    excerpt: Optional[str] = None
    content: Optional[str] = None
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    keywords: List[str] = []
    tags: List[str] = []
    reading_time: int = DEFAULT_READING_TIME

    @field_validator("keywords", "tags", mode="before")
    @classmethod
    def split_comma_separated(cls, value):
        if value is None:
            return []
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        if isinstance(value, list):
            return [str(item).strip() for item in value if str(item).strip()]
        return value

    @field_validator("reading_time", mode="before")
    @classmethod
    def coerce_reading_time(cls, value):
        if value is None:
            return DEFAULT_READING_TIME
        if isinstance(value, str):
            match = _FIRST_INT.search(value)
            return max(1, int(match.group())) if match else DEFAULT_READING_TIME
        if isinstance(value, float):
            return max(1, round(value))
        if isinstance(value, int) and not isinstance(value, bool):
            return max(1, value)
        return value


def clean_json_text(raw_text: str) -> str:
    """코드 펜스 제거, 첫 '{' ~ 마지막 '}' 구간 추출, 제어 문자 제거"""
    clean = raw_text.strip()
    clean = _LEADING_FENCE_JSON.sub("", clean)
    clean = _LEADING_FENCE.sub("", clean)
    clean = _TRAILING_FENCE.sub("", clean)

    first_brace = clean.find("{")
    last_brace = clean.rfind("}")
    if first_brace != -1 and last_brace != -1:
        clean = clean[first_brace:last_brace + 1]

    return _CONTROL_CHARS.sub("", clean)


class ResponseExtractor:
    """
    모델이 생성한 원문에서 블로그 글 레코드를 복원합니다.

    JSON 파싱이나 검증에 실패하면 원문 전체를 본문으로 감싼 degraded 레코드를 반환하므로
    extract()는 예외를 던지지 않습니다.
    """

    def __init__(self, min_content_length: int = MIN_CONTENT_LENGTH):
        self.min_content_length = min_content_length

    def extract(self, raw_text: str, topic: str, provider: Optional[str] = None) -> GeneratedPost:
        topic_name = resolve_topic(topic).name
        try:
            post = self._parse_structured(raw_text, topic, topic_name, provider)
            logger.info(f"[ResponseExtractor] Parsed structured post from {provider or 'provider'}.")
            return post
        except (ValueError, TypeError, RecursionError) as e:
            # ResponseParseError, JSONDecodeError, ValidationError 모두 ValueError 하위 타입
            # RecursionError: 과도하게 중첩된 JSON
            logger.warning(
                f"[ResponseExtractor] JSON parse/validation failed for {provider or 'provider'}, "
                f"falling back to raw text: {e}"
            )
            return self.degraded_post(raw_text, topic, topic_name, provider)

    def _parse_structured(
        self,
        raw_text: str,
        topic: str,
        topic_name: str,
        provider: Optional[str],
    ) -> GeneratedPost:
        data = json.loads(clean_json_text(raw_text), strict=False)
        if not isinstance(data, dict):
            raise ResponseParseError("Response JSON is not an object")

        try:
            payload = ParsedPostPayload.model_validate(data)
        except ValidationError as e:
            raise ResponseParseError(f"Invalid response fields: {e.error_count()} error(s)") from e

        if not payload.content or len(payload.content) < self.min_content_length:
            raise ResponseParseError("Content too short or missing")

        excerpt = payload.excerpt or payload.meta_description or self._synthesized_excerpt(topic_name)

        return GeneratedPost(
            title=payload.title or self._fallback_title(topic_name),
            content=payload.content,
            excerpt=excerpt,
            meta_title=payload.meta_title,
            meta_description=payload.meta_description,
            keywords=payload.keywords,
            tags=payload.tags,
            category=topic,
            reading_time=payload.reading_time,
            ai_generated=True,
            provider=provider,
        )

    def degraded_post(
        self,
        raw_text: str,
        topic: str,
        topic_name: str,
        provider: Optional[str] = None,
    ) -> GeneratedPost:
        return GeneratedPost(
            title=self._fallback_title(topic_name),
            content=raw_text or self._synthesized_excerpt(topic_name),
            excerpt=self._synthesized_excerpt(topic_name),
            meta_description=f"Deep dive into {topic_name}",
            category=topic,
            reading_time=DEFAULT_READING_TIME,
            ai_generated=True,
            provider=provider,
        )

    @staticmethod
    def _fallback_title(topic_name: str) -> str:
        return f"{topic_name} (AI Generated)"

    @staticmethod
    def _synthesized_excerpt(topic_name: str) -> str:
        return f"A comprehensive guide about {topic_name}."


response_extractor = ResponseExtractor()
