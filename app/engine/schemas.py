import enum
from typing import Dict, List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """JSON 입출력은 camelCase, 파이썬 코드에서는 snake_case"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Topic(CamelModel):
    """블로그 글 주제"""
    id: str
    name: str
    description: str


class InternalLink(CamelModel):
    """본문에 자연스럽게 녹여낼 내부 링크 힌트"""
    anchor: str = Field(min_length=1)
    url: str = Field(min_length=1)


class ProviderKind(str, enum.Enum):
    GROQ = "groq"
    GEMINI = "gemini"
    OPENAI = "openai"
    OPENROUTER = "openrouter"


class ProviderConfig(BaseModel):
    """생성 실행 동안 변하지 않는 프로바이더 설정"""
    model_config = ConfigDict(frozen=True)

    name: str
    kind: ProviderKind
    api_key: str = Field(repr=False)
    base_url: str
    model: str
    headers: Dict[str, str] = Field(default_factory=dict)
    pre_call_delay_seconds: float = 0.0


class GenerationPrompt(BaseModel):
    """프로바이더에 전달할 system/user 지시문"""
    system_instruction: str
    user_instruction: str


class ProviderCallResult(BaseModel):
    """프로바이더 1회 호출 결과 (예외 대신 상태값으로 전달)"""
    status: Literal["ok", "rate_limited", "error"]
    text: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, text: str) -> "ProviderCallResult":
        return cls(status="ok", text=text)

    @classmethod
    def rate_limited(cls, error: str) -> "ProviderCallResult":
        return cls(status="rate_limited", error=error)

    @classmethod
    def failed(cls, error: str) -> "ProviderCallResult":
        return cls(status="error", error=error)


class ProviderAttempt(BaseModel):
    """프로바이더 호출 1회에 대한 기록"""
    provider: str
    attempt: int
    status: Literal["ok", "rate_limited", "error"]
    error: Optional[str] = None


class GeneratedPost(CamelModel):
    """AI가 생성한 블로그 글"""
    title: str
    content: str = Field(min_length=1)
    excerpt: str = Field(min_length=1)
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    keywords: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    category: str
    reading_time: int = 5
    ai_generated: bool = True
    provider: Optional[str] = None


class GenerationOutcome(CamelModel):
    """생성 1회의 성공/실패 결과"""
    success: bool
    post: Optional[GeneratedPost] = None
    error: Optional[str] = None

    @classmethod
    def succeeded(cls, post: GeneratedPost) -> "GenerationOutcome":
        return cls(success=True, post=post)

    @classmethod
    def failed(cls, error: str) -> "GenerationOutcome":
        return cls(success=False, error=error)
