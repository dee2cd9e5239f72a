from typing import List, Optional
from pydantic import Field, field_validator

from app.core.config import settings
from app.engine.schemas import CamelModel, GeneratedPost, InternalLink
from app.schemas.blog import BlogPostResponse

class GenerationRequest(CamelModel):
    topic: str = Field(..., min_length=1, max_length=100, description="토픽 ID 또는 자유 형식 토픽")
    count: int = Field(1, ge=1, le=settings.AI_BATCH_MAX_POSTS, description="생성할 글 수")
    internal_links: List[InternalLink] = Field(default_factory=list)

    @field_validator("topic")
    @classmethod
    def topic_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Topic is required")
        return value

class PreviewRequest(CamelModel):
    topic: str = Field(..., min_length=1, max_length=100)
    internal_links: List[InternalLink] = Field(default_factory=list)

    @field_validator("topic")
    @classmethod
    def topic_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Topic is required")
        return value

class GenerationError(CamelModel):
    title: Optional[str] = None
    error: str

class GenerationResult(CamelModel):
    generated: int
    failed: int
    posts: List[BlogPostResponse]
    errors: Optional[List[GenerationError]] = None

class GenerationResponse(CamelModel):
    success: bool = True
    message: str
    data: GenerationResult

class PreviewResponse(CamelModel):
    success: bool = True
    data: GeneratedPost
