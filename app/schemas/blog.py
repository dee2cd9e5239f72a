from datetime import datetime
from typing import List, Literal, Optional
from pydantic import ConfigDict, Field

from app.engine.schemas import CamelModel

PostStatus = Literal["draft", "published", "archived"]

class BlogPostBase(CamelModel):
    content: str = Field(..., min_length=1, description="Markdown 본문")
    excerpt: Optional[str] = Field(None, max_length=500)
    meta_title: Optional[str] = Field(None, max_length=100)
    meta_description: Optional[str] = Field(None, max_length=200)
    keywords: List[str] = Field(default_factory=list)
    featured_image: Optional[str] = None
    category: str = "general"
    tags: List[str] = Field(default_factory=list)
    reading_time: int = Field(5, ge=1)

class BlogPostCreate(BlogPostBase):
    title: str = Field(..., min_length=1, max_length=255)
    status: PostStatus = "draft"
    author_id: str = "admin"
    ai_generated: bool = False

class BlogPostUpdate(CamelModel):
    """부분 수정: 전달된 필드만 반영"""
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    content: Optional[str] = Field(None, min_length=1)
    excerpt: Optional[str] = Field(None, max_length=500)
    meta_title: Optional[str] = Field(None, max_length=100)
    meta_description: Optional[str] = Field(None, max_length=200)
    keywords: Optional[List[str]] = None
    featured_image: Optional[str] = None
    category: Optional[str] = None
    tags: Optional[List[str]] = None
    status: Optional[PostStatus] = None
    reading_time: Optional[int] = Field(None, ge=1)

class BlogPostResponse(BlogPostBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    slug: str
    status: PostStatus
    author_id: Optional[str] = None
    ai_generated: bool = False
    views: int = 0
    published_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class BlogPostSummary(CamelModel):
    """공개 목록용 요약 필드"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    slug: str
    excerpt: Optional[str] = None
    featured_image: Optional[str] = None
    category: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    reading_time: Optional[int] = None
    published_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

class PostCounts(CamelModel):
    total: int
    drafts: int
    published: int

class PublicPostListResponse(CamelModel):
    success: bool = True
    count: int
    data: List[BlogPostSummary]

class AdminPostListResponse(CamelModel):
    success: bool = True
    counts: PostCounts
    data: List[BlogPostResponse]
