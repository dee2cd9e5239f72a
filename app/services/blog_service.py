import logging
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy.orm import Session

from app.database.models import BlogPost, PostStatusEnum
from app.engine.schemas import GeneratedPost
from app.schemas.blog import BlogPostCreate, BlogPostUpdate, PostCounts
from app.services.persistence import SqlPostStore, generate_unique_slug

logger = logging.getLogger(__name__)

AI_AUTHOR_ID = "ai-generator"

# BlogPost 컬럼 길이 제한
_EXCERPT_MAX = 500
_META_TITLE_MAX = 100
_META_DESCRIPTION_MAX = 200
_TITLE_MAX = 255


def _truncate(value: Optional[str], limit: int) -> Optional[str]:
    if value is None or len(value) <= limit:
        return value
    return value[:limit - 3].rstrip() + "..."


class BlogService:
    """블로그 글 CRUD"""

    def list_public(self, db: Session, limit: Optional[int] = None, category: Optional[str] = None) -> List[BlogPost]:
        query = db.query(BlogPost).filter(BlogPost.status == PostStatusEnum.PUBLISHED.value)
        if category:
            query = query.filter(BlogPost.category == category)
        query = query.order_by(BlogPost.created_at.desc(), BlogPost.id.desc())
        if limit:
            query = query.limit(limit)
        return query.all()

    def get_public_by_slug(self, db: Session, slug: str) -> Optional[BlogPost]:
        """발행된 글을 slug로 조회하고 조회수를 1 올립니다."""
        post = (
            db.query(BlogPost)
            .filter(BlogPost.slug == slug, BlogPost.status == PostStatusEnum.PUBLISHED.value)
            .first()
        )
        if not post:
            return None
        post.views = (post.views or 0) + 1
        db.commit()
        db.refresh(post)
        return post

    def list_all(self, db: Session, status: Optional[str] = None) -> List[BlogPost]:
        query = db.query(BlogPost)
        if status:
            query = query.filter(BlogPost.status == status)
        return query.order_by(BlogPost.created_at.desc(), BlogPost.id.desc()).all()

    def count_by_status(self, db: Session) -> PostCounts:
        drafts = db.query(BlogPost).filter(BlogPost.status == PostStatusEnum.DRAFT.value).count()
        published = db.query(BlogPost).filter(BlogPost.status == PostStatusEnum.PUBLISHED.value).count()
        return PostCounts(total=drafts + published, drafts=drafts, published=published)

    def stats(self, db: Session) -> PostCounts:
        total = db.query(BlogPost).count()
        drafts = db.query(BlogPost).filter(BlogPost.status == PostStatusEnum.DRAFT.value).count()
        published = db.query(BlogPost).filter(BlogPost.status == PostStatusEnum.PUBLISHED.value).count()
        return PostCounts(total=total, drafts=drafts, published=published)

    def get(self, db: Session, post_id: int) -> Optional[BlogPost]:
        return db.query(BlogPost).filter(BlogPost.id == post_id).first()

    def create(self, db: Session, payload: BlogPostCreate) -> BlogPost:
        store = SqlPostStore(db)
        data = payload.model_dump()
        data["slug"] = generate_unique_slug(payload.title, store)
        if payload.status == PostStatusEnum.PUBLISHED.value:
            data["published_at"] = datetime.now(timezone.utc)
        return store.create_post(data)

    def update(self, db: Session, post_id: int, payload: BlogPostUpdate) -> Optional[BlogPost]:
        post = self.get(db, post_id)
        if not post:
            return None
        for field, value in payload.model_dump(exclude_unset=True).items():
            setattr(post, field, value)
        db.commit()
        db.refresh(post)
        return post

    def delete(self, db: Session, post_id: int) -> bool:
        post = self.get(db, post_id)
        if not post:
            return False
        db.delete(post)
        db.commit()
        return True

    def publish(self, db: Session, post_id: int) -> Optional[BlogPost]:
        post = self.get(db, post_id)
        if not post:
            return None
        post.status = PostStatusEnum.PUBLISHED.value
        post.published_at = datetime.now(timezone.utc)
        db.commit()
        db.refresh(post)
        logger.info(f"[BlogService] Published BlogPost ID {post_id}")
        return post

    def unpublish(self, db: Session, post_id: int) -> Optional[BlogPost]:
        post = self.get(db, post_id)
        if not post:
            return None
        post.status = PostStatusEnum.DRAFT.value
        db.commit()
        db.refresh(post)
        return post

    def save_generated_post(self, db: Session, generated: GeneratedPost) -> BlogPost:
        """AI 생성 결과를 초안(draft)으로 저장"""
        store = SqlPostStore(db)
        title = _truncate(generated.title, _TITLE_MAX)
        return store.create_post({
            "title": title,
            "slug": generate_unique_slug(title, store),
            "content": generated.content,
            "excerpt": _truncate(generated.excerpt, _EXCERPT_MAX),
            "meta_title": _truncate(generated.meta_title, _META_TITLE_MAX),
            "meta_description": _truncate(generated.meta_description, _META_DESCRIPTION_MAX),
            "keywords": generated.keywords,
            "category": generated.category,
            "tags": generated.tags,
            "reading_time": max(1, generated.reading_time),
            "ai_generated": True,
            "status": PostStatusEnum.DRAFT.value,
            "author_id": AI_AUTHOR_ID,
        })


blog_service = BlogService()
