import logging
from typing import Any, Dict, Protocol

from sqlalchemy.orm import Session

from app.database.models import BlogPost
from app.engine.topics import slugify

logger = logging.getLogger(__name__)

DEFAULT_SLUG = "post"


class PostStore(Protocol):
    """생성 결과를 저장하는 쪽이 제공해야 하는 최소 기능"""

    def slug_exists(self, slug: str) -> bool:
        ...

    def create_post(self, data: Dict[str, Any]) -> BlogPost:
        ...


class SqlPostStore:
    """SQLAlchemy 세션 기반 PostStore 구현"""

    def __init__(self, db: Session):
        self.db = db

    def slug_exists(self, slug: str) -> bool:
        return self.db.query(BlogPost.id).filter(BlogPost.slug == slug).first() is not None

    def create_post(self, data: Dict[str, Any]) -> BlogPost:
        post = BlogPost(**data)
        self.db.add(post)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(post)
        logger.info(f"[SqlPostStore] Saved BlogPost ID {post.id} ({post.slug})")
        return post


def generate_unique_slug(title: str, store: PostStore) -> str:
    """
    제목으로 slug를 만들고, 이미 존재하면 -2, -3 ... 을 붙여 중복을 피합니다.
    """
    base = slugify(title) or DEFAULT_SLUG
    slug = base
    suffix = 2
    while store.slug_exists(slug):
        slug = f"{base}-{suffix}"
        suffix += 1
    return slug
