import enum
from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean, JSON
from sqlalchemy.sql import func

from app.core.database import Base

class PostStatusEnum(str, enum.Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"

class ConnectionTypeEnum(str, enum.Enum):
    CONTACT = "contact"
    NEWSLETTER = "newsletter"

class ConnectionStatusEnum(str, enum.Enum):
    NEW = "new"
    READ = "read"
    ARCHIVED = "archived"

class BlogPost(Base):
    __tablename__ = "blog_post"
    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    slug = Column(String(300), unique=True, nullable=False, index=True)
    content = Column(Text, nullable=False)
    excerpt = Column(String(500))
    meta_title = Column(String(100))
    meta_description = Column(String(200))
    keywords = Column(JSON, default=list)
    featured_image = Column(Text)
    category = Column(String(100), default="general", index=True)
    tags = Column(JSON, default=list)
    status = Column(String(20), default=PostStatusEnum.DRAFT.value, nullable=False, index=True)
    author_id = Column(String(100), default="admin")
    reading_time = Column(Integer, default=5)
    ai_generated = Column(Boolean, default=False)
    views = Column(Integer, default=0, nullable=False)
    published_at = Column(DateTime(timezone=True))
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

class Topic(Base):
    __tablename__ = "topic"
    id = Column(String(100), primary_key=True)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

class Connection(Base):
    __tablename__ = "connection"
    id = Column(Integer, primary_key=True, index=True)
    type = Column(String(20), default=ConnectionTypeEnum.CONTACT.value, nullable=False)
    email = Column(String(255), nullable=False)
    name = Column(String(100))
    message = Column(Text)
    status = Column(String(20), default=ConnectionStatusEnum.NEW.value, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
