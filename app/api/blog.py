from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Security, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.security import verify_admin_token
from app.schemas.blog import (
    AdminPostListResponse,
    BlogPostCreate,
    BlogPostResponse,
    BlogPostSummary,
    BlogPostUpdate,
    PostCounts,
    PostStatus,
    PublicPostListResponse,
)
from app.schemas.common import ApiResponse, MessageResponse
from app.services.blog_service import blog_service

public_router = APIRouter(prefix="/api/blog/public", tags=["Blog (Public)"])
router = APIRouter(prefix="/api/blog", tags=["Blog (Admin)"], dependencies=[Security(verify_admin_token)])

POST_NOT_FOUND = "Post not found"


# ==========================================
# PUBLIC ROUTES
# ==========================================

@public_router.get(
    "",
    summary="발행된 글 목록",
    description="발행(published) 상태의 글을 최신순으로 반환합니다.",
    response_model=PublicPostListResponse,
)
def list_published_posts(
    limit: Optional[int] = Query(None, ge=1, le=100),
    category: Optional[str] = None,
    db: Session = Depends(get_db),
):
    posts = blog_service.list_public(db, limit=limit, category=category)
    return PublicPostListResponse(
        count=len(posts),
        data=[BlogPostSummary.model_validate(p) for p in posts],
    )


@public_router.get(
    "/{slug}",
    summary="발행된 글 상세",
    description="slug로 발행된 글을 조회하고 조회수를 1 올립니다.",
    response_model=ApiResponse[BlogPostResponse],
)
def get_published_post(slug: str, db: Session = Depends(get_db)):
    post = blog_service.get_public_by_slug(db, slug)
    if not post:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=POST_NOT_FOUND)
    return ApiResponse(data=BlogPostResponse.model_validate(post))


# ==========================================
# ADMIN ROUTES
# ==========================================

@router.get("/stats", summary="글 통계", response_model=ApiResponse[PostCounts])
def get_stats(db: Session = Depends(get_db)):
    return ApiResponse(data=blog_service.stats(db))


@router.get(
    "",
    summary="전체 글 목록 (초안 포함)",
    response_model=AdminPostListResponse,
)
def list_posts(status_filter: Optional[PostStatus] = Query(None, alias="status"), db: Session = Depends(get_db)):
    posts = blog_service.list_all(db, status=status_filter)
    return AdminPostListResponse(
        counts=blog_service.count_by_status(db),
        data=[BlogPostResponse.model_validate(p) for p in posts],
    )


@router.get("/{post_id}", summary="글 상세 (관리자)", response_model=ApiResponse[BlogPostResponse])
def get_post(post_id: int, db: Session = Depends(get_db)):
    post = blog_service.get(db, post_id)
    if not post:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=POST_NOT_FOUND)
    return ApiResponse(data=BlogPostResponse.model_validate(post))


@router.post(
    "",
    summary="글 직접 작성",
    response_model=ApiResponse[BlogPostResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_post(payload: BlogPostCreate, db: Session = Depends(get_db)):
    post = blog_service.create(db, payload)
    return ApiResponse(data=BlogPostResponse.model_validate(post))


@router.put("/{post_id}", summary="글 수정", response_model=ApiResponse[BlogPostResponse])
def update_post(post_id: int, payload: BlogPostUpdate, db: Session = Depends(get_db)):
    post = blog_service.update(db, post_id, payload)
    if not post:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=POST_NOT_FOUND)
    return ApiResponse(data=BlogPostResponse.model_validate(post))


@router.delete("/{post_id}", summary="글 삭제", response_model=MessageResponse)
def delete_post(post_id: int, db: Session = Depends(get_db)):
    if not blog_service.delete(db, post_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=POST_NOT_FOUND)
    return MessageResponse(message="Post deleted successfully")


@router.post("/{post_id}/publish", summary="글 발행", response_model=ApiResponse[BlogPostResponse])
def publish_post(post_id: int, db: Session = Depends(get_db)):
    post = blog_service.publish(db, post_id)
    if not post:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=POST_NOT_FOUND)
    return ApiResponse(data=BlogPostResponse.model_validate(post), message="Post published successfully")


@router.post("/{post_id}/unpublish", summary="글 발행 취소 (초안으로)", response_model=ApiResponse[BlogPostResponse])
def unpublish_post(post_id: int, db: Session = Depends(get_db)):
    post = blog_service.unpublish(db, post_id)
    if not post:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=POST_NOT_FOUND)
    return ApiResponse(data=BlogPostResponse.model_validate(post), message="Post moved to drafts")
