from fastapi import APIRouter, Depends, HTTPException, Security, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.security import verify_admin_token
from app.schemas.generation import GenerationRequest, GenerationResponse, PreviewRequest, PreviewResponse
from app.services.generation_service import GenerationService, get_generation_service

router = APIRouter(prefix="/api/blog/generate", tags=["AI Generation"], dependencies=[Security(verify_admin_token)])

NOT_CONFIGURED_DETAIL = (
    "AI provider not configured. Please add GROQ_API_KEY, GEMINI_API_KEY "
    "or OPENROUTER_API_KEY to your .env file."
)


def _ensure_available(generation: GenerationService):
    if not generation.is_available():
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=NOT_CONFIGURED_DETAIL)


@router.post(
    "",
    summary="AI 글 일괄 생성",
    description="토픽으로 글을 count개 생성하고 성공한 글은 초안으로 저장합니다.",
    response_model=GenerationResponse,
    responses={
        503: {"description": "AI 프로바이더가 하나도 설정되지 않은 경우"}
    }
)
async def generate_posts(
    request: GenerationRequest,
    db: Session = Depends(get_db),
    generation: GenerationService = Depends(get_generation_service),
):
    _ensure_available(generation)

    result = await generation.generate_and_save(db, request)
    return GenerationResponse(
        message=f"Generated {result.generated} posts successfully",
        data=result,
    )


@router.post(
    "/preview",
    summary="AI 글 미리보기",
    description="글 1개를 생성하되 저장하지 않습니다.",
    response_model=PreviewResponse,
    responses={
        502: {"description": "모든 AI 프로바이더 호출이 실패한 경우"},
        503: {"description": "AI 프로바이더가 하나도 설정되지 않은 경우"}
    }
)
async def preview_post(
    request: PreviewRequest,
    generation: GenerationService = Depends(get_generation_service),
):
    _ensure_available(generation)

    outcome = await generation.preview(request.topic, request.internal_links)
    if not outcome.success:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=outcome.error)
    return PreviewResponse(data=outcome.post)
