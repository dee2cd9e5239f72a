import logging
from fastapi import APIRouter, File, HTTPException, Security, UploadFile, status

from app.core.security import verify_admin_token
from app.schemas.common import MessageResponse
from app.schemas.upload import UploadedImage, UploadResponse
from app.utils.image import InvalidImageError, delete_blog_image, upload_blog_image

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/upload", tags=["Upload"], dependencies=[Security(verify_admin_token)])


@router.post(
    "/image",
    summary="이미지 업로드",
    description="블로그 이미지를 S3에 업로드합니다. (최대 5MB, JPEG/PNG/WEBP/GIF)",
    response_model=UploadResponse,
)
async def upload_image(image: UploadFile = File(...)):
    data = await image.read()
    try:
        uploaded = await upload_blog_image(data)
    except InvalidImageError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    if not uploaded:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to upload image")
    return UploadResponse(data=UploadedImage(**uploaded))


@router.delete("/image/{public_id}", summary="이미지 삭제", response_model=MessageResponse)
async def delete_image(public_id: str):
    deleted = await delete_blog_image(public_id)
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Image not found or already deleted")
    return MessageResponse(message="Image deleted successfully")
