import io
import uuid
import logging
from dataclasses import dataclass
from typing import Optional
from PIL import Image, UnidentifiedImageError

from .s3 import s3_manager
from app.core.config import settings

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_FORMATS = {"JPEG": "jpg", "PNG": "png", "WEBP": "webp", "GIF": "gif"}


class InvalidImageError(ValueError):
    pass


@dataclass(frozen=True)
class ImageInfo:
    format: str
    width: int
    height: int

    @property
    def extension(self) -> str:
        return ALLOWED_IMAGE_FORMATS[self.format]

    @property
    def content_type(self) -> str:
        return Image.MIME.get(self.format, "application/octet-stream")


def inspect_image(data: bytes) -> ImageInfo:
    """업로드된 바이트가 허용된 포맷의 이미지인지 확인하고 포맷/크기를 반환합니다."""
    if not data:
        raise InvalidImageError("No image file provided")
    if len(data) > settings.UPLOAD_MAX_BYTES:
        max_mb = settings.UPLOAD_MAX_BYTES // (1024 * 1024)
        raise InvalidImageError(f"File size too large. Maximum size is {max_mb}MB.")

    try:
        with Image.open(io.BytesIO(data)) as img:
            img.verify()
            fmt, (width, height) = img.format, img.size
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        raise InvalidImageError("Only image files are allowed") from e

    if fmt not in ALLOWED_IMAGE_FORMATS:
        raise InvalidImageError(f"Unsupported image format: {fmt}")
    return ImageInfo(format=fmt, width=width, height=height)


def image_key(public_id: str, extension: Optional[str] = None) -> str:
    key = f"{settings.UPLOAD_KEY_PREFIX}/{public_id}"
    return f"{key}.{extension}" if extension else key


async def upload_blog_image(data: bytes) -> Optional[dict]:
    """검증된 이미지를 S3에 업로드하고 메타데이터를 반환 (업로드 실패 시 None)"""
    info = inspect_image(data)
    public_id = f"{uuid.uuid4().hex}.{info.extension}"
    url = await s3_manager.upload_bytes(image_key(public_id), data, content_type=info.content_type)
    if not url:
        return None
    logger.info(f"[upload_blog_image] Uploaded {public_id} ({info.width}x{info.height} {info.format})")
    return {
        "url": url,
        "public_id": public_id,
        "format": info.extension,
        "width": info.width,
        "height": info.height,
    }


async def delete_blog_image(public_id: str) -> bool:
    return await s3_manager.delete_object(image_key(public_id))
