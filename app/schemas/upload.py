from typing import Optional

from app.engine.schemas import CamelModel

class UploadedImage(CamelModel):
    url: str
    public_id: str
    format: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None

class UploadResponse(CamelModel):
    success: bool = True
    data: UploadedImage
