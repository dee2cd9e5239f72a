from datetime import datetime
from typing import Literal, Optional
from pydantic import ConfigDict, Field

from app.engine.schemas import CamelModel

EMAIL_PATTERN = r"^\w+([\.-]?\w+)*@\w+([\.-]?\w+)*(\.\w{2,3})+$"

class ConnectionCreate(CamelModel):
    type: Literal["contact", "newsletter"] = "contact"
    email: str = Field(..., pattern=EMAIL_PATTERN, description="연락 받을 이메일")
    name: Optional[str] = Field(None, max_length=100)
    message: Optional[str] = None

class ConnectionResponse(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    type: str
    email: str
    name: Optional[str] = None
    message: Optional[str] = None
    status: str
    created_at: Optional[datetime] = None
