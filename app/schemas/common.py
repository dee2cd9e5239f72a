from typing import Generic, Optional, TypeVar
from pydantic import BaseModel

from app.engine.schemas import CamelModel

T = TypeVar("T")

class ApiResponse(CamelModel, Generic[T]):
    success: bool = True
    data: Optional[T] = None
    message: Optional[str] = None

class MessageResponse(BaseModel):
    success: bool = True
    message: str

class ErrorResponse(BaseModel):
    success: bool = False
    error: str
