from typing import List, Optional
from pydantic import Field

from app.engine.schemas import CamelModel, Topic

class TopicCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None

class TopicUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None

class TopicListResponse(CamelModel):
    success: bool = True
    data: List[Topic]
    ai_available: bool
