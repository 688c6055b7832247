from datetime import datetime
from typing import Optional
from pydantic import Field

from .base import APIModel


class CommentCreate(APIModel):
    body: str = Field(..., min_length=1, max_length=5000)
    parent_id: Optional[int] = Field(None, description="Comment being replied to")


class CommentUpdate(APIModel):
    body: str = Field(..., min_length=1, max_length=5000)


class CommentResponse(APIModel):
    id: int
    task_id: int
    author_id: int
    parent_id: Optional[int] = None
    body: str
    created_at: datetime
    updated_at: Optional[datetime] = None
