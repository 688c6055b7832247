from datetime import datetime
from typing import List, Optional
from pydantic import Field, ValidationInfo, field_validator

from .base import APIModel, reject_null


class ProjectCreate(APIModel):
    name: str = Field(..., min_length=1, max_length=200, description="Project name")
    description: Optional[str] = Field(None, max_length=2000, description="Project description")
    member_ids: List[int] = Field(default_factory=list, description="Initial members besides the owner")


class ProjectUpdate(APIModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)

    @field_validator("name")
    @classmethod
    def not_null(cls, value, info: ValidationInfo):
        return reject_null(info.field_name, value)


class MemberAdd(APIModel):
    user_id: int


class ProjectResponse(APIModel):
    id: int
    name: str
    description: Optional[str] = None
    owner_id: int
    member_ids: List[int]
    created_at: datetime
    updated_at: Optional[datetime] = None
