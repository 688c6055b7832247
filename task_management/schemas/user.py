from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, Field, StrictBool, ValidationInfo, field_validator

from ..models.user import UserRole
from .base import APIModel, reject_null


class UserCreate(APIModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    role: UserRole = UserRole.USER


class UserUpdate(APIModel):
    """Fields a user record accepts on partial update; anything else is dropped"""
    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    avatar: Optional[str] = Field(None, max_length=500)
    role: Optional[UserRole] = None
    is_active: Optional[StrictBool] = None

    @field_validator("first_name", "last_name", "role", "is_active")
    @classmethod
    def not_null(cls, value, info: ValidationInfo):
        return reject_null(info.field_name, value)


class UserOut(APIModel):
    id: int
    email: EmailStr
    first_name: str
    last_name: str
    role: UserRole
    is_active: bool
    avatar: Optional[str] = None
    last_login: Optional[datetime] = None
    created_at: datetime
    updated_at: Optional[datetime] = None


class LoginRequest(APIModel):
    email: EmailStr
    password: str


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int
