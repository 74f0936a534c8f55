from datetime import datetime
from typing import ClassVar, Optional, Tuple

from pydantic import BaseModel, EmailStr, Field

from app.core.schemas import PatchModel


class UserCreate(BaseModel):
    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1)
    email: EmailStr
    role_id: int
    status: bool = True


class UserUpdate(PatchModel):
    non_nullable: ClassVar[Tuple[str, ...]] = ("username", "password", "email", "role_id", "status")

    username: Optional[str] = Field(None, min_length=1, max_length=100)
    password: Optional[str] = Field(None, min_length=1)
    email: Optional[str] = Field(None, max_length=255)
    role_id: Optional[int] = None
    status: Optional[bool] = None


class UserResponse(BaseModel):
    """User as returned by the API; the password hash is never exposed."""

    id: int
    username: str
    email: str
    role_id: int
    status: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
