from datetime import datetime
from typing import ClassVar, Optional, Tuple

from pydantic import BaseModel, EmailStr, Field

from app.core.schemas import PatchModel


class ParentCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    surname: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    address: str = Field(..., min_length=1, max_length=255)


class ParentUpdate(PatchModel):
    non_nullable: ClassVar[Tuple[str, ...]] = ("name", "surname", "email", "address")

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    surname: Optional[str] = Field(None, min_length=1, max_length=255)
    # Shape is checked by the service so a bad value yields "Invalid email format"
    email: Optional[str] = Field(None, max_length=255)
    address: Optional[str] = Field(None, min_length=1, max_length=255)


class ParentResponse(BaseModel):
    id: int
    name: str
    surname: str
    email: str
    address: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
