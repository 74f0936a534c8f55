from datetime import datetime
from decimal import Decimal
from typing import ClassVar, Optional, Tuple

from pydantic import BaseModel, Field

from app.core.schemas import PatchModel


class ActivityCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    price: Decimal = Field(Decimal("0"), ge=0, description="Price must be positive number")
    status: bool = True


class ActivityUpdate(PatchModel):
    non_nullable: ClassVar[Tuple[str, ...]] = ("name", "price", "status")

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    price: Optional[Decimal] = Field(None, ge=0)
    status: Optional[bool] = None


class ActivityResponse(BaseModel):
    id: int
    name: str
    price: Decimal
    status: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ActivitySummary(BaseModel):
    """Activity as embedded in child / kindergarten responses."""

    id: int
    name: str
    price: Decimal
    status: bool

    class Config:
        from_attributes = True
