from datetime import datetime
from decimal import Decimal
from typing import ClassVar, Optional, Tuple

from pydantic import BaseModel, Field

from app.core.schemas import PatchModel


class GroupCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    price: Decimal = Field(..., ge=0)
    discount: int = Field(0, ge=0, description="Discount in percent")
    active: bool = True


class GroupUpdate(PatchModel):
    non_nullable: ClassVar[Tuple[str, ...]] = ("name", "price", "discount", "active")

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    price: Optional[Decimal] = Field(None, ge=0)
    discount: Optional[int] = Field(None, ge=0)
    active: Optional[bool] = None


class GroupResponse(BaseModel):
    id: int
    name: str
    price: Decimal
    discount: int
    active: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class GroupSummary(BaseModel):
    id: int
    name: str
    price: Decimal
    discount: int
    active: bool

    class Config:
        from_attributes = True
