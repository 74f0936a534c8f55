from datetime import date, datetime
from decimal import Decimal
from typing import ClassVar, Optional, Tuple

from pydantic import BaseModel, Field

from app.core.schemas import PatchModel


class BillCreate(BaseModel):
    year: int = Field(..., ge=1900, le=9999)
    month: str = Field(..., min_length=1, max_length=20)
    deadline: Optional[date] = None
    bill_code: Optional[str] = Field(None, max_length=100)
    payment_sum: Decimal = Field(Decimal("0"), ge=0)
    kindergarten_id: Optional[int] = Field(None, ge=1)
    child_id: Optional[int] = Field(None, ge=1)


class BillUpdate(PatchModel):
    non_nullable: ClassVar[Tuple[str, ...]] = ("year", "month", "payment_sum", "kindergarten_id", "child_id")

    year: Optional[int] = Field(None, ge=1900, le=9999)
    month: Optional[str] = Field(None, min_length=1, max_length=20)
    deadline: Optional[date] = None
    bill_code: Optional[str] = Field(None, max_length=100)
    payment_sum: Optional[Decimal] = Field(None, ge=0)
    kindergarten_id: Optional[int] = Field(None, ge=1)
    child_id: Optional[int] = Field(None, ge=1)


class BillResponse(BaseModel):
    id: int
    year: int
    month: str
    deadline: Optional[date] = None
    bill_code: Optional[str] = None
    payment_sum: Decimal
    kindergarten_id: int
    child_id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
