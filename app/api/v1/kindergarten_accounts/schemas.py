from datetime import datetime
from typing import ClassVar, Optional, Tuple

from pydantic import BaseModel, Field, field_validator

from app.core.schemas import PatchModel
from app.core.validators import is_valid_pib


class KindergartenAccountCreate(BaseModel):
    bank_name: str = Field(..., min_length=1, max_length=255)
    account_number: str = Field(..., min_length=1, max_length=50)
    pib: str
    identification_number: str = Field(..., min_length=1, max_length=50)
    activity_code: Optional[int] = None
    kindergarten_id: Optional[int] = Field(None, ge=1, description="Kindergarten the account belongs to; may be linked later")

    @field_validator("pib")
    @classmethod
    def pib_has_nine_digits(cls, v: str) -> str:
        if not is_valid_pib(v):
            raise ValueError("PIB must have 9 digits")
        return v


class KindergartenAccountUpdate(PatchModel):
    non_nullable: ClassVar[Tuple[str, ...]] = ("bank_name", "account_number", "pib", "identification_number")

    bank_name: Optional[str] = Field(None, min_length=1, max_length=255)
    account_number: Optional[str] = Field(None, min_length=1, max_length=50)
    # Pattern is enforced by the service
    pib: Optional[str] = None
    identification_number: Optional[str] = Field(None, min_length=1, max_length=50)
    activity_code: Optional[int] = None
    kindergarten_id: Optional[int] = Field(None, ge=1)


class KindergartenAccountResponse(BaseModel):
    id: int
    bank_name: str
    account_number: str
    pib: str
    identification_number: str
    activity_code: Optional[int] = None
    kindergarten_id: Optional[int] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
