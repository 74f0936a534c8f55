from datetime import datetime
from typing import ClassVar, List, Optional, Tuple

from pydantic import BaseModel, EmailStr, Field

from app.api.v1.activities.schemas import ActivitySummary
from app.api.v1.groups.schemas import GroupSummary
from app.core.schemas import PatchModel


class KindergartenCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    address: str = Field(..., min_length=1, max_length=255)
    phone_number: Optional[str] = Field(None, max_length=50)
    email: EmailStr
    logo: Optional[str] = Field(None, max_length=512)
    # Checked by the service so a missing id reads "Account id must be provided"
    account_id: Optional[int] = Field(None, ge=1)


class KindergartenUpdate(PatchModel):
    non_nullable: ClassVar[Tuple[str, ...]] = ("name", "address", "email", "account_id")

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    address: Optional[str] = Field(None, min_length=1, max_length=255)
    phone_number: Optional[str] = Field(None, max_length=50)
    email: Optional[str] = Field(None, max_length=255)
    logo: Optional[str] = Field(None, max_length=512)
    account_id: Optional[int] = Field(None, ge=1)


class KindergartenResponse(BaseModel):
    id: int
    name: str
    address: str
    phone_number: Optional[str] = None
    email: str
    logo: Optional[str] = None
    account_id: Optional[int] = None
    groups: List[GroupSummary] = Field(default_factory=list)
    activities: List[ActivitySummary] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime
