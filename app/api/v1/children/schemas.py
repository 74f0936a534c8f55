from datetime import date, datetime
from typing import ClassVar, List, Optional, Tuple

from pydantic import BaseModel, Field, field_validator

from app.api.v1.activities.schemas import ActivitySummary
from app.core.clock import utcnow
from app.core.schemas import PatchModel


def _not_in_future(value: Optional[date]) -> Optional[date]:
    if value is not None and value > utcnow().date():
        raise ValueError("Birthday must be in the past")
    return value


class ChildCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    surname: str = Field(..., min_length=1, max_length=255)
    sibling_order: int = Field(1, ge=1, description="Sibling order starts at 1")
    birthday: Optional[date] = None
    status: bool = True
    # Reference ids are checked in the service ("Group id must be provided")
    group_id: Optional[int] = Field(None, ge=1)
    parent_id: Optional[int] = Field(None, ge=1)
    kindergarten_id: Optional[int] = Field(None, ge=1)

    @field_validator("birthday")
    @classmethod
    def birthday_not_in_future(cls, v: Optional[date]) -> Optional[date]:
        return _not_in_future(v)


class ChildUpdate(PatchModel):
    non_nullable: ClassVar[Tuple[str, ...]] = (
        "name",
        "surname",
        "sibling_order",
        "status",
        "group_id",
        "parent_id",
        "kindergarten_id",
    )

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    surname: Optional[str] = Field(None, min_length=1, max_length=255)
    sibling_order: Optional[int] = Field(None, ge=1)
    birthday: Optional[date] = None
    status: Optional[bool] = None
    group_id: Optional[int] = Field(None, ge=1)
    parent_id: Optional[int] = Field(None, ge=1)
    kindergarten_id: Optional[int] = Field(None, ge=1)

    @field_validator("birthday")
    @classmethod
    def birthday_not_in_future(cls, v: Optional[date]) -> Optional[date]:
        return _not_in_future(v)


class ChildResponse(BaseModel):
    id: int
    name: str
    surname: str
    sibling_order: int
    birthday: Optional[date] = None
    status: bool
    group_id: int
    parent_id: int
    kindergarten_id: int
    activities: List[ActivitySummary] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime
