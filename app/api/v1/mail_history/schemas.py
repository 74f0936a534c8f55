from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class MailHistoryCreate(BaseModel):
    addresses: str = Field(..., min_length=1)
    message: Optional[str] = None


class MailHistoryResponse(BaseModel):
    id: int
    addresses: str
    message: Optional[str] = None
    created_date: datetime

    class Config:
        from_attributes = True
