from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class PaymentSlipIn(BaseModel):
    payer: str = Field(..., min_length=1)
    purpose: str = Field(..., min_length=1)
    payee: str = Field(..., min_length=1)
    payee_account: str = Field(..., min_length=1, max_length=50)
    amount: Decimal = Field(..., ge=0)
    reference_model: Optional[str] = Field(None, max_length=2)
    reference_number: Optional[str] = Field(None, max_length=50)


class PaymentSlipMailRequest(BaseModel):
    to: EmailStr
    subject: str = Field(..., min_length=1, max_length=255)
    body: str = ""
    slip: Optional[PaymentSlipIn] = None


class MailSentResponse(BaseModel):
    message: str
    mail_history_id: int
