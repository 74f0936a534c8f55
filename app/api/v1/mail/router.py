from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ServiceError
from app.core.mail_service import MailSender, get_mail_sender
from app.db.session import get_db

from .schemas import MailSentResponse, PaymentSlipMailRequest
from . import service

router = APIRouter(prefix="/api/v1/mail", tags=["mail"])


@router.post("/payment-slip", response_model=MailSentResponse)
async def send_payment_slip(
    payload: PaymentSlipMailRequest,
    db: AsyncSession = Depends(get_db),
    sender: MailSender = Depends(get_mail_sender),
) -> MailSentResponse:
    try:
        return await service.send_payment_slip(db, sender, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
