from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.mail_history.service import record_mail
from app.core.mail_service import MailSender, PaymentSlip

from .schemas import MailSentResponse, PaymentSlipMailRequest


async def send_payment_slip(
    db: AsyncSession, sender: MailSender, payload: PaymentSlipMailRequest
) -> MailSentResponse:
    """Send the mail, then log it. A failed send raises MailDeliveryError and logs nothing."""
    recipient = str(payload.to)
    slip = None
    if payload.slip is not None:
        slip = PaymentSlip(
            payer=payload.slip.payer,
            purpose=payload.slip.purpose,
            payee=payload.slip.payee,
            payee_account=payload.slip.payee_account,
            amount=f"{payload.slip.amount:.2f}",
            reference_model=payload.slip.reference_model,
            reference_number=payload.slip.reference_number,
        )
    await sender.send(recipient, payload.subject, payload.body, slip)
    history = await record_mail(db, recipient, payload.body)
    return MailSentResponse(message=f"Mail sent to {recipient}", mail_history_id=history.id)
