"""
Outbound mail over SMTP. Sending runs in a worker thread so request handlers stay async.

The payment slip ("uplatnica") is not rendered as PDF; its fields are appended to the
plain-text body in the order they appear on the printed form.
"""

import asyncio
import logging
import smtplib
from dataclasses import dataclass
from email.message import EmailMessage
from typing import Optional

from app.core.config import settings
from app.core.exceptions import MailDeliveryError

logger = logging.getLogger(__name__)


@dataclass
class PaymentSlip:
    payer: str
    purpose: str
    payee: str
    payee_account: str
    amount: str
    reference_model: Optional[str] = None
    reference_number: Optional[str] = None

    def render(self) -> str:
        lines = [
            "Payment slip",
            f"Payer: {self.payer}",
            f"Purpose: {self.purpose}",
            f"Payee: {self.payee}",
            f"Payee account: {self.payee_account}",
            f"Amount: {self.amount}",
        ]
        if self.reference_model:
            lines.append(f"Model: {self.reference_model}")
        if self.reference_number:
            lines.append(f"Reference number: {self.reference_number}")
        return "\n".join(lines)


class MailSender:
    def __init__(
        self,
        host: str,
        port: int,
        sender: str,
        user: Optional[str] = None,
        password: Optional[str] = None,
        use_tls: bool = True,
    ) -> None:
        self.host = host
        self.port = port
        self.sender = sender
        self.user = user
        self.password = password
        self.use_tls = use_tls

    def build_message(self, recipient: str, subject: str, body: str, slip: Optional[PaymentSlip] = None) -> EmailMessage:
        text = body if slip is None else f"{body}\n\n{slip.render()}"
        message = EmailMessage()
        message["From"] = self.sender
        message["To"] = recipient
        message["Subject"] = subject
        message.set_content(text)
        return message

    def _deliver(self, message: EmailMessage) -> None:
        with smtplib.SMTP(self.host, self.port, timeout=30) as smtp:
            if self.use_tls:
                smtp.starttls()
            if self.user:
                smtp.login(self.user, self.password or "")
            smtp.send_message(message)

    async def send(self, recipient: str, subject: str, body: str, slip: Optional[PaymentSlip] = None) -> EmailMessage:
        """Send one mail. Raises MailDeliveryError if the SMTP exchange fails."""
        message = self.build_message(recipient, subject, body, slip)
        try:
            await asyncio.to_thread(self._deliver, message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error("Mail to %s failed: %s", recipient, e)
            raise MailDeliveryError(f"Mail could not be sent to {recipient}: {e}")
        logger.info("Mail '%s' sent to %s", subject, recipient)
        return message


def get_mail_sender() -> MailSender:
    return MailSender(
        host=settings.smtp_host,
        port=settings.smtp_port,
        sender=settings.mail_from,
        user=settings.smtp_user,
        password=settings.smtp_password,
        use_tls=settings.smtp_use_tls,
    )
