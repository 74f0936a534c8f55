import smtplib

import pytest
from httpx import AsyncClient

from app.core import mail_service
from app.core.exceptions import MailDeliveryError
from app.core.mail_service import MailSender, PaymentSlip, get_mail_sender
from app.main import app


class FakeSMTP:
    sent = []
    fail = False

    def __init__(self, host, port, timeout=None):
        self.host = host
        self.port = port
        self.started_tls = False
        self.logged_in = None

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def starttls(self):
        self.started_tls = True

    def login(self, user, password):
        self.logged_in = (user, password)

    def send_message(self, message):
        if FakeSMTP.fail:
            raise smtplib.SMTPServerDisconnected("connection lost")
        FakeSMTP.sent.append((self, message))


@pytest.fixture()
def fake_smtp(monkeypatch):
    FakeSMTP.sent = []
    FakeSMTP.fail = False
    monkeypatch.setattr(mail_service.smtplib, "SMTP", FakeSMTP)
    return FakeSMTP


@pytest.fixture()
def sender(fake_smtp) -> MailSender:
    sender = MailSender("smtp.test", 2525, "billing@kindergarten.test", user="billing", password="pw")
    app.dependency_overrides[get_mail_sender] = lambda: sender
    yield sender
    app.dependency_overrides.pop(get_mail_sender, None)


def test_payment_slip_is_appended_to_body() -> None:
    slip = PaymentSlip(
        payer="Marko Jovic",
        purpose="September fee",
        payee="Sunshine",
        payee_account="160-1",
        amount="130.50",
        reference_model="97",
        reference_number="2024-09",
    )
    message = MailSender("h", 25, "from@test.rs").build_message("to@test.rs", "Bill", "Dear parent", slip)
    text = message.get_content()
    assert text.startswith("Dear parent")
    assert "Payee account: 160-1" in text
    assert "Model: 97" in text
    assert message["To"] == "to@test.rs"


@pytest.mark.asyncio
async def test_send_uses_tls_and_login(sender: MailSender, fake_smtp) -> None:
    await sender.send("parent@test.rs", "Hello", "Body")
    assert len(fake_smtp.sent) == 1
    smtp, message = fake_smtp.sent[0]
    assert smtp.started_tls is True
    assert smtp.logged_in == ("billing", "pw")
    assert message["Subject"] == "Hello"


@pytest.mark.asyncio
async def test_send_failure_raises_mail_delivery_error(sender: MailSender, fake_smtp) -> None:
    fake_smtp.fail = True
    with pytest.raises(MailDeliveryError):
        await sender.send("parent@test.rs", "Hello", "Body")


@pytest.mark.asyncio
async def test_payment_slip_endpoint_records_history(client: AsyncClient, sender: MailSender, fake_smtp) -> None:
    payload = {
        "to": "parent@example.com",
        "subject": "September bill",
        "body": "Please find the payment slip below.",
        "slip": {
            "payer": "Marko Jovic",
            "purpose": "Kindergarten fee",
            "payee": "Sunshine",
            "payee_account": "160-1",
            "amount": "130.5",
        },
    }
    response = await client.post("/api/v1/mail/payment-slip", json=payload)
    assert response.status_code == 200
    assert response.json()["message"] == "Mail sent to parent@example.com"
    assert "Amount: 130.50" in fake_smtp.sent[0][1].get_content()

    response = await client.get("/api/v1/mail-history/addresses", params={"addresses": "parent@example.com"})
    assert [m["message"] for m in response.json()] == ["Please find the payment slip below."]


@pytest.mark.asyncio
async def test_failed_send_records_nothing(client: AsyncClient, sender: MailSender, fake_smtp) -> None:
    fake_smtp.fail = True
    response = await client.post(
        "/api/v1/mail/payment-slip", json={"to": "parent@example.com", "subject": "Bill", "body": "x"}
    )
    assert response.status_code == 500
    assert response.json()["message"].startswith("Mail could not be sent to parent@example.com")

    response = await client.get("/api/v1/mail-history")
    assert response.json()["totalElements"] == 0
