"""Unit tests for validators, password hashing, the delete audit hook and the store error body."""

import json
import logging

import pytest
from sqlalchemy.exc import OperationalError
from starlette.requests import Request

from app.core.audit import log_deletion
from app.core.error_handlers import store_error_handler
from app.core.exceptions import ValidationError
from app.core.models import Activity
from app.core.security import hash_password, password_matches
from app.core.validators import ensure_email, ensure_pib, is_valid_email


def test_email_pattern() -> None:
    assert is_valid_email("a.b+c@mail.example.rs")
    assert not is_valid_email("not-an-email")
    assert not is_valid_email("two@@signs.rs")
    assert not is_valid_email("a@b.rs\n")
    with pytest.raises(ValidationError) as exc:
        ensure_email("nope")
    assert exc.value.status_code == 400
    assert exc.value.message == "Invalid email format"


def test_pib_pattern() -> None:
    assert ensure_pib("123456789") == "123456789"
    arabic_indic = "\u0661\u0662\u0663\u0664\u0665\u0666\u0667\u0668\u0669"
    for bad in ("12345678", "1234567890", "12345678a", "123456789\n", arabic_indic):
        with pytest.raises(ValidationError):
            ensure_pib(bad)


def test_password_hash_roundtrip() -> None:
    hashed = hash_password("Secret123")
    assert hashed.startswith("$2")
    assert password_matches("Secret123", hashed)
    assert not password_matches("secret123", hashed)
    assert not password_matches("Secret123", "plain-text")


def test_log_deletion_writes_snapshot(caplog) -> None:
    activity = Activity(id=3, name="Chess", price=5, status=True)
    with caplog.at_level(logging.INFO, logger="app.audit"):
        log_deletion("activity", activity)
    record = caplog.records[-1]
    assert record.name == "app.audit"
    assert "DELETE activity id=3" in record.getMessage()
    assert "'name': 'Chess'" in record.getMessage()


async def test_store_error_body() -> None:
    request = Request({"type": "http", "method": "GET", "path": "/api/v1/bill", "headers": [], "query_string": b""})
    exc = OperationalError("SELECT 1", {}, Exception("db down"))
    response = await store_error_handler(request, exc)
    assert response.status_code == 500
    assert json.loads(response.body) == {"message": "Database error: db down", "path": "/api/v1/bill"}


def test_password_over_72_bytes_is_rejected() -> None:
    with pytest.raises(ValidationError) as exc:
        hash_password("x" * 100)
    assert exc.value.status_code == 400
    # multi-byte characters count by their encoded size
    with pytest.raises(ValidationError):
        hash_password("š" * 40)
    assert password_matches("x" * 72, hash_password("x" * 72))
