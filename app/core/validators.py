import re

from app.core.exceptions import ValidationError

EMAIL_PATTERN = re.compile(r"[A-Za-z0-9+_.-]+@[A-Za-z0-9.-]+")
# ASCII digits only
PIB_PATTERN = re.compile(r"[0-9]{9}")


def is_valid_email(email: str) -> bool:
    return EMAIL_PATTERN.fullmatch(email) is not None


def is_valid_pib(pib: str) -> bool:
    return PIB_PATTERN.fullmatch(pib) is not None


def ensure_email(email: str) -> str:
    """Service-level email shape check for updates; raises ValidationError (400)."""
    if not is_valid_email(email):
        raise ValidationError("Invalid email format")
    return email


def ensure_pib(pib: str) -> str:
    if not is_valid_pib(pib):
        raise ValidationError("PIB must have exactly 9 digits")
    return pib
