from sqlalchemy import Column, DateTime, ForeignKey, Integer, String

from app.core.clock import utcnow
from app.db.session import Base


class KindergartenAccount(Base):
    """Bank account and tax identifiers of a kindergarten (payee data for payment slips)."""

    __tablename__ = "kindergarten_accounts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    bank_name = Column(String(255), nullable=False)
    account_number = Column(String(50), nullable=False, unique=True)
    # Serbian tax id (PIB): exactly 9 digits
    pib = Column(String(9), nullable=False)
    identification_number = Column(String(50), nullable=False, unique=True)
    activity_code = Column(Integer, nullable=True)
    kindergarten_id = Column(Integer, ForeignKey("kindergartens.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
