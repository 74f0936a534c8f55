from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, Numeric, SmallInteger, String

from app.core.clock import utcnow
from app.db.session import Base


class Bill(Base):
    """Monthly bill for one child in one kindergarten."""

    __tablename__ = "bills"

    id = Column(Integer, primary_key=True, autoincrement=True)
    year = Column(SmallInteger, nullable=False)
    month = Column(String(20), nullable=False)
    deadline = Column(Date, nullable=True)
    bill_code = Column(String(100), nullable=True)
    payment_sum = Column(Numeric(12, 2), nullable=False, default=0)
    kindergarten_id = Column(Integer, ForeignKey("kindergartens.id", ondelete="RESTRICT"), nullable=False)
    child_id = Column(Integer, ForeignKey("children.id", ondelete="RESTRICT"), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
