from sqlalchemy import Boolean, Column, DateTime, Integer, Numeric, String

from app.core.clock import utcnow
from app.db.session import Base


class Group(Base):
    """Age/care group with a monthly price and an optional percentage discount."""

    __tablename__ = "groups"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, unique=True)
    price = Column(Numeric(12, 2), nullable=False)
    discount = Column(Integer, nullable=False, default=0)
    active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
