from sqlalchemy import Boolean, Column, DateTime, Integer, Numeric, String

from app.core.clock import utcnow
from app.db.session import Base


class Activity(Base):
    """Extra paid activity (e.g. Swimming) offered by kindergartens and attended by children."""

    __tablename__ = "activities"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, unique=True)
    price = Column(Numeric(12, 2), nullable=False, default=0)
    status = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
