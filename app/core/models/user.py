from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text

from app.core.clock import utcnow
from app.db.session import Base


class User(Base):
    """Back-office user. Password is stored as a bcrypt hash."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(100), nullable=False, unique=True)
    password_hash = Column(Text, nullable=False)
    email = Column(String(255), nullable=False, unique=True)
    role_id = Column(Integer, nullable=False)
    status = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
