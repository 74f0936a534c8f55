"""Kindergarten (the billing organization). Owns the group and activity sets."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from app.core.clock import utcnow
from app.core.models.associations import kindergarten_activity, kindergarten_groups
from app.db.session import Base


class Kindergarten(Base):
    __tablename__ = "kindergartens"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, unique=True)
    address = Column(String(255), nullable=False)
    phone_number = Column(String(50), nullable=True)
    email = Column(String(255), nullable=False, unique=True)
    logo = Column(String(512), nullable=True)
    # Required by the service on create; nullable so an account can be deleted without cascading.
    # use_alter breaks the kindergartens <-> kindergarten_accounts FK cycle at CREATE TABLE time.
    account_id = Column(
        Integer,
        ForeignKey("kindergarten_accounts.id", ondelete="SET NULL", use_alter=True),
        nullable=True,
    )
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    groups = relationship("Group", secondary=kindergarten_groups, collection_class=set, lazy="selectin")
    activities = relationship("Activity", secondary=kindergarten_activity, collection_class=set, lazy="selectin")
