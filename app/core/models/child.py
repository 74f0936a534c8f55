from sqlalchemy import Boolean, Column, Date, DateTime, ForeignKey, Index, Integer, SmallInteger, String, func
from sqlalchemy.orm import relationship

from app.core.clock import utcnow
from app.core.models.associations import child_activities
from app.db.session import Base


class Child(Base):
    """Enrolled child. (name, surname, parent) is unique, case-insensitive on name and surname."""

    __tablename__ = "children"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    surname = Column(String(255), nullable=False)
    sibling_order = Column(SmallInteger, nullable=False, default=1)
    birthday = Column(Date, nullable=True)
    status = Column(Boolean, nullable=False, default=True)
    group_id = Column(Integer, ForeignKey("groups.id", ondelete="RESTRICT"), nullable=False)
    parent_id = Column(Integer, ForeignKey("parents.id", ondelete="RESTRICT"), nullable=False)
    kindergarten_id = Column(Integer, ForeignKey("kindergartens.id", ondelete="RESTRICT"), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    activities = relationship("Activity", secondary=child_activities, collection_class=set, lazy="selectin")


Index(
    "uq_children_name_surname_parent",
    func.lower(Child.name),
    func.lower(Child.surname),
    Child.parent_id,
    unique=True,
)
