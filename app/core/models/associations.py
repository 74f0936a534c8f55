"""Join tables for the owner -> related set relations (child activities, kindergarten groups/activities)."""

from sqlalchemy import Column, ForeignKey, Integer, Table

from app.db.session import Base

child_activities = Table(
    "child_activities",
    Base.metadata,
    Column("child_id", Integer, ForeignKey("children.id", ondelete="CASCADE"), primary_key=True),
    Column("activity_id", Integer, ForeignKey("activities.id", ondelete="CASCADE"), primary_key=True),
)

kindergarten_groups = Table(
    "kindergarten_groups",
    Base.metadata,
    Column("kindergarten_id", Integer, ForeignKey("kindergartens.id", ondelete="CASCADE"), primary_key=True),
    Column("group_id", Integer, ForeignKey("groups.id", ondelete="CASCADE"), primary_key=True),
)

kindergarten_activity = Table(
    "kindergarten_activity",
    Base.metadata,
    Column("kindergarten_id", Integer, ForeignKey("kindergartens.id", ondelete="CASCADE"), primary_key=True),
    Column("activity_id", Integer, ForeignKey("activities.id", ondelete="CASCADE"), primary_key=True),
)
