"""
Append-only log of sent mails. No audit timestamps beyond created_date, no update/delete path.
"""

from sqlalchemy import Column, DateTime, Integer, Text

from app.core.clock import utcnow
from app.db.session import Base


class MailHistory(Base):
    __tablename__ = "mail_history"

    id = Column(Integer, primary_key=True, autoincrement=True)
    addresses = Column(Text, nullable=False)
    message = Column(Text, nullable=True)
    created_date = Column(DateTime(timezone=True), default=utcnow, nullable=False)
