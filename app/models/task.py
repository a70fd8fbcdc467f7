"""Task model"""

from sqlalchemy import Column, Integer, String, DateTime, Boolean, ForeignKey
from datetime import datetime, timezone
from app.core.database import Base


MIN_PRIORITY = 0
MAX_PRIORITY = 3


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Task(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    title = Column(String, nullable=False)
    description = Column(String, nullable=True)
    completed = Column(Boolean, nullable=False, default=False)
    priority = Column(Integer, nullable=False, default=MIN_PRIORITY)
    color = Column(String, nullable=False, default="default")

    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
