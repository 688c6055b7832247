import enum
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey
from ..core.database import Base
from ..utils.dates import utcnow


class NotificationKind(str, enum.Enum):
    TASK_ASSIGNED = "task_assigned"
    COMMENT_ADDED = "comment_added"


class Notification(Base):
    """Per-user message produced by task and comment events"""
    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True, index=True)
    recipient_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    kind = Column(String(40), nullable=False)
    message = Column(Text, nullable=False)
    task_id = Column(Integer, ForeignKey("tasks.id", ondelete="CASCADE"), nullable=True, index=True)
    is_read = Column(Boolean, default=False, nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    def __init__(self, **kwargs):
        kwargs.setdefault("is_read", False)
        kwargs.setdefault("created_at", utcnow())
        super().__init__(**kwargs)

    def __repr__(self):
        return f"<Notification(id={self.id}, recipient_id={self.recipient_id}, kind='{self.kind}')>"
