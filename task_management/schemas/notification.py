from datetime import datetime
from typing import Optional

from ..models.notification import NotificationKind
from .base import APIModel


class NotificationResponse(APIModel):
    id: int
    recipient_id: int
    kind: NotificationKind
    message: str
    task_id: Optional[int] = None
    is_read: bool
    created_at: datetime


class UnreadCount(APIModel):
    unread: int


class MarkedRead(APIModel):
    updated: int
