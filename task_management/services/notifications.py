"""
Notification outbox: per-user messages generated by task and comment events.
"""
import logging
from typing import Iterable, List, Optional, Tuple
from sqlalchemy import desc
from sqlalchemy.exc import SQLAlchemyError

from ..models import User, Task, Comment, Notification, NotificationKind
from .base import BaseService

logger = logging.getLogger(__name__)


class NotificationService(BaseService):
    """Appends notifications as a side effect of mutations and serves the inbox."""

    # Outbox

    def append(
        self,
        recipient_ids: Iterable[int],
        kind: NotificationKind,
        message: str,
        task_id: Optional[int] = None,
    ) -> List[Notification]:
        """
        Store one notification per recipient.

        Best effort: runs after the triggering mutation has committed, and a
        storage failure is logged and rolled back instead of propagating.
        """
        recipients = sorted(set(recipient_ids))
        if not recipients:
            return []

        notifications = [
            Notification(
                recipient_id=recipient_id,
                kind=kind.value,
                message=message,
                task_id=task_id,
            )
            for recipient_id in recipients
        ]
        try:
            self.db.add_all(notifications)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to store {kind.value} notifications for {recipients}: {e}")
            return []

        logger.info(f"NOTIFICATION: {kind.value} -> users {recipients}")
        return notifications

    def task_assigned(self, task: Task, assigned_by: User) -> List[Notification]:
        """Tell the new assignee, unless they assigned themselves"""
        if task.assignee_id is None or task.assignee_id == assigned_by.id:
            return []
        return self.append(
            [task.assignee_id],
            NotificationKind.TASK_ASSIGNED,
            f"{assigned_by.full_name} assigned you to task '{task.title}'",
            task_id=task.id,
        )

    def comment_added(self, task: Task, comment: Comment, participant_ids: Iterable[int]) -> List[Notification]:
        """Tell every task participant except the comment's author"""
        recipients = set(participant_ids) - {comment.author_id}
        author = comment.author
        return self.append(
            recipients,
            NotificationKind.COMMENT_ADDED,
            f"{author.full_name} commented on task '{task.title}'",
            task_id=task.id,
        )

    # Inbox

    def list_for(
        self,
        caller: User,
        unread_only: bool = False,
        skip: int = 0,
        limit: int = 20,
    ) -> Tuple[List[Notification], int]:
        query = self.db.query(Notification).filter(Notification.recipient_id == caller.id)
        if unread_only:
            query = query.filter(Notification.is_read.is_(False))
        total = query.count()
        notifications = (
            query.order_by(desc(Notification.created_at), desc(Notification.id))
            .offset(skip)
            .limit(limit)
            .all()
        )
        return notifications, total

    def unread_count(self, caller: User) -> int:
        return (
            self.db.query(Notification)
            .filter(Notification.recipient_id == caller.id, Notification.is_read.is_(False))
            .count()
        )

    def get(self, caller: User, notification_id: int) -> Notification:
        notification = self.get_or_404(Notification, notification_id)
        self.policy.require(
            self.policy.can_access_notification(caller, notification),
            "You can only access your own notifications",
        )
        return notification

    def mark_read(self, caller: User, notification_id: int) -> Notification:
        notification = self.get(caller, notification_id)
        if not notification.is_read:
            notification.is_read = True
            self.commit(notification)
        return notification

    def mark_all_read(self, caller: User) -> int:
        updated = (
            self.db.query(Notification)
            .filter(Notification.recipient_id == caller.id, Notification.is_read.is_(False))
            .update({Notification.is_read: True}, synchronize_session=False)
        )
        self.commit()
        return updated

    def delete(self, caller: User, notification_id: int):
        notification = self.get(caller, notification_id)
        self.db.delete(notification)
        self.commit()
