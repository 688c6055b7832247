import logging
from typing import List
from sqlalchemy.orm import Session

from ..core.exceptions import ValidationError
from ..core.permissions import AccessPolicy
from ..models import User, Task, Comment
from ..schemas.comment import CommentCreate, CommentUpdate
from .base import BaseService
from .notifications import NotificationService

logger = logging.getLogger(__name__)


class CommentService(BaseService):
    """Comment log attached to tasks"""

    def __init__(self, db: Session, policy: AccessPolicy, notifications: NotificationService):
        super().__init__(db, policy)
        self.notifications = notifications

    def _task(self, caller: User, task_id: int) -> Task:
        task = self.get_or_404(Task, task_id)
        self.policy.require(
            self.policy.can_comment(caller, task),
            "You are not a member of this task's project",
        )
        return task

    def create(self, caller: User, task_id: int, comment_in: CommentCreate) -> Comment:
        task = self._task(caller, task_id)

        if comment_in.parent_id is not None:
            parent = self.get_or_404(Comment, comment_in.parent_id)
            if parent.task_id != task.id:
                raise ValidationError.for_field("parentId", "Replies must belong to the same task")

        participant_ids = task.participant_ids()
        comment = Comment(
            task=task,
            author=caller,
            parent_id=comment_in.parent_id,
            body=comment_in.body,
        )
        self.db.add(comment)
        self.commit(comment)
        logger.info(f"User {caller.id} commented on task {task.id}")

        self.notifications.comment_added(task, comment, participant_ids)
        return comment

    def list(self, caller: User, task_id: int) -> List[Comment]:
        task = self._task(caller, task_id)
        return list(task.comments)

    def update(self, caller: User, comment_id: int, comment_update: CommentUpdate) -> Comment:
        comment = self.get_or_404(Comment, comment_id)
        minutes = int(self.policy.comment_edit_grace.total_seconds() // 60)
        self.policy.require(
            self.policy.can_edit_comment(caller, comment),
            f"Comments can only be edited by their author within {minutes} minutes",
        )
        comment.body = comment_update.body
        self.commit(comment)
        return comment

    def delete(self, caller: User, comment_id: int):
        comment = self.get_or_404(Comment, comment_id)
        self.policy.require(
            self.policy.can_delete_comment(caller, comment),
            "Only the author or project owner can delete this comment",
        )
        self.db.delete(comment)
        self.commit()
