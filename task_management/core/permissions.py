"""
Authorization rules for every resource.

A caller may act on a resource when they own it, when they are an admin, or
when their role in the owning project grants the specific mutation. Checks
return booleans; ``AccessPolicy.require`` turns a denial into an
AuthorizationError.
"""
from datetime import timedelta

from .exceptions import AuthorizationError
from ..models import User, Project, Task, Comment, Notification
from ..utils.dates import utcnow, convert_datetime_to_utc


class AccessPolicy:
    """Stateless permission checks shared by the services."""

    def __init__(self, comment_edit_grace: timedelta = timedelta(minutes=15)):
        self.comment_edit_grace = comment_edit_grace

    def require(self, allowed: bool, message: str = "You do not have permission to perform this action"):
        if not allowed:
            raise AuthorizationError(message)

    # Users

    def can_update_user(self, caller: User, target: User) -> bool:
        return caller.is_admin or caller.id == target.id

    def can_change_account_flags(self, caller: User) -> bool:
        """Role and active flag are administrative fields"""
        return caller.is_admin

    def can_delete_user(self, caller: User, target: User) -> bool:
        return caller.is_admin or caller.id == target.id

    # Projects

    def is_project_owner(self, caller: User, project: Project) -> bool:
        return project.owner_id == caller.id

    def can_view_project(self, caller: User, project: Project) -> bool:
        return caller.is_admin or project.has_member(caller)

    def can_manage_project(self, caller: User, project: Project) -> bool:
        """Rename, delete and change membership"""
        return caller.is_admin or self.is_project_owner(caller, project)

    # Tasks

    def can_create_task(self, caller: User, project: Project) -> bool:
        return self.can_view_project(caller, project)

    def can_view_task(self, caller: User, task: Task) -> bool:
        return self.can_view_project(caller, task.project)

    def can_edit_task(self, caller: User, task: Task) -> bool:
        return (
            caller.is_admin
            or task.creator_id == caller.id
            or self.is_project_owner(caller, task.project)
        )

    def can_change_task_status(self, caller: User, task: Task) -> bool:
        return self.can_edit_task(caller, task) or task.assignee_id == caller.id

    def can_delete_task(self, caller: User, task: Task) -> bool:
        return self.can_edit_task(caller, task)

    # Comments

    def can_comment(self, caller: User, task: Task) -> bool:
        return self.can_view_task(caller, task)

    def within_edit_grace(self, comment: Comment) -> bool:
        created_at = convert_datetime_to_utc(comment.created_at)
        return utcnow() - created_at <= self.comment_edit_grace

    def can_edit_comment(self, caller: User, comment: Comment) -> bool:
        # Authors only, admins included, and only while the grace period runs
        return comment.author_id == caller.id and self.within_edit_grace(comment)

    def can_delete_comment(self, caller: User, comment: Comment) -> bool:
        return (
            caller.is_admin
            or comment.author_id == caller.id
            or self.is_project_owner(caller, comment.task.project)
        )

    # Notifications

    def can_access_notification(self, caller: User, notification: Notification) -> bool:
        return caller.is_admin or notification.recipient_id == caller.id
