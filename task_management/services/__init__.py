# task_management/services/__init__.py
"""Business rules for each resource, independent of HTTP."""
from .auth import AuthService
from .users import UserService
from .projects import ProjectService
from .tasks import TaskService
from .comments import CommentService
from .notifications import NotificationService

__all__ = [
    "AuthService",
    "UserService",
    "ProjectService",
    "TaskService",
    "CommentService",
    "NotificationService",
]
