# task_management/models/__init__.py
"""Database models for the Task Management service."""
from .user import User, UserRole
from .project import Project, project_members
from .task import Task, TaskStatus, TaskPriority
from .comment import Comment
from .notification import Notification, NotificationKind

__all__ = [
    "User", "UserRole",
    "Project", "project_members",
    "Task", "TaskStatus", "TaskPriority",
    "Comment",
    "Notification", "NotificationKind",
]
