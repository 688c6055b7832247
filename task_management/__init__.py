# task_management/__init__.py
"""Task Management service: users, projects, tasks, comments and notifications."""

__version__ = "1.0.0"
