# task_management/routers/__init__.py
"""API routers for the Task Management service."""
