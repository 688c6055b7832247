# task_management/schemas/__init__.py
"""Pydantic schemas for the Task Management service."""
