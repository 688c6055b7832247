# task_management/utils/__init__.py
"""Helpers shared by the service layer."""
