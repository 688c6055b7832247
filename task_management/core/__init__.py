# task_management/core/__init__.py
"""Core modules: configuration, database, errors, authentication and policy."""
