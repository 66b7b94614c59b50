"""
Task subsystem.

Components:
- task_models.py: data structures (Task)
- task_store.py: JSON-file storage + mutation primitives
"""

from .task_models import Task
from .task_store import TaskStore

__all__ = ["Task", "TaskStore"]
