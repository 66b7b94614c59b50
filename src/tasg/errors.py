# src/tasg/errors.py

"""
Error taxonomy for task operations.

Every error carries a user-facing message (str(err)); the CLI prints it
and exits non-zero. None of them are retried.
"""

from __future__ import annotations

from pathlib import Path


class TaskError(Exception):
    """Base class for all task-related failures."""


class ValidationError(TaskError):
    """Invalid input: empty description, unconfirmed nuke, unknown command."""


class NotFoundError(TaskError):
    def __init__(self, task_id: int) -> None:
        super().__init__(f"Task with ID {task_id} not found")
        self.task_id = task_id


class StorageError(TaskError):
    """
    The task file is unreadable, unwritable or corrupt.

    A corrupt file is never repaired: silently dropping tasks is worse
    than refusing to run.
    """

    def __init__(self, message: str, *, path: str | Path | None = None) -> None:
        super().__init__(message)
        self.path = Path(path) if path is not None else None
