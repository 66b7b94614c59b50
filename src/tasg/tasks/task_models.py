# src/tasg/tasks/task_models.py

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Any

# Files written by earlier releases carry nanosecond fractions.
_EXTRA_FRACTION_RE = re.compile(r"(\.\d{6})\d+")


def now_local() -> datetime:
    return datetime.now().astimezone().replace(microsecond=0)


@dataclass(slots=True)
class Task:
    id: int
    description: str
    completed: bool = False

    created_at: datetime | None = None
    updated_at: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "description": self.description,
            "completed": self.completed,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    @classmethod
    def from_dict(cls, raw: Any) -> Task:
        """
        Build a Task from its JSON object.

        Raises ValueError on any shape problem; the store turns that into
        a StorageError naming the file.
        """
        if not isinstance(raw, dict):
            raise ValueError(f"task entry must be an object, got {type(raw).__name__}")

        task_id = raw.get("id")
        # bool is an int subclass; reject it explicitly.
        if not isinstance(task_id, int) or isinstance(task_id, bool) or task_id < 1:
            raise ValueError(f"invalid task id: {task_id!r}")

        description = raw.get("description")
        if not isinstance(description, str) or not description.strip():
            raise ValueError(f"task {task_id}: description must be a non-empty string")

        completed = raw.get("completed", False)
        if not isinstance(completed, bool):
            raise ValueError(f"task {task_id}: completed must be true or false")

        return cls(
            id=task_id,
            description=description,
            completed=completed,
            created_at=_parse_ts(raw.get("created_at"), task_id, "created_at"),
            updated_at=_parse_ts(raw.get("updated_at"), task_id, "updated_at"),
        )


def _parse_ts(raw: Any, task_id: int, field: str) -> datetime | None:
    if raw is None:
        return None
    if not isinstance(raw, str):
        raise ValueError(f"task {task_id}: {field} must be a timestamp string")
    try:
        return datetime.fromisoformat(_EXTRA_FRACTION_RE.sub(r"\1", raw))
    except ValueError as e:
        raise ValueError(f"task {task_id}: bad {field} {raw!r}") from e
