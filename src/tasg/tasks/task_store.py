# src/tasg/tasks/task_store.py

from __future__ import annotations

import contextlib
import json
import logging
import os
from collections.abc import Callable, Iterable
from datetime import datetime
from pathlib import Path
from typing import Any

from ..errors import NotFoundError, StorageError, ValidationError
from .task_models import Task, now_local

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1


def _clean_description(description: str | None) -> str:
    text = (description or "").strip()
    if not text:
        raise ValidationError("Description cannot be empty")
    return text


class TaskStore:
    """
    JSON-file task store.

    The whole file is read into memory by load() and written back in full
    by save(). Between the two, the store is owned by the running command;
    nothing is written implicitly.

    File layout (version 1):
        {"version": 1, "next_id": N, "tasks": [{...}, ...]}

    A bare JSON array of tasks (written by earlier releases) is accepted
    on load and upgraded on the next save.

    Not safe against concurrent processes: the last save wins.
    """

    def __init__(
        self,
        path: str | Path,
        tasks: Iterable[Task] = (),
        next_id: int = 1,
        *,
        clock: Callable[[], datetime] = now_local,
    ) -> None:
        self._path = Path(path)
        self._tasks: list[Task] = list(tasks)
        self._next_id = next_id
        self._clock = clock

    @property
    def path(self) -> Path:
        return self._path

    @property
    def next_id(self) -> int:
        return self._next_id

    def __len__(self) -> int:
        return len(self._tasks)

    # ---- persistence ----

    @classmethod
    def load(cls, path: str | Path, *, clock: Callable[[], datetime] = now_local) -> TaskStore:
        """
        Load the store from `path`.

        Missing file -> empty store with next_id=1 (nothing is created on disk).
        Unreadable or corrupt file -> StorageError; no repair is attempted.
        """
        path = Path(path)
        if not path.exists():
            logger.info("No task file at %s; starting with an empty store.", path)
            return cls(path, clock=clock)

        try:
            raw = path.read_text("utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Cannot read task file {path}: {e}", path=path) from e

        try:
            data = json.loads(raw)
        except (json.JSONDecodeError, RecursionError) as e:
            # RecursionError: nesting too deep for the decoder.
            raise StorageError(f"Task file {path} is corrupt: {e}", path=path) from e

        try:
            tasks, next_id = cls._decode(data)
        except ValueError as e:
            raise StorageError(f"Task file {path} is corrupt: {e}", path=path) from e

        logger.info("TaskStore loaded path=%s tasks=%d next_id=%d", path, len(tasks), next_id)
        return cls(path, tasks, next_id, clock=clock)

    @staticmethod
    def _decode(data: Any) -> tuple[list[Task], int]:
        if isinstance(data, list):
            entries = data
            stored_next = 1
            logger.debug("Legacy array format detected; upgrading on next save.")
        elif isinstance(data, dict):
            version = data.get("version", FORMAT_VERSION)
            if version != FORMAT_VERSION:
                raise ValueError(f"unsupported format version {version!r}")
            entries = data.get("tasks", [])
            if not isinstance(entries, list):
                raise ValueError("'tasks' must be a list")
            stored_next = data.get("next_id", 1)
            if not isinstance(stored_next, int) or isinstance(stored_next, bool) or stored_next < 1:
                raise ValueError(f"invalid next_id: {stored_next!r}")
        else:
            raise ValueError(f"expected an object or a list, got {type(data).__name__}")

        tasks = [Task.from_dict(entry) for entry in entries]

        seen: set[int] = set()
        for task in tasks:
            if task.id in seen:
                raise ValueError(f"duplicate task id {task.id}")
            seen.add(task.id)

        # The counter never goes back below an id that was already handed out.
        next_id = max(stored_next, max(seen, default=0) + 1)
        return tasks, next_id

    def _to_document(self) -> dict[str, Any]:
        return {
            "version": FORMAT_VERSION,
            "next_id": self._next_id,
            "tasks": [t.to_dict() for t in self._tasks],
        }

    def save(self) -> None:
        """
        Write the full state to disk.

        The document goes to a sibling temp file first and is then moved
        over the real one, so a successful save never leaves a half-written
        file behind.
        """
        payload = json.dumps(self._to_document(), ensure_ascii=False, indent=2) + "\n"
        tmp = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(payload, "utf-8")
            os.replace(tmp, self._path)
        except OSError as e:
            with contextlib.suppress(OSError):
                tmp.unlink(missing_ok=True)
            logger.error("Failed to save tasks to %s: %s", self._path, e)
            raise StorageError(f"Cannot write task file {self._path}: {e}", path=self._path) from e

        logger.debug(
            "TaskStore saved path=%s tasks=%d next_id=%d",
            self._path,
            len(self._tasks),
            self._next_id,
        )

    # ---- public API ----

    def add(self, description: str) -> Task:
        text = _clean_description(description)
        now = self._clock()
        task = Task(id=self._next_id, description=text, created_at=now, updated_at=now)
        self._tasks.append(task)
        self._next_id += 1
        logger.debug("Task added id=%s", task.id)
        return task

    def find(self, task_id: int) -> Task:
        for task in self._tasks:
            if task.id == task_id:
                return task
        raise NotFoundError(task_id)

    def complete(self, task_id: int) -> Task:
        """Mark a task complete. Completing an already completed task is a no-op."""
        task = self.find(task_id)
        if not task.completed:
            task.completed = True
            task.updated_at = self._clock()
            logger.debug("Task completed id=%s", task_id)
        return task

    def edit(self, task_id: int, description: str) -> Task:
        task = self.find(task_id)
        task.description = _clean_description(description)
        task.updated_at = self._clock()
        logger.debug("Task edited id=%s", task_id)
        return task

    def delete(self, task_id: int) -> Task:
        for idx, task in enumerate(self._tasks):
            if task.id == task_id:
                del self._tasks[idx]
                logger.debug("Task deleted id=%s", task_id)
                return task
        raise NotFoundError(task_id)

    def list_tasks(self, include_completed: bool = False) -> list[Task]:
        if include_completed:
            return list(self._tasks)
        return [t for t in self._tasks if not t.completed]

    def nuke(self, *, confirmed: bool) -> int:
        """
        Remove every task and reset the id counter to 1.

        Irreversible. Callers must pass confirmed=True explicitly; asking the
        user is the caller's job.
        """
        if confirmed is not True:
            raise ValidationError("Refusing to delete all tasks without confirmation")
        removed = len(self._tasks)
        self._tasks.clear()
        self._next_id = 1
        logger.info("TaskStore nuked path=%s removed=%d", self._path, removed)
        return removed
