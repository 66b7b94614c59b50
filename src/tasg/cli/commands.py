# src/tasg/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from ..errors import ValidationError
from ..tasks.task_models import Task
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)

TS_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True, slots=True)
class CommandResult:
    """What a handler hands back to the front end: text to print, and whether to save."""

    message: str
    changed: bool = False


CommandHandler = Callable[..., CommandResult]


class CommandRegistry:
    """Command-name -> handler registry used by the CLI front end."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(self, name: str, handler: CommandHandler, help_text: str) -> None:
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text

    def names(self) -> list[str]:
        return list(self._handlers)

    def help_for(self, name: str) -> str:
        return self._help.get(name.lower(), "")

    def handle(self, store: TaskStore, name: str, **kwargs) -> CommandResult:
        """Run one command against the loaded store."""
        handler = self._handlers.get(name.lower())
        if handler is None:
            raise ValidationError(f"Unknown command: {name}")
        logger.debug("Dispatching command=%s args=%s", name, kwargs)
        return handler(store, **kwargs)


registry = CommandRegistry()


def _fmt_ts(task: Task) -> str:
    return task.created_at.strftime(TS_FORMAT) if task.created_at else "-"


def render_task_table(tasks: list[Task], *, show_completed: bool) -> str:
    if not tasks:
        return "No tasks found"

    def row(task_id: str, description: str, created: str, done: str) -> str:
        line = f"{task_id:<5} {description:<50} {created:<20}"
        return f"{line} {done}" if show_completed else line.rstrip()

    lines = [row("ID", "Description", "Created At", "Completed")]
    for t in tasks:
        lines.append(row(str(t.id), t.description, _fmt_ts(t), "Yes" if t.completed else "No"))
    return "\n".join(lines)


def cmd_add(store: TaskStore, *, description: str) -> CommandResult:
    task = store.add(description)
    return CommandResult(f"Task added successfully (id={task.id}).", changed=True)


def cmd_list(store: TaskStore, *, include_completed: bool = False) -> CommandResult:
    tasks = store.list_tasks(include_completed=include_completed)
    return CommandResult(render_task_table(tasks, show_completed=include_completed))


def cmd_complete(store: TaskStore, *, task_id: int) -> CommandResult:
    if store.find(task_id).completed:
        return CommandResult(f"Task {task_id} is already complete.")
    store.complete(task_id)
    return CommandResult(f"Task {task_id} marked as complete.", changed=True)


def cmd_edit(store: TaskStore, *, task_id: int, description: str) -> CommandResult:
    store.edit(task_id, description)
    return CommandResult(f"Task {task_id} updated successfully.", changed=True)


def cmd_delete(store: TaskStore, *, task_id: int) -> CommandResult:
    store.delete(task_id)
    return CommandResult(f"Task {task_id} deleted successfully.", changed=True)


def cmd_nuke(store: TaskStore, *, confirmed: bool) -> CommandResult:
    """
    Second half of the nuke protocol.

    The front end asks the user and passes the answer in; a declined
    prompt never reaches the store.
    """
    if not confirmed:
        logger.info("Nuke cancelled by user.")
        return CommandResult("Operation cancelled.")
    removed = store.nuke(confirmed=True)
    logger.info("Nuke removed %d tasks.", removed)
    return CommandResult("All tasks have been deleted.", changed=True)


registry.register("add", cmd_add, help_text="Add a new task.")
registry.register("list", cmd_list, help_text="List open tasks (--all includes completed).")
registry.register("complete", cmd_complete, help_text="Mark a task as complete.")
registry.register("edit", cmd_edit, help_text="Replace a task's description.")
registry.register("delete", cmd_delete, help_text="Delete a task.")
registry.register("nuke", cmd_nuke, help_text="Delete all tasks (asks for confirmation).")
