# src/tasg/cli/main.py

"""
CLI entrypoint.

Every invocation is one pass:
load the task file -> run one handler -> save if it changed anything -> print.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click

from .. import __version__
from ..config import APP_NAME, Settings
from ..errors import TaskError
from ..logging_setup import setup_logging
from ..tasks.task_store import TaskStore
from .commands import registry

logger = logging.getLogger(__name__)

TASK_ID = click.IntRange(min=1)


def _run(ctx: click.Context, name: str, **kwargs) -> None:
    tasks_file: Path = ctx.obj
    try:
        store = TaskStore.load(tasks_file)
        result = registry.handle(store, name, **kwargs)
        if result.changed:
            store.save()
    except TaskError as e:
        logger.info("Command %s failed: %s", name, e)
        raise click.ClickException(str(e)) from e
    click.echo(result.message)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--file",
    "tasks_file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Task file to use instead of the default (or TASG_FILE).",
)
@click.version_option(__version__, prog_name=APP_NAME)
@click.pass_context
def cli(ctx: click.Context, tasks_file: Path | None) -> None:
    """Manage your tasks with tasg!"""
    settings = Settings.from_env()
    setup_logging(
        console_level=settings.console_level,
        log_file=settings.log_file if settings.log_to_file else None,
    )
    ctx.obj = tasks_file or settings.tasks_file
    logger.debug("tasg %s using %s", __version__, ctx.obj)


@cli.command(short_help=registry.help_for("add"))
@click.argument("description")
@click.pass_context
def add(ctx: click.Context, description: str) -> None:
    """Add a new task with DESCRIPTION."""
    _run(ctx, "add", description=description)


@cli.command("list", short_help=registry.help_for("list"))
@click.option(
    "--all", "-a", "show_all", is_flag=True, help="Show all tasks, including completed ones."
)
@click.pass_context
def list_(ctx: click.Context, show_all: bool) -> None:
    """List open tasks in the order they were added."""
    _run(ctx, "list", include_completed=show_all)


@cli.command(short_help=registry.help_for("complete"))
@click.argument("task_id", metavar="ID", type=TASK_ID)
@click.pass_context
def complete(ctx: click.Context, task_id: int) -> None:
    """Mark task ID as complete."""
    _run(ctx, "complete", task_id=task_id)


@cli.command(short_help=registry.help_for("edit"))
@click.argument("task_id", metavar="ID", type=TASK_ID)
@click.option("--description", "-d", required=True, help="The new description.")
@click.pass_context
def edit(ctx: click.Context, task_id: int, description: str) -> None:
    """Replace the description of task ID."""
    _run(ctx, "edit", task_id=task_id, description=description)


@cli.command(short_help=registry.help_for("delete"))
@click.argument("task_id", metavar="ID", type=TASK_ID)
@click.pass_context
def delete(ctx: click.Context, task_id: int) -> None:
    """Delete task ID. Other tasks keep their ids."""
    _run(ctx, "delete", task_id=task_id)


@cli.command(short_help=registry.help_for("nuke"))
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation.")
@click.pass_context
def nuke(ctx: click.Context, yes: bool) -> None:
    """Delete all of your tasks. Use with caution!"""
    confirmed = yes
    if not confirmed:
        try:
            confirmed = click.confirm(
                "Are you sure you want to delete all tasks? This action cannot be undone.",
                default=False,
            )
        except click.Abort:
            # Closed stdin or Ctrl+C at the prompt counts as "no".
            click.echo()
            confirmed = False
    _run(ctx, "nuke", confirmed=confirmed)


def main() -> None:
    cli(prog_name=APP_NAME)


if __name__ == "__main__":
    main()
