"""tasktracker CLI entry point."""

from __future__ import annotations

import contextlib
import locale
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

import click

from . import __version__
from .config import ConfigLoader
from .errors import ConfigError
from .operations import ALL, OperationResult, TaskOperations
from .state.tasks import Task, TaskStatus, TaskStore
from .utils.logger import Logger

USAGE = """Task Tracker CLI
Usage:
  add <task name>        Add new task
  update <id> <name>     Update task name
  delete <id>            Delete task
  status <id> <status>   Update task status (done/not-done/in-progress)
  list [filter]          List tasks (all/done/not-done/in-progress)

Examples:
  tasktracker add "Finish project"
  tasktracker status 3 in-progress
  tasktracker list done"""

# Extra words are ignored and dash-leading words are values, e.g. `delete -1`.
LENIENT_ARGS = {"ignore_unknown_options": True, "allow_extra_args": True}


class ValidationError(click.ClickException):
    """Malformed command invocation."""


@dataclass
class CliState:
    operations: TaskOperations
    date_format: str = "%x"


class TaskTrackerGroup(click.Group):
    """Group that reports unknown commands and usage errors as a plain error (exit code 1)."""

    def parse_args(self, ctx: click.Context, args):
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as exc:
            raise ValidationError(exc.message) from exc

    def invoke(self, ctx: click.Context):
        try:
            return super().invoke(ctx)
        except click.UsageError as exc:
            raise ValidationError(exc.message) from exc

    def resolve_command(self, ctx: click.Context, args):
        cmd_name = args[0] if args else None
        if cmd_name and not cmd_name.startswith("-") and self.get_command(ctx, cmd_name) is None:
            raise ValidationError(f"Unknown command: {cmd_name}")
        return super().resolve_command(ctx, args)


def build_operations(config: ConfigLoader, file_path: Optional[Path] = None) -> TaskOperations:
    """Wire a store (and the event log, if configured) from configuration."""
    store = TaskStore(file_path or config.storage_path())
    log_file = config.log_file()
    return TaskOperations(store, Logger(log_file) if log_file else None)


def format_task(task: Task, date_format: str = "%x") -> str:
    created = task.created_at.astimezone().strftime(date_format)
    return f"#{task.id} [{task.status.value.ljust(11)}] {task.name} (Created: {created})"


def _check(result: OperationResult):
    if not result.success:
        raise click.ClickException(result.message)
    return result.value


def _parse_id(value: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise ValidationError(f"Invalid task ID: {value}") from None


@click.group(cls=TaskTrackerGroup, invoke_without_command=True)
@click.version_option(version=__version__)
@click.option(
    "--file",
    "file_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Task document to use (default: storage.path from config, tasks.json)",
)
@click.pass_context
def main(ctx: click.Context, file_path: Optional[Path]) -> None:
    """Task Tracker - add, rename, delete, re-status and list tasks."""
    if ctx.invoked_subcommand is None:
        click.echo(USAGE)
        ctx.exit(0)

    with contextlib.suppress(locale.Error):
        locale.setlocale(locale.LC_TIME, "")

    try:
        config = ConfigLoader()
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc
    ctx.obj = CliState(operations=build_operations(config, file_path), date_format=config.date_format())


@main.command(context_settings=LENIENT_ARGS)
@click.argument("name", nargs=-1)
@click.pass_obj
def add(state: CliState, name: Tuple[str, ...]) -> None:
    """Add new task."""
    if not name:
        raise ValidationError("Missing task name")
    task = _check(state.operations.add(" ".join(name)))
    click.echo(f"Added task: {task.id} - {task.name}")


@main.command(context_settings=LENIENT_ARGS)
@click.argument("task_id", required=False)
@click.argument("name", nargs=-1)
@click.pass_obj
def update(state: CliState, task_id: Optional[str], name: Tuple[str, ...]) -> None:
    """Update task name."""
    if task_id is None or not name:
        raise ValidationError("Missing ID or new name")
    task = _check(state.operations.update(_parse_id(task_id), " ".join(name)))
    click.echo(f"Updated task {task.id}")


@main.command(context_settings=LENIENT_ARGS)
@click.argument("task_id", required=False)
@click.pass_obj
def delete(state: CliState, task_id: Optional[str]) -> None:
    """Delete task."""
    if task_id is None:
        raise ValidationError("Missing task ID")
    task = _check(state.operations.remove(_parse_id(task_id)))
    click.echo(f"Deleted task {task.id}")


@main.command(context_settings=LENIENT_ARGS)
@click.argument("task_id", required=False)
@click.argument("new_status", required=False)
@click.pass_obj
def status(state: CliState, task_id: Optional[str], new_status: Optional[str]) -> None:
    """Update task status (done/not-done/in-progress)."""
    if task_id is None or new_status is None:
        raise ValidationError("Missing ID or status")
    if new_status not in TaskStatus.values():
        raise ValidationError("Invalid status. Use done/not-done/in-progress")
    task = _check(state.operations.set_status(_parse_id(task_id), TaskStatus(new_status)))
    click.echo(f"Updated task {task.id} status to {task.status.value}")


@main.command("list", context_settings=LENIENT_ARGS)
@click.argument("status_filter", required=False, default=ALL)
@click.pass_obj
def list_tasks(state: CliState, status_filter: str) -> None:
    """List tasks (all/done/not-done/in-progress)."""
    if status_filter != ALL and status_filter not in TaskStatus.values():
        raise ValidationError("Invalid filter. Use all/done/not-done/in-progress")
    tasks = _check(state.operations.list(status_filter))
    if not tasks:
        click.echo("No tasks found")
        return

    click.echo("\nTasks:")
    for task in tasks:
        click.echo(format_task(task, state.date_format))


if __name__ == "__main__":
    main()
