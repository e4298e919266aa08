"""CLI entry point for Nuxeo Workflow."""

import asyncio
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Any, TypeVar

import typer
from rich.console import Console
from rich.table import Table

from . import __version__
from .cli_commands.config import register_config_commands
from .core.client import DocumentClient
from .core.config import load_config
from .core.exceptions import NuxeoClientError
from .core.logging_setup import configure_logging
from .core.task import Task

T = TypeVar("T")


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console = Console()
        console.print(f"Nuxeo Workflow v{__version__}")
        raise typer.Exit(0)


app = typer.Typer(
    name="nuxeo-tasks",
    help="""Inspect and act on document server workflow tasks.

Quick start:
  nuxeo-tasks list --actor Administrator
  nuxeo-tasks complete <task-id> validate --var comment=ok
  nuxeo-tasks reassign <task-id> user:alice --comment "on leave"
""",
    add_completion=False,
)
console = Console()


@app.callback()
def main(
    ctx: typer.Context,
    config_path: Path | None = typer.Option(
        None, "--config", "-c", help="Path to config.json (default: ~/.nuxeo-workflow/config.json)"
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Log HTTP requests to stderr"),
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """Nuxeo Workflow - workflow task operations."""
    configure_logging(verbose)
    ctx.obj = {"config_path": config_path}


register_config_commands(app)  # config init, config show


def _create_client(config_path: Path | None) -> DocumentClient:
    return DocumentClient(load_config(config_path))


def _run(ctx: typer.Context, operation: Callable[[DocumentClient], Awaitable[T]]) -> T:
    """Run an async operation against a fresh client, exiting on client errors."""

    async def runner() -> T:
        async with _create_client(ctx.obj["config_path"]) as client:
            return await operation(client)

    try:
        return asyncio.run(runner())
    except NuxeoClientError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from None


def _parse_variables(values: list[str]) -> dict[str, str]:
    variables = {}
    for item in values:
        name, sep, value = item.partition("=")
        if not sep or not name:
            raise typer.BadParameter(f"Expected name=value, got '{item}'", param_hint="--var")
        variables[name] = value
    return variables


def _cell(value: Any) -> str:
    return "" if value is None else str(value)


def _print_task(task: Task) -> None:
    variables = task.variables if isinstance(task.variables, dict) else None
    table = Table(title=f"Task {task.id}", show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    for key, value in task.to_payload().items():
        if key == "variables" and variables is not None:
            continue
        table.add_row(key, str(value))
    console.print(table)

    if variables:
        table = Table(title="Variables")
        table.add_column("Name", style="cyan")
        table.add_column("Value")
        for name, value in variables.items():
            table.add_row(name, str(value))
        console.print(table)


@app.command()
def show(
    ctx: typer.Context,
    task_id: str = typer.Argument(..., help="Task id"),
) -> None:
    """Display a single task."""
    task = _run(ctx, lambda client: client.workflows().fetch_task(task_id))
    _print_task(task)


@app.command("list")
def list_tasks(
    ctx: typer.Context,
    actor: str | None = typer.Option(None, "--actor", "-a", help="Only tasks assigned to this user"),
    workflow_instance: str | None = typer.Option(
        None, "--workflow-instance", "-w", help="Only tasks of this workflow instance"
    ),
    workflow_model: str | None = typer.Option(
        None, "--workflow-model", "-m", help="Only tasks of this workflow model"
    ),
) -> None:
    """List open tasks.

    Examples:
        nuxeo-tasks list --actor Administrator
        nuxeo-tasks list -m SerialDocumentReview
    """
    tasks = _run(
        ctx,
        lambda client: client.workflows().fetch_tasks(
            actor_id=actor,
            workflow_instance_id=workflow_instance,
            workflow_model_name=workflow_model,
        ),
    )
    if not tasks:
        console.print("[dim]No open tasks.[/dim]")
        return

    table = Table(title="Open tasks")
    table.add_column("Id", style="cyan", no_wrap=True)
    table.add_column("Name")
    table.add_column("Workflow")
    table.add_column("Due")
    for task in tasks:
        table.add_row(
            _cell(task.id), _cell(task.name), _cell(task.workflow_model_name), _cell(task.due_date)
        )
    console.print(table)


@app.command()
def complete(
    ctx: typer.Context,
    task_id: str = typer.Argument(..., help="Task id"),
    action: str = typer.Argument(..., help="Action to complete the task with, e.g. validate"),
    var: list[str] = typer.Option([], "--var", help="Task variable as name=value (repeatable)"),
    comment: str | None = typer.Option(None, "--comment", help="Completion comment"),
) -> None:
    """Complete a task.

    The task is fetched first so its current variables are sent along with
    the ones given on the command line.
    """
    variables = _parse_variables(var)

    async def operation(client: DocumentClient) -> Any:
        task = await client.workflows().fetch_task(task_id)
        return await task.complete(action, {"variables": variables, "comment": comment})

    _run(ctx, operation)
    console.print(f"[green]✓ Task {task_id} completed with action '{action}'[/green]")


@app.command()
def reassign(
    ctx: typer.Context,
    task_id: str = typer.Argument(..., help="Task id"),
    actors: list[str] = typer.Argument(..., help="Actors, e.g. user:alice group:reviewers"),
    comment: str | None = typer.Option(None, "--comment", help="Reassignment comment"),
) -> None:
    """Reassign a task to other actors."""
    _run(
        ctx,
        lambda client: Task.from_payload({"id": task_id}, client=client).reassign(
            actors, {"comment": comment}
        ),
    )
    console.print(f"[green]✓ Task {task_id} reassigned to {', '.join(actors)}[/green]")


@app.command()
def delegate(
    ctx: typer.Context,
    task_id: str = typer.Argument(..., help="Task id"),
    actors: list[str] = typer.Argument(..., help="Actors, e.g. user:alice group:reviewers"),
    comment: str | None = typer.Option(None, "--comment", help="Delegation comment"),
) -> None:
    """Delegate a task to other actors."""
    _run(
        ctx,
        lambda client: Task.from_payload({"id": task_id}, client=client).delegate(
            actors, {"comment": comment}
        ),
    )
    console.print(f"[green]✓ Task {task_id} delegated to {', '.join(actors)}[/green]")


def run() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    run()
