"""Config commands - create and display the client configuration."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.syntax import Syntax

from ..core.config import DEFAULT_CONFIG_PATH, generate_default_config_json, load_config
from ..core.exceptions import ConfigError

console = Console()

config_app = typer.Typer(help="Manage the client configuration file.")


@config_app.command("init")
def config_init(
    ctx: typer.Context,
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing config file"),
) -> None:
    """Write a default config.json."""
    path = ctx.obj.get("config_path") or DEFAULT_CONFIG_PATH
    if path.exists() and not force:
        console.print(f"[yellow]Config already exists at {path}. Use --force to overwrite.[/yellow]")
        raise typer.Exit(1)

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(generate_default_config_json() + "\n")
    console.print(f"[green]✓ Wrote default config to {path}[/green]")


@config_app.command("show")
def config_show(ctx: typer.Context) -> None:
    """Show the effective configuration (file plus environment), secrets masked."""
    try:
        config = load_config(ctx.obj.get("config_path"))
    except ConfigError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from None

    data = config.model_dump()
    for key in ("password", "token"):
        if data["auth"].get(key):
            data["auth"][key] = "********"

    import json

    console.print(Syntax(json.dumps(data, indent=2), "json"))


def register_config_commands(app: typer.Typer) -> None:
    """Register the `config` command group."""
    app.add_typer(config_app, name="config")
