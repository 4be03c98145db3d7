"""Configuration management commands."""

from typing import Any

import typer
from rich.table import Table

from todolist.services.config_service import get_config_service
from todolist.ui.console import get_console
from todolist.ui.formatters import format_error, format_info, format_success

from .decorators import command_wrapper

app = typer.Typer(help="Configuration management commands")
console = get_console()


def _flatten(data: dict[str, Any], prefix: str = "") -> list[tuple[str, Any]]:
    rows = []
    for key, value in data.items():
        path = f"{prefix}{key}"
        if isinstance(value, dict):
            rows.extend(_flatten(value, f"{path}."))
        else:
            rows.append((path, value))
    return rows


@app.command("show")
@command_wrapper
def show_config() -> None:
    """Show the current configuration."""
    config_service = get_config_service()

    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")
    for key, value in _flatten(config_service.config.model_dump()):
        table.add_row(key, "-" if value is None else str(value))

    console.print(table)
    console.print(f"[dim]{config_service.config_path}[/dim]")


@app.command("get")
@command_wrapper
def get_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., api.endpoint)"),
) -> None:
    """Get a configuration value."""
    config_service = get_config_service()
    value = config_service.get(key)
    if value is None and not config_service.is_known_key(key):
        format_error(f"Configuration key '{key}' not found")
        raise typer.Exit(1)
    console.print("-" if value is None else value)


@app.command("set")
@command_wrapper
def set_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., storage.type)"),
    value: str = typer.Argument(..., help="Configuration value"),
) -> None:
    """Set a configuration value."""
    get_config_service().set(key, value)
    format_success(f"Configuration '{key}' set to '{value}'")


@app.command("reset")
@command_wrapper
def reset_config(
    key: str | None = typer.Argument(None, help="Configuration key to reset"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Reset configuration to defaults."""
    if not yes:
        msg = "entire configuration" if not key else f"'{key}'"
        if not typer.confirm(f"Are you sure you want to reset {msg}?"):
            format_info("Cancelled")
            raise typer.Exit(0)

    get_config_service().reset(key)

    if key:
        format_success(f"Configuration '{key}' reset to default")
    else:
        format_success("Configuration reset to defaults")
