"""CLI commands for configuration management."""

import json
import shutil
import sys
from pathlib import Path
from typing import Any

import click  # type: ignore[import-not-found]
from rich.console import Console  # type: ignore[import-not-found]
from rich.table import Table  # type: ignore[import-not-found]

from harvest_reports.core.config import ConfigManager

console = Console()
error_console = Console(stderr=True)

SECRET_KEYS = ("connection.password",)


def _config_manager(ctx: click.Context) -> ConfigManager:
    obj = ctx.obj or {}
    if obj.get("config") is not None:
        return obj["config"]
    config_path = obj.get("config_path")
    try:
        return ConfigManager(Path(config_path) if config_path else None)
    except ValueError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)


@click.group()  # type: ignore[misc]
def config() -> None:
    """Manage Harvest Reports configuration.

    Configuration is stored in ~/.harvest-reports/config.yml
    """
    pass


@config.command("show")  # type: ignore[misc]
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")  # type: ignore[misc]
@click.pass_context  # type: ignore[misc]
def config_show(ctx: click.Context, as_json: bool) -> None:
    """Show all configuration settings.

    Passwords are masked.

    Example:
        harvest-reports config show
        harvest-reports config show --json
    """
    config_mgr = _config_manager(ctx)
    config_dict = config_mgr.to_dict()
    if config_dict.get("connection", {}).get("password"):
        config_dict["connection"]["password"] = "********"

    if as_json:
        click.echo(json.dumps(config_dict, indent=2))
        return

    table = Table(title="Harvest Reports Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    def add_rows(prefix: str, data: dict[str, Any]) -> None:
        """Recursively add configuration rows."""
        for key, value in data.items():
            full_key = f"{prefix}.{key}" if prefix else key
            if isinstance(value, dict):
                add_rows(full_key, value)
            else:
                table.add_row(full_key, str(value))

    add_rows("", config_dict)
    console.print(table)
    console.print(f"\nConfig file: {config_mgr.config_path}")


@config.command("get")  # type: ignore[misc]
@click.argument("key")  # type: ignore[misc]
@click.pass_context  # type: ignore[misc]
def config_get(ctx: click.Context, key: str) -> None:
    """Get a specific configuration value.

    Uses dot notation to access nested values.

    Example:
        harvest-reports config get general.timezone
    """
    config_mgr = _config_manager(ctx)
    value = config_mgr.get(key)

    if value is None:
        error_console.print(f"[red]Error:[/red] Configuration key '{key}' not found")
        sys.exit(1)

    if key in SECRET_KEYS:
        value = "********"

    if isinstance(value, dict):
        click.echo(json.dumps(value, indent=2))
    else:
        click.echo(str(value))


@config.command("set")  # type: ignore[misc]
@click.argument("key")  # type: ignore[misc]
@click.argument("value")  # type: ignore[misc]
@click.pass_context  # type: ignore[misc]
def config_set(ctx: click.Context, key: str, value: str) -> None:
    """Set a configuration value.

    Numbers are stored as numbers, 'null' clears a value.

    Example:
        harvest-reports config set connection.account mycompany
        harvest-reports config set connection.timeout 60
        harvest-reports config set general.timezone "America/New_York"
    """
    config_mgr = _config_manager(ctx)

    converted_value: Any = value
    if value.lower() == "null":
        converted_value = None
    else:
        try:
            converted_value = int(value)
        except ValueError:
            try:
                converted_value = float(value)
            except ValueError:
                converted_value = value

    try:
        config_mgr.set(key, converted_value)
    except ValueError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    shown = "********" if key in SECRET_KEYS else converted_value
    console.print(f"[green]✓[/green] Set {key} = {shown}")


@config.command("reset")  # type: ignore[misc]
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")  # type: ignore[misc]
@click.pass_context  # type: ignore[misc]
def config_reset(ctx: click.Context, yes: bool) -> None:
    """Reset configuration to defaults.

    Example:
        harvest-reports config reset --yes
    """
    config_mgr = _config_manager(ctx)

    if not yes:
        console.print("[yellow]Warning:[/yellow] This will reset all configuration to defaults.")
        if not click.confirm("Continue?"):
            console.print("Cancelled")
            return

    backup_path = config_mgr.config_path.with_suffix(".yml.backup")
    if config_mgr.config_path.exists():
        shutil.copy(config_mgr.config_path, backup_path)
        console.print(f"Backed up current config to {backup_path}")

    config_mgr.reset()
    console.print("[green]✓[/green] Configuration reset to defaults")


@config.command("validate")  # type: ignore[misc]
@click.pass_context  # type: ignore[misc]
def config_validate(ctx: click.Context) -> None:
    """Validate configuration file."""
    config_mgr = _config_manager(ctx)

    try:
        config_mgr.validate()
        console.print("[green]✓[/green] Configuration is valid")
    except ValueError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)


@config.command("path")  # type: ignore[misc]
@click.pass_context  # type: ignore[misc]
def config_path(ctx: click.Context) -> None:
    """Show path to configuration file."""
    click.echo(str(_config_manager(ctx).config_path))
