"""Main CLI application."""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console

from harvest_reports import __version__
from harvest_reports.api.base import HarvestAccessor
from harvest_reports.api.client import HarvestApi
from harvest_reports.api.reports import HarvestReports
from harvest_reports.cli.config_commands import config
from harvest_reports.cli.tables import TableRenderer
from harvest_reports.core import ranges
from harvest_reports.core.config import ConfigManager, ReportSettings
from harvest_reports.core.exceptions import HarvestError
from harvest_reports.core.result import Result

console = Console()
error_console = Console(stderr=True)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_log_handler: Optional[logging.StreamHandler] = None  # type: ignore[type-arg]


def setup_logging(level: str) -> None:
    """Send log records to stderr at the given level."""
    global _log_handler

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    if _log_handler is None:
        _log_handler = logging.StreamHandler()
        _log_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root_logger.addHandler(_log_handler)
    else:
        _log_handler.setStream(sys.stderr)
    _log_handler.setLevel(level)


def get_config(ctx: click.Context) -> ConfigManager:
    """Get the ConfigManager for this invocation, loading it on first use.

    Exits with an error if the config file is invalid.
    """
    config_mgr = ctx.obj.get("config")
    if config_mgr is None:
        config_path = ctx.obj.get("config_path")
        try:
            config_mgr = ConfigManager(Path(config_path) if config_path else None)
        except ValueError as e:
            error_console.print(f"[red]Error:[/red] {e}")
            sys.exit(1)
        ctx.obj["config"] = config_mgr
    return config_mgr


def build_api(config_mgr: ConfigManager) -> HarvestAccessor:
    """Create the API accessor from configuration."""
    return HarvestApi.from_config(config_mgr)


def open_api(ctx: click.Context, config_mgr: ConfigManager) -> HarvestAccessor:
    """Create the API accessor, closed when the command finishes."""
    return ctx.with_resource(build_api(config_mgr))


def get_reports(ctx: click.Context) -> HarvestReports:
    """Get HarvestReports wired from configuration."""
    config_mgr = get_config(ctx)
    return HarvestReports(open_api(ctx, config_mgr), ReportSettings.from_config(config_mgr))


def check_result(result: Result) -> None:
    """Exit with an error message if the call failed."""
    if result.is_success():
        return
    error_console.print(f"[red]Error:[/red] Request failed with status {result.status_code}")
    if result.payload:
        error_console.print(str(result.payload), markup=False)
    sys.exit(1)


@click.group()
@click.version_option(version=__version__)
@click.option("--config", "config_path", help="Path to config file", type=click.Path())
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option("--no-color", is_flag=True, help="Disable colored output")
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[str], verbose: bool, no_color: bool) -> None:
    """Harvest Reports - Filtered views over a Harvest account.

    List active or inactive clients, projects and users, running timers
    and project tasks.
    """
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path

    if no_color:
        console.no_color = True

    level = "DEBUG" if verbose else get_config(ctx).get("advanced.log_level", "WARNING")
    setup_logging(level)


cli.add_command(config)


@cli.command()
@click.option("--inactive", is_flag=True, help="Show inactive clients instead")
@click.pass_context
def clients(ctx: click.Context, inactive: bool) -> None:
    """List active (or inactive) clients.

    Example:
        harvest-reports clients
        harvest-reports clients --inactive
    """
    try:
        reports = get_reports(ctx)
        result = reports.get_inactive_clients() if inactive else reports.get_active_clients()
    except (HarvestError, ValueError) as e:
        error_console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    check_result(result)
    TableRenderer(console).clients(result.payload, "Inactive Clients" if inactive else "Active Clients")


@cli.command()
@click.option("-c", "--client", "client_id", type=int, help="Only projects of this client")
@click.option("--inactive", is_flag=True, help="Show inactive projects instead")
@click.pass_context
def projects(ctx: click.Context, client_id: Optional[int], inactive: bool) -> None:
    """List active (or inactive) projects.

    Example:
        harvest-reports projects
        harvest-reports projects --client 12345 --inactive
    """
    try:
        reports = get_reports(ctx)
        if client_id is not None:
            if inactive:
                result = reports.get_client_inactive_projects(client_id)
            else:
                result = reports.get_client_active_projects(client_id)
        else:
            result = reports.get_inactive_projects() if inactive else reports.get_active_projects()
    except (HarvestError, ValueError) as e:
        error_console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    check_result(result)
    TableRenderer(console).projects(
        result.payload, "Inactive Projects" if inactive else "Active Projects"
    )


@cli.command()
@click.option(
    "-r",
    "--role",
    type=click.Choice(["all", "admin", "contractor"]),
    default="all",
    help="Restrict to a role",
)
@click.option("--inactive", is_flag=True, help="Show inactive users instead")
@click.pass_context
def users(ctx: click.Context, role: str, inactive: bool) -> None:
    """List active (or inactive) users, optionally by role.

    Example:
        harvest-reports users
        harvest-reports users --role admin --inactive
    """
    try:
        reports = get_reports(ctx)
        queries = {
            ("all", False): reports.get_active_users,
            ("all", True): reports.get_inactive_users,
            ("admin", False): reports.get_active_admins,
            ("admin", True): reports.get_inactive_admins,
            ("contractor", False): reports.get_active_contractors,
            ("contractor", True): reports.get_inactive_contractors,
        }
        result = queries[(role, inactive)]()
    except (HarvestError, ValueError) as e:
        error_console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    check_result(result)
    label = "Users" if role == "all" else f"{role.capitalize()}s"
    TableRenderer(console).users(result.payload, f"{'Inactive' if inactive else 'Active'} {label}")


@cli.command()
@click.option("-u", "--user", "user_id", type=int, help="Only this user's timer")
@click.pass_context
def timers(ctx: click.Context, user_id: Optional[int]) -> None:
    """Show timers running today.

    Example:
        harvest-reports timers
        harvest-reports timers --user 12345
    """
    try:
        reports = get_reports(ctx)
        if user_id is None:
            result = reports.get_active_timers()
        else:
            result = reports.get_users_active_timer(user_id)
    except (HarvestError, ValueError) as e:
        error_console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    check_result(result)
    if user_id is None:
        TableRenderer(console).timers(result.payload)
    elif result.payload is None:
        console.print(f"[yellow]No timer running for user {user_id}[/yellow]")
    else:
        TableRenderer(console).timers({user_id: result.payload})


@cli.command()
@click.argument("project_id", type=int)
@click.pass_context
def tasks(ctx: click.Context, project_id: int) -> None:
    """List the tasks assigned to a project.

    Example:
        harvest-reports tasks 12345
    """
    try:
        result = get_reports(ctx).get_project_tasks(project_id)
    except (HarvestError, ValueError) as e:
        error_console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    check_result(result)
    TableRenderer(console).tasks(result.payload, f"Tasks of Project {project_id}")


@cli.command()
@click.argument("user_id", type=int)
@click.option(
    "-p",
    "--period",
    type=click.Choice(["today", "week", "last-week", "month", "last-month"]),
    default="today",
    help="Time period",
)
@click.pass_context
def entries(ctx: click.Context, user_id: int, period: str) -> None:
    """List a user's time entries for a period.

    Weeks start on the configured general.week_start day.

    Example:
        harvest-reports entries 12345 --period week
    """
    try:
        config_mgr = get_config(ctx)
        settings = ReportSettings.from_config(config_mgr)
        zone = settings.time_zone
        if period == "today":
            date_range = ranges.today(zone)
        elif period == "week":
            date_range = ranges.this_week(zone, settings.start_of_week)
        elif period == "last-week":
            date_range = ranges.last_week(zone, settings.start_of_week)
        elif period == "month":
            date_range = ranges.this_month(zone)
        else:
            date_range = ranges.last_month(zone)

        result = open_api(ctx, config_mgr).list_user_entries(user_id, date_range)
    except (HarvestError, ValueError) as e:
        error_console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    check_result(result)
    title = f"Entries {date_range.from_date.isoformat()} to {date_range.to_date.isoformat()}"
    TableRenderer(console).entries(result.payload, title)


def main() -> None:
    """Console script entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
