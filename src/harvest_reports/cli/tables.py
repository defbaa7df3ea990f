"""Rich table rendering for report results."""

from decimal import Decimal
from typing import Optional

from rich.console import Console  # type: ignore[import-not-found]
from rich.table import Table  # type: ignore[import-not-found]

from harvest_reports.core.models import Client, Project, Task, TimeEntry, User


def _flag(value: Optional[bool]) -> str:
    if value is None:
        return "-"
    return "[green]yes[/green]" if value else "[dim]no[/dim]"


def _hours(value: Optional[Decimal]) -> str:
    return f"{value:.2f}" if value is not None else "-"


class TableRenderer:
    """Render record collections as tables."""

    def __init__(self, console: Optional[Console] = None):
        """Initialize renderer.

        Args:
            console: Rich console for output. Creates default if None.
        """
        self.console = console or Console()

    def _empty(self, label: str) -> None:
        self.console.print(f"[yellow]No {label} found[/yellow]")

    def clients(self, clients: dict[int, Client], title: str = "Clients") -> None:
        """Display clients."""
        if not clients:
            self._empty("clients")
            return

        table = Table(title=title)
        table.add_column("ID", style="dim")
        table.add_column("Name", style="cyan")
        table.add_column("Currency")
        table.add_column("Active", justify="center")
        for client in clients.values():
            table.add_row(str(client.id), client.name or "", client.currency or "", _flag(client.active))
        self.console.print(table)

    def projects(self, projects: dict[int, Project], title: str = "Projects") -> None:
        """Display projects."""
        if not projects:
            self._empty("projects")
            return

        table = Table(title=title)
        table.add_column("ID", style="dim")
        table.add_column("Name", style="cyan")
        table.add_column("Code")
        table.add_column("Client", style="dim")
        table.add_column("Active", justify="center")
        for project in projects.values():
            table.add_row(
                str(project.id),
                project.name or "",
                project.code or "",
                str(project.client_id) if project.client_id is not None else "",
                _flag(project.active),
            )
        self.console.print(table)

    def users(self, users: dict[int, User], title: str = "Users") -> None:
        """Display users with their role flags."""
        if not users:
            self._empty("users")
            return

        table = Table(title=title)
        table.add_column("ID", style="dim")
        table.add_column("Name", style="cyan")
        table.add_column("Email")
        table.add_column("Active", justify="center")
        table.add_column("Admin", justify="center")
        table.add_column("Contractor", justify="center")
        for user in users.values():
            table.add_row(
                str(user.id),
                user.full_name,
                user.email or "",
                _flag(user.is_active),
                _flag(user.is_admin),
                _flag(user.is_contractor),
            )
        self.console.print(table)

    def timers(self, timers: dict[int, TimeEntry], title: str = "Running Timers") -> None:
        """Display running timers keyed by user id."""
        if not timers:
            self._empty("running timers")
            return

        table = Table(title=title)
        table.add_column("User", style="cyan")
        table.add_column("Entry", style="dim")
        table.add_column("Project")
        table.add_column("Task")
        table.add_column("Started")
        table.add_column("Hours", justify="right")
        for user_id, entry in timers.items():
            table.add_row(
                str(user_id),
                str(entry.id),
                str(entry.project_id or ""),
                str(entry.task_id or ""),
                entry.timer_started_at or "",
                _hours(entry.hours),
            )
        self.console.print(table)

    def entries(self, entries: list[TimeEntry], title: str = "Time Entries") -> None:
        """Display time entries with a total row."""
        if not entries:
            self._empty("time entries")
            return

        table = Table(title=title)
        table.add_column("Date")
        table.add_column("Project")
        table.add_column("Task")
        table.add_column("Notes", style="dim")
        table.add_column("Hours", justify="right")
        total = Decimal("0")
        for entry in entries:
            total += entry.hours or Decimal("0")
            marker = " [green]●[/green]" if entry.is_running else ""
            table.add_row(
                entry.spent_at.isoformat() if entry.spent_at else "",
                str(entry.project_id or ""),
                str(entry.task_id or ""),
                entry.notes or "",
                _hours(entry.hours) + marker,
            )
        table.add_section()
        table.add_row("Total", "", "", "", f"[bold]{total:.2f}[/bold]")
        self.console.print(table)

    def tasks(self, tasks: dict[int, Task], title: str = "Tasks") -> None:
        """Display tasks."""
        if not tasks:
            self._empty("tasks")
            return

        table = Table(title=title)
        table.add_column("ID", style="dim")
        table.add_column("Name", style="cyan")
        table.add_column("Billable", justify="center")
        table.add_column("Rate", justify="right")
        for task in tasks.values():
            table.add_row(
                str(task.id),
                task.name or "",
                _flag(task.billable_by_default),
                _hours(task.default_hourly_rate),
            )
        self.console.print(table)
