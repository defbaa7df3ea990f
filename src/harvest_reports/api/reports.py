"""Aggregated views over the Harvest API.

Single-pass views issue one call and filter its payload. When that call
fails, its `Result` is returned unchanged. The running timer scan and the
project task list issue one extra call per item and skip items whose call
fails or cannot reach the server.
"""

import logging
from typing import Any, Callable, Optional

from harvest_reports.api.base import HarvestAccessor
from harvest_reports.core import ranges
from harvest_reports.core.config import ReportSettings
from harvest_reports.core.exceptions import HarvestConnectionError
from harvest_reports.core.models import Record, TimeEntry
from harvest_reports.core.result import Result

logger = logging.getLogger(__name__)


def filter_result(result: Result, predicate: Callable[[Any], bool]) -> Result:
    """Replace a successful result's payload with the records matching predicate.

    Args:
        result: Result whose payload is an iterable or mapping of records
        predicate: Selection test applied to each record

    Returns:
        The same result, with payload rekeyed by record id when successful
    """
    if not result.is_success():
        return result

    records = result.payload or {}
    if isinstance(records, dict):
        records = records.values()

    result.payload = {record.id: record for record in records if predicate(record)}
    return result


def first_running_entry(entries: Optional[list[TimeEntry]]) -> Optional[TimeEntry]:
    """Get the first entry with a timer start marker, if any."""
    for entry in entries or []:
        if entry.timer_started_at is not None:
            return entry
    return None


class HarvestReports:
    """Filtered and joined views built on a `HarvestAccessor`."""

    def __init__(self, api: HarvestAccessor, settings: Optional[ReportSettings] = None):
        """Initialize reports.

        Args:
            api: Raw API accessor
            settings: Time zone and start of week. Defaults to UTC, Monday.
        """
        self.api = api
        self.settings = settings or ReportSettings()

    # Clients

    def get_active_clients(self) -> Result:
        """Get all active clients.

        Example:
            >>> result = reports.get_active_clients()
            >>> if result.is_success():
            ...     clients = result.payload
        """
        return filter_result(self.api.list_clients(), lambda c: c.active is True)

    def get_inactive_clients(self) -> Result:
        """Get all inactive clients."""
        return filter_result(self.api.list_clients(), lambda c: c.active is False)

    # Projects

    def get_active_projects(self) -> Result:
        """Get all active projects."""
        return filter_result(self.api.list_projects(), lambda p: p.active is True)

    def get_inactive_projects(self) -> Result:
        """Get all inactive projects."""
        return filter_result(self.api.list_projects(), lambda p: p.active is False)

    def get_client_active_projects(self, client_id: int) -> Result:
        """Get the active projects of a client."""
        return filter_result(self.api.list_client_projects(client_id), lambda p: p.active is True)

    def get_client_inactive_projects(self, client_id: int) -> Result:
        """Get the inactive projects of a client."""
        return filter_result(
            self.api.list_client_projects(client_id), lambda p: p.active is False
        )

    # Users

    def get_active_users(self) -> Result:
        """Get all active users."""
        return filter_result(self.api.list_users(), lambda u: u.is_active is True)

    def get_inactive_users(self) -> Result:
        """Get all inactive users."""
        return filter_result(self.api.list_users(), lambda u: u.is_active is False)

    def get_admins(self) -> Result:
        """Get all admin users."""
        return filter_result(self.api.list_users(), lambda u: u.is_admin is True)

    def get_active_admins(self) -> Result:
        """Get all active admin users."""
        return filter_result(
            self.api.list_users(), lambda u: u.is_active is True and u.is_admin is True
        )

    def get_inactive_admins(self) -> Result:
        """Get all inactive admin users.

        Selects users whose parsed ``is_admin`` flag is True. A raw "false"
        string is never treated as set (see DESIGN.md).
        """
        return filter_result(
            self.api.list_users(), lambda u: u.is_active is False and u.is_admin is True
        )

    def get_contractors(self) -> Result:
        """Get all contractor users."""
        return filter_result(self.api.list_users(), lambda u: u.is_contractor is True)

    def get_active_contractors(self) -> Result:
        """Get all active contractor users."""
        return filter_result(
            self.api.list_users(), lambda u: u.is_active is True and u.is_contractor is True
        )

    def get_inactive_contractors(self) -> Result:
        """Get all inactive contractor users whose ``is_contractor`` is True."""
        return filter_result(
            self.api.list_users(), lambda u: u.is_active is False and u.is_contractor is True
        )

    # Timers

    def get_active_timers(self) -> Result:
        """Get the running timer of every active user.

        Users whose entries cannot be fetched are skipped. The payload maps
        user id to that user's first running entry for today; users with no
        running timer are left out.

        Returns:
            Result of the active users call with the timers as payload
        """
        result = self.get_active_users()
        if not result.is_success():
            return result

        day = ranges.today(self.settings.time_zone)
        timers: dict[int, TimeEntry] = {}
        for user in result.payload.values():
            try:
                entries = self.api.list_user_entries(user.id, day)
            except HarvestConnectionError as e:
                logger.warning("Skipping user %s: %s", user.id, e)
                continue
            if not entries.is_success():
                logger.warning(
                    "Skipping user %s: entries request returned %s", user.id, entries.status_code
                )
                continue
            running = first_running_entry(entries.payload)
            if running is not None:
                timers[user.id] = running

        result.payload = timers
        return result

    def get_users_active_timer(self, user_id: int) -> Result:
        """Get a user's running timer for today.

        Returns:
            Result whose payload is the running entry, or None if no timer
            is running. A failed entries request is returned as is.
        """
        result = self.api.list_user_entries(user_id, ranges.today(self.settings.time_zone))
        if result.is_success():
            result.payload = first_running_entry(result.payload)
        return result

    # Tasks

    def get_project_tasks(self, project_id: int) -> Result:
        """Get the tasks assigned to a project.

        Tasks that cannot be fetched are skipped.

        Returns:
            Result of the assignments call with a task id to Task payload
        """
        result = self.api.list_project_task_assignments(project_id)
        if not result.is_success():
            return result

        tasks: dict[int, Record] = {}
        for assignment in result.payload or []:
            try:
                task_result = self.api.get_task(assignment.task_id)
            except HarvestConnectionError as e:
                logger.warning(
                    "Skipping task %s of project %s: %s", assignment.task_id, project_id, e
                )
                continue
            if not task_result.is_success():
                logger.warning(
                    "Skipping task %s of project %s: request returned %s",
                    assignment.task_id,
                    project_id,
                    task_result.status_code,
                )
                continue
            task = task_result.payload
            if task is not None:
                tasks[task.id] = task

        result.payload = tasks
        return result
