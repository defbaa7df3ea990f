"""Abstract interface for raw Harvest API access."""

from abc import ABC, abstractmethod
from typing import Any

from harvest_reports.core.ranges import DateRange
from harvest_reports.core.result import Result


class HarvestAccessor(ABC):
    """Raw calls the reports layer is built on.

    Every method returns a `Result`. Collection calls return a mapping of
    identifier to record as payload, except entries and task assignments
    which return lists.
    """

    def close(self) -> None:
        """Release any resources held by the accessor."""

    def __enter__(self) -> "HarvestAccessor":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    @abstractmethod
    def list_clients(self) -> Result:
        """Get all clients."""

    @abstractmethod
    def get_client(self, client_id: int) -> Result:
        """Get one client."""

    @abstractmethod
    def list_projects(self) -> Result:
        """Get all projects."""

    @abstractmethod
    def list_client_projects(self, client_id: int) -> Result:
        """Get the projects of a client."""

    @abstractmethod
    def get_project(self, project_id: int) -> Result:
        """Get one project."""

    @abstractmethod
    def list_users(self) -> Result:
        """Get all users."""

    @abstractmethod
    def get_user(self, user_id: int) -> Result:
        """Get one user."""

    @abstractmethod
    def list_user_entries(self, user_id: int, date_range: DateRange) -> Result:
        """Get a user's time entries within a date range."""

    @abstractmethod
    def list_project_task_assignments(self, project_id: int) -> Result:
        """Get the task assignments of a project."""

    @abstractmethod
    def list_tasks(self) -> Result:
        """Get all tasks."""

    @abstractmethod
    def get_task(self, task_id: int) -> Result:
        """Get one task."""
