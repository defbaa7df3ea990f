"""Pytest configuration and shared fixtures."""

import copy
from typing import Any, Optional

import pytest  # type: ignore[import-not-found]

from harvest_reports.api.base import HarvestAccessor
from harvest_reports.core.models import Client, Project, Task, TaskAssignment, TimeEntry, User
from harvest_reports.core.ranges import DateRange
from harvest_reports.core.result import Result


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest."""
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "slow: Slow tests")


def make_client(id: int, active: str = "true", name: Optional[str] = None) -> Client:
    return Client.from_dict({"id": id, "name": name or f"Client {id}", "active": active})


def make_project(id: int, active: str = "true", client_id: int = 1) -> Project:
    return Project.from_dict(
        {"id": id, "name": f"Project {id}", "client_id": client_id, "active": active}
    )


def make_user(
    id: int, active: str = "true", admin: str = "false", contractor: str = "false"
) -> User:
    return User.from_dict(
        {
            "id": id,
            "email": f"user{id}@example.com",
            "first-name": "User",
            "last-name": str(id),
            "is-active": active,
            "is-admin": admin,
            "is-contractor": contractor,
        }
    )


def make_entry(id: int, user_id: int, timer_started_at: Optional[str] = None) -> TimeEntry:
    return TimeEntry.from_dict(
        {
            "id": id,
            "user_id": user_id,
            "project_id": 5,
            "task_id": 7,
            "spent_at": "2024-05-15",
            "hours": "1.5",
            "timer_started_at": timer_started_at,
        }
    )


def make_assignment(id: int, task_id: int, project_id: int = 1) -> TaskAssignment:
    return TaskAssignment.from_dict({"id": id, "project_id": project_id, "task_id": task_id})


def make_task(id: int, name: Optional[str] = None) -> Task:
    return Task.from_dict({"id": id, "name": name or f"Task {id}", "billable_by_default": "true"})


class FakeApi(HarvestAccessor):
    """In-memory accessor returning a fresh Result for every call.

    Responses are ``(status_code, payload)`` pairs, or an exception to raise.
    Unregistered per-item lookups answer 404.
    """

    def __init__(self) -> None:
        self.clients: tuple[str, Any] = ("200", {})
        self.projects: tuple[str, Any] = ("200", {})
        self.client_projects: dict[int, tuple[str, Any]] = {}
        self.users: tuple[str, Any] = ("200", {})
        self.entries: dict[int, Any] = {}
        self.task_assignments: dict[int, tuple[str, Any]] = {}
        self.tasks: dict[int, Any] = {}
        self.calls: list[tuple[Any, ...]] = []
        self.closed = False

    def close(self) -> None:
        self.closed = True

    def _result(self, response: Any) -> Result:
        if isinstance(response, Exception):
            raise response
        if response is None:
            return Result("404", "Not Found", {"Status": "404 Not Found"})
        status_code, payload = response
        return Result(status_code, copy.copy(payload), {"X-Runtime": "0.01"})

    def list_clients(self) -> Result:
        self.calls.append(("list_clients",))
        return self._result(self.clients)

    def get_client(self, client_id: int) -> Result:
        self.calls.append(("get_client", client_id))
        client = self.clients[1].get(client_id) if isinstance(self.clients[1], dict) else None
        return self._result(("200", client) if client else None)

    def list_projects(self) -> Result:
        self.calls.append(("list_projects",))
        return self._result(self.projects)

    def list_client_projects(self, client_id: int) -> Result:
        self.calls.append(("list_client_projects", client_id))
        return self._result(self.client_projects.get(client_id, ("200", {})))

    def get_project(self, project_id: int) -> Result:
        self.calls.append(("get_project", project_id))
        project = self.projects[1].get(project_id) if isinstance(self.projects[1], dict) else None
        return self._result(("200", project) if project else None)

    def list_users(self) -> Result:
        self.calls.append(("list_users",))
        return self._result(self.users)

    def get_user(self, user_id: int) -> Result:
        self.calls.append(("get_user", user_id))
        user = self.users[1].get(user_id) if isinstance(self.users[1], dict) else None
        return self._result(("200", user) if user else None)

    def list_user_entries(self, user_id: int, date_range: DateRange) -> Result:
        self.calls.append(("list_user_entries", user_id, date_range))
        return self._result(self.entries.get(user_id, ("200", [])))

    def list_project_task_assignments(self, project_id: int) -> Result:
        self.calls.append(("list_project_task_assignments", project_id))
        return self._result(self.task_assignments.get(project_id, ("200", [])))

    def list_tasks(self) -> Result:
        self.calls.append(("list_tasks",))
        found = {
            tid: r[1] for tid, r in self.tasks.items() if isinstance(r, tuple) and r[0] == "200"
        }
        return self._result(("200", found))

    def get_task(self, task_id: int) -> Result:
        self.calls.append(("get_task", task_id))
        return self._result(self.tasks.get(task_id))


@pytest.fixture
def fake_api() -> FakeApi:
    """Create an empty in-memory accessor."""
    return FakeApi()


