"""Core types shared by the API client and the reports layer."""

from harvest_reports.core.exceptions import (
    HarvestConnectionError,
    HarvestError,
    UnknownPropertyError,
)
from harvest_reports.core.models import Client, Project, Task, TaskAssignment, TimeEntry, User
from harvest_reports.core.result import Result

__all__ = [
    "Client",
    "HarvestConnectionError",
    "HarvestError",
    "Project",
    "Result",
    "Task",
    "TaskAssignment",
    "TimeEntry",
    "UnknownPropertyError",
    "User",
]
