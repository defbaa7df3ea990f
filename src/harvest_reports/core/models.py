"""Domain records returned by the Harvest API."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Optional


def parse_bool(value: Any) -> Optional[bool]:
    """Convert a Harvest flag to a boolean.

    Harvest sends flags as ``"true"``/``"false"`` strings, JSON booleans or
    ``1``/``0``. Missing or empty values become None.

    Args:
        value: Raw flag value

    Returns:
        Parsed flag or None

    Raises:
        ValueError: If the value is not a recognizable flag
    """
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "1"):
            return True
        if lowered in ("false", "0"):
            return False
    raise ValueError(f"Invalid boolean flag: {value!r}")


def _pick(data: dict[str, Any], name: str) -> Any:
    """Look up a field by its underscore or hyphen spelling."""
    if name in data:
        return data[name]
    return data.get(name.replace("_", "-"))


def _text(data: dict[str, Any], name: str) -> Optional[str]:
    value = _pick(data, name)
    if value is None or value == "":
        return None
    return str(value)


def _int(data: dict[str, Any], name: str) -> Optional[int]:
    value = _pick(data, name)
    if value is None or value == "":
        return None
    return int(value)


def _decimal(data: dict[str, Any], name: str) -> Optional[Decimal]:
    value = _pick(data, name)
    if value is None or value == "":
        return None
    try:
        return Decimal(str(value))
    except InvalidOperation:
        raise ValueError(f"Invalid decimal for {name}: {value!r}")


def _flag(data: dict[str, Any], name: str) -> Optional[bool]:
    return parse_bool(_pick(data, name))


def unwrap(data: Any, key: str) -> Any:
    """Strip a single-key wrapper such as ``{"client": {...}}``."""
    if isinstance(data, dict) and len(data) == 1 and key in data:
        return data[key]
    return data


@dataclass
class Record:
    """Base for Harvest records.

    Attributes:
        id: Harvest identifier
        raw: Field mapping as received from the API
    """

    id: int
    raw: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    def get(self, name: str, default: Any = None) -> Any:
        """Get a raw field by its wire name (e.g. ``is-active``)."""
        if name in self.raw:
            return self.raw[name]
        alternate = name.replace("-", "_") if "-" in name else name.replace("_", "-")
        return self.raw.get(alternate, default)


@dataclass
class Client(Record):
    """Customer that owns projects.

    Attributes:
        name: Display name
        active: Whether the client is active
        currency: Billing currency
        details: Free-form address/details
    """

    name: Optional[str] = None
    active: Optional[bool] = None
    currency: Optional[str] = None
    details: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Client":
        """Create Client from an API mapping."""
        data = unwrap(data, "client")
        return cls(
            id=int(data["id"]),
            raw=dict(data),
            name=_text(data, "name"),
            active=_flag(data, "active"),
            currency=_text(data, "currency"),
            details=_text(data, "details"),
        )


@dataclass
class Project(Record):
    """Project belonging to a client."""

    name: Optional[str] = None
    client_id: Optional[int] = None
    code: Optional[str] = None
    active: Optional[bool] = None
    billable: Optional[bool] = None
    budget: Optional[Decimal] = None
    notes: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Project":
        """Create Project from an API mapping."""
        data = unwrap(data, "project")
        return cls(
            id=int(data["id"]),
            raw=dict(data),
            name=_text(data, "name"),
            client_id=_int(data, "client_id"),
            code=_text(data, "code"),
            active=_flag(data, "active"),
            billable=_flag(data, "billable"),
            budget=_decimal(data, "budget"),
            notes=_text(data, "notes"),
        )


@dataclass
class User(Record):
    """Person with access to the Harvest account.

    Attributes:
        email: Login email
        first_name: Given name
        last_name: Family name
        is_active: Whether the account is enabled
        is_admin: Whether the user has admin rights
        is_contractor: Whether the user is a contractor
        timezone: User time zone name
        department: Department label
    """

    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    is_active: Optional[bool] = None
    is_admin: Optional[bool] = None
    is_contractor: Optional[bool] = None
    timezone: Optional[str] = None
    department: Optional[str] = None

    @property
    def full_name(self) -> str:
        """First and last name joined, falling back to the email."""
        parts = [p for p in (self.first_name, self.last_name) if p]
        if parts:
            return " ".join(parts)
        return self.email or str(self.id)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "User":
        """Create User from an API mapping."""
        data = unwrap(data, "user")
        return cls(
            id=int(data["id"]),
            raw=dict(data),
            email=_text(data, "email"),
            first_name=_text(data, "first_name"),
            last_name=_text(data, "last_name"),
            is_active=_flag(data, "is_active"),
            is_admin=_flag(data, "is_admin"),
            is_contractor=_flag(data, "is_contractor"),
            timezone=_text(data, "timezone"),
            department=_text(data, "department"),
        )


@dataclass
class Task(Record):
    """Kind of work that time can be logged against."""

    name: Optional[str] = None
    billable_by_default: Optional[bool] = None
    default_hourly_rate: Optional[Decimal] = None
    is_default: Optional[bool] = None
    deactivated: Optional[bool] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Task":
        """Create Task from an API mapping."""
        data = unwrap(data, "task")
        return cls(
            id=int(data["id"]),
            raw=dict(data),
            name=_text(data, "name"),
            billable_by_default=_flag(data, "billable_by_default"),
            default_hourly_rate=_decimal(data, "default_hourly_rate"),
            is_default=_flag(data, "is_default"),
            deactivated=_flag(data, "deactivated"),
        )


@dataclass
class TaskAssignment(Record):
    """Link between a project and a task."""

    project_id: Optional[int] = None
    task_id: Optional[int] = None
    billable: Optional[bool] = None
    deactivated: Optional[bool] = None
    hourly_rate: Optional[Decimal] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TaskAssignment":
        """Create TaskAssignment from an API mapping."""
        data = unwrap(data, "task_assignment")
        return cls(
            id=int(data["id"]),
            raw=dict(data),
            project_id=_int(data, "project_id"),
            task_id=_int(data, "task_id"),
            billable=_flag(data, "billable"),
            deactivated=_flag(data, "deactivated"),
            hourly_rate=_decimal(data, "hourly_rate"),
        )


@dataclass
class TimeEntry(Record):
    """Time logged by a user on a given day.

    Attributes:
        user_id: Owner of the entry
        project_id: Project the time was logged against
        task_id: Task the time was logged against
        spent_at: Day the time belongs to
        hours: Logged hours
        notes: Entry notes
        timer_started_at: Timestamp of the running timer, None when stopped
    """

    user_id: Optional[int] = None
    project_id: Optional[int] = None
    task_id: Optional[int] = None
    spent_at: Optional[date] = None
    hours: Optional[Decimal] = None
    notes: Optional[str] = None
    timer_started_at: Optional[str] = None

    @property
    def is_running(self) -> bool:
        """Check if this entry has a timer running."""
        return self.timer_started_at is not None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TimeEntry":
        """Create TimeEntry from an API mapping."""
        data = unwrap(unwrap(data, "day_entry"), "time_entry")
        spent_at = _text(data, "spent_at")
        return cls(
            id=int(data["id"]),
            raw=dict(data),
            user_id=_int(data, "user_id"),
            project_id=_int(data, "project_id"),
            task_id=_int(data, "task_id"),
            spent_at=date.fromisoformat(spent_at) if spent_at else None,
            hours=_decimal(data, "hours"),
            notes=_text(data, "notes"),
            timer_started_at=_text(data, "timer_started_at"),
        )
