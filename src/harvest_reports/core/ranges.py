"""Calendar date ranges used to query time entries."""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

DEFAULT_TIME_ZONE = "UTC"

WEEKDAYS = {
    "monday": 0,
    "tuesday": 1,
    "wednesday": 2,
    "thursday": 3,
    "friday": 4,
    "saturday": 5,
    "sunday": 6,
}


@dataclass(frozen=True)
class DateRange:
    """Inclusive range of calendar days.

    Attributes:
        from_date: First day of the range
        to_date: Last day of the range
    """

    from_date: date
    to_date: date

    def __post_init__(self) -> None:
        if self.to_date < self.from_date:
            raise ValueError("to_date must not be before from_date")

    def to_params(self) -> dict[str, str]:
        """Convert to Harvest query parameters (``YYYYMMDD``)."""
        return {
            "from": self.from_date.strftime("%Y%m%d"),
            "to": self.to_date.strftime("%Y%m%d"),
        }

    @property
    def days(self) -> int:
        """Number of days covered."""
        return (self.to_date - self.from_date).days + 1


def local_date(time_zone: Optional[str] = None, now: Optional[datetime] = None) -> date:
    """Get the current calendar day in a time zone.

    Args:
        time_zone: IANA zone name. Uses DEFAULT_TIME_ZONE if None.
        now: Reference instant (for testing). Uses the current time if None.

    Returns:
        Calendar day in the requested zone

    Raises:
        ValueError: If the zone name is unknown
    """
    try:
        zone = ZoneInfo(time_zone or DEFAULT_TIME_ZONE)
    except (ZoneInfoNotFoundError, ValueError):
        raise ValueError(f"Unknown time zone: {time_zone}")

    if now is None:
        return datetime.now(zone).date()
    if now.tzinfo is None:
        return now.date()
    return now.astimezone(zone).date()


def _week_start(day: date, start_of_week: str) -> date:
    try:
        first = WEEKDAYS[start_of_week.lower()]
    except KeyError:
        raise ValueError(f"Unknown start of week: {start_of_week}")
    offset = (day.weekday() - first) % 7
    return day - timedelta(days=offset)


def today(time_zone: Optional[str] = None, now: Optional[datetime] = None) -> DateRange:
    """Range covering the current day."""
    day = local_date(time_zone, now)
    return DateRange(day, day)


def this_week(
    time_zone: Optional[str] = None,
    start_of_week: str = "monday",
    now: Optional[datetime] = None,
) -> DateRange:
    """Range from the start of the current week through today.

    Example:
        >>> this_week("UTC", "sunday", datetime(2024, 5, 15, tzinfo=timezone.utc))
        DateRange(from_date=datetime.date(2024, 5, 12), to_date=datetime.date(2024, 5, 15))
    """
    day = local_date(time_zone, now)
    return DateRange(_week_start(day, start_of_week), day)


def last_week(
    time_zone: Optional[str] = None,
    start_of_week: str = "monday",
    now: Optional[datetime] = None,
) -> DateRange:
    """Range covering the full previous week."""
    start = _week_start(local_date(time_zone, now), start_of_week) - timedelta(days=7)
    return DateRange(start, start + timedelta(days=6))


def this_month(time_zone: Optional[str] = None, now: Optional[datetime] = None) -> DateRange:
    """Range from the first of the current month through today."""
    day = local_date(time_zone, now)
    return DateRange(day.replace(day=1), day)


def last_month(time_zone: Optional[str] = None, now: Optional[datetime] = None) -> DateRange:
    """Range covering the full previous calendar month."""
    end = local_date(time_zone, now).replace(day=1) - timedelta(days=1)
    return DateRange(end.replace(day=1), end)
