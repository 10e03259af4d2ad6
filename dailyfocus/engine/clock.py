"""Timezone helpers for dailyFocus.

The engine never reads the system clock. Callers pass an instant and a
resolved timezone; these helpers project the instant into that zone.
"""

from datetime import date, datetime, timezone, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dailyfocus.models.constants import DEFAULT_TIMEZONE
from dailyfocus.recurrence.weekdays import weekday_index


class AmbiguousTimezone(ValueError):
    """Timezone identifier is not a recognized IANA zone."""

    def __init__(self, name: Optional[str]):
        super().__init__(f"Unrecognized timezone: {name!r}")
        self.name = name


def resolve_timezone(name: Optional[str], *, default: str = DEFAULT_TIMEZONE) -> ZoneInfo:
    """Resolve an IANA zone identifier, falling back to `default` when unset.

    Call this when configuration is loaded, not from the evaluation functions.

    Raises:
        AmbiguousTimezone: if the identifier is not a known zone
    """
    key = (name or "").strip() or default
    try:
        return ZoneInfo(key)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise AmbiguousTimezone(key) from e


def to_local(now: datetime, tz: tzinfo) -> datetime:
    """Project an instant into `tz`. Naive instants are taken as UTC."""
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(tz)


def local_date(now: datetime, tz: tzinfo) -> date:
    """Calendar date of an instant in `tz`."""
    return to_local(now, tz).date()


def local_hhmm(local_now: datetime) -> str:
    return f"{local_now.hour:02d}:{local_now.minute:02d}"


def local_weekday(local_now: datetime) -> int:
    """Day of week of a local datetime with Sunday = 0."""
    return weekday_index(local_now.date())
