"""Weekday helpers for dailyFocus (0 = Sunday ... 6 = Saturday)."""

from datetime import date

from dailyfocus.models.fields import normalize_weekdays, parse_weekday

__all__ = ["weekday_index", "parse_weekday", "normalize_weekdays"]


def weekday_index(d: date) -> int:
    """Day of week for a date with Sunday = 0."""
    # Python weekday: Monday=0 ... Sunday=6
    return (d.weekday() + 1) % 7
