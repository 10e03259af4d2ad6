"""Occurrence predicate for recurrence rules.

`occurs_on` is the single place that decides whether a recurring task,
project or goal is active on a calendar date. It is pure and total: a
malformed rule evaluates to False instead of raising.
"""

from __future__ import annotations

from calendar import monthrange
from datetime import date, timedelta
from typing import Iterable, List, Optional

from dailyfocus.models.constants import WORKING_DAYS
from dailyfocus.models.recurrence import RecurrenceRule, RecurrenceType
from dailyfocus.recurrence.weekdays import weekday_index


def days_in_month(year: int, month: int) -> int:
    return monthrange(year, month)[1]


def occurs_on(rule: Optional[RecurrenceRule], day: date) -> bool:
    """Return True if the rule occurs on the given calendar date."""
    if rule is None or not rule.enabled:
        return False

    if rule.type == RecurrenceType.DAILY:
        return True

    if rule.type == RecurrenceType.WEEKLY:
        return weekday_index(day) in (rule.week_days or [])

    if rule.type == RecurrenceType.MONTHLY:
        if rule.month_day is None:
            return False
        # No clamping and no rollover: day 31 simply does not occur in short months.
        if rule.month_day > days_in_month(day.year, day.month):
            return False
        return day.day == rule.month_day

    if rule.type == RecurrenceType.WEEKDAYS:
        return weekday_index(day) in WORKING_DAYS

    if rule.type == RecurrenceType.CUSTOM:
        return day in (rule.custom_dates or [])

    return False


def _daterange(start: date, end_exclusive: date) -> Iterable[date]:
    cur = start
    while cur < end_exclusive:
        yield cur
        cur = cur + timedelta(days=1)


def occurrences_between(rule: Optional[RecurrenceRule], start: date, end_exclusive: date) -> List[date]:
    """All dates in [start, end_exclusive) on which the rule occurs."""
    return [day for day in _daterange(start, end_exclusive) if occurs_on(rule, day)]

