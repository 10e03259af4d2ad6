"""Ordering for the today and overdue views.

Sorts items by priority, then overdue carry-forward, then start time, then
due date. Python's sort is stable, so ties keep their input order.
"""

from datetime import date
from typing import List

from dailyfocus.models.item import Priority, SchedulableItem


PRIORITY_RANK = {
    Priority.HIGH.value: 0,
    Priority.MEDIUM.value: 1,
    Priority.LOW.value: 2,
}


def rank_today(items: List[SchedulableItem], today: date) -> List[SchedulableItem]:
    """Order the today list.

    Items are sorted:
    1. By priority (high, medium, low)
    2. Overdue items before the rest
    3. Items with a start time first, earliest time first
    4. Items with a due date first, earliest date first
    5. Input order

    This function is deterministic - same inputs always produce same outputs.

    Args:
        items: Items already selected for today
        today: Calendar date the list is built for; decides overdue per item

    Returns:
        New list in display order
    """
    return sorted(
        items,
        key=lambda item: (
            _priority_sort_key(item),
            _overdue_sort_key(item, today),
            _start_time_sort_key(item),
            _due_date_sort_key(item),
        ),
    )


def rank_overdue(items: List[SchedulableItem]) -> List[SchedulableItem]:
    """Order the overdue list: oldest due date first, then input order."""
    return sorted(items, key=_due_date_sort_key)


def _priority_sort_key(item: SchedulableItem) -> int:
    """Get sort key for priority (lower = shown first).

    Unknown priorities sort after low.
    """
    value = getattr(item.priority, "value", item.priority)
    return PRIORITY_RANK.get(value, len(PRIORITY_RANK))


def _overdue_sort_key(item: SchedulableItem, today: date) -> int:
    return 0 if item.due_date is not None and item.due_date < today else 1


def _start_time_sort_key(item: SchedulableItem) -> tuple:
    """Items with a start time come first, compared as zero-padded HH:MM."""
    if item.start_time:
        return (0, item.start_time)
    return (1, "")


def _due_date_sort_key(item: SchedulableItem) -> tuple:
    """Get sort key for due date.

    Items with a due date come before those without.
    Among items with due dates, earlier dates come first.
    """
    if item.due_date:
        return (0, item.due_date.toordinal())
    return (1, 0)
