"""Today view aggregation for dailyFocus.

Classifies schedulable items into the "today" and "overdue" lists for a
calendar date and orders them. Every call recomputes from scratch; nothing
is cached between calls.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, tzinfo
from typing import Any, Iterable, List, Mapping, Optional, Union

from pydantic import ValidationError

from dailyfocus.engine.clock import local_date
from dailyfocus.engine.ranking import rank_overdue, rank_today
from dailyfocus.models.item import SchedulableItem
from dailyfocus.recurrence.occurrence import occurs_on

logger = logging.getLogger(__name__)

ItemLike = Union[SchedulableItem, Mapping[str, Any]]


@dataclass(frozen=True)
class TodayView:
    """Result of a today view computation."""

    today: date
    today_items: List[SchedulableItem] = field(default_factory=list)
    overdue_items: List[SchedulableItem] = field(default_factory=list)
    skipped_ids: List[Optional[str]] = field(default_factory=list)
    generated_at: Optional[datetime] = None


def is_overdue(item: SchedulableItem, today: date) -> bool:
    """Due date strictly before today (date-only comparison)."""
    return item.due_date is not None and item.due_date < today


def is_scheduled_today(item: SchedulableItem, today: date) -> bool:
    """Starts today, is due today, or recurs today."""
    if item.start_date == today or item.due_date == today:
        return True
    return item.recurrence is not None and occurs_on(item.recurrence, today)


def _coerce(raw: ItemLike) -> SchedulableItem:
    if isinstance(raw, SchedulableItem):
        return raw
    return SchedulableItem.model_validate(raw)


def _raw_id(raw: ItemLike) -> Optional[str]:
    if isinstance(raw, Mapping):
        value = raw.get("id")
        return str(value) if value is not None else None
    return getattr(raw, "id", None)


def compute_today_view(
    items: Iterable[ItemLike],
    today: Optional[date] = None,
    now: Optional[datetime] = None,
    *,
    time_zone: Optional[tzinfo] = None,
) -> TodayView:
    """Build the today and overdue lists.

    Done items never appear. Overdue items appear in both lists. A record that
    cannot be read as a SchedulableItem is skipped and reported in
    `skipped_ids` instead of aborting the computation.

    Args:
        items: Items (models or raw mappings) in the caller's order
        today: Calendar date in the user's timezone
        now: Current instant; used to derive `today` when it is omitted
        time_zone: User's timezone, required when `today` is omitted

    Returns:
        TodayView with ordered `today_items` and `overdue_items`

    Raises:
        ValueError: if neither `today` nor (`now`, `time_zone`) is given
    """
    if today is None:
        if now is None or time_zone is None:
            raise ValueError("compute_today_view needs `today`, or `now` with `time_zone`")
        today = local_date(now, time_zone)

    today_items: List[SchedulableItem] = []
    overdue_items: List[SchedulableItem] = []
    skipped: List[Optional[str]] = []

    for raw in items:
        try:
            item = _coerce(raw)
        except (ValidationError, TypeError, ValueError) as e:
            item_id = _raw_id(raw)
            skipped.append(item_id)
            logger.warning(f"Skipping malformed item {item_id}: {type(e).__name__}: {str(e)}")
            continue

        if item.is_done:
            continue

        overdue = is_overdue(item, today)
        if overdue:
            overdue_items.append(item)
        if overdue or is_scheduled_today(item, today):
            today_items.append(item)

    return TodayView(
        today=today,
        today_items=rank_today(today_items, today),
        overdue_items=rank_overdue(overdue_items),
        skipped_ids=skipped,
        generated_at=now,
    )
