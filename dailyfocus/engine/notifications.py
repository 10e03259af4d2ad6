"""Notification trigger evaluation for dailyFocus.

Decides whether a notification rule fires at an instant in the user's
timezone. The evaluator is a stateless predicate: it does not remember what
already fired. Callers that want fire-once behavior keep their own ledger
(see `dailyfocus.engine.dispatcher`).
"""

from datetime import datetime, tzinfo
from typing import Iterable, List

from dailyfocus.engine.clock import local_hhmm, local_weekday, to_local
from dailyfocus.models.notification import NotificationRule, NotificationType, QuietConfig


def in_quiet_window(hhmm: str, start: str, end: str) -> bool:
    """Whether a local HH:MM falls within [start, end).

    The window wraps past midnight when end < start. An empty window
    (start == end) contains nothing.
    """
    if start == end:
        return False
    if start < end:
        return start <= hhmm < end
    return hhmm >= start or hhmm < end


def is_quiet(quiet: QuietConfig, local_now: datetime) -> bool:
    """Whether notifications are suppressed at a local datetime."""
    if quiet.quiet_hours_enabled and in_quiet_window(
        local_hhmm(local_now), quiet.quiet_start, quiet.quiet_end
    ):
        return True
    return local_weekday(local_now) in (quiet.quiet_days or [])


def matches_trigger(rule: NotificationRule, local_now: datetime) -> bool:
    """Type matching only, without quiet or active checks."""
    if rule.type == NotificationType.TIME:
        return rule.time is not None and rule.time == local_hhmm(local_now)

    if rule.type == NotificationType.DAY:
        # Date-only: any time carried on a day rule is ignored.
        return local_weekday(local_now) in (rule.days_of_week or [])

    if rule.type == NotificationType.DATE:
        return rule.specific_date is not None and rule.specific_date == local_now.date()

    return False


def should_fire(rule: NotificationRule, quiet: QuietConfig, now: datetime, tz: tzinfo) -> bool:
    """Whether a rule fires at `now` in timezone `tz`.

    Inactive rules, quiet hours, quiet days and switched-off item kinds all
    suppress firing before the trigger type is considered.

    Args:
        rule: Notification rule
        quiet: User's quiet configuration
        now: Current instant (naive values are taken as UTC)
        tz: User's resolved timezone

    Returns:
        True if the rule fires at minute precision
    """
    if not rule.is_active:
        return False

    local_now = to_local(now, tz)
    if is_quiet(quiet, local_now):
        return False
    if not quiet.kind_enabled(rule.linked_item_kind):
        return False

    return matches_trigger(rule, local_now)


def select_due_rules(
    rules: Iterable[NotificationRule], quiet: QuietConfig, now: datetime, tz: tzinfo
) -> List[str]:
    """Ids of the rules that fire at `now`, in input order."""
    return [rule.id for rule in rules if should_fire(rule, quiet, now, tz)]
