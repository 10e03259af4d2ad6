"""Scheduling engine for dailyFocus."""

from dailyfocus.engine.clock import AmbiguousTimezone, resolve_timezone
from dailyfocus.engine.today import compute_today_view, TodayView
from dailyfocus.engine.ranking import rank_today, rank_overdue
from dailyfocus.engine.notifications import should_fire, select_due_rules, is_quiet
from dailyfocus.engine.dispatcher import NotificationDispatcher, FiredLedger, LoggingSink

__all__ = [
    "AmbiguousTimezone",
    "resolve_timezone",
    "compute_today_view",
    "TodayView",
    "rank_today",
    "rank_overdue",
    "should_fire",
    "select_due_rules",
    "is_quiet",
    "NotificationDispatcher",
    "FiredLedger",
    "LoggingSink",
]
