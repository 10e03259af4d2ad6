"""Data models for dailyFocus."""

from dailyfocus.models.recurrence import RecurrenceRule, RecurrenceType
from dailyfocus.models.item import SchedulableItem, ItemKind, ItemStatus, Priority
from dailyfocus.models.notification import NotificationRule, NotificationType, QuietConfig
from dailyfocus.models.settings import UserSettings
from dailyfocus.models.errors import InvalidRuleConfiguration

__all__ = [
    "RecurrenceRule",
    "RecurrenceType",
    "SchedulableItem",
    "ItemKind",
    "ItemStatus",
    "Priority",
    "NotificationRule",
    "NotificationType",
    "QuietConfig",
    "UserSettings",
    "InvalidRuleConfiguration",
]
