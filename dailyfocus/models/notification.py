"""Notification rule and quiet-hours models for dailyFocus."""

from datetime import date
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from dailyfocus.models.constants import DEFAULT_QUIET_END, DEFAULT_QUIET_START
from dailyfocus.models.item import ItemKind
from dailyfocus.models.fields import normalize_hhmm, normalize_weekdays


class NotificationType(str, Enum):
    """Notification trigger type."""
    TIME = "time"
    DAY = "day"
    DATE = "date"


class NotificationRule(BaseModel):
    """User-configured notification rule.

    Exactly one of `time` / `days_of_week` / `specific_date` is expected to be
    populated, matching `type`. Mismatched rules are accepted here and never fire.
    """

    id: str = Field(..., description="Unique rule identifier")
    type: NotificationType = Field(..., description="Trigger type")
    time: Optional[str] = Field(None, description="Time of day, HH:MM (type=time)")
    days_of_week: List[int] = Field(
        default_factory=list, description="Weekdays, 0 = Sunday (type=day)"
    )
    specific_date: Optional[date] = Field(None, description="One-shot date (type=date)")
    message: str = Field("", description="Message shown when the rule fires")
    is_active: bool = Field(True, description="Inactive rules never fire")
    linked_item_id: Optional[str] = Field(None, description="Item this rule concerns")
    linked_item_kind: Optional[ItemKind] = Field(None, description="Kind of the linked item")

    @field_validator("time", mode="before")
    @classmethod
    def _validate_time(cls, v):
        return normalize_hhmm(v)

    @field_validator("days_of_week", mode="before")
    @classmethod
    def _validate_days_of_week(cls, v):
        if v is None:
            return []
        return normalize_weekdays(v)

    class Config:
        """Pydantic configuration."""
        use_enum_values = True


class QuietConfig(BaseModel):
    """Per-user quiet hours/days. Suppresses firing, never disables rules."""

    quiet_hours_enabled: bool = Field(False, description="Whether quiet hours apply")
    quiet_start: str = Field(DEFAULT_QUIET_START, description="Quiet window start, HH:MM")
    quiet_end: str = Field(DEFAULT_QUIET_END, description="Quiet window end (exclusive), HH:MM")
    quiet_days: List[int] = Field(default_factory=list, description="Weekdays with no notifications")

    # Per-kind switches
    tasks_enabled: bool = Field(True, description="Notify for task rules")
    projects_enabled: bool = Field(True, description="Notify for project rules")
    goals_enabled: bool = Field(True, description="Notify for goal rules")

    @field_validator("quiet_start", "quiet_end", mode="before")
    @classmethod
    def _validate_window(cls, v, info):
        if v is None or (isinstance(v, str) and not v.strip()):
            return DEFAULT_QUIET_START if info.field_name == "quiet_start" else DEFAULT_QUIET_END
        return normalize_hhmm(v)

    @field_validator("quiet_days", mode="before")
    @classmethod
    def _validate_quiet_days(cls, v):
        if v is None:
            return []
        return normalize_weekdays(v)

    def kind_enabled(self, kind: Optional[str]) -> bool:
        """Whether notifications for an item kind are switched on."""
        if kind is None:
            return True
        return {
            ItemKind.TASK.value: self.tasks_enabled,
            ItemKind.PROJECT.value: self.projects_enabled,
            ItemKind.GOAL.value: self.goals_enabled,
        }.get(getattr(kind, "value", kind), True)
