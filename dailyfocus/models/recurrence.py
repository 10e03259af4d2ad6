"""Recurrence models (simple presets) for dailyFocus.

A recurrence rule is attached to a task, project or goal and answers whether
the item occurs on a calendar date. Rules are created by the user and are
read-only to the engine.
"""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from dailyfocus.models.fields import normalize_weekdays


class RecurrenceType(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    WEEKDAYS = "weekdays"
    CUSTOM = "custom"


class RecurrenceRule(BaseModel):
    """Simple recurrence definition.

    Notes:
    - Only the field selected by `type` is meaningful; the others are ignored.
    - Partially populated rules (e.g. monthly without `month_day`) are accepted
      here and evaluate to "does not occur".
    - Weekdays use 0 = Sunday ... 6 = Saturday.
    """

    enabled: bool = Field(True, description="Disabled rules never occur")
    type: RecurrenceType = Field(..., description="Recurrence type")

    # Weekly specifics
    week_days: List[int] = Field(
        default_factory=list, description="Weekdays on which it occurs (0 = Sunday)"
    )

    # Monthly specifics (no clamping: 31 never occurs in a 30-day month)
    month_day: Optional[int] = Field(None, ge=1, le=31, description="Day of month")

    # Custom specifics
    custom_dates: List[date] = Field(
        default_factory=list, description="Explicit dates on which it occurs"
    )

    @field_validator("week_days", mode="before")
    @classmethod
    def _validate_week_days(cls, v):
        if v is None:
            return []
        return normalize_weekdays(v)

    @field_validator("custom_dates")
    @classmethod
    def _validate_custom_dates(cls, v):
        if v is None:
            return []
        # Deduplicate but preserve order
        seen = set()
        out: List[date] = []
        for day in v:
            if day not in seen:
                seen.add(day)
                out.append(day)
        return out

    class Config:
        """Pydantic configuration."""
        use_enum_values = True
