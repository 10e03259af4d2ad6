"""Schedulable item data model for dailyFocus.

A task, project or goal as seen by the today view: only the fields the engine
needs to classify and order it.
"""

from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from dailyfocus.models.fields import normalize_hhmm
from dailyfocus.models.recurrence import RecurrenceRule


class ItemKind(str, Enum):
    """Kind of schedulable entity."""
    TASK = "task"
    PROJECT = "project"
    GOAL = "goal"


class ItemStatus(str, Enum):
    """Item status enumeration."""
    TODO = "todo"
    IN_PROGRESS = "in-progress"
    REVIEW = "review"
    DONE = "done"


class Priority(str, Enum):
    """Priority enumeration."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class SchedulableItem(BaseModel):
    """Canonical schedulable item model."""

    id: str = Field(..., description="Unique item identifier")
    title: str = Field(..., description="Item title")
    kind: ItemKind = Field(ItemKind.TASK, description="Task, project or goal")
    priority: Priority = Field(Priority.MEDIUM, description="Item priority")
    status: ItemStatus = Field(ItemStatus.TODO, description="Item status")
    start_date: Optional[date] = Field(None, description="Start date (date-only, user's timezone)")
    due_date: Optional[date] = Field(None, description="Due date (date-only, user's timezone)")
    start_time: Optional[str] = Field(None, description="Start time of day, HH:MM")
    recurrence: Optional[RecurrenceRule] = Field(None, description="Recurrence rule, if repeating")

    @field_validator("start_time", mode="before")
    @classmethod
    def _validate_start_time(cls, v):
        return normalize_hhmm(v)

    @property
    def is_done(self) -> bool:
        return self.status == ItemStatus.DONE

    class Config:
        """Pydantic configuration."""
        use_enum_values = True
