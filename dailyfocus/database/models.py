"""SQLAlchemy database models for dailyFocus."""

from datetime import date, datetime
from typing import Union, TypeVar, Type
import uuid
from sqlalchemy import Column, String, Integer, Boolean, Date, DateTime, JSON

from dailyfocus.database.database import Base
from dailyfocus.models.constants import LEGACY_PRIORITY_MAPPING
from dailyfocus.models.item import ItemKind, ItemStatus, Priority

T = TypeVar('T')


def enum_to_value(enum_obj: Union[str, T]) -> str:
    """Convert enum to string value (handles both enum and string).

    Args:
        enum_obj: Enum instance or string value

    Returns:
        String value of the enum, or the string itself if already a string
    """
    if hasattr(enum_obj, 'value'):
        return enum_obj.value
    return str(enum_obj)


def value_to_enum(value: str, enum_class: Type[T], default: T) -> T:
    """Convert string to enum with fallback to default.

    Args:
        value: String value to convert
        enum_class: Enum class to convert to
        default: Default enum value if conversion fails

    Returns:
        Enum instance, or default if conversion fails
    """
    if not value:
        return default
    try:
        return enum_class(value.lower())
    except (ValueError, AttributeError):
        return default


def _dates_to_json(values) -> list:
    return [d.isoformat() if isinstance(d, date) else str(d) for d in (values or [])]


class ItemDB(Base):
    """Database model for a task, project or goal."""

    __tablename__ = "items"

    # Primary key
    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))

    # User association
    user_id = Column(String, nullable=False, index=True)
    kind = Column(String, nullable=False, default=ItemKind.TASK.value, index=True)

    # Basic fields
    title = Column(String, nullable=False)
    description = Column(String, nullable=True)
    priority = Column(String, nullable=False, default=Priority.MEDIUM.value)
    status = Column(String, nullable=False, default=ItemStatus.TODO.value)

    # Timestamps
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)
    deleted_at = Column(DateTime, nullable=True, index=True)

    # Scheduling fields (date-only, user's timezone)
    start_date = Column(Date, nullable=True)
    due_date = Column(Date, nullable=True, index=True)
    start_time = Column(String, nullable=True)

    # Display order within the user's list
    position = Column(Integer, nullable=False, default=0, index=True)

    # Recurrence (legacy repeat_* columns; repeat_days may hold names or integers)
    repeat_enabled = Column(Boolean, nullable=False, default=False)
    repeat_type = Column(String, nullable=True)
    repeat_days = Column(JSON, nullable=True)
    repeat_month_day = Column(Integer, nullable=True)
    repeat_custom_dates = Column(JSON, nullable=True)

    def recurrence_payload(self):
        """Recurrence rule fields as a dict, or None for non-repeating rows."""
        if not self.repeat_type:
            return None
        month_day = self.repeat_month_day
        # Legacy monthly rows repeat on the day of their start date.
        if self.repeat_type == "monthly" and month_day is None and self.start_date is not None:
            month_day = self.start_date.day
        return {
            "enabled": bool(self.repeat_enabled),
            "type": self.repeat_type.lower(),
            "week_days": self.repeat_days or [],
            "month_day": month_day,
            "custom_dates": self.repeat_custom_dates or [],
        }

    def to_pydantic(self):
        """Convert database model to Pydantic model.

        Raises:
            pydantic.ValidationError: if the row cannot form a valid item
        """
        from dailyfocus.models.item import SchedulableItem

        # Handle legacy priority values (migration support)
        raw_priority = (self.priority or "").lower()
        priority = value_to_enum(
            LEGACY_PRIORITY_MAPPING.get(raw_priority, raw_priority), Priority, Priority.MEDIUM
        )

        return SchedulableItem(
            id=self.id,
            title=self.title,
            kind=value_to_enum(self.kind, ItemKind, ItemKind.TASK),
            priority=priority,
            status=self.status,
            start_date=self.start_date,
            due_date=self.due_date,
            start_time=self.start_time,
            recurrence=self.recurrence_payload(),
        )

    @classmethod
    def from_pydantic(cls, item, user_id: str):
        """Create database model from Pydantic model."""
        rule = item.recurrence
        return cls(
            id=item.id,
            user_id=user_id,
            kind=enum_to_value(item.kind),
            title=item.title,
            priority=enum_to_value(item.priority),
            status=enum_to_value(item.status),
            start_date=item.start_date,
            due_date=item.due_date,
            start_time=item.start_time,
            repeat_enabled=bool(rule and rule.enabled),
            repeat_type=enum_to_value(rule.type) if rule else None,
            repeat_days=list(rule.week_days) if rule else None,
            repeat_month_day=rule.month_day if rule else None,
            repeat_custom_dates=_dates_to_json(rule.custom_dates) if rule else None,
        )


class NotificationRuleDB(Base):
    """Database model for a notification rule."""

    __tablename__ = "notification_rules"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String, nullable=False, index=True)

    type = Column(String, nullable=False)
    time = Column(String, nullable=True)
    days_of_week = Column(JSON, nullable=True)
    specific_date = Column(Date, nullable=True)
    message = Column(String, nullable=False, default="")
    is_active = Column(Boolean, nullable=False, default=True)

    # At most one of these is set
    task_id = Column(String, nullable=True, index=True)
    project_id = Column(String, nullable=True, index=True)
    goal_id = Column(String, nullable=True, index=True)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    def _linked(self):
        for kind, item_id in (
            (ItemKind.TASK, self.task_id),
            (ItemKind.PROJECT, self.project_id),
            (ItemKind.GOAL, self.goal_id),
        ):
            if item_id:
                return kind, item_id
        return None, None

    def to_pydantic(self):
        """Convert database model to Pydantic model."""
        from dailyfocus.models.notification import NotificationRule

        kind, item_id = self._linked()
        return NotificationRule(
            id=self.id,
            type=(self.type or "").lower(),
            time=self.time,
            days_of_week=self.days_of_week or [],
            specific_date=self.specific_date,
            message=self.message or "",
            is_active=bool(self.is_active),
            linked_item_id=item_id,
            linked_item_kind=kind,
        )

    @classmethod
    def from_pydantic(cls, rule, user_id: str):
        """Create database model from Pydantic model."""
        kind = enum_to_value(rule.linked_item_kind) if rule.linked_item_kind else None
        return cls(
            id=rule.id,
            user_id=user_id,
            type=enum_to_value(rule.type),
            time=rule.time,
            days_of_week=list(rule.days_of_week),
            specific_date=rule.specific_date,
            message=rule.message,
            is_active=rule.is_active,
            task_id=rule.linked_item_id if kind in (None, ItemKind.TASK.value) else None,
            project_id=rule.linked_item_id if kind == ItemKind.PROJECT.value else None,
            goal_id=rule.linked_item_id if kind == ItemKind.GOAL.value else None,
        )


class NotificationSettingsDB(Base):
    """Database model for a user's quiet hours and notification switches."""

    __tablename__ = "notification_settings"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String, nullable=False, unique=True, index=True)

    quiet_hours_enabled = Column(Boolean, nullable=False, default=False)
    quiet_start_time = Column(String, nullable=True)
    quiet_end_time = Column(String, nullable=True)
    quiet_days = Column(JSON, nullable=True)

    tasks_enabled = Column(Boolean, nullable=False, default=True)
    projects_enabled = Column(Boolean, nullable=False, default=True)
    goals_enabled = Column(Boolean, nullable=False, default=True)

    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_pydantic(self):
        """Convert database model to Pydantic model."""
        from dailyfocus.models.notification import QuietConfig

        return QuietConfig(
            quiet_hours_enabled=bool(self.quiet_hours_enabled),
            quiet_start=self.quiet_start_time,
            quiet_end=self.quiet_end_time,
            quiet_days=self.quiet_days or [],
            tasks_enabled=bool(self.tasks_enabled),
            projects_enabled=bool(self.projects_enabled),
            goals_enabled=bool(self.goals_enabled),
        )

    def apply(self, quiet) -> None:
        """Copy a QuietConfig onto this row."""
        self.quiet_hours_enabled = quiet.quiet_hours_enabled
        self.quiet_start_time = quiet.quiet_start
        self.quiet_end_time = quiet.quiet_end
        self.quiet_days = list(quiet.quiet_days)
        self.tasks_enabled = quiet.tasks_enabled
        self.projects_enabled = quiet.projects_enabled
        self.goals_enabled = quiet.goals_enabled


class UserSettingsDB(Base):
    """Database model for per-user display settings."""

    __tablename__ = "user_settings"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String, nullable=False, unique=True, index=True)

    timezone = Column(String, nullable=True)
    date_format = Column(String, nullable=True)
    time_format = Column(String, nullable=True)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)
