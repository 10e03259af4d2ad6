"""User settings data model for dailyFocus."""

from pydantic import BaseModel, Field

from dailyfocus.models.constants import DEFAULT_TIMEZONE
from dailyfocus.models.notification import QuietConfig


class UserSettings(BaseModel):
    """Per-user settings consumed by the engine."""

    user_id: str = Field(..., description="User who owns these settings")
    timezone: str = Field(DEFAULT_TIMEZONE, description="IANA timezone identifier")
    quiet: QuietConfig = Field(default_factory=QuietConfig, description="Quiet hours/days")
