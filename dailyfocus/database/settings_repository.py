"""Repository for per-user settings (timezone, quiet hours)."""

import logging
from datetime import datetime

from pydantic import ValidationError
from sqlalchemy.orm import Session

from dailyfocus.database.models import NotificationSettingsDB, UserSettingsDB
from dailyfocus.engine.clock import resolve_timezone
from dailyfocus.models.constants import DEFAULT_TIMEZONE
from dailyfocus.models.notification import QuietConfig
from dailyfocus.models.settings import UserSettings

logger = logging.getLogger(__name__)


class SettingsRepository:
    def __init__(self, db: Session, *, default_timezone: str = DEFAULT_TIMEZONE):
        self.db = db
        self.default_timezone = default_timezone

    def get_quiet_config(self, user_id: str) -> QuietConfig:
        """Quiet configuration for a user; defaults when none is stored or it cannot be read."""
        row = self.db.query(NotificationSettingsDB).filter(NotificationSettingsDB.user_id == user_id).first()
        if row is None:
            return QuietConfig()
        try:
            return row.to_pydantic()
        except ValidationError as e:
            logger.warning(f"Unreadable quiet settings for user {user_id}, using defaults: {type(e).__name__}: {str(e)}")
            return QuietConfig()

    def get_timezone_name(self, user_id: str) -> str:
        row = self.db.query(UserSettingsDB).filter(UserSettingsDB.user_id == user_id).first()
        return (row.timezone if row and row.timezone else None) or self.default_timezone

    def get_timezone(self, user_id: str):
        """Resolved timezone for a user.

        Raises:
            AmbiguousTimezone: if the stored identifier is not a known zone
        """
        return resolve_timezone(self.get_timezone_name(user_id), default=self.default_timezone)

    def get(self, user_id: str) -> UserSettings:
        return UserSettings(
            user_id=user_id,
            timezone=self.get_timezone_name(user_id),
            quiet=self.get_quiet_config(user_id),
        )

    def save(self, settings: UserSettings) -> UserSettings:
        """Upsert timezone and quiet configuration.

        Raises:
            AmbiguousTimezone: if the timezone is not a known zone (nothing is written)
        """
        resolve_timezone(settings.timezone, default=self.default_timezone)

        user_row = self.db.query(UserSettingsDB).filter(UserSettingsDB.user_id == settings.user_id).first()
        if user_row is None:
            user_row = UserSettingsDB(user_id=settings.user_id)
            self.db.add(user_row)
        user_row.timezone = settings.timezone
        user_row.updated_at = datetime.utcnow()

        quiet_row = (
            self.db.query(NotificationSettingsDB)
            .filter(NotificationSettingsDB.user_id == settings.user_id)
            .first()
        )
        if quiet_row is None:
            quiet_row = NotificationSettingsDB(user_id=settings.user_id)
            self.db.add(quiet_row)
        quiet_row.apply(settings.quiet)
        quiet_row.updated_at = datetime.utcnow()

        try:
            self.db.commit()
            logger.debug(f"Saved settings for user {settings.user_id}")
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to save settings for user {settings.user_id}: {type(e).__name__}: {str(e)}")
            raise
        return self.get(settings.user_id)
