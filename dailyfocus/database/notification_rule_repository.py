"""Repository for NotificationRule database operations."""

import logging
from typing import List, Optional

from pydantic import ValidationError
from sqlalchemy.orm import Session

from dailyfocus.database.models import NotificationRuleDB
from dailyfocus.models.notification import NotificationRule
from dailyfocus.models.validation import InvalidRuleConfiguration, validate_notification_rule

logger = logging.getLogger(__name__)


class NotificationRuleRepository:
    def __init__(self, db: Session):
        self.db = db

    def _to_rule(self, row: NotificationRuleDB) -> Optional[NotificationRule]:
        try:
            rule = row.to_pydantic()
        except (ValidationError, ValueError) as e:
            logger.warning(f"Skipping unreadable notification rule {row.id}: {type(e).__name__}: {str(e)}")
            return None
        try:
            validate_notification_rule(rule)
        except InvalidRuleConfiguration as e:
            logger.warning(f"{str(e)}; it will not fire")
        return rule

    def create(self, user_id: str, rule: NotificationRule) -> NotificationRule:
        row = NotificationRuleDB.from_pydantic(rule, user_id)
        try:
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
            logger.debug(f"Created notification rule {rule.id}")
            return row.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to create notification rule {rule.id}: {type(e).__name__}: {str(e)}")
            raise

    def list_for_user(self, user_id: str) -> List[NotificationRule]:
        rows = (
            self.db.query(NotificationRuleDB)
            .filter(NotificationRuleDB.user_id == user_id)
            .order_by(NotificationRuleDB.created_at, NotificationRuleDB.id)
            .all()
        )
        out: List[NotificationRule] = []
        for row in rows:
            rule = self._to_rule(row)
            if rule is not None:
                out.append(rule)
        return out

    def list_active(self, user_id: str) -> List[NotificationRule]:
        return [rule for rule in self.list_for_user(user_id) if rule.is_active]

    def set_active(self, user_id: str, rule_id: str, is_active: bool) -> Optional[NotificationRule]:
        """Activate or deactivate a rule (e.g. after a one-shot date rule fired)."""
        row = (
            self.db.query(NotificationRuleDB)
            .filter(NotificationRuleDB.user_id == user_id, NotificationRuleDB.id == rule_id)
            .first()
        )
        if not row:
            return None
        row.is_active = bool(is_active)
        try:
            self.db.commit()
            self.db.refresh(row)
            return row.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to update notification rule {rule_id}: {type(e).__name__}: {str(e)}")
            raise
