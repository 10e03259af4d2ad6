"""Repository layer for database operations."""

import logging
from datetime import datetime
from typing import List, Optional

from pydantic import ValidationError
from sqlalchemy import func
from sqlalchemy.orm import Session

from dailyfocus.database.models import ItemDB, enum_to_value
from dailyfocus.models.item import SchedulableItem
from dailyfocus.models.validation import InvalidRuleConfiguration, validate_recurrence_rule

logger = logging.getLogger(__name__)


class ItemRepository:
    """Repository for task/project/goal database operations."""

    def __init__(self, db: Session):
        self.db = db

    def _to_item(self, item_db: ItemDB) -> Optional[SchedulableItem]:
        """Convert a row, logging and skipping rows that cannot be read."""
        try:
            item = item_db.to_pydantic()
        except (ValidationError, ValueError) as e:
            logger.warning(f"Skipping unreadable item {item_db.id}: {type(e).__name__}: {str(e)}")
            return None
        if item.recurrence is not None and item.recurrence.enabled:
            try:
                validate_recurrence_rule(item.recurrence)
            except InvalidRuleConfiguration as e:
                logger.warning(f"Item {item.id} will not recur: {str(e)}")
        return item

    def create(self, user_id: str, item: SchedulableItem) -> SchedulableItem:
        """Create a new item."""
        try:
            item_db = ItemDB.from_pydantic(item, user_id)
            item_db.position = self._next_position(user_id)
            self.db.add(item_db)
            self.db.commit()
            self.db.refresh(item_db)
            logger.debug(f"Created item {item.id}: {item.title[:50]}")
            return item_db.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to create item {item.id}: {type(e).__name__}: {str(e)}")
            raise

    def _next_position(self, user_id: str) -> int:
        current = self.db.query(func.max(ItemDB.position)).filter(ItemDB.user_id == user_id).scalar()
        return (current or 0) + 1

    def _get_row(self, user_id: str, item_id: str) -> Optional[ItemDB]:
        return self.db.query(ItemDB).filter(
            ItemDB.id == item_id,
            ItemDB.user_id == user_id,
            ItemDB.deleted_at.is_(None),
        ).first()

    def get(self, user_id: str, item_id: str) -> Optional[SchedulableItem]:
        """Get item by ID for a specific user."""
        item_db = self._get_row(user_id, item_id)
        return self._to_item(item_db) if item_db else None

    def list_for_user(self, user_id: str, kind: Optional[str] = None) -> List[SchedulableItem]:
        """All readable items for a user, in list position order (stable input order for the today view)."""
        query = self.db.query(ItemDB).filter(
            ItemDB.user_id == user_id,
            ItemDB.deleted_at.is_(None),
        )
        if kind:
            query = query.filter(ItemDB.kind == kind)
        rows = query.order_by(ItemDB.position, ItemDB.created_at).all()
        out: List[SchedulableItem] = []
        for row in rows:
            item = self._to_item(row)
            if item is not None:
                out.append(item)
        return out

    def update_status(self, user_id: str, item_id: str, status) -> SchedulableItem:
        """Set an item's status."""
        item_db = self._get_row(user_id, item_id)
        if not item_db:
            raise ValueError(f"Item {item_id} not found")
        item_db.status = enum_to_value(status)
        item_db.updated_at = datetime.utcnow()
        try:
            self.db.commit()
            self.db.refresh(item_db)
            logger.debug(f"Updated item {item_id} status to {item_db.status}")
            return item_db.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to update item {item_id}: {type(e).__name__}: {str(e)}")
            raise

    def soft_delete(self, user_id: str, item_id: str) -> bool:
        """Soft-delete an item. Returns False if it does not exist."""
        item_db = self._get_row(user_id, item_id)
        if not item_db:
            return False
        item_db.deleted_at = datetime.utcnow()
        try:
            self.db.commit()
            logger.debug(f"Soft-deleted item {item_id}")
            return True
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to soft-delete item {item_id}: {type(e).__name__}: {str(e)}")
            raise
