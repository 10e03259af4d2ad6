"""FastAPI web application for dailyFocus."""

import logging
import os
from datetime import date, datetime, timezone
from typing import List, Optional

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, HTTPException, Query
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from dailyfocus.database.database import get_db
from dailyfocus.database.notification_rule_repository import NotificationRuleRepository
from dailyfocus.database.repository import ItemRepository
from dailyfocus.database.settings_repository import SettingsRepository
from dailyfocus.engine.clock import AmbiguousTimezone, resolve_timezone, to_local
from dailyfocus.engine.notifications import select_due_rules
from dailyfocus.engine.today import compute_today_view
from dailyfocus.models.constants import DEFAULT_TIMEZONE as FALLBACK_TIMEZONE
from dailyfocus.models.item import SchedulableItem
from dailyfocus.models.notification import NotificationRule, QuietConfig
from dailyfocus.models.settings import UserSettings
from dailyfocus.recurrence.occurrence import occurrences_between

load_dotenv()

logger = logging.getLogger(__name__)

# Fail fast on a bad default zone at startup, not per request
DEFAULT_TIMEZONE = os.getenv("DEFAULT_TIMEZONE", FALLBACK_TIMEZONE)
resolve_timezone(DEFAULT_TIMEZONE)

MAX_OCCURRENCE_RANGE_DAYS = 366

# Initialize FastAPI app
app = FastAPI(
    title="dailyFocus API",
    description="Today view and notification triggers for tasks, projects and goals",
    version="0.1.0"
)


# Response models
class TodayResponse(BaseModel):
    """Response for the today view."""
    today: date
    timezone: str
    today_items: List[SchedulableItem]
    overdue_items: List[SchedulableItem]
    skipped_ids: List[Optional[str]] = Field(default_factory=list)


class DueNotificationsResponse(BaseModel):
    """Response for notification evaluation."""
    evaluated_at: datetime
    local_time: str
    rule_ids: List[str]


class OccurrencesResponse(BaseModel):
    """Response for an item's occurrences in a date range."""
    item_id: str
    dates: List[date]


class SettingsPayload(BaseModel):
    """Settings update body."""
    timezone: str = DEFAULT_TIMEZONE
    quiet: QuietConfig = Field(default_factory=QuietConfig)


def _now(at: Optional[datetime]) -> datetime:
    """The request's instant: `at` if given, otherwise the wall clock (UTC)."""
    if at is None:
        return datetime.now(timezone.utc)
    if at.tzinfo is None:
        return at.replace(tzinfo=timezone.utc)
    return at


def _user_timezone(settings_repo: SettingsRepository, user_id: str):
    try:
        return settings_repo.get_timezone(user_id)
    except AmbiguousTimezone as e:
        raise HTTPException(status_code=422, detail=str(e))


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy", "version": "0.1.0"}


@app.post("/users/{user_id}/items", response_model=SchedulableItem, status_code=201)
def create_item(user_id: str, item: SchedulableItem, db: Session = Depends(get_db)):
    """Create a task, project or goal."""
    repo = ItemRepository(db)
    if repo.get(user_id, item.id) is not None:
        raise HTTPException(status_code=409, detail=f"Item {item.id} already exists")
    return repo.create(user_id, item)


@app.get("/users/{user_id}/items", response_model=List[SchedulableItem])
def list_items(user_id: str, kind: Optional[str] = None, db: Session = Depends(get_db)):
    """List a user's items in list order."""
    return ItemRepository(db).list_for_user(user_id, kind=kind)


@app.get("/users/{user_id}/items/{item_id}/occurrences", response_model=OccurrencesResponse)
def item_occurrences(
    user_id: str,
    item_id: str,
    start: date,
    end: date,
    db: Session = Depends(get_db),
):
    """Dates in [start, end) on which a recurring item occurs."""
    if end < start or (end - start).days > MAX_OCCURRENCE_RANGE_DAYS:
        raise HTTPException(status_code=400, detail="Invalid date range")
    item = ItemRepository(db).get(user_id, item_id)
    if item is None:
        raise HTTPException(status_code=404, detail=f"Item {item_id} not found")
    return OccurrencesResponse(item_id=item.id, dates=occurrences_between(item.recurrence, start, end))


@app.post("/users/{user_id}/notification-rules", response_model=NotificationRule, status_code=201)
def create_notification_rule(user_id: str, rule: NotificationRule, db: Session = Depends(get_db)):
    """Create a notification rule."""
    return NotificationRuleRepository(db).create(user_id, rule)


@app.get("/users/{user_id}/notification-rules", response_model=List[NotificationRule])
def list_notification_rules(user_id: str, db: Session = Depends(get_db)):
    return NotificationRuleRepository(db).list_for_user(user_id)


@app.get("/users/{user_id}/settings", response_model=UserSettings)
def get_settings(user_id: str, db: Session = Depends(get_db)):
    return SettingsRepository(db, default_timezone=DEFAULT_TIMEZONE).get(user_id)


@app.put("/users/{user_id}/settings", response_model=UserSettings)
def save_settings(user_id: str, payload: SettingsPayload, db: Session = Depends(get_db)):
    """Save timezone and quiet configuration. Unknown timezones are rejected."""
    repo = SettingsRepository(db, default_timezone=DEFAULT_TIMEZONE)
    try:
        return repo.save(UserSettings(user_id=user_id, timezone=payload.timezone, quiet=payload.quiet))
    except AmbiguousTimezone as e:
        raise HTTPException(status_code=422, detail=str(e))


@app.get("/users/{user_id}/today", response_model=TodayResponse)
def today_view(
    user_id: str,
    at: Optional[datetime] = Query(None, description="Evaluate at this instant instead of now"),
    db: Session = Depends(get_db),
):
    """Today and overdue lists in the user's timezone."""
    settings_repo = SettingsRepository(db, default_timezone=DEFAULT_TIMEZONE)
    tz = _user_timezone(settings_repo, user_id)
    now = _now(at)

    items = ItemRepository(db).list_for_user(user_id)
    view = compute_today_view(items, now=now, time_zone=tz)
    return TodayResponse(
        today=view.today,
        timezone=str(tz),
        today_items=view.today_items,
        overdue_items=view.overdue_items,
        skipped_ids=view.skipped_ids,
    )


@app.get("/users/{user_id}/notifications/due", response_model=DueNotificationsResponse)
def due_notifications(
    user_id: str,
    at: Optional[datetime] = Query(None, description="Evaluate at this instant instead of now"),
    db: Session = Depends(get_db),
):
    """Ids of the rules that fire at this minute.

    Stateless: calling twice in the same minute returns the same ids.
    De-duplication belongs to the caller that delivers them.
    """
    settings_repo = SettingsRepository(db, default_timezone=DEFAULT_TIMEZONE)
    tz = _user_timezone(settings_repo, user_id)
    quiet = settings_repo.get_quiet_config(user_id)
    now = _now(at)

    rules = NotificationRuleRepository(db).list_active(user_id)
    rule_ids = select_due_rules(rules, quiet, now, tz)
    local_now = to_local(now, tz)
    logger.debug(f"{len(rule_ids)} of {len(rules)} rules due for user {user_id}")
    return DueNotificationsResponse(
        evaluated_at=now,
        local_time=local_now.strftime("%Y-%m-%dT%H:%M"),
        rule_ids=rule_ids,
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
