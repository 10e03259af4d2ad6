"""Notification dispatch loop for dailyFocus.

The evaluator in `dailyfocus.engine.notifications` is stateless. This module
is the caller side: it runs one tick per minute, asks the evaluator which
rules fire, drops rules already delivered on the same local date, and hands
the rest to a sink. The "already fired" ledger lives here, never in the
evaluator.
"""

import logging
import threading
from abc import ABC, abstractmethod
from collections import deque
from datetime import date, datetime, tzinfo
from typing import Deque, Dict, Iterable, List, Optional

from dailyfocus.engine.clock import local_date, to_local
from dailyfocus.engine.notifications import should_fire
from dailyfocus.models.notification import NotificationRule, QuietConfig

logger = logging.getLogger(__name__)


class NotificationSink(ABC):
    """Receives the ids of rules that fired. Delivery is the sink's concern."""

    @abstractmethod
    def deliver(self, rule_ids: List[str], fired_at: datetime) -> None:
        """Deliver a batch. Raising leaves the batch unrecorded for a retry."""


class LoggingSink(NotificationSink):
    """Sink that only logs; useful as a default and in development.

    Keeps the most recent `history` delivered ids in `delivered`.
    """

    def __init__(self, history: int = 100):
        self.delivered: Deque[str] = deque(maxlen=history)

    def deliver(self, rule_ids: List[str], fired_at: datetime) -> None:
        for rule_id in rule_ids:
            logger.info(f"Notification {rule_id} fired at {fired_at.isoformat()}")
        self.delivered.extend(rule_ids)


class FiredLedger:
    """Caller-owned record of when each rule last fired.

    A rule counts as already fired if it fired earlier on the same local
    calendar date. That makes a `date` rule one-shot and keeps a `time` or
    `day` rule to once per day even if ticks repeat within the minute.
    """

    def __init__(self, last_fired_at: Optional[Dict[str, datetime]] = None):
        self._last_fired_at: Dict[str, datetime] = dict(last_fired_at or {})

    def last_fired_at(self, rule_id: str) -> Optional[datetime]:
        return self._last_fired_at.get(rule_id)

    def already_fired(self, rule_id: str, local_day: date, tz: tzinfo) -> bool:
        last = self._last_fired_at.get(rule_id)
        return last is not None and local_date(last, tz) == local_day

    def record(self, rule_id: str, fired_at: datetime) -> None:
        self._last_fired_at[rule_id] = fired_at

    def snapshot(self) -> Dict[str, datetime]:
        """Copy of the ledger, for persisting between runs."""
        return dict(self._last_fired_at)


class DispatchResult:
    """Result of a dispatch tick."""

    def __init__(self):
        self.fired: List[str] = []
        self.deduplicated: List[str] = []
        self.tick_at: Optional[datetime] = None


class NotificationDispatcher:
    """Serialized once-per-minute notification tick.

    Ticks never overlap: a second caller waits for the running tick, so the
    same rule cannot be delivered twice by racing ticks.
    """

    def __init__(
        self,
        sink: Optional[NotificationSink] = None,
        ledger: Optional[FiredLedger] = None,
    ):
        self.sink = sink or LoggingSink()
        self.ledger = ledger or FiredLedger()
        self._lock = threading.Lock()

    def tick(
        self,
        rules: Iterable[NotificationRule],
        quiet: QuietConfig,
        now: datetime,
        tz: tzinfo,
    ) -> DispatchResult:
        """Evaluate all rules at `now` and deliver the ones not yet delivered today.

        The ledger is updated only after the sink accepts the batch; if the
        sink raises, nothing is recorded and the next tick retries.
        """
        result = DispatchResult()
        result.tick_at = now

        with self._lock:
            local_day = to_local(now, tz).date()
            for rule in rules:
                if not should_fire(rule, quiet, now, tz):
                    continue
                if self.ledger.already_fired(rule.id, local_day, tz):
                    result.deduplicated.append(rule.id)
                    continue
                result.fired.append(rule.id)

            if not result.fired:
                return result

            try:
                self.sink.deliver(list(result.fired), now)
            except Exception as e:
                logger.error(f"Failed to deliver {len(result.fired)} notifications: {type(e).__name__}: {str(e)}")
                raise

            for rule_id in result.fired:
                self.ledger.record(rule_id, now)
            logger.debug(f"Delivered {len(result.fired)} notifications at {now.isoformat()}")

        return result
