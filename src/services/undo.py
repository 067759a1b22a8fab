"""
Undo of the most recent batch of created events, per session.
"""

import logging
from dataclasses import dataclass, field

from models.events import UndoBatch, UndoEntry
from services.backends import BackendError, CalendarBackend

logger = logging.getLogger(__name__)


class UndoLedger:
    """Ordered batches created by one session; only the last is reversible."""

    def __init__(self):
        self._batches: list[UndoBatch] = []

    def __len__(self) -> int:
        return len(self._batches)

    def append(self, batch: UndoBatch) -> None:
        self._batches.append(batch)

    def pop_last(self) -> UndoBatch | None:
        """Remove and return the newest batch, or None when there is nothing to undo."""
        if not self._batches:
            return None
        return self._batches.pop()


class UndoStore:
    """Undo ledgers keyed by session id; sessions with nothing to undo hold no entry."""

    def __init__(self):
        self._ledgers: dict[str, UndoLedger] = {}

    def __len__(self) -> int:
        return len(self._ledgers)

    def record(self, session_id: str, batch: UndoBatch) -> None:
        self._ledgers.setdefault(session_id, UndoLedger()).append(batch)

    def ledger(self, session_id: str) -> UndoLedger | None:
        return self._ledgers.get(session_id)

    def discard_empty(self, session_id: str) -> None:
        ledger = self._ledgers.get(session_id)
        if ledger is not None and not len(ledger):
            del self._ledgers[session_id]


@dataclass
class UndoOutcome:
    batch: UndoBatch
    deleted: list[UndoEntry] = field(default_factory=list)

    @property
    def message(self) -> str:
        return f"Undid {len(self.deleted)} events for {self.batch.employee_name}"


async def undo_last(ledger: UndoLedger, calendar: CalendarBackend) -> UndoOutcome | None:
    """
    Delete every event of the newest batch.

    A failed delete is logged and the remaining events are still attempted.
    The batch stays popped even when some deletes fail.
    """
    batch = ledger.pop_last()
    if batch is None:
        return None

    outcome = UndoOutcome(batch=batch)
    for entry in batch.events:
        try:
            await calendar.delete_event(entry.event_id)
        except BackendError as e:
            logger.error("Error deleting event %s: %s", entry.event_id, e)
            continue
        outcome.deleted.append(entry)
        logger.info("Deleted event: %s on %s", entry.shift_label, entry.date_label)

    return outcome
