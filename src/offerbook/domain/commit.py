"""Batch commit of the pending-entry ledger."""

import logging
import threading
from datetime import date
from typing import Optional, Sequence

from offerbook.database.base import Database
from offerbook.domain.entities import (
    ANONYMOUS_DONOR,
    CommitState,
    Donor,
    NewOfferingRecord,
    PendingItem,
)
from offerbook.domain.errors import CommitInProgressError, ValidationError
from offerbook.domain.ledger import PendingLedger
from offerbook.domain.sync import SyncMarker

logger = logging.getLogger(__name__)


class CommitEngine:
    """Turns staged entries into committed records in one batch.

    Only one commit runs at a time. A failed commit leaves the ledger as
    it was so the batch can be retried without re-entering anything.
    """

    def __init__(self, db: Database, ledger: PendingLedger, marker: SyncMarker):
        """Initialize commit engine.

        Args:
            db: Database instance
            ledger: Ledger whose items are committed
            marker: Sync marker that receives the new record IDs
        """
        self.db = db
        self.ledger = ledger
        self.marker = marker
        self.state = CommitState.IDLE
        self.last_outcome: Optional[CommitState] = None
        self._guard = threading.Lock()

    def _transition(self, state: CommitState) -> None:
        logger.debug("Commit state %s -> %s", self.state.value, state.value)
        self.state = state

    def commit(self, entry_date: date, items: Optional[Sequence[PendingItem]] = None) -> list[int]:
        """Commit staged entries dated ``entry_date``.

        Args:
            entry_date: Offering date applied to every record
            items: Items to commit; defaults to the whole ledger

        Returns:
            IDs of the created records

        Raises:
            ValidationError: If there is nothing to commit
            CommitInProgressError: If another commit is still running
            PersistenceError: If the gateway rejected the batch
        """
        if not isinstance(entry_date, date):
            raise ValidationError(f"Invalid offering date: {entry_date!r}")

        batch = list(items) if items is not None else self.ledger.items()
        if not batch:
            raise ValidationError("There are no pending entries to commit")

        if not self._guard.acquire(blocking=False):
            raise CommitInProgressError("A commit is already in progress")

        try:
            self._transition(CommitState.SUBMITTING)
            try:
                records = self._build_records(batch, entry_date)
                ids = self.db.insert_records(records)
                # Inserted ids reach the sync set before the ledger is cleared
                self.marker.mark_pending(ids)
                if items is None:
                    self.ledger.clear()
                else:
                    self.ledger.remove_items(i.id for i in batch)
            except Exception as e:
                logger.error("Commit of %d entries failed: %s", len(batch), e)
                self._transition(CommitState.FAILED)
                self.last_outcome = CommitState.FAILED
                raise

            self._transition(CommitState.COMMITTED)
            self.last_outcome = CommitState.COMMITTED
            logger.info("Committed %d entries for %s", len(ids), entry_date.isoformat())
            return ids
        finally:
            self._transition(CommitState.IDLE)
            self._guard.release()

    def _build_records(self, batch: Sequence[PendingItem], entry_date: date) -> list[NewOfferingRecord]:
        resolved: dict[str, Donor] = {}
        records = []
        for item in batch:
            donor_id = item.donor_id
            offering_number = item.offering_number
            if donor_id is None and item.donor_name and item.donor_name != ANONYMOUS_DONOR:
                donor = resolved.get(item.donor_name)
                if donor is None:
                    donor = self._resolve_donor(item.donor_name)
                    resolved[item.donor_name] = donor
                donor_id = donor.id
                offering_number = offering_number or donor.offering_number

            records.append(
                NewOfferingRecord(
                    date=entry_date,
                    donor_id=donor_id,
                    donor_name=item.donor_name,
                    offering_number=offering_number,
                    code=item.code,
                    label=item.label,
                    amount=item.amount,
                    note=item.note,
                )
            )
        return records

    def _resolve_donor(self, name: str) -> Donor:
        """Find an active donor by exact name, creating one if needed."""
        existing = self.db.find_active_donor_by_name(name)
        if existing is not None:
            # TODO: ask staff to confirm a name match before reusing it (namesakes collide)
            return existing
        created = self.db.upsert_donor(Donor(id=None, name=name))
        logger.info("Created donor %s for new name %r", created.id, name)
        return created
