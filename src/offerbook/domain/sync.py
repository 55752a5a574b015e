"""One-way mirroring of committed records to an external spreadsheet.

Newly committed record IDs are kept in a durable pending set until a
manual sync posts them to the spreadsheet webhook. The webhook's reply is
never read: a delivered request clears the set even if the spreadsheet
later rejects the rows, so results are reported as unconfirmed.
"""

import json
import logging
import os
from typing import Any, Iterable, Optional, Sequence

import httpx

from offerbook.database.base import Database
from offerbook.domain.entities import (
    ANONYMOUS_DONOR,
    OfferingRecord,
    RecordFilter,
    SyncResult,
)
from offerbook.domain.errors import (
    PersistenceError,
    SyncConfigurationError,
    SyncTransportError,
    nothing_to_sync,
    sync_url_missing,
)
from offerbook.utils.local_store import LocalStore

logger = logging.getLogger(__name__)

PENDING_SYNC_KEY = "pending_sync_ids"
SHEET_URL_SETTING = "google_sheet_webhook_url"
DEFAULT_SYNC_TIMEOUT = 10.0


class SyncMarker:
    """Durable set of record IDs not yet mirrored to the spreadsheet."""

    def __init__(self, store: LocalStore):
        self.store = store

    def pending_ids(self) -> set[int]:
        """Return the current unsynced record IDs."""
        return {int(i) for i in self.store.load(PENDING_SYNC_KEY, default=[])}

    def _save(self, ids: set[int]) -> None:
        if ids:
            self.store.save(PENDING_SYNC_KEY, sorted(ids))
        else:
            self.store.delete(PENDING_SYNC_KEY)

    def mark_pending(self, ids: Iterable[int]) -> None:
        """Add record IDs to the pending set (duplicates are ignored)."""
        self._save(self.pending_ids() | {int(i) for i in ids})

    def discard(self, ids: Iterable[int]) -> None:
        """Drop record IDs, e.g. after the records were deleted."""
        self._save(self.pending_ids() - {int(i) for i in ids})

    def clear(self) -> None:
        """Forget every pending ID."""
        self.store.delete(PENDING_SYNC_KEY)


class SheetSettings:
    """Spreadsheet webhook URL kept in the gateway with a local fallback copy."""

    def __init__(self, db: Database, store: LocalStore):
        self.db = db
        self.store = store

    def get_url(self) -> str:
        """Return the configured URL, or an empty string.

        Falls back to the locally cached copy when the gateway read fails.
        """
        try:
            return self.db.get_setting(SHEET_URL_SETTING) or ""
        except PersistenceError as e:
            logger.warning("Using cached spreadsheet URL, gateway read failed: %s", e)
            return self.store.load(SHEET_URL_SETTING, default="") or ""

    def set_url(self, url: str) -> str:
        """Save the URL locally and in the gateway.

        Raises:
            PersistenceError: If the gateway write fails (the local copy is
                kept regardless)
        """
        clean_url = (url or "").strip()
        self.store.save(SHEET_URL_SETTING, clean_url)
        self.db.set_setting(SHEET_URL_SETTING, clean_url)
        return clean_url


def record_to_sheet_row(record: OfferingRecord) -> dict[str, Any]:
    """Shape one record as a spreadsheet row."""
    return {
        "Date": record.date.isoformat(),
        "Code": record.code,
        "Description": record.label or "",
        "NameID": record.offering_number or "",
        "Name": record.donor_name or ANONYMOUS_DONOR,
        "Amount": float(record.amount),
        "Remarks": record.note or "",
    }


def sync_timeout_from_env() -> float:
    """Return OFFERBOOK_SYNC_TIMEOUT seconds, or the default."""
    raw = os.environ.get("OFFERBOOK_SYNC_TIMEOUT")
    if not raw:
        return DEFAULT_SYNC_TIMEOUT
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring invalid OFFERBOOK_SYNC_TIMEOUT %r", raw)
        return DEFAULT_SYNC_TIMEOUT


class SheetSync:
    """Posts pending records to the spreadsheet webhook."""

    def __init__(
        self,
        db: Database,
        marker: SyncMarker,
        settings: SheetSettings,
        *,
        client: httpx.Client | None = None,
        timeout: float | None = None,
    ):
        """Initialize spreadsheet sync.

        Args:
            db: Database instance
            marker: Pending-ID set
            settings: Source of the webhook URL
            client: Optional httpx client (a private one is created if None)
            timeout: Request timeout in seconds
        """
        self.db = db
        self.marker = marker
        self.settings = settings
        self._client = client or httpx.Client()
        self._owns_client = client is None
        self.timeout = timeout if timeout is not None else sync_timeout_from_env()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "SheetSync":
        return self

    def __exit__(self, *_args: object) -> None:
        self.close()

    def sync(self, records: Optional[Sequence[OfferingRecord]] = None) -> SyncResult:
        """Send every pending record in one request.

        Args:
            records: Records to send; defaults to the records whose IDs are
                pending

        Returns:
            SyncResult with confirmed=False

        Raises:
            SyncConfigurationError: If nothing is pending or no URL is set
            SyncTransportError: If the request could not be delivered; the
                pending set is kept so the sync can be retried
        """
        pending = self.marker.pending_ids()
        if not pending:
            raise SyncConfigurationError(nothing_to_sync())

        url = self.settings.get_url()
        if not url:
            raise SyncConfigurationError(sync_url_missing())

        if records is None:
            records = self.db.list_records(RecordFilter(ids=frozenset(pending)))

        payload = [record_to_sheet_row(r) for r in records]
        body = json.dumps(payload, ensure_ascii=False)

        try:
            response = self._client.post(
                url,
                content=body.encode("utf-8"),
                headers={"Content-Type": "text/plain"},
                timeout=self.timeout,
            )
        except httpx.HTTPError as e:
            logger.error("Spreadsheet sync to %s failed: %s", url, e)
            raise SyncTransportError(f"Could not reach the spreadsheet webhook: {e}") from e

        if response.status_code >= 400:
            logger.warning(
                "Spreadsheet webhook answered HTTP %s; rows may not have been stored",
                response.status_code,
            )
        self.marker.clear()
        logger.info("Sent %d rows to spreadsheet webhook", len(payload))
        return SyncResult(sent=len(payload), status_code=response.status_code, confirmed=False)
