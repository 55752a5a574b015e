"""Committed offering record domain service."""

from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Optional
from offerbook.database.base import Database
from offerbook.domain.entities import OfferingRecord, RecordFilter
from offerbook.domain.errors import NotFoundError, ValidationError, invalid_amount, record_not_found
from offerbook.domain.offering_type import OfferingTypeService
from offerbook.domain.sync import SyncMarker

SORT_KEYS = ("date", "offering_number", "code")


def _record_sort_key(sort_key: str):
    if sort_key == "date":
        return lambda r: (r.date, r.id)
    if sort_key == "offering_number":
        def by_number(r: OfferingRecord):
            number = (r.offering_number or "").strip()
            return int(number) if number.isdecimal() else 99999
        return by_number
    if sort_key == "code":
        return lambda r: r.code or ""
    raise ValidationError(f"Unknown sort key '{sort_key}'. Supported: {', '.join(SORT_KEYS)}")


class RecordService:
    """Service for browsing, editing and deleting committed records."""

    def __init__(self, db: Database, marker: Optional[SyncMarker] = None):
        """Initialize record service.

        Args:
            db: Database instance
            marker: Sync marker to update when records are deleted
        """
        self.db = db
        self.marker = marker

    def list_records(
        self,
        year: Optional[int] = None,
        month: Optional[int] = None,
        search: Optional[str] = None,
        sort_key: str = "date",
        descending: bool = True,
        limit: Optional[int] = None,
    ) -> list[OfferingRecord]:
        """List records with filters.

        Args:
            year: Optional year filter
            month: Optional month filter (requires year)
            search: Optional text matched against donor name, offering
                number and note
            sort_key: One of "date", "offering_number", "code"
            descending: Sort direction
            limit: Optional maximum number of records

        Returns:
            List of record entities

        Raises:
            ValidationError: If month is given without year or sort_key is unknown
        """
        if month is not None and year is None:
            raise ValidationError("A month filter requires a year")
        key = _record_sort_key(sort_key)

        records = self.db.list_records(RecordFilter(year=year, month=month))

        if search:
            needle = search.strip().lower()
            records = [
                r
                for r in records
                if needle in (r.donor_name or "").lower()
                or needle in (r.offering_number or "")
                or needle in (r.note or "").lower()
            ]

        records = sorted(records, key=key, reverse=descending)
        return records[:limit] if limit is not None else records

    def get_record(self, record_id: int) -> Optional[OfferingRecord]:
        """Get record by ID."""
        return self.db.get_record(record_id)

    def update_record(
        self,
        record_id: int,
        date: Optional[date] = None,
        code: Optional[str] = None,
        amount: Optional[Decimal] = None,
        note: Optional[str] = None,
        donor_name: Optional[str] = None,
        offering_number: Optional[str] = None,
    ) -> OfferingRecord:
        """Update record fields. Fields left as None are unchanged.

        Args:
            record_id: Record ID to update
            date: Optional new date
            code: Optional new offering type code (label is refreshed)
            amount: Optional new amount
            note: Optional new note
            donor_name: Optional new donor display name
            offering_number: Optional new offering number ("" clears it)

        Returns:
            The updated record

        Raises:
            NotFoundError: If record or offering type doesn't exist
            ValidationError: If amount is negative or not finite
        """
        record = self.db.get_record(record_id)
        if record is None:
            raise NotFoundError(record_not_found(record_id))

        changes = {}
        if date is not None:
            changes["date"] = date
        if code is not None:
            offering_type = OfferingTypeService(self.db).require_type(code)
            changes["code"] = offering_type.code
            changes["label"] = offering_type.label
        if amount is not None:
            if not amount.is_finite() or amount < 0:
                raise ValidationError(invalid_amount(str(amount)))
            changes["amount"] = amount
        if note is not None:
            changes["note"] = note.strip()
        if donor_name is not None:
            changes["donor_name"] = donor_name.strip()
        if offering_number is not None:
            changes["offering_number"] = offering_number.strip() or None

        updated = replace(record, **changes)
        self.db.update_record(updated)
        return updated

    def delete_record(self, record_id: int) -> None:
        """Hard-delete a record and drop it from the pending sync set.

        Raises:
            NotFoundError: If record doesn't exist
        """
        if self.db.get_record(record_id) is None:
            raise NotFoundError(record_not_found(record_id))
        self.db.delete_record(record_id)
        if self.marker is not None:
            self.marker.discard([record_id])
