"""Pending-entry ledger: draft offerings staged before a batch commit."""

import logging
import uuid
from dataclasses import replace
from decimal import Decimal
from typing import Any, Iterable, Optional

from offerbook.domain.entities import ANONYMOUS_DONOR, CategorySummary, Donor, PendingItem
from offerbook.domain.errors import ValidationError, invalid_amount
from offerbook.domain.summary import summarize_by_code
from offerbook.utils.amount_parser import coerce_amount, parse_amount
from offerbook.utils.local_store import LocalStore

logger = logging.getLogger(__name__)

LEDGER_KEY = "pending_entries"


def _item_to_dict(item: PendingItem) -> dict[str, Any]:
    return {
        "id": item.id,
        "code": item.code,
        "label": item.label,
        "amount": str(item.amount),
        "note": item.note,
        "donor_name": item.donor_name,
        "donor_id": item.donor_id,
        "offering_number": item.offering_number,
    }


def _item_from_dict(data: dict[str, Any]) -> PendingItem:
    return PendingItem(
        id=data["id"],
        code=data["code"],
        label=data.get("label", data["code"]),
        amount=coerce_amount(data.get("amount", "0")),
        note=data.get("note", ""),
        donor_name=data.get("donor_name") or ANONYMOUS_DONOR,
        donor_id=data.get("donor_id"),
        offering_number=data.get("offering_number"),
    )


class PendingLedger:
    """Ordered list of uncommitted entries for one data-entry session.

    Every change is written through to the local store, so the session
    survives a restart on the same machine.
    """

    def __init__(self, store: LocalStore):
        """Initialize the ledger from whatever the store holds.

        Args:
            store: LocalStore used for durable staging
        """
        self.store = store
        self._items: list[PendingItem] = [
            _item_from_dict(d) for d in store.load(LEDGER_KEY, default=[])
        ]

    def _persist(self) -> None:
        if self._items:
            self.store.save(LEDGER_KEY, [_item_to_dict(i) for i in self._items])
        else:
            self.store.delete(LEDGER_KEY)

    def __len__(self) -> int:
        return len(self._items)

    def items(self, newest_first: bool = False) -> list[PendingItem]:
        """Return a copy of the items in insertion order (or reversed)."""
        if newest_first:
            return list(reversed(self._items))
        return list(self._items)

    def get_item(self, item_id: str) -> Optional[PendingItem]:
        for item in self._items:
            if item.id == item_id:
                return item
        return None

    def add_item(
        self,
        code: str,
        label: str,
        amount: str | Decimal,
        note: str = "",
        donor: Optional[Donor] = None,
        typed_name: str = "",
    ) -> PendingItem:
        """Append a draft entry.

        Args:
            code: Offering type code
            label: Offering type label shown with the entry
            amount: Amount as typed; grouping commas are allowed
            note: Optional free-text note
            donor: Selected donor, if any
            typed_name: Free text typed in the donor field when no donor
                was selected

        Returns:
            The new PendingItem

        Raises:
            ValidationError: If code is empty or amount is not a finite
                non-negative number
        """
        code = (code or "").strip()
        if not code:
            raise ValidationError("An offering type code is required")

        try:
            parsed = amount if isinstance(amount, Decimal) else parse_amount(amount)
        except ValueError:
            raise ValidationError(invalid_amount(str(amount)))
        if not parsed.is_finite() or parsed < 0:
            raise ValidationError(invalid_amount(str(amount)))

        if donor is not None:
            donor_name = donor.name
            donor_id = donor.id
            offering_number = donor.offering_number or None
        else:
            donor_name = (typed_name or "").strip() or ANONYMOUS_DONOR
            donor_id = None
            offering_number = None

        item = PendingItem(
            id=uuid.uuid4().hex[:12],
            code=code,
            label=label or code,
            amount=parsed,
            note=(note or "").strip(),
            donor_name=donor_name,
            donor_id=donor_id,
            offering_number=offering_number,
        )
        self._items.append(item)
        self._persist()
        logger.debug("Staged %s %s for %s", item.code, item.amount, item.donor_name)
        return item

    def remove_item(self, item_id: str) -> None:
        """Remove an item by ID. Unknown IDs are ignored."""
        remaining = [i for i in self._items if i.id != item_id]
        if len(remaining) != len(self._items):
            self._items = remaining
            self._persist()

    def remove_items(self, item_ids: Iterable[str]) -> None:
        """Remove several items at once. Unknown IDs are ignored."""
        doomed = set(item_ids)
        self._items = [i for i in self._items if i.id not in doomed]
        self._persist()

    def update_item_amount(self, item_id: str, raw: str) -> None:
        """Re-parse an item's amount; unreadable input becomes 0."""
        for index, item in enumerate(self._items):
            if item.id == item_id:
                self._items[index] = replace(item, amount=coerce_amount(raw))
                self._persist()
                return

    def summarize_by_category(self) -> list[CategorySummary]:
        """Totals and contributor labels per code, ordered by code."""
        return summarize_by_code(self._items)

    def grand_total(self) -> Decimal:
        """Sum of all item amounts."""
        return sum((i.amount for i in self._items), Decimal("0"))

    def clear(self) -> None:
        """Drop every item, including the durable copy."""
        self._items = []
        self.store.delete(LEDGER_KEY)
