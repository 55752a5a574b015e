"""Domain model entities for offerbook.

These are pure data classes representing business concepts, independent of
database schema. Offering records carry denormalized donor and category
labels so that history stays readable after donors or codes change.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional

ANONYMOUS_DONOR = "anonymous"


@dataclass(frozen=True)
class Donor:
    """Donor (church member) domain entity."""

    id: Optional[int]
    name: str
    offering_number: Optional[str] = None
    note: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    is_active: bool = True


@dataclass(frozen=True)
class OfferingType:
    """Donation category keyed by a short code."""

    code: str
    label: str
    category: Optional[str] = None
    description: Optional[str] = None
    is_active: bool = True


@dataclass(frozen=True)
class NewOfferingRecord:
    """Write shape of an offering record before the gateway assigns an id."""

    date: date
    donor_id: Optional[int]
    donor_name: str
    offering_number: Optional[str]
    code: str
    label: str
    amount: Decimal
    note: str = ""


@dataclass(frozen=True)
class OfferingRecord:
    """Committed donation record."""

    id: int
    date: date
    donor_id: Optional[int]
    donor_name: str
    offering_number: Optional[str]
    code: str
    label: str
    amount: Decimal
    note: str = ""


@dataclass(frozen=True)
class PendingItem:
    """Uncommitted entry in the current data-entry session."""

    id: str
    code: str
    label: str
    amount: Decimal
    note: str
    donor_name: str
    donor_id: Optional[int] = None
    offering_number: Optional[str] = None


@dataclass(frozen=True)
class BudgetRecord:
    """Budgeted amount for one offering code in one year."""

    year: int
    code: str
    amount: Decimal
    note: Optional[str] = None


@dataclass(frozen=True)
class RecordFilter:
    """Filter for listing offering records."""

    year: Optional[int] = None
    month: Optional[int] = None
    ids: Optional[frozenset[int]] = None
    limit: Optional[int] = None


@dataclass(frozen=True)
class MonthlyTotal:
    """Total of all offerings in one month."""

    month: int
    total: Decimal


@dataclass(frozen=True)
class DonorDailyTotal:
    """Total given by one donor for one code on one day."""

    year: int
    month: int
    day: int
    code: str
    total: Decimal


@dataclass(frozen=True)
class CategorySummary:
    """Per-code total with the ordered list of contributor labels."""

    code: str
    label: str
    total: Decimal
    contributors: tuple[str, ...] = field(default_factory=tuple)


class CommitState(Enum):
    """States of one commit attempt."""

    IDLE = "idle"
    SUBMITTING = "submitting"
    COMMITTED = "committed"
    FAILED = "failed"


@dataclass(frozen=True)
class SyncResult:
    """Outcome of a sync transmission.

    The endpoint's response body is never inspected, so a delivered batch
    is only known to have left this process, not to have been accepted.
    """

    sent: int
    status_code: Optional[int]
    confirmed: bool = False
