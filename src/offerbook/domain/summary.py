"""Per-code grouping of offering entries.

Shared by the pending-entry ledger and the committed-records day report,
which both list each code's total with the people who gave to it.
"""

from collections import defaultdict
from decimal import Decimal
from typing import Iterable, Optional, Protocol

from offerbook.domain.entities import CategorySummary


class SummaryEntry(Protocol):
    """Anything with the fields needed to appear in a category summary."""

    code: str
    label: str
    amount: Decimal
    note: str
    donor_name: str
    offering_number: Optional[str]


def contributor_label(entry: SummaryEntry) -> str:
    """Offering number if present, else donor name, with "(note)" appended."""
    label = entry.offering_number or entry.donor_name
    if entry.note:
        return f"{label}({entry.note})"
    return label


def contributor_sort_key(entry: SummaryEntry) -> tuple:
    """Sort numbered donors by number, then everyone else by name."""
    number = (entry.offering_number or "").strip()
    if number.isdecimal():
        return (0, int(number), entry.donor_name)
    return (1, 0, entry.donor_name)


def summarize_by_code(entries: Iterable[SummaryEntry]) -> list[CategorySummary]:
    """Group entries by code, ordered by code.

    Args:
        entries: Pending items or committed records

    Returns:
        One CategorySummary per code with the summed amount and the
        contributor labels in donor order
    """
    grouped: dict[str, list[SummaryEntry]] = defaultdict(list)
    for entry in entries:
        grouped[entry.code].append(entry)

    summaries = []
    for code in sorted(grouped):
        members = grouped[code]
        ordered = sorted(members, key=contributor_sort_key)
        summaries.append(
            CategorySummary(
                code=code,
                label=members[0].label,
                total=sum((m.amount for m in members), Decimal("0")),
                contributors=tuple(contributor_label(m) for m in ordered),
            )
        )
    return summaries
