"""Trend and period reports built from committed records."""

from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from offerbook.database.base import Database
from offerbook.domain.entities import CategorySummary, DonorDailyTotal, MonthlyTotal, RecordFilter
from offerbook.domain.summary import summarize_by_code
from offerbook.utils.date_parser import previous_month


@dataclass(frozen=True)
class MonthlyComparison:
    """One month against the previous month and the same month last year."""

    year: int
    month: int
    current_total: Decimal
    previous_month_total: Decimal
    last_year_total: Decimal
    mom_diff: Decimal
    yoy_diff: Decimal
    mom_percent: float
    yoy_percent: float


@dataclass(frozen=True)
class YearTrend:
    """Twelve monthly totals for a year and the year before."""

    year: int
    current: tuple[Decimal, ...]
    previous: tuple[Decimal, ...]
    current_total: Decimal
    previous_total: Decimal
    growth_percent: float
    best_month: int
    monthly_average: Decimal


@dataclass(frozen=True)
class CodeBreakdown:
    """One code's share of a month."""

    code: str
    label: str
    total: Decimal
    count: int
    share_percent: float


def change_percent(current: Decimal, base: Decimal) -> float:
    """Percentage change from base to current, 0 when base is zero."""
    if base <= 0:
        return 0.0
    return float((current - base) / base * 100)


def _month_lookup(totals: list[MonthlyTotal]) -> dict[int, Decimal]:
    return {t.month: t.total for t in totals}


class ReportService:
    """Service for month, year and donor reports."""

    def __init__(self, db: Database):
        """Initialize report service.

        Args:
            db: Database instance
        """
        self.db = db

    def day_summary(self, day: date) -> list[CategorySummary]:
        """Per-code totals and contributors for one offering date."""
        records = self.db.list_records(RecordFilter(year=day.year, month=day.month))
        return summarize_by_code(r for r in records if r.date == day)

    def monthly_comparison(self, year: int, month: int) -> MonthlyComparison:
        """Compare a month with the month before and the same month last year.

        January is compared with December of the previous year.
        """
        this_year = _month_lookup(self.db.monthly_totals(year))
        last_year = _month_lookup(self.db.monthly_totals(year - 1))

        current = this_year.get(month, Decimal("0"))
        prev_year, prev_month = previous_month(year, month)
        source = this_year if prev_year == year else last_year
        previous = source.get(prev_month, Decimal("0"))
        same_month_last_year = last_year.get(month, Decimal("0"))

        return MonthlyComparison(
            year=year,
            month=month,
            current_total=current,
            previous_month_total=previous,
            last_year_total=same_month_last_year,
            mom_diff=current - previous,
            yoy_diff=current - same_month_last_year,
            mom_percent=change_percent(current, previous),
            yoy_percent=change_percent(current, same_month_last_year),
        )

    def year_trend(self, year: int) -> YearTrend:
        """Monthly points for a year and the previous year."""
        this_year = _month_lookup(self.db.monthly_totals(year))
        last_year = _month_lookup(self.db.monthly_totals(year - 1))

        current = tuple(this_year.get(m, Decimal("0")) for m in range(1, 13))
        previous = tuple(last_year.get(m, Decimal("0")) for m in range(1, 13))
        current_total = sum(current, Decimal("0"))
        previous_total = sum(previous, Decimal("0"))
        # Growth against an empty previous year is measured against 1
        growth = float((current_total - previous_total) / (previous_total or Decimal("1")) * 100)

        return YearTrend(
            year=year,
            current=current,
            previous=previous,
            current_total=current_total,
            previous_total=previous_total,
            growth_percent=growth,
            best_month=current.index(max(current)) + 1,
            monthly_average=current_total / 12,
        )

    def month_breakdown(self, year: int, month: int) -> list[CodeBreakdown]:
        """Per-code totals of a month, largest first."""
        records = self.db.list_records(RecordFilter(year=year, month=month))
        totals: dict[str, Decimal] = defaultdict(Decimal)
        counts: dict[str, int] = defaultdict(int)
        labels: dict[str, str] = {}
        for record in records:
            totals[record.code] += record.amount
            counts[record.code] += 1
            labels.setdefault(record.code, record.label or record.code)

        month_total = sum(totals.values(), Decimal("0"))
        breakdown = [
            CodeBreakdown(
                code=code,
                label=labels[code],
                total=total,
                count=counts[code],
                share_percent=float(total / month_total * 100) if month_total else 0.0,
            )
            for code, total in totals.items()
        ]
        return sorted(breakdown, key=lambda b: (-b.total, b.code))

    def donor_history(self, offering_number: str, year: Optional[int] = None) -> list[DonorDailyTotal]:
        """Daily per-code totals for one offering number, optionally one year."""
        history = self.db.monthly_totals_by_donor(offering_number.strip())
        if year is not None:
            history = [h for h in history if h.year == year]
        return history
