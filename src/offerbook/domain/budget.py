"""Budget domain service: yearly budget lines against recorded actuals."""

from collections import defaultdict
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from offerbook.database.base import Database
from offerbook.domain.entities import BudgetRecord, RecordFilter
from offerbook.domain.errors import ValidationError, invalid_amount
from offerbook.domain.offering_type import normalize_code

UNCATEGORIZED = "Other"


@dataclass(frozen=True)
class BudgetLine:
    """Budget and actual for one offering code."""

    code: str
    label: str
    budget: Decimal
    actual: Decimal
    note: Optional[str]

    @property
    def percent(self) -> Optional[float]:
        """Actual as a percentage of budget, or None without a budget."""
        return percent_of(self.actual, self.budget)


@dataclass(frozen=True)
class BudgetCategory:
    """Budget lines grouped under one offering type category."""

    category: str
    lines: tuple[BudgetLine, ...]
    budget: Decimal
    actual: Decimal

    @property
    def percent(self) -> Optional[float]:
        return percent_of(self.actual, self.budget)


@dataclass(frozen=True)
class BudgetReport:
    """Budget vs actual for a whole year."""

    year: int
    categories: tuple[BudgetCategory, ...]
    total_budget: Decimal
    total_actual: Decimal

    @property
    def percent(self) -> Optional[float]:
        return percent_of(self.total_actual, self.total_budget)


def percent_of(actual: Decimal, budget: Decimal) -> Optional[float]:
    """Return actual/budget*100, or None when budget is zero."""
    if not budget:
        return None
    return float(actual / budget * 100)


class BudgetService:
    """Service for budgets and budget-vs-actual reports."""

    def __init__(self, db: Database):
        """Initialize budget service.

        Args:
            db: Database instance
        """
        self.db = db

    def list_budgets(self, year: int) -> list[BudgetRecord]:
        """List budget lines for a year."""
        return self.db.list_budgets(year)

    def set_budget(self, year: int, code: str, amount: Decimal, note: Optional[str] = None) -> BudgetRecord:
        """Create or replace the budget for (year, code).

        Raises:
            ValidationError: If code is empty or amount is negative
        """
        code = normalize_code(code)
        if not code:
            raise ValidationError("Offering type code is required")
        if not amount.is_finite() or amount < 0:
            raise ValidationError(invalid_amount(str(amount)))
        budget = BudgetRecord(year=year, code=code, amount=amount, note=(note or "").strip() or None)
        self.db.upsert_budget(budget)
        return budget

    def _actuals_by_code(self, year: int) -> dict[str, Decimal]:
        actuals: dict[str, Decimal] = defaultdict(Decimal)
        for record in self.db.list_records(RecordFilter(year=year)):
            actuals[record.code] += record.amount
        return actuals

    def budget_vs_actual(self, year: int) -> BudgetReport:
        """Build the per-category budget table for a year.

        Every active offering type appears, grouped by its category in
        first-seen order. Codes without a budget show a zero budget.
        """
        types = self.db.list_offering_types()
        budgets = {b.code: b for b in self.db.list_budgets(year)}
        actuals = self._actuals_by_code(year)

        grouped: dict[str, list[BudgetLine]] = {}
        for offering_type in types:
            budget = budgets.get(offering_type.code)
            line = BudgetLine(
                code=offering_type.code,
                label=offering_type.label,
                budget=budget.amount if budget else Decimal("0"),
                actual=actuals.get(offering_type.code, Decimal("0")),
                note=budget.note if budget else None,
            )
            grouped.setdefault(offering_type.category or UNCATEGORIZED, []).append(line)

        categories = tuple(
            BudgetCategory(
                category=category,
                lines=tuple(lines),
                budget=sum((line.budget for line in lines), Decimal("0")),
                actual=sum((line.actual for line in lines), Decimal("0")),
            )
            for category, lines in grouped.items()
        )
        return BudgetReport(
            year=year,
            categories=categories,
            total_budget=sum((c.budget for c in categories), Decimal("0")),
            total_actual=sum((c.actual for c in categories), Decimal("0")),
        )

    def category_progress(self, year: int) -> list[BudgetCategory]:
        """Year-to-date budget achievement per category.

        Budgets and records whose code has no active offering type are
        counted under "Other". Categories with neither budget nor actual
        are dropped; the rest are ordered by actual, largest first.
        """
        category_of = {t.code: t.category or UNCATEGORIZED for t in self.db.list_offering_types()}
        budget_totals: dict[str, Decimal] = defaultdict(Decimal)
        actual_totals: dict[str, Decimal] = defaultdict(Decimal)

        for budget in self.db.list_budgets(year):
            budget_totals[category_of.get(budget.code, UNCATEGORIZED)] += budget.amount
        for code, actual in self._actuals_by_code(year).items():
            actual_totals[category_of.get(code, UNCATEGORIZED)] += actual

        progress = [
            BudgetCategory(
                category=category,
                lines=(),
                budget=budget_totals.get(category, Decimal("0")),
                actual=actual_totals.get(category, Decimal("0")),
            )
            for category in set(budget_totals) | set(actual_totals)
        ]
        progress = [p for p in progress if p.budget > 0 or p.actual > 0]
        return sorted(progress, key=lambda p: (-p.actual, p.category))
