"""Tests for budget service."""

from datetime import date
from decimal import Decimal

import pytest

from offerbook.domain.budget import BudgetService, UNCATEGORIZED, percent_of
from offerbook.domain.errors import ValidationError


@pytest.fixture
def budget_service(temp_db):
    """Create a BudgetService with a temporary database."""
    return BudgetService(temp_db)


@pytest.fixture
def year_data(temp_db, sample_types, budget_service, make_record):
    """Budgets and actuals for 2025."""
    budget_service.set_budget(2025, "11", Decimal("1000"))
    budget_service.set_budget(2025, "22", Decimal("500"), note="weekly")
    budget_service.set_budget(2025, "41", Decimal("200"))
    budget_service.set_budget(2024, "11", Decimal("9999"))
    temp_db.insert_records(
        [
            make_record(date(2025, 1, 5), code="11", amount="300"),
            make_record(date(2025, 2, 2), code="11", amount="200"),
            make_record(date(2025, 1, 5), code="22", amount="100"),
            make_record(date(2025, 3, 2), code="29", amount="40"),
            make_record(date(2025, 3, 2), code="ZZ", amount="5"),
            make_record(date(2024, 6, 2), code="11", amount="777"),
        ]
    )


def test_percent_of():
    assert percent_of(Decimal("50"), Decimal("200")) == 25.0
    assert percent_of(Decimal("50"), Decimal("0")) is None


def test_set_budget_replaces_existing(budget_service):
    budget_service.set_budget(2025, "11", Decimal("100"))
    budget_service.set_budget(2025, "11", Decimal("250"), note="raised")

    budgets = budget_service.list_budgets(2025)
    assert len(budgets) == 1
    assert budgets[0].amount == Decimal("250")
    assert budgets[0].note == "raised"


def test_set_budget_normalizes_code(budget_service):
    assert budget_service.set_budget(2025, " mx ", Decimal("10")).code == "MX"


@pytest.mark.parametrize("code, amount", [("", Decimal("10")), ("11", Decimal("-1"))])
def test_set_budget_validation(budget_service, code, amount):
    with pytest.raises(ValidationError):
        budget_service.set_budget(2025, code, amount)


def test_budget_vs_actual(budget_service, year_data):
    report = budget_service.budget_vs_actual(2025)

    assert [c.category for c in report.categories] == ["General", "Special", "Mission"]
    general = report.categories[0]
    assert [line.code for line in general.lines] == ["11", "22"]
    assert general.budget == Decimal("1500")
    assert general.actual == Decimal("600")
    assert general.percent == 40.0

    tithe = general.lines[0]
    assert tithe.budget == Decimal("1000")
    assert tithe.actual == Decimal("500")
    assert tithe.percent == 50.0
    assert general.lines[1].note == "weekly"

    special = report.categories[1]
    assert special.budget == Decimal("0")
    assert special.actual == Decimal("40")
    assert special.percent is None

    assert report.total_budget == Decimal("1700")
    # Records with an unknown code are not part of any line
    assert report.total_actual == Decimal("640")


def test_category_progress(budget_service, year_data):
    progress = budget_service.category_progress(2025)

    assert [(p.category, p.actual, p.budget) for p in progress] == [
        ("General", Decimal("600"), Decimal("1500")),
        ("Special", Decimal("40"), Decimal("0")),
        (UNCATEGORIZED, Decimal("5"), Decimal("0")),
        ("Mission", Decimal("0"), Decimal("200")),
    ]


def test_category_progress_empty_year(budget_service, sample_types):
    assert budget_service.category_progress(2030) == []
