"""Tests for report service."""

from datetime import date
from decimal import Decimal

import pytest

from offerbook.domain.reports import ReportService, change_percent


@pytest.fixture
def report_service(temp_db):
    """Create a ReportService with a temporary database."""
    return ReportService(temp_db)


@pytest.fixture
def history(temp_db, make_record):
    """Two years of records."""
    return temp_db.insert_records(
        [
            make_record(date(2024, 1, 7), code="11", amount="100", offering_number="12", donor_name="Kim"),
            make_record(date(2024, 12, 29), code="11", amount="200", offering_number="12", donor_name="Kim"),
            make_record(date(2025, 1, 5), code="11", amount="300", offering_number="12", donor_name="Kim", label="Tithe"),
            make_record(date(2025, 1, 5), code="11", amount="50", offering_number="12", donor_name="Kim", label="Tithe"),
            make_record(date(2025, 1, 5), code="29", amount="25", offering_number="3", donor_name="Lee", label="Thanks"),
            make_record(date(2025, 1, 5), code="29", amount="25", donor_name="Park", label="Thanks", note="baby"),
            make_record(date(2025, 1, 12), code="22", amount="100", donor_name="Choi", label="Sunday"),
            make_record(date(2025, 2, 2), code="22", amount="250", donor_name="Choi", label="Sunday"),
        ]
    )


def test_change_percent():
    assert change_percent(Decimal("150"), Decimal("100")) == 50.0
    assert change_percent(Decimal("150"), Decimal("0")) == 0.0


def test_day_summary(report_service, history):
    summaries = report_service.day_summary(date(2025, 1, 5))

    assert [(s.code, s.total) for s in summaries] == [("11", Decimal("350")), ("29", Decimal("50"))]
    assert summaries[1].label == "Thanks"
    assert summaries[1].contributors == ("3", "Park(baby)")


def test_day_summary_empty(report_service, history):
    assert report_service.day_summary(date(2025, 1, 6)) == []


def test_monthly_comparison_wraps_to_previous_december(report_service, history):
    comparison = report_service.monthly_comparison(2025, 1)

    assert comparison.current_total == Decimal("500")
    assert comparison.previous_month_total == Decimal("200")
    assert comparison.last_year_total == Decimal("100")
    assert comparison.mom_diff == Decimal("300")
    assert comparison.mom_percent == 150.0
    assert comparison.yoy_percent == 400.0


def test_monthly_comparison_same_year(report_service, history):
    comparison = report_service.monthly_comparison(2025, 2)

    assert comparison.current_total == Decimal("250")
    assert comparison.previous_month_total == Decimal("500")
    assert comparison.mom_percent == -50.0
    # No February last year
    assert comparison.yoy_percent == 0.0


def test_year_trend(report_service, history):
    trend = report_service.year_trend(2025)

    assert len(trend.current) == 12
    assert trend.current[0] == Decimal("500")
    assert trend.current[1] == Decimal("250")
    assert trend.previous[11] == Decimal("200")
    assert trend.current_total == Decimal("750")
    assert trend.previous_total == Decimal("300")
    assert trend.growth_percent == 150.0
    assert trend.best_month == 1
    assert trend.monthly_average == Decimal("62.5")


def test_year_trend_without_previous_year(report_service, history):
    trend = report_service.year_trend(2024)
    assert trend.previous_total == Decimal("0")
    assert trend.growth_percent == 30000.0


def test_month_breakdown(report_service, history):
    breakdown = report_service.month_breakdown(2025, 1)

    assert [(b.code, b.total, b.count) for b in breakdown] == [
        ("11", Decimal("350"), 2),
        ("22", Decimal("100"), 1),
        ("29", Decimal("50"), 2),
    ]
    assert breakdown[0].share_percent == 70.0


def test_donor_history(report_service, history):
    rows = report_service.donor_history("12")

    assert [(r.year, r.month, r.day, r.code, r.total) for r in rows] == [
        (2024, 1, 7, "11", Decimal("100")),
        (2024, 12, 29, "11", Decimal("200")),
        (2025, 1, 5, "11", Decimal("350")),
    ]
    assert len(report_service.donor_history(" 12 ", year=2025)) == 1
    assert report_service.donor_history("999") == []
