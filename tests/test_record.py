"""Tests for committed record service."""

from datetime import date
from decimal import Decimal

import pytest

from offerbook.domain.errors import NotFoundError, ValidationError
from offerbook.domain.record import RecordService


@pytest.fixture
def record_service(temp_db, marker):
    """Create a RecordService wired to the sync marker."""
    return RecordService(temp_db, marker)


@pytest.fixture
def sample_records(temp_db, make_record):
    """Insert records across two months."""
    return temp_db.insert_records(
        [
            make_record(date(2025, 1, 5), code="11", amount="100", donor_name="Kim", offering_number="12"),
            make_record(date(2025, 1, 12), code="22", amount="20", donor_name="Lee", offering_number="3"),
            make_record(date(2025, 2, 2), code="29", amount="50", donor_name="Park", note="move-in"),
            make_record(date(2024, 12, 29), code="11", amount="70", donor_name="Choi"),
        ]
    )


def test_list_newest_first(record_service, sample_records):
    records = record_service.list_records()
    assert [r.date for r in records] == [
        date(2025, 2, 2),
        date(2025, 1, 12),
        date(2025, 1, 5),
        date(2024, 12, 29),
    ]


def test_filter_by_year_and_month(record_service, sample_records):
    assert len(record_service.list_records(year=2025)) == 3
    assert [r.donor_name for r in record_service.list_records(year=2025, month=1, descending=False)] == [
        "Kim",
        "Lee",
    ]


def test_month_without_year_is_rejected(record_service):
    with pytest.raises(ValidationError):
        record_service.list_records(month=1)


def test_unknown_sort_key_is_rejected(record_service):
    with pytest.raises(ValidationError):
        record_service.list_records(sort_key="amount")


def test_search_matches_name_number_and_note(record_service, sample_records):
    assert [r.donor_name for r in record_service.list_records(search="park")] == ["Park"]
    assert [r.donor_name for r in record_service.list_records(search="move")] == ["Park"]
    assert [r.donor_name for r in record_service.list_records(search="3")] == ["Lee"]


def test_sort_by_offering_number(record_service, sample_records):
    records = record_service.list_records(sort_key="offering_number", descending=False)
    assert [r.donor_name for r in records][:2] == ["Lee", "Kim"]


def test_sort_by_non_ascii_digit_number(record_service, temp_db, make_record):
    temp_db.insert_records(
        [
            make_record(date(2025, 1, 5), donor_name="Song", offering_number="①"),
            make_record(date(2025, 1, 5), donor_name="Ahn", offering_number="4"),
        ]
    )

    records = record_service.list_records(sort_key="offering_number", descending=False)

    assert [r.donor_name for r in records] == ["Ahn", "Song"]


def test_limit(record_service, sample_records):
    assert len(record_service.list_records(limit=2)) == 2


def test_update_record(record_service, sample_types, sample_records):
    updated = record_service.update_record(
        sample_records[0], code="29", amount=Decimal("150"), note=" fixed ", offering_number=""
    )

    assert updated.code == "29"
    assert updated.label == "Thanksgiving"
    assert updated.amount == Decimal("150")
    assert updated.note == "fixed"
    assert updated.offering_number is None

    stored = record_service.get_record(sample_records[0])
    assert stored.amount == Decimal("150")
    assert stored.label == "Thanksgiving"
    assert stored.donor_name == "Kim"


def test_update_with_unknown_code(record_service, sample_types, sample_records):
    with pytest.raises(NotFoundError):
        record_service.update_record(sample_records[0], code="99")


def test_update_negative_amount(record_service, sample_records):
    with pytest.raises(ValidationError):
        record_service.update_record(sample_records[0], amount=Decimal("-1"))


def test_update_missing_record(record_service):
    with pytest.raises(NotFoundError):
        record_service.update_record(999, note="x")


def test_delete_removes_record_and_pending_id(record_service, marker, sample_records):
    marker.mark_pending(sample_records)

    record_service.delete_record(sample_records[1])

    assert record_service.get_record(sample_records[1]) is None
    assert marker.pending_ids() == set(sample_records) - {sample_records[1]}


def test_delete_missing_record(record_service):
    with pytest.raises(NotFoundError):
        record_service.delete_record(999)


def test_records_keep_donor_name_after_deactivation(record_service, donor_service, temp_db, make_record):
    donor = donor_service.save_donor(name="Han", offering_number="8")
    [record_id] = temp_db.insert_records(
        [make_record(date(2025, 1, 5), donor_id=donor.id, donor_name="Han", offering_number="8")]
    )

    donor_service.deactivate_donor(donor.id)

    record = record_service.get_record(record_id)
    assert record.donor_name == "Han"
    assert record.offering_number == "8"
