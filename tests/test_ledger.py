"""Tests for the pending-entry ledger."""

from decimal import Decimal

import pytest

from offerbook.domain.entities import ANONYMOUS_DONOR, Donor
from offerbook.domain.errors import ValidationError
from offerbook.domain.ledger import PendingLedger


class TestAddItem:
    """Tests for staging entries."""

    @pytest.mark.parametrize("amount", ["1", "250", "1,000", "12.34"])
    def test_add_grows_size_and_total(self, ledger, amount):
        ledger.add_item("11", "Tithe", "50")
        size_before = len(ledger)
        total_before = ledger.grand_total()

        ledger.add_item("11", "Tithe", amount)

        assert len(ledger) == size_before + 1
        assert ledger.grand_total() == total_before + Decimal(amount.replace(",", ""))

    def test_empty_code_is_rejected(self, ledger):
        with pytest.raises(ValidationError):
            ledger.add_item("  ", "Tithe", "10")
        assert len(ledger) == 0

    @pytest.mark.parametrize("amount", ["", "abc", "-1", "NaN"])
    def test_invalid_amount_is_rejected(self, ledger, amount):
        with pytest.raises(ValidationError):
            ledger.add_item("11", "Tithe", amount)
        assert len(ledger) == 0

    def test_selected_donor_is_captured(self, ledger):
        donor = Donor(id=7, name="Kim Yongjun", offering_number="122")
        item = ledger.add_item("11", "Tithe", "250", donor=donor, typed_name="122")

        assert item.donor_id == 7
        assert item.donor_name == "Kim Yongjun"
        assert item.offering_number == "122"

    def test_typed_name_without_donor(self, ledger):
        item = ledger.add_item("11", "Tithe", "250", typed_name=" Visitor ")

        assert item.donor_id is None
        assert item.donor_name == "Visitor"
        assert item.offering_number is None

    def test_no_donor_defaults_to_anonymous(self, ledger):
        item = ledger.add_item("22", "Sunday", "10")
        assert item.donor_name == ANONYMOUS_DONOR

    def test_items_keep_insertion_order(self, ledger):
        first = ledger.add_item("11", "Tithe", "1")
        second = ledger.add_item("22", "Sunday", "2")

        assert [i.id for i in ledger.items()] == [first.id, second.id]
        assert [i.id for i in ledger.items(newest_first=True)] == [second.id, first.id]

    def test_item_ids_are_unique(self, ledger):
        ids = {ledger.add_item("11", "Tithe", "1").id for _ in range(20)}
        assert len(ids) == 20


class TestRemoveAndUpdate:
    """Tests for removing entries and editing amounts."""

    def test_remove_item(self, ledger):
        item = ledger.add_item("11", "Tithe", "10")
        ledger.remove_item(item.id)
        assert len(ledger) == 0

    def test_remove_unknown_id_is_noop(self, ledger):
        ledger.add_item("11", "Tithe", "10")
        before = ledger.items()

        ledger.remove_item("does-not-exist")

        assert ledger.items() == before

    def test_update_amount_strips_noise(self, ledger):
        item = ledger.add_item("11", "Tithe", "10")
        ledger.update_item_amount(item.id, "1,250.50abc")
        assert ledger.get_item(item.id).amount == Decimal("1250.5")

    def test_update_amount_non_numeric_becomes_zero(self, ledger):
        item = ledger.add_item("11", "Tithe", "10")
        ledger.update_item_amount(item.id, "lots")
        assert ledger.get_item(item.id).amount == Decimal("0")

    def test_update_unknown_id_is_noop(self, ledger):
        ledger.add_item("11", "Tithe", "10")
        ledger.update_item_amount("nope", "99")
        assert ledger.grand_total() == Decimal("10")


class TestSummaries:
    """Tests for per-code summaries."""

    def test_same_code_is_grouped(self, ledger):
        ledger.add_item("29", "Thanksgiving", "50", typed_name="Lee")
        ledger.add_item("29", "Thanksgiving", "100", typed_name="Park")

        summaries = ledger.summarize_by_category()

        assert len(summaries) == 1
        assert summaries[0].code == "29"
        assert summaries[0].total == Decimal("150")
        assert len(summaries[0].contributors) == 2

    def test_totals_match_per_code_sums(self, ledger):
        amounts = {"11": ["10", "20.5"], "22": ["3"], "41": ["7", "8", "9"]}
        for code, values in amounts.items():
            for value in values:
                ledger.add_item(code, f"Label {code}", value)

        summaries = ledger.summarize_by_category()

        assert [s.code for s in summaries] == ["11", "22", "41"]
        for summary in summaries:
            assert summary.total == sum(Decimal(v) for v in amounts[summary.code])
        assert ledger.grand_total() == sum(s.total for s in summaries)

    def test_contributors_sorted_by_number_then_name(self, ledger):
        ledger.add_item("11", "Tithe", "1", donor=Donor(id=1, name="B", offering_number="12"))
        ledger.add_item("11", "Tithe", "1", donor=Donor(id=2, name="A", offering_number="3"))
        ledger.add_item("11", "Tithe", "1", donor=Donor(id=3, name="C"))

        summary = ledger.summarize_by_category()[0]

        assert summary.contributors == ("3", "12", "C")

    def test_non_ascii_digit_numbers_sort_with_names(self, ledger):
        ledger.add_item("11", "Tithe", "1", donor=Donor(id=1, name="Song", offering_number="①"))
        ledger.add_item("11", "Tithe", "1", donor=Donor(id=2, name="Ahn", offering_number="3"))
        ledger.add_item("11", "Tithe", "1", donor=Donor(id=3, name="Baek", offering_number="²"))

        summary = ledger.summarize_by_category()[0]

        # Superscript and circled digits are not offering numbers to sort on
        assert summary.contributors == ("3", "²", "①")

    def test_contributor_label_includes_note(self, ledger):
        ledger.add_item("29", "Thanksgiving", "5", note="birthday", typed_name="Choi")

        summary = ledger.summarize_by_category()[0]

        assert summary.contributors == ("Choi(birthday)",)

    def test_empty_ledger(self, ledger):
        assert ledger.summarize_by_category() == []
        assert ledger.grand_total() == Decimal("0")


class TestDurability:
    """Tests for surviving a restart."""

    def test_items_survive_reload(self, store):
        ledger = PendingLedger(store)
        item = ledger.add_item("11", "Tithe", "1,250", note="n", typed_name="Kim")
        ledger.update_item_amount(item.id, "300")

        reloaded = PendingLedger(store)

        assert reloaded.items() == ledger.items()
        assert reloaded.grand_total() == Decimal("300")

    def test_clear_removes_durable_copy(self, store):
        ledger = PendingLedger(store)
        ledger.add_item("11", "Tithe", "10")
        ledger.clear()

        assert len(ledger) == 0
        assert len(PendingLedger(store)) == 0

    def test_starts_empty(self, ledger):
        assert len(ledger) == 0
        assert ledger.items() == []
