"""Unit tests for filter rules."""

import pytest

from cnpj_explorer.filtering import FilterSelection, legal_nature_code
from cnpj_explorer.filtering.rules import (
    apply_activity_rule,
    apply_legal_nature_rule,
    apply_region_rule,
)
from conftest import make_record


class TestActivityRule:
    """Tests for apply_activity_rule."""

    def test_not_set_passes(self) -> None:
        passed, explanation = apply_activity_rule(make_record(), FilterSelection())
        assert passed
        assert "not set" in explanation

    def test_primary_match(self) -> None:
        record = make_record(primary_activity_code="6611-8/01")
        passed, explanation = apply_activity_rule(record, FilterSelection(activity_codes=["6611801"]))
        assert passed
        assert "Primary" in explanation

    def test_secondary_match(self) -> None:
        record = make_record(primary_activity_code="7020-4/00", secondary_activity_list=["6630-4/00"])
        passed, explanation = apply_activity_rule(record, FilterSelection(activity_codes=["6630-4/00"]))
        assert passed
        assert "Secondary" in explanation

    def test_any_selected_code(self) -> None:
        record = make_record(primary_activity_code="6612-6/02")
        selection = FilterSelection(activity_codes=["6611-8/01", "6612-6/02"])
        assert apply_activity_rule(record, selection)[0]

    def test_no_match(self) -> None:
        record = make_record(primary_activity_code="7020-4/00", secondary_activity_list=["4711-3/02"])
        passed, explanation = apply_activity_rule(record, FilterSelection(activity_codes=["6611-8/01"]))
        assert not passed
        assert explanation.startswith("Excluded")

    def test_record_without_codes(self) -> None:
        selection = FilterSelection(activity_codes=["6611-8/01"])
        assert not apply_activity_rule(make_record(), selection)[0]

    def test_substring_match(self) -> None:
        """Partial codes match anywhere in the digits."""
        record = make_record(primary_activity_code="1660-0/00")
        assert apply_activity_rule(record, FilterSelection(activity_codes=["66"]))[0]

    def test_selection_without_digits_ignored(self) -> None:
        record = make_record(primary_activity_code="7020-4/00")
        assert apply_activity_rule(record, FilterSelection(activity_codes=["-/"]))[0]


class TestRegionRule:
    """Tests for apply_region_rule."""

    def test_not_set_passes(self) -> None:
        assert apply_region_rule(make_record(), FilterSelection())[0]

    def test_selected_region(self) -> None:
        record = make_record(region="SP")
        assert apply_region_rule(record, FilterSelection(regions=["sp", "RJ"]))[0]

    def test_other_region_excluded(self) -> None:
        passed, explanation = apply_region_rule(make_record(region="MG"), FilterSelection(regions=["SP"]))
        assert not passed
        assert "MG" in explanation

    def test_missing_region_excluded(self) -> None:
        passed, explanation = apply_region_rule(make_record(), FilterSelection(regions=["SP"]))
        assert not passed
        assert "unknown" in explanation


class TestLegalNatureRule:
    """Tests for apply_legal_nature_rule."""

    @pytest.mark.parametrize(
        "option,expected",
        [
            ("206-2 - Sociedade Empresária Limitada", "206"),
            ("213-5 - Empresário (Individual)", "213"),
            (" 399 ", "399"),
        ],
    )
    def test_legal_nature_code(self, option: str, expected: str) -> None:
        assert legal_nature_code(option) == expected

    def test_not_set_passes(self) -> None:
        assert apply_legal_nature_rule(make_record(), FilterSelection())[0]

    def test_code_in_column(self) -> None:
        record = make_record(data={"NATUREZA JURÍDICA": "206-2 - Sociedade Empresária Limitada"})
        selection = FilterSelection(legal_natures=["206-2 - Sociedade Empresária Limitada"])
        assert apply_legal_nature_rule(record, selection)[0]

    def test_column_with_code_only(self) -> None:
        record = make_record(data={"NATUREZA_JURIDICA": "2062"})
        selection = FilterSelection(legal_natures=["206-2 - Sociedade Empresária Limitada"])
        assert apply_legal_nature_rule(record, selection)[0]

    def test_other_nature_excluded(self) -> None:
        record = make_record(data={"NATUREZA JURÍDICA": "213-5 - Empresário (Individual)"})
        selection = FilterSelection(legal_natures=["206-2 - Sociedade Empresária Limitada"])
        assert not apply_legal_nature_rule(record, selection)[0]

    def test_missing_column_excluded(self) -> None:
        selection = FilterSelection(legal_natures=["206-2 - Sociedade Empresária Limitada"])
        passed, explanation = apply_legal_nature_rule(make_record(), selection)
        assert not passed
        assert "no legal nature column" in explanation
