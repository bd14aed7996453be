"""Unit tests for record models."""

import pytest
from pydantic import ValidationError

from cnpj_explorer.models import ChartDataPoint, NormalizedRecord, RawRecord
from conftest import make_record


class TestRawRecord:
    """Tests for RawRecord."""

    def test_keys_in_source_order(self) -> None:
        raw = RawRecord(data={"UF": "SP", "CNPJ": "1", "NOME": "A"})
        assert raw.keys() == ("UF", "CNPJ", "NOME")


class TestNormalizedRecord:
    """Tests for NormalizedRecord."""

    def test_counts_follow_lists(self) -> None:
        record = make_record(partner_list=["Ana", "Beto"], secondary_activity_list=["6630-4/00"])
        assert record.partner_count == 2
        assert record.secondary_activity_count == 1

    def test_counts_in_dump(self) -> None:
        dumped = make_record(partner_list=["Ana"]).model_dump()
        assert dumped["partner_count"] == 1
        assert dumped["secondary_activity_count"] == 0

    def test_record_id_from_cnpj(self) -> None:
        record = make_record(data={"RAZAO SOCIAL": "A", "CNPJ": "12.345.678/0001-95"})
        assert record.record_id == "12.345.678/0001-95"

    def test_record_id_without_cnpj_is_stable(self) -> None:
        a = make_record(data={"RAZAO SOCIAL": "A", "UF": "SP"})
        b = make_record(data={"UF": "SP", "RAZAO SOCIAL": "A"})
        assert a.record_id == b.record_id
        assert "RAZAO SOCIAL" in a.record_id

    def test_as_row_derived_fields(self) -> None:
        record = make_record(
            data={"CNPJ": "1"},
            raw_capital=10.0,
            region="SP",
            year=2020,
            partner_list=["Ana"],
            primary_activity_code="6611-8/01",
            secondary_activity_list=["6630-4/00", "6619-3/99"],
        )
        row = record.as_row()
        assert row["CNPJ"] == "1"
        assert row["_raw_capital"] == 10.0
        assert row["_uf"] == "SP"
        assert row["_year"] == 2020
        assert row["_socios_list"] == ["Ana"]
        assert row["_socios_count"] == 1
        assert row["_cnae_principal"] == "6611-8/01"
        assert row["_cnae_sec_count"] == 2

    def test_as_row_omits_absent_fields(self) -> None:
        row = make_record(data={"CNPJ": "1"}).as_row()
        assert "_uf" not in row
        assert "_year" not in row
        assert row["_socios_count"] == 0

    def test_frozen(self) -> None:
        record = make_record()
        with pytest.raises(ValidationError):
            record.region = "SP"  # type: ignore[misc]


class TestChartDataPoint:
    """Tests for ChartDataPoint."""

    def test_keeps_record_reference(self) -> None:
        record = NormalizedRecord(data={"CNPJ": "1"})
        point = ChartDataPoint(name="x", value=1, source_record=record)
        assert point.source_record is record
        assert point.value == 1.0
