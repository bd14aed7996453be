"""Unit tests for report export and comparison."""

from datetime import datetime, timezone

import pytest

from cnpj_explorer.models import NormalizedRecord, RawRecord
from cnpj_explorer.normalizing import normalize_row
from cnpj_explorer.report import (
    COMPARISON_ROWS,
    build_card,
    build_report,
    compare_records,
    render_markdown,
)
from conftest import make_record

NBSP = "\u00a0"
GENERATED_AT = datetime(2026, 3, 15, 14, 30, tzinfo=timezone.utc)


@pytest.fixture
def record(raw_record: RawRecord) -> NormalizedRecord:
    return normalize_row(raw_record)


@pytest.fixture
def second_record(sample_company_row: dict[str, str]) -> NormalizedRecord:
    row = dict(
        sample_company_row,
        CNPJ="98765432000110",
        UF="RJ",
        **{"RAZÃO SOCIAL": "Beta Seguros SA", "CAPITAL SOCIAL": "R$ 5.000,00", "EMAIL": ""},
    )
    return normalize_row(RawRecord(source_id="sheet:2", data=row))


class TestBuildCard:
    """Tests for build_card."""

    def test_fields(self, record: NormalizedRecord) -> None:
        card = build_card(record)
        assert card.record_id == "12.345.678/0001-95"
        assert card.name == "Alfa Investimentos Distribuidora de Títulos LTDA"
        assert card.cnpj == "12.345.678/0001-95"
        assert card.capital == f"R${NBSP}10.000,00"
        assert card.region == "SP"
        assert card.legal_nature == "206-2 - Sociedade Empresária Limitada"
        assert card.partners == ["Ana", "Beto"]
        assert card.secondary_activities == ["6619-3/99", "6630-4/00", "7020-4/00"]
        assert card.phone_1 == "(11) 3333-4444"
        assert card.email == "contato@alfa.com.br"

    def test_primary_activity_description(self, record: NormalizedRecord) -> None:
        card = build_card(record)
        assert card.primary_activity == "6612-6/02"
        assert card.primary_activity_description

    def test_missing_fields_use_placeholder(self) -> None:
        card = build_card(make_record(data={"RAZAO SOCIAL": "Só Nome"}))
        assert card.name == "Só Nome"
        assert card.cnpj == "-"
        assert card.phone_2 == "-"
        assert card.email == "-"
        assert card.primary_activity_description is None


class TestBuildReport:
    """Tests for build_report and render_markdown."""

    def test_report_contents(self, record: NormalizedRecord, second_record: NormalizedRecord) -> None:
        report = build_report([record, second_record], generated_at=GENERATED_AT)
        assert report.record_count == 2
        assert [c.cnpj for c in report.cards] == ["12.345.678/0001-95", "98.765.432/0001-10"]
        capital_rows = report.tables["Maiores Capitais Sociais"]
        assert [r.value for r in capital_rows] == [f"R${NBSP}10.000,00", f"R${NBSP}5.000,00"]
        assert [r.label for r in report.tables["Distribuição por UF"]] == ["SP", "RJ"]

    def test_markdown_pages(self, record: NormalizedRecord, second_record: NormalizedRecord) -> None:
        text = render_markdown(build_report([record, second_record], generated_at=GENERATED_AT))
        assert text.startswith("# Relatório de Empresas\n")
        assert "Gerado em 15/03/2026 14:30 - 2 empresa(s)" in text
        assert "<!-- página 1/3 -->" in text
        assert "<!-- página 3/3 -->" in text
        assert "## Alfa Investimentos Distribuidora de Títulos LTDA" in text
        assert "### Sócios (2)" in text
        assert "- E-mail: -" in text
        assert text.index("## Beta Seguros SA") < text.index("## Resumo")

    def test_markdown_tables(self, record: NormalizedRecord) -> None:
        text = render_markdown(build_report([record], generated_at=GENERATED_AT))
        assert "### Maiores Capitais Sociais" in text
        assert f"| Alfa Investimentos D... | R${NBSP}10.000,00 |" in text
        assert "| 2020 |" in text

    def test_empty_table_placeholder(self) -> None:
        text = render_markdown(build_report([make_record()], generated_at=GENERATED_AT))
        assert "| - | - |" in text


class TestCompareRecords:
    """Tests for compare_records."""

    def test_one_value_per_record(self, record: NormalizedRecord, second_record: NormalizedRecord) -> None:
        rows = compare_records([record, second_record])
        assert [r.label for r in rows] == [label for label, _, _ in COMPARISON_ROWS]
        assert all(len(r.values) == 2 for r in rows)

    def test_values(self, record: NormalizedRecord, second_record: NormalizedRecord) -> None:
        rows = {r.label: r.values for r in compare_records([record, second_record])}
        assert rows["CNPJ"] == ["12.345.678/0001-95", "98.765.432/0001-10"]
        assert rows["Razão Social"][1] == "Beta Seguros SA"
        assert rows["Capital Social"] == [f"R${NBSP}10.000,00", f"R${NBSP}5.000,00"]
        assert rows["CNAE Primário"] == ["6612-6/02", "6612-6/02"]
        assert rows["CNAEs Secundários"][0] == "6619-3/99; 6630-4/00; 7020-4/00"
        assert rows["Sócios"][0] == "Ana; Beto"
        assert rows["E-mail"] == ["contato@alfa.com.br", "-"]
        assert rows["Porte"] == ["-", "-"]

    def test_numeric_capital_formatted(self) -> None:
        record = make_record(data={"CAPITAL SOCIAL": 1500})
        rows = {r.label: r.values for r in compare_records([record])}
        assert rows["Capital Social"] == [f"R${NBSP}1.500,00"]
