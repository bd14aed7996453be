"""Pytest fixtures for cnpj-explorer tests."""

import csv
from io import StringIO

import pytest

from cnpj_explorer.models.raw import RawRecord
from cnpj_explorer.models.record import NormalizedRecord


def build_csv(rows: list[dict]) -> str:
    """Build CSV string from list of row dicts."""
    if not rows:
        return ""
    out = StringIO()
    writer = csv.DictWriter(out, fieldnames=rows[0].keys())
    writer.writeheader()
    writer.writerows(rows)
    return out.getvalue()


def make_record(**kwargs) -> NormalizedRecord:
    """Minimal normalized record for aggregator/filter tests."""
    defaults = {
        "source_id": "test",
        "data": {"RAZAO SOCIAL": "Empresa Teste"},
    }
    defaults.update(kwargs)
    return NormalizedRecord(**defaults)


@pytest.fixture
def sample_company_row() -> dict[str, str]:
    """Sample spreadsheet row as exported from the registry sheet."""
    return {
        "CNPJ": "12345678000195",
        "RAZÃO SOCIAL": "Alfa Investimentos Distribuidora de Títulos LTDA",
        "NOME FANTASIA": "Alfa Invest",
        "NATUREZA JURÍDICA": "206-2 - Sociedade Empresária Limitada",
        "CAPITAL SOCIAL": "R$ 10.000,00",
        "DATA INICIO ATIVIDADE": "2020-05-01",
        "CNAE PRINCIPAL": "6612-6/02",
        "CNAES SECUNDÁRIOS": "6619-3/99; 6630-4/00; 7020-4/00",
        "UF": " sp ",
        "SÓCIOS": "Ana; Beto;",
        "TELEFONE 1": "(11) 3333-4444",
        "EMAIL": "contato@alfa.com.br",
    }


@pytest.fixture
def raw_record(sample_company_row: dict[str, str]) -> RawRecord:
    """RawRecord as the parser would produce it (no numeric cells in the sample)."""
    return RawRecord(source_id="sheet:1", data=dict(sample_company_row))


@pytest.fixture
def sample_csv_content(sample_company_row: dict[str, str]) -> str:
    """CSV with header and three data rows."""
    second = dict(sample_company_row, CNPJ="98765432000110", UF="RJ", **{"CAPITAL SOCIAL": "R$ 5.000,00"})
    third = dict(sample_company_row, CNPJ="11222333000181", UF="MG", **{"CAPITAL SOCIAL": ""})
    return build_csv([sample_company_row, second, third])
