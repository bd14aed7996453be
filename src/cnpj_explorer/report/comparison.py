"""Side-by-side comparison of selected companies."""

from typing import Any, Literal, Sequence

from pydantic import BaseModel, Field

from cnpj_explorer.keys import find_value
from cnpj_explorer.models.record import NormalizedRecord
from cnpj_explorer.normalizing.values import format_currency

MISSING = "-"

# (label, column keywords, kind)
COMPARISON_ROWS: list[tuple[str, tuple[str, ...], str]] = [
    ("CNPJ", ("CNPJ",), "text"),
    ("Razão Social", ("RAZAO", "NOME"), "text"),
    ("Matriz/Filial", ("MATRIZ", "FILIAL", "IDENTIFICADOR"), "text"),
    ("Natureza Jurídica", ("NATUREZA", "JURIDICA"), "text"),
    ("Capital Social", ("CAPITAL",), "currency"),
    ("Porte", ("PORTE",), "text"),
    ("CNAE Primário", ("PRIMARIO", "PRINCIPAL"), "text"),
    ("CNAEs Secundários", ("SECUNDARI",), "text"),
    ("UF", ("UF", "ESTADO"), "text"),
    ("E-mail", ("EMAIL", "CORREIO"), "text"),
    ("Telefone", ("TELEFONE", "TEL"), "text"),
    ("Sócios", ("SOCIOS", "QSA"), "text"),
]


class ComparisonRow(BaseModel):
    """One attribute across the compared companies."""

    label: str
    kind: Literal["text", "currency"] = "text"
    values: list[str] = Field(default_factory=list)


def _cell(record: NormalizedRecord, keywords: Sequence[str], kind: str) -> str:
    value: Any = find_value(record.data, keywords)
    if value is None or value == "":
        return MISSING
    if kind == "currency" and isinstance(value, (int, float)):
        return format_currency(value)
    return str(value)


def compare_records(records: Sequence[NormalizedRecord]) -> list[ComparisonRow]:
    """Fixed comparison rows with one value per record ("-" when missing)."""
    return [
        ComparisonRow(
            label=label,
            kind=kind,  # type: ignore[arg-type]
            values=[_cell(r, keywords, kind) for r in records],
        )
        for label, keywords, kind in COMPARISON_ROWS
    ]
