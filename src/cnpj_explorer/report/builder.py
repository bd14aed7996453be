"""Report export: one card per company plus the aggregate tables."""

from datetime import datetime, timezone
from typing import Any, Optional, Sequence

from pydantic import BaseModel, Field

from cnpj_explorer.keys import find_value
from cnpj_explorer.models.record import NormalizedRecord
from cnpj_explorer.normalizing.values import format_currency
from cnpj_explorer.pipeline import DashboardSummary, build_summary
from cnpj_explorer.reference import describe_code

MISSING = "-"


def _text(value: Any) -> str:
    if value is None or value == "":
        return MISSING
    return str(value)


class RecordCard(BaseModel):
    """Display fields of one company."""

    record_id: str
    name: str
    cnpj: str = MISSING
    capital: str = MISSING
    region: str = MISSING
    primary_activity: str = MISSING
    primary_activity_description: Optional[str] = None
    legal_nature: str = MISSING
    partners: list[str] = Field(default_factory=list)
    secondary_activities: list[str] = Field(default_factory=list)
    phone_1: str = MISSING
    phone_2: str = MISSING
    email: str = MISSING


class TableRow(BaseModel):
    label: str
    value: str


class Report(BaseModel):
    """Export document: cards first, then summary tables."""

    title: str = "Relatório de Empresas"
    generated_at: datetime
    record_count: int
    cards: list[RecordCard] = Field(default_factory=list)
    tables: dict[str, list[TableRow]] = Field(default_factory=dict)


def build_card(record: NormalizedRecord) -> RecordCard:
    """Collect a record's display fields by column-name keywords."""
    data = record.data
    capital: Any = record.raw_capital
    if capital is None:
        capital = find_value(data, ["CAPITAL"])
    capital_text = format_currency(capital) if isinstance(capital, (int, float)) else _text(capital)

    phone_1 = find_value(data, ["TELEFONE 1", "TEL 1", "CELULAR", "CONTATO 1"])
    if phone_1 in (None, ""):
        phone_1 = find_value(data, ["TELEFONE"])

    primary = record.primary_activity_code or find_value(data, ["PRINCIPAL"])
    return RecordCard(
        record_id=record.record_id,
        name=_text(find_value(data, ["RAZAO", "NOME"])),
        cnpj=_text(find_value(data, ["CNPJ"])),
        capital=capital_text,
        region=_text(record.region or find_value(data, ["UF", "ESTADO"])),
        primary_activity=_text(primary),
        primary_activity_description=describe_code(primary) if primary else None,
        legal_nature=_text(find_value(data, ["NATUREZA", "JURIDICA"])),
        partners=list(record.partner_list),
        secondary_activities=list(record.secondary_activity_list),
        phone_1=_text(phone_1),
        phone_2=_text(find_value(data, ["TELEFONE 2", "TEL 2", "CONTATO 2"])),
        email=_text(find_value(data, ["EMAIL", "E-MAIL", "CORREIO"])),
    )


def _summary_tables(summary: DashboardSummary) -> dict[str, list[TableRow]]:
    return {
        "Maiores Capitais Sociais": [
            TableRow(label=p.name, value=format_currency(p.value)) for p in summary.top_capital
        ],
        "Empresas com mais CNAEs Financeiros Secundários": [
            TableRow(label=p.name, value=str(int(p.value))) for p in summary.top_secondary_activity
        ],
        "CNAEs Financeiros mais Frequentes": [
            TableRow(label=f"{p.code} - {p.description}", value=str(int(p.value)))
            for p in summary.top_reference_codes
        ],
        "Evolução do Capital por Ano": [
            TableRow(label=p.name, value=format_currency(p.value)) for p in summary.capital_trend
        ],
        "Distribuição por UF": [
            TableRow(label=p.name, value=str(int(p.value))) for p in summary.regions
        ],
    }


def build_report(
    records: Sequence[NormalizedRecord],
    *,
    top_n: int = 10,
    generated_at: Optional[datetime] = None,
) -> Report:
    """Cards for ``records`` and the five aggregate tables over them."""
    summary = build_summary(records, top_n=top_n)
    return Report(
        generated_at=generated_at or datetime.now(timezone.utc),
        record_count=len(records),
        cards=[build_card(r) for r in records],
        tables=_summary_tables(summary),
    )


def _render_card(card: RecordCard) -> list[str]:
    primary = card.primary_activity
    if card.primary_activity_description:
        primary = f"{primary} - {card.primary_activity_description}"
    lines = [
        f"## {card.name}",
        "",
        f"- CNPJ: {card.cnpj}",
        f"- UF: {card.region}",
        f"- Capital Social: {card.capital}",
        f"- Natureza Jurídica: {card.legal_nature}",
        f"- CNAE Principal: {primary}",
        f"- Telefone 1: {card.phone_1}",
        f"- Telefone 2: {card.phone_2}",
        f"- E-mail: {card.email}",
        "",
        f"### Sócios ({len(card.partners)})",
    ]
    lines.extend(f"- {p}" for p in card.partners or [MISSING])
    lines += ["", f"### CNAEs Secundários ({len(card.secondary_activities)})"]
    for code in card.secondary_activities or [MISSING]:
        desc = describe_code(code) if code != MISSING else None
        lines.append(f"- {code} - {desc}" if desc else f"- {code}")
    return lines


def render_markdown(report: Report) -> str:
    """Paginated Markdown: one page per card, then a page of summary tables."""
    pages: list[list[str]] = [_render_card(c) for c in report.cards]
    summary: list[str] = ["## Resumo", ""]
    for title, rows in report.tables.items():
        summary += [f"### {title}", "", "| Item | Valor |", "| --- | --- |"]
        summary += [f"| {r.label} | {r.value} |" for r in rows] or ["| - | - |"]
        summary.append("")
    pages.append(summary)

    header = [
        f"# {report.title}",
        "",
        f"Gerado em {report.generated_at:%d/%m/%Y %H:%M} - {report.record_count} empresa(s)",
    ]
    out = list(header)
    total = len(pages)
    for number, page in enumerate(pages, start=1):
        out += ["", "---", f"<!-- página {number}/{total} -->", ""]
        out += page
    return "\n".join(out).rstrip() + "\n"
