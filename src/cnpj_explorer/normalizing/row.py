"""Row normalization: classified columns -> NormalizedRecord."""

from typing import Any, Optional, Sequence

from cnpj_explorer.keys import DERIVED_PREFIX
from cnpj_explorer.models.raw import RawRecord
from cnpj_explorer.models.record import ColumnMeta, ColumnType, NormalizedRecord

from .classifier import FieldCategory, classify_columns, classify_key
from .values import (
    extract_year,
    format_cnpj,
    format_currency,
    format_date,
    normalize_activity_code,
    normalize_region,
    parse_currency,
    split_list,
)

_COLUMN_TYPES: dict[FieldCategory, ColumnType] = {
    FieldCategory.CURRENCY: "currency",
    FieldCategory.DATE: "date",
    FieldCategory.PARTNERS: "list",
    FieldCategory.SECONDARY_ACTIVITY: "list",
}


def normalize_row(raw: RawRecord) -> NormalizedRecord:
    """
    Normalize one raw row. Source columns are kept (tax id, capital, dates and
    partners reformatted for display) and derived fields are filled from the
    columns the classifier picked for this header.
    """
    schema = classify_columns(raw.keys())
    data: dict[str, Any] = {}
    raw_capital: Optional[float] = None
    year: Optional[int] = None
    region: Optional[str] = None
    primary_code: Optional[str] = None
    partners: list[str] = []
    secondary: list[str] = []

    for key, value in raw.data.items():
        category = schema.category(key)

        if category is FieldCategory.IDENTIFIER:
            value = format_cnpj(value)

        elif category is FieldCategory.CURRENCY and value is not None:
            amount = parse_currency(value)
            if key == schema.capital_key:
                raw_capital = max(amount, 0.0) if amount is not None else 0.0
            if amount is not None:
                value = format_currency(amount)

        elif category is FieldCategory.DATE and value is not None:
            if key == schema.date_key:
                year = extract_year(value)
            value = format_date(value)

        elif category is FieldCategory.PARTNERS:
            items = split_list(value)
            if key == schema.partners_key:
                partners = items
            if isinstance(value, str):
                value = "; ".join(items)

        elif category is FieldCategory.SECONDARY_ACTIVITY:
            if key == schema.secondary_activity_key:
                secondary = split_list(value)

        elif category is FieldCategory.PRIMARY_ACTIVITY:
            if key == schema.primary_activity_key:
                primary_code = normalize_activity_code(value)

        elif category is FieldCategory.REGION:
            if key == schema.region_key:
                region = normalize_region(value)

        data[key] = value

    return NormalizedRecord(
        source_id=raw.source_id,
        data=data,
        raw_capital=raw_capital,
        region=region,
        year=year,
        partner_list=partners,
        primary_activity_code=primary_code,
        secondary_activity_list=secondary,
    )


def analyze_columns(records: Sequence[NormalizedRecord]) -> list[ColumnMeta]:
    """
    Infer a display type per source column of the first record.
    Name heuristics decide currency/date/list; otherwise the first non-empty
    value decides number/boolean/string.
    """
    if not records:
        return []
    keys = [k for k in records[0].data if not k.startswith(DERIVED_PREFIX)]
    columns: list[ColumnMeta] = []
    for key in keys:
        col_type: ColumnType = _COLUMN_TYPES.get(classify_key(key), "string")
        if col_type == "string":
            sample = next(
                (r.data[key] for r in records if r.data.get(key) not in (None, "")),
                None,
            )
            if isinstance(sample, bool):
                col_type = "boolean"
            elif isinstance(sample, (int, float)):
                col_type = "number"
        unique = {str(r.data[key]) for r in records if r.data.get(key) not in (None, "")}
        columns.append(
            ColumnMeta(accessor_key=key, header=key, type=col_type, unique_values=len(unique))
        )
    return columns
