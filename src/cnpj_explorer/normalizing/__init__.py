"""Column classification and row/value normalization."""

from .classifier import ColumnSchema, FieldCategory, classify_columns, classify_key
from .row import analyze_columns, normalize_row
from .values import (
    coerce_cell,
    extract_year,
    format_cnpj,
    format_currency,
    format_date,
    normalize_currency,
    normalize_region,
    parse_currency,
    parse_date,
    split_list,
    strip_non_digits,
)

__all__ = [
    "ColumnSchema",
    "FieldCategory",
    "analyze_columns",
    "classify_columns",
    "classify_key",
    "coerce_cell",
    "extract_year",
    "format_cnpj",
    "format_currency",
    "format_date",
    "normalize_currency",
    "normalize_region",
    "normalize_row",
    "parse_currency",
    "parse_date",
    "split_list",
    "strip_non_digits",
]
