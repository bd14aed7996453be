"""Column classification by name heuristics.

Rules are evaluated in a fixed priority order and the first match wins, so a
column is never classified twice. Classification depends only on the set of
column names, so the result is cached per source schema.
"""

from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Callable, Optional

from cnpj_explorer.keys import normalize_key


class FieldCategory(str, Enum):
    """What a source column holds."""

    IDENTIFIER = "identifier"
    CURRENCY = "currency"
    DATE = "date"
    PARTNERS = "partners"
    SECONDARY_ACTIVITY = "secondary_activity"
    PRIMARY_ACTIVITY = "primary_activity"
    REGION = "region"
    PLAIN = "plain"


def _is_activity(key: str) -> bool:
    return "CNAE" in key or "ATIVIDADE" in key


# (predicate over the normalized key, category), checked in order
CLASSIFICATION_RULES: list[tuple[Callable[[str], bool], FieldCategory]] = [
    (lambda k: "CNPJ" in k, FieldCategory.IDENTIFIER),
    (lambda k: "CAPITAL" in k, FieldCategory.CURRENCY),
    (lambda k: "DATA" in k or "INICIO" in k, FieldCategory.DATE),
    (lambda k: "SOCIOS" in k or "QSA" in k, FieldCategory.PARTNERS),
    (lambda k: _is_activity(k) and "SECUNDARI" in k, FieldCategory.SECONDARY_ACTIVITY),
    (
        lambda k: _is_activity(k) and ("PRIMARIO" in k or "PRINCIPAL" in k),
        FieldCategory.PRIMARY_ACTIVITY,
    ),
    (lambda k: k == "UF" or "ESTADO" in k, FieldCategory.REGION),
]


def classify_key(key: str) -> FieldCategory:
    """Category of a single column name (case- and accent-insensitive)."""
    upper = normalize_key(key)
    for predicate, category in CLASSIFICATION_RULES:
        if predicate(upper):
            return category
    return FieldCategory.PLAIN


@dataclass(frozen=True)
class ColumnSchema:
    """
    Classification of one source's header.

    Singular derived fields (capital, date, primary activity, region) read the
    first matching column; list fields read the last one.
    """

    categories: dict[str, FieldCategory]
    capital_key: Optional[str] = None
    date_key: Optional[str] = None
    region_key: Optional[str] = None
    primary_activity_key: Optional[str] = None
    partners_key: Optional[str] = None
    secondary_activity_key: Optional[str] = None

    def category(self, key: str) -> FieldCategory:
        return self.categories.get(key, FieldCategory.PLAIN)


@lru_cache(maxsize=256)
def classify_columns(keys: tuple[str, ...]) -> ColumnSchema:
    """Classify every column of a header once; cached by the exact key tuple."""
    categories: dict[str, FieldCategory] = {}
    first: dict[FieldCategory, str] = {}
    last: dict[FieldCategory, str] = {}
    for key in keys:
        category = classify_key(key)
        categories[key] = category
        first.setdefault(category, key)
        last[category] = key
    return ColumnSchema(
        categories=categories,
        capital_key=first.get(FieldCategory.CURRENCY),
        date_key=first.get(FieldCategory.DATE),
        region_key=first.get(FieldCategory.REGION),
        primary_activity_key=first.get(FieldCategory.PRIMARY_ACTIVITY),
        partners_key=last.get(FieldCategory.PARTNERS),
        secondary_activity_key=last.get(FieldCategory.SECONDARY_ACTIVITY),
    )
