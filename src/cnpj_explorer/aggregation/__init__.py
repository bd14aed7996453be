"""Aggregates for charts and reports."""

from .aggregators import (
    MAX_REGIONS,
    MISSING_NAME,
    capital_trend_by_year,
    display_name,
    financial_secondary_count,
    records_in_region,
    region_distribution,
    top_by_capital,
    top_by_secondary_activity_count,
    top_reference_code_frequency,
)

__all__ = [
    "MAX_REGIONS",
    "MISSING_NAME",
    "capital_trend_by_year",
    "display_name",
    "financial_secondary_count",
    "records_in_region",
    "region_distribution",
    "top_by_capital",
    "top_by_secondary_activity_count",
    "top_reference_code_frequency",
]
