"""Data models for raw and normalized registry records."""

from cnpj_explorer.models.raw import CellValue, RawRecord
from cnpj_explorer.models.record import (
    ChartDataPoint,
    CodeFrequencyPoint,
    ColumnMeta,
    NormalizedRecord,
)

__all__ = [
    "CellValue",
    "ChartDataPoint",
    "CodeFrequencyPoint",
    "ColumnMeta",
    "NormalizedRecord",
    "RawRecord",
]
