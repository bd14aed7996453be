"""Report export and company comparison."""

from .builder import Report, RecordCard, TableRow, build_card, build_report, render_markdown
from .comparison import COMPARISON_ROWS, ComparisonRow, compare_records

__all__ = [
    "COMPARISON_ROWS",
    "ComparisonRow",
    "RecordCard",
    "Report",
    "TableRow",
    "build_card",
    "build_report",
    "compare_records",
    "render_markdown",
]
