"""Record filtering by activity code, region and legal nature."""

from .engine import FilterEngine, FilterResult
from .rules import legal_nature_code
from .selection import FilterSelection

__all__ = ["FilterEngine", "FilterResult", "FilterSelection", "legal_nature_code"]
