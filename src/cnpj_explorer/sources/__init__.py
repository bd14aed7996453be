"""CSV sources and the dataset loader."""

from .base import BaseSource, SourceError
from .loader import DatasetLoader, LoadChunk, LoadError, LoadResult, SourceFailure
from .parsers import ParseWarning, looks_like_html, parse_csv
from .registry import SourceRegistry
from .sheets import FileSource, SheetSource, UrlSource

__all__ = [
    "BaseSource",
    "DatasetLoader",
    "FileSource",
    "LoadChunk",
    "LoadError",
    "LoadResult",
    "ParseWarning",
    "SheetSource",
    "SourceError",
    "SourceFailure",
    "SourceRegistry",
    "UrlSource",
    "looks_like_html",
    "parse_csv",
]
