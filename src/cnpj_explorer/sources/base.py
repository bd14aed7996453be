"""Abstract base class for CSV sources."""

from abc import ABC, abstractmethod
from typing import Optional

import httpx


class SourceError(Exception):
    """A source could not deliver CSV text. Handled inside the loader."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class BaseSource(ABC):
    """
    One spreadsheet export (a sheet tab, a URL or a local file).
    Implementations return the raw CSV text or raise.
    """

    source_id: str = ""

    @abstractmethod
    def fetch_text(self, client: httpx.Client) -> str:
        """Return the CSV body. Raise SourceError/httpx.HTTPError/OSError on failure."""
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.source_id!r})"
