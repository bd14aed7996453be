"""Raw spreadsheet row before normalization."""

from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

# A cell after ingestion: text, a number, or absent.
CellValue = Optional[Union[str, int, float]]


class RawRecord(BaseModel):
    """
    One parsed CSV row keyed by the column names as they appear in the source.
    Column names are not standardized across sources.
    """

    model_config = ConfigDict(extra="allow")

    source_id: str = ""
    data: dict[str, Any] = Field(default_factory=dict)

    def keys(self) -> tuple[str, ...]:
        """Column names in source order."""
        return tuple(self.data.keys())
