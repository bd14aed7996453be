"""Normalized record and the chart/column shapes derived from it."""

import json
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field

from cnpj_explorer.keys import DERIVED_PREFIX, find_key


class NormalizedRecord(BaseModel):
    """
    Canonical company row. ``data`` holds the source columns (some reformatted
    for display); the remaining attributes are derived during normalization.
    Records are frozen: filtering and aggregation share them by reference.
    """

    model_config = ConfigDict(frozen=True)

    source_id: str = ""
    data: dict[str, Any] = Field(default_factory=dict)

    raw_capital: Optional[float] = Field(
        default=None,
        description="Parsed capital in BRL; 0 when the capital cell is unparseable",
    )
    region: Optional[str] = Field(default=None, description="Two-letter UF code")
    year: Optional[int] = Field(default=None, description="Year of the opening date")

    partner_list: list[str] = Field(default_factory=list)
    primary_activity_code: Optional[str] = None
    secondary_activity_list: list[str] = Field(default_factory=list)

    @computed_field
    @property
    def partner_count(self) -> int:
        return len(self.partner_list)

    @computed_field
    @property
    def secondary_activity_count(self) -> int:
        return len(self.secondary_activity_list)

    @property
    def record_id(self) -> str:
        """Tax id when the row has a CNPJ column, else a stable rendering of the row."""
        key = find_key(self.data.keys(), ["CNPJ"])
        if key is not None and self.data.get(key) not in (None, ""):
            return str(self.data[key])
        return json.dumps(self.data, sort_keys=True, default=str, ensure_ascii=False)

    def as_row(self) -> dict[str, Any]:
        """Flatten to one mapping: source columns plus prefixed derived fields."""
        row = dict(self.data)
        if self.raw_capital is not None:
            row[f"{DERIVED_PREFIX}raw_capital"] = self.raw_capital
        if self.region is not None:
            row[f"{DERIVED_PREFIX}uf"] = self.region
        if self.year is not None:
            row[f"{DERIVED_PREFIX}year"] = self.year
        row[f"{DERIVED_PREFIX}socios_list"] = list(self.partner_list)
        row[f"{DERIVED_PREFIX}socios_count"] = self.partner_count
        if self.primary_activity_code is not None:
            row[f"{DERIVED_PREFIX}cnae_principal"] = self.primary_activity_code
        row[f"{DERIVED_PREFIX}cnae_sec_list"] = list(self.secondary_activity_list)
        row[f"{DERIVED_PREFIX}cnae_sec_count"] = self.secondary_activity_count
        return row


class ChartDataPoint(BaseModel):
    """One bar/point of an aggregate; ``source_record`` is kept for drill-down."""

    name: str
    value: float
    source_record: Optional[NormalizedRecord] = None


class CodeFrequencyPoint(ChartDataPoint):
    """Reference-code frequency with the code's description."""

    code: str
    description: str


ColumnType = Literal["string", "number", "date", "boolean", "currency", "list"]


class ColumnMeta(BaseModel):
    """Inferred display type of a source column."""

    accessor_key: str
    header: str
    type: ColumnType = "string"
    unique_values: int = 0
