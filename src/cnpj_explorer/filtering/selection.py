"""User selections for the filter engine."""

from pydantic import BaseModel, Field, field_validator


class FilterSelection(BaseModel):
    """
    Selected values per dimension. An empty dimension places no constraint;
    non-empty dimensions are combined with AND.
    """

    activity_codes: list[str] = Field(default_factory=list, description="e.g. ['6611-8/01']")
    regions: list[str] = Field(default_factory=list, description="UF codes, e.g. ['SP', 'RJ']")
    legal_natures: list[str] = Field(
        default_factory=list,
        description="Options like '206-2 - Sociedade Empresária Limitada'",
    )

    @field_validator("regions")
    @classmethod
    def _upper_regions(cls, value: list[str]) -> list[str]:
        return [r.strip().upper() for r in value if r.strip()]

    @property
    def is_empty(self) -> bool:
        return not (self.activity_codes or self.regions or self.legal_natures)
