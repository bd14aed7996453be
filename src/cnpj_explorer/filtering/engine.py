"""Filter engine with per-dimension rules and explanation trail."""

from typing import Callable, Optional, Sequence

from pydantic import BaseModel, Field

from cnpj_explorer.models.record import NormalizedRecord

from .rules import apply_activity_rule, apply_legal_nature_rule, apply_region_rule
from .selection import FilterSelection


class FilterResult(BaseModel):
    """Result of filtering a record against a selection."""

    passed: bool = Field(..., description="All selected dimensions matched")
    explanations: list[str] = Field(default_factory=list)
    record: NormalizedRecord = Field(..., description="The record that was filtered")
    excluded_by_rule: Optional[str] = Field(
        default=None,
        description="First rule that excluded (activity|region|legal_nature)",
    )


RuleFn = Callable[[NormalizedRecord, FilterSelection], tuple[bool, str]]


class FilterEngine:
    """Applies the conjunction of the non-empty selection dimensions."""

    def __init__(self, selection: Optional[FilterSelection] = None):
        self.selection = selection or FilterSelection()
        self._rules: list[tuple[str, RuleFn]] = [
            ("activity", apply_activity_rule),
            ("region", apply_region_rule),
            ("legal_nature", apply_legal_nature_rule),
        ]

    def filter(self, record: NormalizedRecord) -> FilterResult:
        """Apply all rules and return FilterResult with explanation trail."""
        explanations: list[str] = []
        excluded_by: Optional[str] = None

        for rule_id, rule_fn in self._rules:
            passed, explanation = rule_fn(record, self.selection)
            explanations.append(explanation)
            if not passed and excluded_by is None:
                excluded_by = rule_id

        return FilterResult(
            passed=excluded_by is None,
            explanations=explanations,
            record=record,
            excluded_by_rule=excluded_by,
        )

    def filter_many(self, records: Sequence[NormalizedRecord]) -> list[FilterResult]:
        """Filter multiple records; returns all with full results."""
        return [self.filter(r) for r in records]

    def filter_passed(self, records: Sequence[NormalizedRecord]) -> list[NormalizedRecord]:
        """The matching records in dataset order (a new list, same record objects)."""
        if self.selection.is_empty:
            return list(records)
        return [r for r in records if self.filter(r).passed]
