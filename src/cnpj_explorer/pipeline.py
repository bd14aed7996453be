"""Pipeline orchestration: load → filter → aggregate."""

from typing import Iterable, Optional, Sequence

import httpx
from pydantic import BaseModel, Field

from cnpj_explorer.aggregation import (
    capital_trend_by_year,
    region_distribution,
    top_by_capital,
    top_by_secondary_activity_count,
    top_reference_code_frequency,
)
from cnpj_explorer.config import DashboardConfig
from cnpj_explorer.filtering import FilterEngine, FilterSelection
from cnpj_explorer.models.record import ChartDataPoint, CodeFrequencyPoint, NormalizedRecord
from cnpj_explorer.sources import DatasetLoader, LoadError, LoadResult, SourceRegistry
from cnpj_explorer.store import select_favorites


class DashboardSummary(BaseModel):
    """Filtered records and the five chart aggregates."""

    records: list[NormalizedRecord] = Field(default_factory=list)
    top_capital: list[ChartDataPoint] = Field(default_factory=list)
    top_secondary_activity: list[ChartDataPoint] = Field(default_factory=list)
    top_reference_codes: list[CodeFrequencyPoint] = Field(default_factory=list)
    capital_trend: list[ChartDataPoint] = Field(default_factory=list)
    regions: list[ChartDataPoint] = Field(default_factory=list)


def build_loader(config: DashboardConfig, client: Optional[httpx.Client] = None) -> DatasetLoader:
    """Loader over the sources the config describes."""
    return DatasetLoader(
        SourceRegistry.from_config(config),
        client,
        max_workers=config.max_workers,
        chunk_size=config.chunk_size,
        timeout=config.timeout,
    )


def load_dataset(config: DashboardConfig, client: Optional[httpx.Client] = None) -> LoadResult:
    """Load all configured sources. Raises LoadError when nothing loaded."""
    loader = build_loader(config, client)
    try:
        result = loader.load()
    finally:
        if client is None:
            loader.close()
    if result is None:
        raise LoadError("Load was superseded by a newer load")
    return result


def build_summary(
    records: Sequence[NormalizedRecord],
    selection: Optional[FilterSelection] = None,
    *,
    top_n: int = 10,
    favorite_ids: Optional[Iterable[str]] = None,
) -> DashboardSummary:
    """
    Filter records (optionally to favorites only) and compute every aggregate
    over the filtered view.
    """
    filtered = FilterEngine(selection).filter_passed(records)
    if favorite_ids is not None:
        filtered = select_favorites(filtered, favorite_ids)

    return DashboardSummary(
        records=filtered,
        top_capital=top_by_capital(filtered, top_n),
        top_secondary_activity=top_by_secondary_activity_count(filtered, top_n),
        top_reference_codes=top_reference_code_frequency(filtered, top_n),
        capital_trend=capital_trend_by_year(filtered),
        regions=region_distribution(filtered),
    )
