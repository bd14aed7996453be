"""Registry for building sources from configuration."""

from typing import Type

from cnpj_explorer.config import DashboardConfig

from .base import BaseSource
from .sheets import FileSource, SheetSource, UrlSource


class SourceRegistry:
    """Maps source kinds to their classes."""

    _sources: dict[str, Type[BaseSource]] = {
        "sheet": SheetSource,
        "url": UrlSource,
        "file": FileSource,
    }

    @classmethod
    def get(cls, kind: str, **kwargs) -> BaseSource:
        """Instantiate a source of the given kind. kwargs passed to the source __init__."""
        source_cls = cls._sources.get(kind.lower())
        if not source_cls:
            raise ValueError(f"Unknown source kind: {kind}. Available: {list(cls._sources.keys())}")
        return source_cls(**kwargs)

    @classmethod
    def available_kinds(cls) -> list[str]:
        return list(cls._sources.keys())

    @classmethod
    def from_config(cls, config: DashboardConfig) -> list[BaseSource]:
        """Sources in load order: sheet tabs, then URLs, then files."""
        sources: list[BaseSource] = []
        if config.sheet_id:
            sources.extend(
                cls.get("sheet", sheet_id=config.sheet_id, gid=gid) for gid in config.sheet_gids
            )
        sources.extend(cls.get("url", url=url) for url in config.urls)
        sources.extend(cls.get("file", path=path) for path in config.files)
        return sources
