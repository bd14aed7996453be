"""Dashboard configuration: YAML file plus environment overrides."""

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field

DEFAULT_SHEET_ID = "1EpXltXf1lIRTD604cvnkJwfVHWoPu9dWqSEfp2nr5A4"
DEFAULT_SHEET_GIDS = ["1578193024", "287609093", "1298660928"]


def _split_env(name: str) -> Optional[list[str]]:
    value = os.environ.get(name)
    if value is None:
        return None
    return [v.strip() for v in value.split(",") if v.strip()]


class DashboardConfig(BaseModel):
    """Where to load records from and how."""

    sheet_id: Optional[str] = Field(default=DEFAULT_SHEET_ID, description="Google spreadsheet id")
    sheet_gids: list[str] = Field(default_factory=lambda: list(DEFAULT_SHEET_GIDS))
    urls: list[str] = Field(default_factory=list, description="Extra CSV URLs")
    files: list[Path] = Field(default_factory=list, description="Local CSV files")

    timeout: float = Field(default=60.0, gt=0)
    max_workers: int = Field(default=4, ge=1)
    chunk_size: int = Field(default=500, ge=1)

    db_path: Path = Path("cnpj_explorer.db")

    @classmethod
    def from_yaml(cls, path: str | Path) -> "DashboardConfig":
        """Load from YAML. Supports nested (sources/loader) or flat structure."""
        data = yaml.safe_load(Path(path).read_text()) or {}
        sources = data.get("sources", {})
        loader = data.get("loader", {})

        def _get(key: str, nested: dict, top: dict, default=None):
            return nested.get(key, top.get(key, default))

        flat: dict[str, Any] = {}
        for key in ("sheet_id", "sheet_gids", "urls", "files"):
            value = _get(key, sources, data)
            if value is not None:
                flat[key] = value
        for key in ("timeout", "max_workers", "chunk_size"):
            value = _get(key, loader, data)
            if value is not None:
                flat[key] = value
        if data.get("db_path") is not None:
            flat["db_path"] = data["db_path"]
        if "sheet_gids" in flat:
            flat["sheet_gids"] = [str(g) for g in flat["sheet_gids"]]
        return cls.model_validate(flat)

    @classmethod
    def load(cls, path: Optional[str | Path] = None) -> "DashboardConfig":
        """Config from an optional YAML file, then CNPJ_EXPLORER_* environment overrides."""
        config = cls.from_yaml(path) if path else cls()
        return config.with_env_overrides()

    def with_env_overrides(self) -> "DashboardConfig":
        update: dict[str, Any] = {}
        sheet_id = os.environ.get("CNPJ_EXPLORER_SHEET_ID")
        if sheet_id is not None:
            update["sheet_id"] = sheet_id.strip() or None
        gids = _split_env("CNPJ_EXPLORER_SHEET_GIDS")
        if gids is not None:
            update["sheet_gids"] = gids
        urls = _split_env("CNPJ_EXPLORER_URLS")
        if urls is not None:
            update["urls"] = urls
        db_path = os.environ.get("CNPJ_EXPLORER_DB")
        if db_path:
            update["db_path"] = Path(db_path)
        return self.model_copy(update=update) if update else self
