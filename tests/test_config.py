"""Unit tests for DashboardConfig."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from cnpj_explorer.config import DEFAULT_SHEET_GIDS, DEFAULT_SHEET_ID, DashboardConfig


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "CNPJ_EXPLORER_SHEET_ID",
        "CNPJ_EXPLORER_SHEET_GIDS",
        "CNPJ_EXPLORER_URLS",
        "CNPJ_EXPLORER_DB",
    ):
        monkeypatch.delenv(name, raising=False)


class TestDashboardConfig:
    """Defaults, YAML loading and environment overrides."""

    def test_defaults(self) -> None:
        config = DashboardConfig()
        assert config.sheet_id == DEFAULT_SHEET_ID
        assert config.sheet_gids == DEFAULT_SHEET_GIDS
        assert config.urls == []
        assert config.chunk_size == 500

    def test_from_yaml_nested(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text(
            "sources:\n"
            "  sheet_id: xyz\n"
            "  sheet_gids: [10, 20]\n"
            "  urls:\n"
            "    - https://example.com/a.csv\n"
            "loader:\n"
            "  max_workers: 2\n"
            "  chunk_size: 100\n"
            "db_path: data/fav.db\n"
        )
        config = DashboardConfig.from_yaml(path)
        assert config.sheet_id == "xyz"
        assert config.sheet_gids == ["10", "20"]
        assert config.urls == ["https://example.com/a.csv"]
        assert config.max_workers == 2
        assert config.chunk_size == 100
        assert config.db_path == Path("data/fav.db")

    def test_from_yaml_flat(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("sheet_id: flat\nfiles: [a.csv]\ntimeout: 5\n")
        config = DashboardConfig.from_yaml(path)
        assert config.sheet_id == "flat"
        assert config.files == [Path("a.csv")]
        assert config.timeout == 5.0
        assert config.sheet_gids == DEFAULT_SHEET_GIDS

    def test_from_yaml_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert DashboardConfig.from_yaml(path) == DashboardConfig()

    def test_invalid_chunk_size(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("loader:\n  chunk_size: 0\n")
        with pytest.raises(ValidationError):
            DashboardConfig.from_yaml(path)

    def test_env_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CNPJ_EXPLORER_SHEET_GIDS", "1, 2 ,")
        monkeypatch.setenv("CNPJ_EXPLORER_URLS", "https://example.com/a.csv")
        monkeypatch.setenv("CNPJ_EXPLORER_DB", "/tmp/fav.db")
        config = DashboardConfig.load()
        assert config.sheet_gids == ["1", "2"]
        assert config.urls == ["https://example.com/a.csv"]
        assert config.db_path == Path("/tmp/fav.db")
        assert config.sheet_id == DEFAULT_SHEET_ID

    def test_blank_sheet_id_env_disables_sheet(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CNPJ_EXPLORER_SHEET_ID", "")
        assert DashboardConfig.load().sheet_id is None

    def test_env_wins_over_yaml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("sheet_id: from-yaml\n")
        monkeypatch.setenv("CNPJ_EXPLORER_SHEET_ID", "from-env")
        assert DashboardConfig.load(path).sheet_id == "from-env"
