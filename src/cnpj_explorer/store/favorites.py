"""Favorites: record ids starred by the user, kept in a SQLite key/value table."""

import json
import logging
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, Sequence

from cnpj_explorer.models.record import NormalizedRecord

logger = logging.getLogger(__name__)

FAVORITES_KEY = "company_favorites"


class FavoritesStore:
    """
    Set of favorite record ids stored as one JSON array under a fixed key.
    Read on construction (and again by ``load()``) and rewritten on every
    ``toggle()``. Assumes a single writer.
    """

    def __init__(self, db_path: str | Path = "cnpj_explorer.db", key: str = FAVORITES_KEY):
        self._db_path = Path(db_path)
        self._key = key
        self._ids: dict[str, None] = {}
        self._ensure_schema()
        self.load()

    def _connection(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        schema_path = Path(__file__).parent / "schema.sql"
        with self._connection() as conn:
            conn.executescript(schema_path.read_text())

    def load(self) -> frozenset[str]:
        """Read the stored list; a corrupt payload loads as empty."""
        with self._connection() as conn:
            row = conn.execute("SELECT value FROM kv_store WHERE key = ?", (self._key,)).fetchone()
        self._ids = {}
        if row is None:
            return self.snapshot()
        try:
            stored = json.loads(row["value"])
        except json.JSONDecodeError as e:
            logger.error("Failed to load favorites: %s", e)
            return self.snapshot()
        if not isinstance(stored, list):
            logger.error("Failed to load favorites: expected a list, got %s", type(stored).__name__)
            return self.snapshot()
        self._ids = {str(i): None for i in stored}
        return self.snapshot()

    def toggle(self, record_id: str) -> bool:
        """Add or remove an id and persist. Returns True when it is now a favorite."""
        if record_id in self._ids:
            del self._ids[record_id]
            is_favorite = False
        else:
            self._ids[record_id] = None
            is_favorite = True
        self._write()
        return is_favorite

    def snapshot(self) -> frozenset[str]:
        return frozenset(self._ids)

    def ids(self) -> list[str]:
        """Favorite ids in the order they were added."""
        return list(self._ids)

    def is_favorite(self, record_id: str) -> bool:
        return record_id in self._ids

    def _write(self) -> None:
        now = datetime.now(timezone.utc).isoformat()
        payload = json.dumps(list(self._ids), ensure_ascii=False)
        with self._connection() as conn:
            conn.execute(
                """
                INSERT INTO kv_store (key, value, updated_at) VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at
                """,
                (self._key, payload, now),
            )
            conn.commit()


def select_favorites(
    records: Sequence[NormalizedRecord],
    favorite_ids: Iterable[str],
) -> list[NormalizedRecord]:
    """Records whose id is a favorite, in dataset order."""
    ids = set(favorite_ids)
    return [r for r in records if r.record_id in ids]
