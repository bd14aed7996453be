"""Column-name heuristics shared by the classifier, aggregators and report."""

import unicodedata
from typing import Any, Iterable, Mapping, Optional

# Prefix reserved for derived fields when a record is flattened to a row.
DERIVED_PREFIX = "_"


def normalize_key(key: str) -> str:
    """Upper-case a column name and strip accents ("Sócios" -> "SOCIOS")."""
    base = unicodedata.normalize("NFKD", str(key))
    base = "".join(ch for ch in base if not unicodedata.combining(ch))
    return base.upper().strip()


def find_key(keys: Iterable[str], keywords: Iterable[str]) -> Optional[str]:
    """First key whose normalized name contains any keyword; derived keys are skipped."""
    words = [normalize_key(w) for w in keywords]
    for key in keys:
        if key.startswith(DERIVED_PREFIX):
            continue
        upper = normalize_key(key)
        if any(w in upper for w in words):
            return key
    return None


def find_value(row: Mapping[str, Any], keywords: Iterable[str]) -> Any:
    """Value of the first column matching any keyword, or None."""
    key = find_key(row.keys(), keywords)
    if key is None:
        return None
    return row.get(key)
