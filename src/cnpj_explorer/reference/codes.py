"""Reference activity codes (financial services) and legal-nature options."""

from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel

from cnpj_explorer.normalizing.values import strip_non_digits

_DATA_DIR = Path(__file__).parent / "data"


class ReferenceCode(BaseModel):
    """Activity code and its description."""

    code: str
    desc: str

    @property
    def digits(self) -> str:
        return strip_non_digits(self.code)


class ReferenceCodeSet:
    """
    Code -> description mapping compared on digits only, so "6611-8/01",
    "6611801" and "6611.8-01" are the same code.
    """

    def __init__(self, codes: list[ReferenceCode]):
        self._codes = list(codes)
        self._by_digits: dict[str, ReferenceCode] = {}
        for c in self._codes:
            self._by_digits.setdefault(c.digits, c)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "ReferenceCodeSet":
        """Load a list of {code, desc} entries."""
        data: Any = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or []
        return cls([ReferenceCode.model_validate(item) for item in data])

    def __iter__(self):
        return iter(self._codes)

    def __len__(self) -> int:
        return len(self._codes)

    def __contains__(self, code: object) -> bool:
        return strip_non_digits(code) in self._by_digits

    @property
    def digit_codes(self) -> frozenset[str]:
        return frozenset(self._by_digits)

    def describe(self, code: Any) -> Optional[str]:
        """Description for a code in any punctuation, or None."""
        found = self._by_digits.get(strip_non_digits(code))
        return found.desc if found else None


@lru_cache(maxsize=1)
def financial_codes() -> ReferenceCodeSet:
    """Bundled financial-services code set."""
    return ReferenceCodeSet.from_yaml(_DATA_DIR / "financial_cnae.yaml")


@lru_cache(maxsize=1)
def legal_nature_options() -> tuple[str, ...]:
    """Bundled legal-nature options, e.g. "206-2 - Sociedade Empresária Limitada"."""
    data = yaml.safe_load((_DATA_DIR / "legal_nature.yaml").read_text(encoding="utf-8")) or []
    return tuple(str(item) for item in data)


def describe_code(code: Any) -> Optional[str]:
    """Description of a financial activity code, or None when it is not in the set."""
    return financial_codes().describe(code)
