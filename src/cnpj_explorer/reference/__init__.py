"""Reference code sets used by aggregation, filtering and display."""

from .codes import (
    ReferenceCode,
    ReferenceCodeSet,
    describe_code,
    financial_codes,
    legal_nature_options,
)

__all__ = [
    "ReferenceCode",
    "ReferenceCodeSet",
    "describe_code",
    "financial_codes",
    "legal_nature_options",
]
