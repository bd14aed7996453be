"""Cell-level parsing and formatting. Nothing here raises on bad input."""

import math
import re
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Any, Optional, Union

from cnpj_explorer.models.raw import CellValue

DATE_FORMATS = (
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%d/%m/%Y",
)
DISPLAY_DATE_FORMAT = "%d/%m/%Y"
MIN_YEAR_EXCLUSIVE = 1900

CURRENCY_SYMBOL = "R$"
# Intl pt-BR puts a no-break space between symbol and amount
CURRENCY_SEPARATOR = "\u00a0"

# Same shape the spreadsheet parser treats as a number
_NUMERIC_CELL = re.compile(r"^\s*-?(\d+\.?|\.\d+|\d+\.\d+)([eE][-+]?\d+)?\s*$")
# Leading numeric prefix, like JavaScript parseFloat
_NUMBER_PREFIX = re.compile(r"^[-+]?(\d+\.?\d*|\.\d+)([eE][-+]?\d+)?")
_CURRENCY_NOISE = re.compile(r"[^\d,.\-]")
_NON_DIGIT = re.compile(r"\D")
_REGION_CODE = re.compile(r"[A-Z]{2}")
_THOUSANDS = str.maketrans(",.", ".,")


def coerce_cell(value: Optional[str]) -> CellValue:
    """
    Resolve a CSV cell to text, a number, or None.
    Blank cells are None; numeric text becomes int/float unless it has a
    leading zero (tax ids, postal codes and phone numbers keep their digits).
    """
    if value is None:
        return None
    text = value.strip()
    if not text:
        return None
    if not _NUMERIC_CELL.match(text):
        return value
    unsigned = text.lstrip("-")
    if len(unsigned) > 1 and unsigned[0] == "0" and unsigned[1] != ".":
        return value
    if re.fullmatch(r"-?\d+", text):
        return int(text)
    return float(text)


def strip_non_digits(value: Any) -> str:
    """Digits only: "6611-8/01" -> "6611801"."""
    if value is None:
        return ""
    return _NON_DIGIT.sub("", str(value))


def parse_currency(value: Any) -> Optional[float]:
    """
    Parse a BRL amount, or None when nothing numeric is found.
    Periods are thousands separators and the first comma is the decimal mark.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        clean = _CURRENCY_NOISE.sub("", str(value)).replace(".", "").replace(",", ".", 1)
        match = _NUMBER_PREFIX.match(clean)
        if not match:
            return None
        number = float(match.group())
    if not math.isfinite(number):
        return None
    return number


def normalize_currency(value: Any) -> float:
    """Parse a BRL amount ("R$ 1.234,56" -> 1234.56); unparseable is 0.0."""
    parsed = parse_currency(value)
    return 0.0 if parsed is None else parsed


def format_currency(value: Union[int, float, Decimal, str]) -> str:
    """
    Format as pt-BR BRL, e.g. 1234.56 -> "R$ 1.234,56".
    Two decimals rounded half-up. Formatted strings are parsed first, so
    applying this twice gives the same text.
    """
    if isinstance(value, str):
        value = normalize_currency(value)
    exact = Decimal(str(value))
    if not exact.is_finite():
        return str(value)
    # quantize needs room for every integer digit plus the two decimals
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, exact.adjusted() + 4)
        amount = exact.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
        digits = f"{abs(amount):,.2f}".translate(_THOUSANDS)
    sign = "-" if amount < 0 else ""
    return f"{sign}{CURRENCY_SYMBOL}{CURRENCY_SEPARATOR}{digits}"


def parse_date(value: Any) -> Optional[datetime]:
    """Parse a registry date; None when no known format fits."""
    if value is None or isinstance(value, bool):
        return None
    text = str(value).strip()
    if not text:
        return None
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text[:19], fmt)
        except (ValueError, TypeError):
            continue
    return None


def format_date(value: Any) -> Any:
    """Reformat to dd/mm/yyyy; unparseable values come back unchanged."""
    parsed = parse_date(value)
    if parsed is None:
        return value
    return parsed.strftime(DISPLAY_DATE_FORMAT)


def extract_year(value: Any, *, today: Optional[datetime] = None) -> Optional[int]:
    """
    Year of a parseable date cell, or None. Cells that do not parse as a date
    give no year. Only years in (1900, current year] are kept.
    """
    if value is None or isinstance(value, bool):
        return None
    parsed = parse_date(value)
    if parsed is None:
        return None
    year = parsed.year
    current = (today or datetime.now()).year
    if MIN_YEAR_EXCLUSIVE < year <= current:
        return year
    return None


def split_list(value: Any) -> list[str]:
    """Split a ";"-separated cell into trimmed, non-empty items. Duplicates stay."""
    if value is None or isinstance(value, bool):
        return []
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return [item.strip() for item in str(value).split(";") if item.strip()]


def format_cnpj(value: Any) -> Any:
    """
    Format a tax id as NN.NNN.NNN/NNNN-NN, left-padding with zeros.
    Values with no digits or more than 14 digits come back unchanged.
    """
    if value is None or isinstance(value, bool):
        return value
    digits = strip_non_digits(value)
    if not digits or len(digits) > 14:
        return value
    v = digits.zfill(14)
    return f"{v[:2]}.{v[2:5]}.{v[5:8]}/{v[8:12]}-{v[12:]}"


def normalize_region(value: Any) -> Optional[str]:
    """Trim and upper-case a UF cell; anything but two letters is None."""
    if value is None or isinstance(value, bool):
        return None
    code = str(value).strip().upper()
    if _REGION_CODE.fullmatch(code):
        return code
    return None


def normalize_activity_code(value: Any) -> Optional[str]:
    """Primary activity cell as text; blank is None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    text = str(value).strip()
    return text or None
