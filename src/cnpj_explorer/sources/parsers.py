"""CSV parsing with header row, cell coercion and per-row warnings."""

import csv
from io import StringIO

from pydantic import BaseModel

from cnpj_explorer.models.raw import RawRecord
from cnpj_explorer.normalizing.values import coerce_cell

_HTML_PREFIXES = ("<!doctype html", "<html")


class ParseWarning(BaseModel):
    """A data row the CSV parser could only parse partially."""

    source_id: str
    row: int
    message: str


def looks_like_html(text: str) -> bool:
    """True for an HTML page (e.g. a login wall) served where CSV was expected."""
    return text.lstrip().lower().startswith(_HTML_PREFIXES)


def parse_csv(content: str, source_id: str = "") -> tuple[list[RawRecord], list[ParseWarning]]:
    """
    Parse CSV text using the first row as column names.
    Blank lines and all-blank rows are skipped. Ragged rows are kept
    best-effort (extra cells dropped, missing cells blank) and reported.
    """
    reader = csv.DictReader(StringIO(content.lstrip("\ufeff")))
    rows: list[RawRecord] = []
    warnings: list[ParseWarning] = []
    for index, row in enumerate(reader, start=1):
        extra = row.pop(None, None)  # type: ignore[call-overload]
        if extra:
            warnings.append(
                ParseWarning(
                    source_id=source_id,
                    row=index,
                    message=f"Too many fields: {len(extra)} extra value(s) dropped",
                )
            )
        elif any(v is None for v in row.values()):
            warnings.append(
                ParseWarning(source_id=source_id, row=index, message="Too few fields")
            )
        data = {k: coerce_cell(v) for k, v in row.items()}
        if all(v is None for v in data.values()):
            continue
        rows.append(RawRecord(source_id=source_id, data=data))
    return rows, warnings
