"""Chart-ready aggregates over normalized records.

All functions are pure: they never mutate their input and sort stably, so
ties keep dataset order.
"""

from collections import Counter
from datetime import datetime
from typing import Optional, Sequence

from cnpj_explorer.keys import find_key
from cnpj_explorer.models.record import ChartDataPoint, CodeFrequencyPoint, NormalizedRecord
from cnpj_explorer.normalizing.values import MIN_YEAR_EXCLUSIVE, strip_non_digits
from cnpj_explorer.reference import ReferenceCodeSet, financial_codes

NAME_KEYWORDS = ("RAZAO", "NOME")
NAME_LENGTH = 20
MISSING_NAME = "Sem Nome"
# Brazil has 26 states plus the Federal District
MAX_REGIONS = 27


def display_name(record: NormalizedRecord, length: int = NAME_LENGTH) -> str:
    """Legal or trade name, truncated with an ellipsis past ``length`` characters."""
    key = find_key(record.data.keys(), NAME_KEYWORDS) or next(iter(record.data), None)
    value = record.data.get(key) if key is not None else None
    name = str(value).strip() if value not in (None, "") else MISSING_NAME
    if len(name) > length:
        return name[:length] + "..."
    return name


def top_by_capital(records: Sequence[NormalizedRecord], n: int = 10) -> list[ChartDataPoint]:
    """The ``n`` records with the largest capital."""
    ranked = sorted(records, key=lambda r: r.raw_capital or 0.0, reverse=True)
    return [
        ChartDataPoint(name=display_name(r), value=r.raw_capital or 0.0, source_record=r)
        for r in ranked[:n]
    ]


def financial_secondary_count(
    record: NormalizedRecord,
    codes: Optional[ReferenceCodeSet] = None,
) -> int:
    """How many of the record's secondary activities are reference codes."""
    digit_codes = (codes or financial_codes()).digit_codes
    return sum(1 for c in record.secondary_activity_list if strip_non_digits(c) in digit_codes)


def top_by_secondary_activity_count(
    records: Sequence[NormalizedRecord],
    n: int = 10,
    codes: Optional[ReferenceCodeSet] = None,
) -> list[ChartDataPoint]:
    """The ``n`` records with the most secondary activities in the reference set."""
    codes = codes or financial_codes()
    counted = [(r, financial_secondary_count(r, codes)) for r in records]
    counted.sort(key=lambda pair: pair[1], reverse=True)
    return [
        ChartDataPoint(name=display_name(r), value=count, source_record=r)
        for r, count in counted[:n]
    ]


def top_reference_code_frequency(
    records: Sequence[NormalizedRecord],
    n: int = 10,
    codes: Optional[ReferenceCodeSet] = None,
) -> list[CodeFrequencyPoint]:
    """
    For each reference code, the number of records carrying it as primary or
    secondary activity (each record counted once per code). Codes nobody
    carries are left out.
    """
    codes = codes or financial_codes()
    counts: Counter[str] = Counter()
    for record in records:
        carried = {strip_non_digits(c) for c in record.secondary_activity_list}
        if record.primary_activity_code:
            carried.add(strip_non_digits(record.primary_activity_code))
        counts.update(carried & codes.digit_codes)

    points = [
        CodeFrequencyPoint(name=ref.code, code=ref.code, description=ref.desc, value=counts[ref.digits])
        for ref in codes
        if counts[ref.digits] > 0
    ]
    points.sort(key=lambda p: p.value, reverse=True)
    return points[:n]


def capital_trend_by_year(
    records: Sequence[NormalizedRecord],
    *,
    today: Optional[datetime] = None,
) -> list[ChartDataPoint]:
    """Total capital per opening year, ascending. Years outside (1900, now] are ignored."""
    current = (today or datetime.now()).year
    totals: dict[int, float] = {}
    for record in records:
        if not record.year or not record.raw_capital:
            continue
        if MIN_YEAR_EXCLUSIVE < record.year <= current:
            totals[record.year] = totals.get(record.year, 0.0) + record.raw_capital
    return [ChartDataPoint(name=str(year), value=total) for year, total in sorted(totals.items())]


def region_distribution(records: Sequence[NormalizedRecord]) -> list[ChartDataPoint]:
    """Record count per UF, descending, at most 27 entries."""
    counts: dict[str, int] = {}
    for record in records:
        region = record.region
        if region and len(region) == 2:
            counts[region] = counts.get(region, 0) + 1
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [ChartDataPoint(name=uf, value=count) for uf, count in ranked[:MAX_REGIONS]]


def records_in_region(records: Sequence[NormalizedRecord], region: str) -> list[NormalizedRecord]:
    """Drill-down: the records of one UF."""
    code = region.strip().upper()
    return [r for r in records if r.region == code]
