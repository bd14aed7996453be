"""Filter rules: each returns (passed, explanation)."""

from cnpj_explorer.keys import find_key
from cnpj_explorer.models.record import NormalizedRecord
from cnpj_explorer.normalizing.values import strip_non_digits

from .selection import FilterSelection

LEGAL_NATURE_KEYWORDS = ("NATUREZA", "JURIDICA")


def legal_nature_code(option: str) -> str:
    """Leading code of a legal-nature option: "206-2 - Sociedade ..." -> "206"."""
    return option.split("-")[0].strip().upper()


def apply_activity_rule(record: NormalizedRecord, selection: FilterSelection) -> tuple[bool, str]:
    """
    Activity codes: any selected code (digits only) is a substring of the
    primary code or of one of the secondary codes, so "66" also matches "1660".
    Selections without digits are ignored.
    """
    wanted = [(code, strip_non_digits(code)) for code in selection.activity_codes]
    wanted = [(code, clean) for code, clean in wanted if clean]
    if not wanted:
        return True, "Activity filter not set"

    primary = strip_non_digits(record.primary_activity_code)
    secondary = [strip_non_digits(c) for c in record.secondary_activity_list]
    for code, clean in wanted:
        if clean in primary:
            return True, f"Primary activity matches {code}"
        if any(clean in s for s in secondary):
            return True, f"Secondary activity matches {code}"
    return False, "Excluded: no selected activity code"


def apply_region_rule(record: NormalizedRecord, selection: FilterSelection) -> tuple[bool, str]:
    """Region: exact membership of the record's UF."""
    if not selection.regions:
        return True, "Region filter not set"
    if record.region in selection.regions:
        return True, f"Matches region: {record.region}"
    return False, f"Excluded: region {record.region or 'unknown'} not selected"


def apply_legal_nature_rule(record: NormalizedRecord, selection: FilterSelection) -> tuple[bool, str]:
    """
    Legal nature: the code before the first dash of a selected option appears
    in the record's NATUREZA/JURIDICA column. Records without that column fail.
    """
    if not selection.legal_natures:
        return True, "Legal nature filter not set"

    key = find_key(record.data.keys(), LEGAL_NATURE_KEYWORDS)
    if key is None:
        return False, "Excluded: no legal nature column"
    value = str(record.data.get(key)).upper()
    for option in selection.legal_natures:
        if legal_nature_code(option) in value:
            return True, f"Matches legal nature: {option}"
    return False, f"Excluded: legal nature {value} not selected"
