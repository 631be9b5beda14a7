# portal/utils/national_id.py
import re

from portal.core.constants import NATIONAL_ID_LENGTH

# ASCII only: Python's \D would keep Arabic-Indic digits
_NON_DIGITS = re.compile(r"[^0-9]")


def clean_national_id(raw: str | None) -> str | None:
    """
    Strip every non-digit character.
    Empty or missing input (or input with no digits at all) gives None.
    """
    if not raw:
        return None
    cleaned = _NON_DIGITS.sub("", raw)
    return cleaned or None


def is_valid_national_id(cleaned: str | None) -> bool:
    # Length only: no checksum or birth-date check
    return bool(cleaned) and len(cleaned) == NATIONAL_ID_LENGTH
