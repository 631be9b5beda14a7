# portal/utils/numeric.py

import math
import re

# Plain ASCII decimal: no "_" grouping, no Arabic-Indic digits, no "nan"/"inf"
_DECIMAL = re.compile(r"[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?")
_INTEGER = re.compile(r"[+-]?[0-9]+")


def parse_number(text: str) -> int | float | None:
    """Number from form text, or None when the text is not a plain decimal."""
    text = text.strip()
    if not _DECIMAL.fullmatch(text):
        return None
    if _INTEGER.fullmatch(text):
        return int(text)
    number = float(text)
    return number if math.isfinite(number) else None
