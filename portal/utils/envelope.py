# portal/utils/envelope.py
"""
Reply-envelope unwrapping.

The housing backend is not consistent about where it puts the payload. A
reply may be the bare record/list, `{"data": ...}`, or `{"data": {"data": ...}}`.
Both helpers probe those three shapes and never raise: missing data
comes back as an empty list or an empty dict.
"""
from typing import Any

# A bare object carrying one of these is treated as a single record
_RECORD_HINTS = ("id", "name", "title")


def _data(value: Any) -> Any:
    if isinstance(value, dict):
        return value.get("data")
    return None


def extract_array(body: Any) -> list:
    if not body:
        return []
    if isinstance(body, list):
        return body

    inner = _data(body)
    if isinstance(inner, list):
        return inner

    nested = _data(inner)
    if isinstance(nested, list):
        return nested

    if isinstance(body, dict) and any(body.get(key) is not None for key in _RECORD_HINTS):
        return [body]
    return []


def extract_object(body: Any) -> dict:
    if not isinstance(body, dict):
        return {}

    inner = _data(body)
    nested = _data(inner)
    if isinstance(nested, dict):
        return nested
    if isinstance(inner, dict):
        return inner
    return body
