# portal/services/inquiry_service.py

import re
from datetime import datetime, timezone
from typing import Any

from loguru import logger

from portal.core.constants import (
    MSG_CONNECTION_FAILED,
    MSG_NATIONAL_ID_INVALID,
    MSG_NATIONAL_ID_REQUIRED,
    SEARCH_BY_NATIONAL_ID,
    TIMESTAMP_FIELDS,
)
from portal.core.exceptions import BackendError, InvalidNationalIdError
from portal.services.api_client import ApiClient
from portal.utils.envelope import extract_array
from portal.utils.national_id import clean_national_id, is_valid_national_id

# .NET emits up to 7 fractional digits; fromisoformat takes at most 6
_LONG_FRACTION = re.compile(r"(\.\d{6})\d+")


# ------------------------------------------------------------
# TIMESTAMP RESOLUTION
# ------------------------------------------------------------
def _to_epoch(value: Any) -> float:
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        # Numeric timestamps are milliseconds since epoch
        return value / 1000

    if not isinstance(value, str):
        return 0.0
    text = _LONG_FRACTION.sub(r"\1", value.strip())
    try:
        moment = datetime.fromisoformat(text)
    except ValueError:
        return 0.0
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.timestamp()


def resolve_timestamp(candidate: Any) -> float:
    """
    Best-effort submission time of a search result.

    The first non-empty field among submittedAt, createdAt, date wins, in
    that order. No field, or an unparseable value, counts as epoch zero.
    """
    if not isinstance(candidate, dict):
        return 0.0
    for field in TIMESTAMP_FIELDS:
        value = candidate.get(field)
        if value:
            return _to_epoch(value)
    return 0.0


def most_recent(candidates: list) -> Any | None:
    if not candidates:
        return None
    # sorted() is stable with reverse=True: ties keep their original order
    return sorted(candidates, key=resolve_timestamp, reverse=True)[0]


# ============================================================
# SEARCH
# ============================================================
def require_national_id(raw: str | None) -> str:
    cleaned = clean_national_id(raw)
    if not cleaned:
        raise InvalidNationalIdError(MSG_NATIONAL_ID_REQUIRED)
    if not is_valid_national_id(cleaned):
        raise InvalidNationalIdError(MSG_NATIONAL_ID_INVALID)
    return cleaned


async def search_by_national_id(client: ApiClient, raw: str | None) -> list:
    """
    All applications filed under a national id.

    Invalid ids fail before any request is made. A 404 or an empty reply
    is "no application", returned as an empty list.
    """
    national_id = require_national_id(raw)

    try:
        body = await client.get(
            SEARCH_BY_NATIONAL_ID.format(national_id=national_id),
            fallback_message=MSG_CONNECTION_FAILED,
        )
    except BackendError as e:
        if e.is_not_found:
            logger.info(f"No application found for national id ending {national_id[-4:]}")
            return []
        raise

    results = extract_array(body)
    if results:
        return results

    # An object reply extract_array could not read is the sole match
    if isinstance(body, dict):
        return [body]
    return []


async def get_application_status(client: ApiClient, raw: str | None) -> Any | None:
    return most_recent(await search_by_national_id(client, raw))
