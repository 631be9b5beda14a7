# portal/services/profile_service.py
"""
Student profile, notifications, fees, room assignments, payments and
complaints.

Reads degrade to an empty dict/list when the backend fails (the 401
credential clearing has already happened in the transport by then).
Writes propagate their errors to the caller.
"""

from typing import Any

import httpx
from loguru import logger

from portal.core.constants import (
    COMPLAINT_SUBMIT,
    COMPLAINTS,
    MSG_COMPLAINT_FAILED,
    MSG_COMPLAINT_FIELDS_REQUIRED,
    MSG_PAYMENT_FAILED,
    NOTIFICATION_READ,
    PAYMENT_PAY,
    PAYMENTS,
    PROFILE_ASSIGNMENTS,
    PROFILE_DETAILS,
    PROFILE_FEES,
    PROFILE_NOTIFICATIONS,
    STUDENT_ASSIGNMENTS,
    STUDENT_DETAILS,
    STUDENT_FEES,
    STUDENT_NOTIFICATIONS,
    STUDENT_PAYMENTS,
)
from portal.core.exceptions import BackendError
from portal.schemas.profile import ComplaintCreate, PaymentCreate
from portal.services.api_client import ApiClient
from portal.utils.envelope import extract_array, extract_object


def _endpoint(student_id: str | None, scoped: str, default: str) -> str:
    return scoped.format(student_id=student_id) if student_id else default


async def _read_array(client: ApiClient, path: str, what: str) -> list:
    try:
        return extract_array(await client.get(path))
    except (BackendError, httpx.HTTPError) as e:
        logger.warning(f"Error fetching {what}: {e}")
        return []


async def _read_object(client: ApiClient, path: str, what: str) -> dict:
    try:
        return extract_object(await client.get(path))
    except (BackendError, httpx.HTTPError) as e:
        logger.warning(f"Error fetching {what}: {e}")
        return {}


# ------------------------------------------------------------
# PROFILE
# ------------------------------------------------------------
async def get_profile(client: ApiClient, student_id: str | None = None) -> dict:
    return await _read_object(client, _endpoint(student_id, STUDENT_DETAILS, PROFILE_DETAILS), "profile")


async def get_notifications(client: ApiClient, student_id: str | None = None) -> list:
    path = _endpoint(student_id, STUDENT_NOTIFICATIONS, PROFILE_NOTIFICATIONS)
    return await _read_array(client, path, "notifications")


async def mark_notification_read(client: ApiClient, notification_id: str) -> Any:
    try:
        body = await client.put(NOTIFICATION_READ.format(notification_id=notification_id), json={})
    except (BackendError, httpx.HTTPError) as e:
        logger.warning(f"Error marking notification {notification_id} as read: {e}")
        return {}
    return body or {}


async def get_fees(client: ApiClient, student_id: str | None = None) -> list:
    return await _read_array(client, _endpoint(student_id, STUDENT_FEES, PROFILE_FEES), "fees")


async def get_assignments(client: ApiClient, student_id: str | None = None) -> list:
    path = _endpoint(student_id, STUDENT_ASSIGNMENTS, PROFILE_ASSIGNMENTS)
    return await _read_array(client, path, "assignments")


# ------------------------------------------------------------
# PAYMENTS
# ------------------------------------------------------------
async def make_payment(client: ApiClient, fee_id: str, data: PaymentCreate) -> dict:
    body = await client.post(
        PAYMENT_PAY.format(fee_id=fee_id),
        json=data.to_wire(),
        fallback_message=MSG_PAYMENT_FAILED,
    )
    logger.info(f"Payment submitted for fee {fee_id}.")
    return extract_object(body)


async def get_payment_history(client: ApiClient, student_id: str | None = None) -> list:
    path = _endpoint(student_id, STUDENT_PAYMENTS, PAYMENTS)
    return await _read_array(client, path, "payment history")


# ------------------------------------------------------------
# COMPLAINTS
# ------------------------------------------------------------
async def list_complaints(client: ApiClient) -> list:
    return await _read_array(client, COMPLAINTS, "complaints")


async def submit_complaint(client: ApiClient, title: str, message: str) -> Any:
    if not (title or "").strip() or not (message or "").strip():
        raise ValueError(MSG_COMPLAINT_FIELDS_REQUIRED)

    complaint = ComplaintCreate(title=title, message=message)
    body = await client.post(
        COMPLAINT_SUBMIT,
        json=complaint.model_dump(),
        fallback_message=MSG_COMPLAINT_FAILED,
    )
    return body or {}
