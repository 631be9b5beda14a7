# portal/api/endpoints/profile.py

import httpx
from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from portal.api.deps import backend_http_error, get_api_client, require_session, transport_http_error
from portal.core.constants import MSG_COMPLAINT_SUCCESS
from portal.core.exceptions import BackendError
from portal.schemas.profile import PaymentCreate
from portal.services import profile_service
from portal.services.api_client import ApiClient
from portal.services.auth_service import AuthState

router = APIRouter(tags=["Student Profile"])


def _student_id(state: AuthState) -> str | None:
    student_id = (state.user or {}).get("studentId")
    return str(student_id) if student_id else None


# ------------------------------------------------------------
# PROFILE / NOTIFICATIONS / FEES / ASSIGNMENTS
# ------------------------------------------------------------
@router.get("/profile")
async def profile_page(
    client: ApiClient = Depends(get_api_client),
    state: AuthState = Depends(require_session),
):
    return {"profile": await profile_service.get_profile(client, _student_id(state))}


@router.get("/notifications")
async def notifications_page(
    client: ApiClient = Depends(get_api_client),
    state: AuthState = Depends(require_session),
):
    return {"notifications": await profile_service.get_notifications(client, _student_id(state))}


@router.put("/notifications/{notification_id}/read")
async def mark_notification_read(
    notification_id: str,
    client: ApiClient = Depends(get_api_client),
    _: AuthState = Depends(require_session),
):
    return await profile_service.mark_notification_read(client, notification_id)


@router.get("/fees")
async def fees_page(
    client: ApiClient = Depends(get_api_client),
    state: AuthState = Depends(require_session),
):
    return {"fees": await profile_service.get_fees(client, _student_id(state))}


@router.get("/assignments")
async def assignments_page(
    client: ApiClient = Depends(get_api_client),
    state: AuthState = Depends(require_session),
):
    return {"assignments": await profile_service.get_assignments(client, _student_id(state))}


# ------------------------------------------------------------
# PAYMENTS
# ------------------------------------------------------------
@router.get("/payments")
async def payments_page(
    client: ApiClient = Depends(get_api_client),
    state: AuthState = Depends(require_session),
):
    return {"payments": await profile_service.get_payment_history(client, _student_id(state))}


@router.post("/payments/{fee_id}")
async def pay_fee(
    fee_id: str,
    payload: PaymentCreate,
    client: ApiClient = Depends(get_api_client),
    _: AuthState = Depends(require_session),
):
    try:
        return await profile_service.make_payment(client, fee_id, payload)
    except BackendError as e:
        raise backend_http_error(e)
    except httpx.HTTPError as e:
        raise transport_http_error(e)


# ------------------------------------------------------------
# COMPLAINTS
# ------------------------------------------------------------
class ComplaintForm(BaseModel):
    title: str = ""
    message: str = ""


@router.get("/complaints")
async def complaints_page(
    client: ApiClient = Depends(get_api_client),
    _: AuthState = Depends(require_session),
):
    return {"complaints": await profile_service.list_complaints(client)}


@router.post("/complaints", status_code=status.HTTP_201_CREATED)
async def submit_complaint(
    payload: ComplaintForm,
    client: ApiClient = Depends(get_api_client),
    _: AuthState = Depends(require_session),
):
    try:
        result = await profile_service.submit_complaint(client, payload.title, payload.message)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except BackendError as e:
        raise backend_http_error(e)
    except httpx.HTTPError as e:
        raise transport_http_error(e)

    return {"message": MSG_COMPLAINT_SUCCESS, "result": result}
