# portal/api/endpoints/inquiry.py

import httpx
from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from portal.api.deps import backend_http_error, get_api_client, require_session, transport_http_error
from portal.core.constants import MSG_APPLICATION_NOT_FOUND, status_label
from portal.core.exceptions import BackendError, InvalidNationalIdError
from portal.services.api_client import ApiClient
from portal.services.auth_service import AuthState
from portal.services.inquiry_service import most_recent, search_by_national_id

router = APIRouter(tags=["Inquiry"])


class InquiryRequest(BaseModel):
    national_id: str = Field(default="", alias="nationalId")


@router.post("/inquiry")
async def inquiry_page(
    payload: InquiryRequest,
    client: ApiClient = Depends(get_api_client),
    _: AuthState = Depends(require_session),
):
    try:
        candidates = await search_by_national_id(client, payload.national_id)
    except InvalidNationalIdError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except BackendError as e:
        raise backend_http_error(e)
    except httpx.HTTPError as e:
        raise transport_http_error(e)

    result = most_recent(candidates)
    if result is None:
        return {"result": None, "message": MSG_APPLICATION_NOT_FOUND}

    status_value = result.get("status") if isinstance(result, dict) else None
    return {
        "result": result,
        "status_label": status_label(status_value),
        "matches": len(candidates),
    }
