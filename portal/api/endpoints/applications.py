# portal/api/endpoints/applications.py

import httpx
from fastapi import APIRouter, Depends, status
from loguru import logger

from portal.api.deps import backend_http_error, get_api_client, require_session, transport_http_error
from portal.core.constants import GUARDIAN_RELATION_LABELS, MSG_SUBMIT_SUCCESS
from portal.core.exceptions import BackendError
from portal.models.enums import Gender, Governorate, Grade, Level, Religion, SecondaryStream
from portal.schemas.application import ContinuingStudentApplication, NewStudentApplication
from portal.services.api_client import ApiClient
from portal.services.application_service import get_my_applications, submit_application
from portal.services.auth_service import AuthState

router = APIRouter(
    prefix="/applications",
    tags=["Applications"],
)


async def _submit(client: ApiClient, application: NewStudentApplication | ContinuingStudentApplication) -> dict:
    try:
        result = await submit_application(client, application)
    except BackendError as e:
        logger.warning(f"Application rejected by backend ({e.status_code}): {e.message}")
        raise backend_http_error(e)
    except httpx.HTTPError as e:
        raise transport_http_error(e)

    return {
        "message": MSG_SUBMIT_SUCCESS,
        "result": result,
        "redirect": "/my-applications",
    }


# ------------------------------------------------------------
# FORM OPTIONS (select lists)
# ------------------------------------------------------------
def _options(enum_cls) -> list[dict]:
    return [{"value": member.value, "label": member.value} for member in enum_cls]


@router.get("/options")
async def form_options():
    return {
        "governorates": _options(Governorate),
        "genders": _options(Gender),
        "religions": _options(Religion),
        "guardianRelations": [
            {"value": relation.value, "label": label}
            for relation, label in GUARDIAN_RELATION_LABELS.items()
        ],
        "secondaryStreams": _options(SecondaryStream),
        "grades": _options(Grade),
        "levels": _options(Level),
    }


# ------------------------------------------------------------
# NEW STUDENT (studentType = 0)
# ------------------------------------------------------------
@router.post("/new-student", status_code=status.HTTP_201_CREATED)
async def submit_new_student_application(
    payload: NewStudentApplication,
    client: ApiClient = Depends(get_api_client),
    _: AuthState = Depends(require_session),
):
    return await _submit(client, payload)


# ------------------------------------------------------------
# CONTINUING STUDENT (studentType = 1)
# ------------------------------------------------------------
@router.post("/continuing-student", status_code=status.HTTP_201_CREATED)
async def submit_continuing_student_application(
    payload: ContinuingStudentApplication,
    client: ApiClient = Depends(get_api_client),
    _: AuthState = Depends(require_session),
):
    return await _submit(client, payload)


# ------------------------------------------------------------
# MY APPLICATIONS
# ------------------------------------------------------------
@router.get("/my")
async def my_applications(
    client: ApiClient = Depends(get_api_client),
    _: AuthState = Depends(require_session),
):
    return {"applications": await get_my_applications(client)}
