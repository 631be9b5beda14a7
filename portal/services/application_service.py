# portal/services/application_service.py

from datetime import date, datetime, time, timezone
from typing import Any

import httpx
from loguru import logger
from pydantic import TypeAdapter

from portal.core.constants import (
    APPLICATION_SUBMIT,
    MSG_CONNECTION_FAILED,
    MSG_SUBMIT_FAILED,
    MY_APPLICATIONS,
)
from portal.core.exceptions import BackendError
from portal.models.enums import GuardianRelation
from portal.schemas.application import (
    AcademicPayload,
    Application,
    ApplicationPayload,
    ContactInfo,
    ContactPayload,
    ContinuingStudentApplication,
    NewStudentApplication,
    SecondaryPayload,
    StudentPayload,
)
from portal.services.api_client import ApiClient
from portal.utils.envelope import extract_array, extract_object
from portal.utils.national_id import clean_national_id
from portal.utils.numeric import parse_number

application_adapter = TypeAdapter(Application)


# ------------------------------------------------------------
# COERCION HELPERS
# ------------------------------------------------------------
def to_number(value: str, field: str) -> int | float:
    """
    Text -> number for the wire.
    A non-numeric value here means validation was skipped; it is an error,
    never a silent zero.
    """
    number = parse_number(str(value))
    if number is None:
        raise ValueError(f"{field} is not numeric: {value!r}")
    return number


def to_wire_date(value: date) -> str:
    # Midnight UTC, millisecond precision: 2004-05-01T00:00:00.000Z
    moment = datetime.combine(value, time.min, tzinfo=timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _contact_payload(contact: ContactInfo, relation: str) -> ContactPayload:
    return ContactPayload(
        contact_id=contact.contact_id or 0,
        full_name=contact.full_name,
        national_id=clean_national_id(contact.national_id) or "",
        relation=relation,
        job=contact.job,
        phone_number=contact.phone_number,
        address=contact.address,
    )


# ============================================================
# NORMALIZE: validated application -> wire payload
# ============================================================
def normalize_application(application: NewStudentApplication | ContinuingStudentApplication) -> dict:
    """
    Build the exact body the submission endpoint expects.

        - national ids re-cleaned (student, father, guardian)
        - GPA / total score / percentage sent as numbers
        - server-assigned ids default to 0 ("assign a new one")
        - otherGuardianInfo only when the guardian is not the father
        - secondaryInfo only for studentType 0, academicInfo only for 1
    """
    student = application.student_info
    selected = application.selected_guardian_relation

    student_payload = StudentPayload(
        student_id=student.student_id or 0,
        national_id=clean_national_id(student.national_id) or "",
        full_name=student.full_name,
        student_type=application.student_type,
        birth_date=to_wire_date(student.birth_date),
        birth_place=student.birth_place,
        gender=student.gender.value,
        religion=student.religion.value,
        governorate=student.governorate.value,
        city=student.city,
        address=student.address,
        email=str(student.email),
        phone=student.phone,
        faculty=student.faculty,
        department=student.department,
        level=student.level.value,
        father_contact_id=student.father_contact_id or 0,
        guardian_contact_id=student.guardian_contact_id or 0,
        user_id=student.user_id or 0,
    )

    father = application.father_info

    other_guardian = None
    if selected != GuardianRelation.Father:
        other_guardian = _contact_payload(application.other_guardian_info, selected.value)

    secondary = None
    academic = None
    if isinstance(application, NewStudentApplication):
        info = application.secondary_info
        secondary = SecondaryPayload(
            student_id=info.student_id or 0,
            secondary_stream=info.secondary_stream.value,
            total_score=to_number(info.total_score, "totalScore"),
            percentage=to_number(info.percentage, "percentage"),
            grade=info.grade.value,
        )
    elif isinstance(application, ContinuingStudentApplication):
        info = application.academic_info
        academic = AcademicPayload(
            student_id=info.student_id or 0,
            current_gpa=to_number(info.current_gpa, "currentGPA"),
            last_year_grade=info.last_year_grade.value,
        )
    else:
        raise TypeError(f"Unsupported application type: {type(application).__name__}")

    payload = ApplicationPayload(
        student_type=application.student_type,
        student_info=student_payload,
        father_info=_contact_payload(father, GuardianRelation.Father.value),
        selected_guardian_relation=selected.value,
        other_guardian_info=other_guardian,
        secondary_info=secondary,
        academic_info=academic,
    )
    return payload.to_wire()


def parse_application(data: dict) -> NewStudentApplication | ContinuingStudentApplication:
    """Validate raw form input; `studentType` picks the variant."""
    return application_adapter.validate_python(data)


# ============================================================
# SUBMIT
# ============================================================
async def submit_application(
    client: ApiClient,
    application: NewStudentApplication | ContinuingStudentApplication,
) -> Any:
    payload = normalize_application(application)

    logger.info(
        f"Submitting housing application (studentType={application.student_type}, "
        f"guardian={application.selected_guardian_relation.value})"
    )
    body = await client.post(APPLICATION_SUBMIT, json=payload, fallback_message=MSG_SUBMIT_FAILED)

    if isinstance(body, dict) and body.get("data"):
        return extract_object(body)
    return body or {}


# ------------------------------------------------------------
# MY APPLICATIONS
# ------------------------------------------------------------
async def get_my_applications(client: ApiClient) -> list:
    try:
        body = await client.get(MY_APPLICATIONS, fallback_message=MSG_CONNECTION_FAILED)
    except (BackendError, httpx.HTTPError) as e:
        logger.warning(f"Fetching my applications failed: {e}")
        return []
    return extract_array(body)
