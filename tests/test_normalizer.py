import json
from datetime import date

import pytest

from portal.schemas.application import (
    ApplicationPayload,
    ContinuingStudentApplication,
    NewStudentApplication,
)
from portal.services.application_service import (
    normalize_application,
    submit_application,
    to_number,
    to_wire_date,
)


def test_new_student_payload_shape(new_student_form):
    payload = normalize_application(NewStudentApplication.model_validate(new_student_form))

    assert payload["studentType"] == 0
    assert "secondaryInfo" in payload
    assert "academicInfo" not in payload
    assert "otherGuardianInfo" not in payload

    secondary = payload["secondaryInfo"]
    assert secondary == {
        "studentId": 0,
        "secondaryStream": "علمي رياضة",
        "totalScore": 395.5,
        "percentage": 96.46,
        "grade": "ممتاز",
    }


def test_continuing_student_payload_shape(continuing_student_form):
    payload = normalize_application(ContinuingStudentApplication.model_validate(continuing_student_form))

    assert payload["studentType"] == 1
    assert payload["academicInfo"] == {"studentId": 0, "currentGPA": 3.4, "lastYearGrade": "جيد جداً"}
    assert "secondaryInfo" not in payload


def test_other_guardian_stamped_with_selected_relation(continuing_student_form):
    continuing_student_form["otherGuardianInfo"]["relation"] = "brother"
    payload = normalize_application(ContinuingStudentApplication.model_validate(continuing_student_form))

    guardian = payload["otherGuardianInfo"]
    assert payload["selectedGuardianRelation"] == "mother"
    assert guardian["relation"] == "mother"
    assert guardian["contactId"] == 0
    assert guardian["nationalId"] == "27001011234567"


def test_student_info_defaults_and_coercions(new_student_form):
    new_student_form["studentInfo"]["nationalId"] = "301 0101 1234567"
    payload = normalize_application(NewStudentApplication.model_validate(new_student_form))

    info = payload["studentInfo"]
    assert info["nationalId"] == "30101011234567"
    assert info["studentType"] == 0
    assert info["birthDate"] == "2004-05-01T00:00:00.000Z"
    for key in ("studentId", "fatherContactId", "guardianContactId", "userId"):
        assert info[key] == 0


def test_father_defaults(new_student_form):
    payload = normalize_application(NewStudentApplication.model_validate(new_student_form))
    father = payload["fatherInfo"]
    assert father["relation"] == "father"
    assert father["contactId"] == 0
    assert set(father) == {"contactId", "fullName", "nationalId", "relation", "job", "phoneNumber", "address"}


def test_father_relation_is_always_father(new_student_form):
    new_student_form["fatherInfo"]["relation"] = "mother"
    payload = normalize_application(NewStudentApplication.model_validate(new_student_form))
    assert payload["fatherInfo"]["relation"] == "father"


def test_known_server_ids_are_kept(new_student_form):
    new_student_form["studentInfo"]["studentId"] = 42
    new_student_form["fatherInfo"]["contactId"] = 7
    payload = normalize_application(NewStudentApplication.model_validate(new_student_form))
    assert payload["studentInfo"]["studentId"] == 42
    assert payload["fatherInfo"]["contactId"] == 7


def test_integer_text_stays_integer():
    assert to_number("410", "totalScore") == 410
    assert isinstance(to_number("410", "totalScore"), int)
    assert to_number(" 3.5 ", "currentGPA") == 3.5


def test_non_numeric_is_an_error_not_zero():
    with pytest.raises(ValueError):
        to_number("three", "currentGPA")


@pytest.mark.parametrize("value", ["3_95", "٩٦", "1,5", "0x10"])
def test_only_plain_decimals_convert(value):
    with pytest.raises(ValueError):
        to_number(value, "totalScore")


def test_non_numeric_gpa_fails_normalization(continuing_student_form):
    application = ContinuingStudentApplication.model_validate(continuing_student_form)
    # Bypass validation the way a buggy caller would
    application.academic_info.current_gpa = "n/a"
    with pytest.raises(ValueError):
        normalize_application(application)


def test_to_wire_date():
    assert to_wire_date(date(2003, 12, 31)) == "2003-12-31T00:00:00.000Z"


def test_payload_rejects_both_tracks(new_student_form):
    payload = normalize_application(NewStudentApplication.model_validate(new_student_form))
    payload["academicInfo"] = {"currentGPA": 3.0, "lastYearGrade": "جيد"}
    with pytest.raises(ValueError):
        ApplicationPayload.model_validate(payload)


def test_payload_rejects_guardian_with_father(continuing_student_form):
    payload = normalize_application(ContinuingStudentApplication.model_validate(continuing_student_form))
    payload["selectedGuardianRelation"] = "father"
    with pytest.raises(ValueError):
        ApplicationPayload.model_validate(payload)


# ------------------------------------------------------------
# SUBMISSION
# ------------------------------------------------------------
@pytest.mark.asyncio
async def test_submit_posts_payload_and_unwraps_reply(api_client, backend, new_student_form):
    backend.on("POST", "/api/student/applications/submit", json={"data": {"data": {"id": 55}}})
    application = NewStudentApplication.model_validate(new_student_form)

    result = await submit_application(api_client, application)

    assert result == {"id": 55}
    sent = backend.last_request
    assert sent.method == "POST"
    body = json.loads(sent.content)
    assert body == normalize_application(application)


@pytest.mark.asyncio
async def test_submit_returns_raw_reply_without_envelope(api_client, backend, new_student_form):
    backend.on("POST", "/api/student/applications/submit", json={"id": 9, "status": "submitted"})
    result = await submit_application(api_client, NewStudentApplication.model_validate(new_student_form))
    assert result == {"id": 9, "status": "submitted"}


@pytest.mark.asyncio
async def test_submit_empty_reply(api_client, backend, new_student_form):
    backend.on("POST", "/api/student/applications/submit", status_code=201)
    result = await submit_application(api_client, NewStudentApplication.model_validate(new_student_form))
    assert result == {}


@pytest.mark.asyncio
async def test_submit_failure_surfaces_backend_message(api_client, backend, new_student_form):
    from portal.core.exceptions import BackendError

    backend.on("POST", "/api/student/applications/submit", status_code=400, json={"message": "Duplicate"})
    with pytest.raises(BackendError) as exc:
        await submit_application(api_client, NewStudentApplication.model_validate(new_student_form))
    assert exc.value.message == "Duplicate"
    assert len(backend.requests) == 1
