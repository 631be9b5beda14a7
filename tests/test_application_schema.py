import pytest
from pydantic import ValidationError

from portal.models.enums import GuardianRelation
from portal.schemas.application import ContinuingStudentApplication, NewStudentApplication
from portal.services.application_service import parse_application


def test_new_student_form_is_valid(new_student_form):
    application = NewStudentApplication.model_validate(new_student_form)
    assert application.student_type == 0
    assert application.secondary_info.total_score == "395.5"
    assert application.other_guardian_info is None


def test_discriminator_picks_variant(new_student_form, continuing_student_form):
    assert isinstance(parse_application(new_student_form), NewStudentApplication)
    assert isinstance(parse_application(continuing_student_form), ContinuingStudentApplication)


def test_discriminator_must_match_populated_track(continuing_student_form):
    continuing_student_form["studentType"] = 0
    with pytest.raises(ValidationError):
        parse_application(continuing_student_form)


def test_national_id_is_stored_cleaned(new_student_form):
    new_student_form["studentInfo"]["nationalId"] = "3010-1011-234567"
    application = NewStudentApplication.model_validate(new_student_form)
    assert application.student_info.national_id == "30101011234567"


@pytest.mark.parametrize("national_id", ["301234567890123", "3010101123456", "", "abcdefghijklmn"])
def test_bad_national_id_rejected(new_student_form, national_id):
    new_student_form["fatherInfo"]["nationalId"] = national_id
    with pytest.raises(ValidationError):
        NewStudentApplication.model_validate(new_student_form)


@pytest.mark.parametrize("phone", ["0101234567", "02012345678", "010123456789", "0101234567a"])
def test_bad_phone_rejected(new_student_form, phone):
    new_student_form["studentInfo"]["phone"] = phone
    with pytest.raises(ValidationError):
        NewStudentApplication.model_validate(new_student_form)


def test_short_name_and_address_rejected(new_student_form):
    new_student_form["fatherInfo"]["fullName"] = "مح"
    new_student_form["fatherInfo"]["address"] = "شارع"
    with pytest.raises(ValidationError) as exc:
        NewStudentApplication.model_validate(new_student_form)
    fields = {err["loc"][-1] for err in exc.value.errors()}
    assert {"fullName", "address"} <= fields


def test_bad_email_and_closed_sets_rejected(new_student_form):
    new_student_form["studentInfo"]["email"] = "not-an-email"
    new_student_form["studentInfo"]["governorate"] = "Paris"
    new_student_form["studentInfo"]["level"] = "السابعة"
    with pytest.raises(ValidationError) as exc:
        NewStudentApplication.model_validate(new_student_form)
    fields = {err["loc"][-1] for err in exc.value.errors()}
    assert {"email", "governorate", "level"} <= fields


@pytest.mark.parametrize("score", ["", "abc", "nan", "inf", "3_95", "٣٩٥", "1e"])
def test_non_numeric_score_rejected(new_student_form, score):
    new_student_form["secondaryInfo"]["totalScore"] = score
    with pytest.raises(ValidationError):
        NewStudentApplication.model_validate(new_student_form)


def test_arabic_indic_percentage_rejected(new_student_form):
    new_student_form["secondaryInfo"]["percentage"] = "٩٦"
    with pytest.raises(ValidationError):
        NewStudentApplication.model_validate(new_student_form)


def test_numeric_fields_accept_json_numbers(continuing_student_form):
    continuing_student_form["academicInfo"]["currentGPA"] = 3.25
    application = ContinuingStudentApplication.model_validate(continuing_student_form)
    assert application.academic_info.current_gpa == "3.25"


def test_guardian_required_when_not_father(continuing_student_form):
    del continuing_student_form["otherGuardianInfo"]
    with pytest.raises(ValidationError):
        ContinuingStudentApplication.model_validate(continuing_student_form)


def test_guardian_dropped_when_father_selected(continuing_student_form):
    continuing_student_form["selectedGuardianRelation"] = "father"
    application = ContinuingStudentApplication.model_validate(continuing_student_form)
    assert application.other_guardian_info is None
    assert application.has_other_guardian is False


def test_unknown_guardian_relation_rejected(new_student_form):
    new_student_form["selectedGuardianRelation"] = "cousin"
    with pytest.raises(ValidationError):
        NewStudentApplication.model_validate(new_student_form)


def test_default_guardian_is_father(new_student_form):
    del new_student_form["selectedGuardianRelation"]
    application = NewStudentApplication.model_validate(new_student_form)
    assert application.selected_guardian_relation == GuardianRelation.Father
