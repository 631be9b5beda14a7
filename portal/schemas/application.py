# portal/schemas/application.py

from datetime import date
from typing import Annotated, Literal, Optional, Union

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    EmailStr,
    Field,
    model_validator,
)
from pydantic.alias_generators import to_camel

from portal.core.constants import MSG_NATIONAL_ID_INVALID
from portal.models.enums import (
    Gender,
    Governorate,
    Grade,
    GuardianRelation,
    Level,
    Religion,
    SecondaryStream,
    StudentType,
)
from portal.utils.national_id import clean_national_id, is_valid_national_id
from portal.utils.numeric import parse_number


class CamelModel(BaseModel):
    """snake_case in Python, camelCase on the wire and in form input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ------------------------------------------------------------
# FIELD TYPES
# ------------------------------------------------------------
def _national_id(value: str) -> str:
    cleaned = clean_national_id(value)
    if not is_valid_national_id(cleaned):
        raise ValueError(MSG_NATIONAL_ID_INVALID)
    return cleaned


def _phone(value: str) -> str:
    if len(value) != 11 or not value.isascii() or not value.isdigit() or not value.startswith("01"):
        raise ValueError("رقم الهاتف يجب أن يكون 11 رقم يبدأ بـ 01")
    return value


def _number_as_text(value):
    # Form fields arrive as text; tolerate a JSON number too
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


def _numeric_text(value: str) -> str:
    value = value.strip()
    if parse_number(value) is None:
        raise ValueError("يجب إدخال قيمة رقمية")
    return value


NationalId = Annotated[str, AfterValidator(_national_id)]
PhoneNumber = Annotated[str, AfterValidator(_phone)]
NumericText = Annotated[str, BeforeValidator(_number_as_text), AfterValidator(_numeric_text)]
Name = Annotated[str, Field(min_length=3)]
Address = Annotated[str, Field(min_length=5)]
Required = Annotated[str, Field(min_length=1)]


# ============================================================
# FORM MODELS (validated in-memory application)
# ============================================================
class ContactInfo(CamelModel):
    """Father or alternate guardian."""

    contact_id: Optional[int] = None
    full_name: Name
    national_id: NationalId
    relation: Optional[GuardianRelation] = None
    job: Required
    phone_number: PhoneNumber
    address: Address


class StudentInfo(CamelModel):
    # Server-assigned; absent on a first submission
    student_id: Optional[int] = None
    father_contact_id: Optional[int] = None
    guardian_contact_id: Optional[int] = None
    user_id: Optional[int] = None

    national_id: NationalId
    full_name: Name
    birth_date: date
    birth_place: Required
    gender: Gender
    religion: Religion
    governorate: Governorate
    city: Required
    address: Address
    email: EmailStr
    phone: PhoneNumber
    faculty: Required
    department: Required
    level: Level


class SecondaryInfo(CamelModel):
    student_id: Optional[int] = None
    secondary_stream: SecondaryStream
    total_score: NumericText
    percentage: NumericText
    grade: Grade


class AcademicInfo(CamelModel):
    student_id: Optional[int] = None
    current_gpa: NumericText = Field(alias="currentGPA")
    last_year_grade: Grade


class ApplicationBase(CamelModel):
    student_info: StudentInfo
    father_info: ContactInfo
    selected_guardian_relation: GuardianRelation = GuardianRelation.Father
    other_guardian_info: Optional[ContactInfo] = None

    @model_validator(mode="after")
    def guardian_matches_selection(self):
        if self.selected_guardian_relation == GuardianRelation.Father:
            # Leftover guardian fields from a changed selection are dropped
            self.other_guardian_info = None
        elif self.other_guardian_info is None:
            raise ValueError("بيانات ولي الأمر مطلوبة عندما لا يكون الأب هو ولي الأمر")
        return self

    @property
    def has_other_guardian(self) -> bool:
        return self.selected_guardian_relation != GuardianRelation.Father


class NewStudentApplication(ApplicationBase):
    student_type: Literal[0] = 0
    secondary_info: SecondaryInfo


class ContinuingStudentApplication(ApplicationBase):
    student_type: Literal[1] = 1
    academic_info: AcademicInfo


# Keyed on studentType: 0 -> new student, 1 -> continuing student
Application = Annotated[
    Union[NewStudentApplication, ContinuingStudentApplication],
    Field(discriminator="student_type"),
]


# ============================================================
# WIRE PAYLOAD (exact body of POST /api/student/applications/submit)
# ============================================================
Number = Union[int, float]


class ContactPayload(CamelModel):
    contact_id: int = 0
    full_name: str
    national_id: str
    relation: str
    job: str
    phone_number: str
    address: str


class StudentPayload(CamelModel):
    student_id: int = 0
    national_id: str
    full_name: str
    student_type: int
    birth_date: str
    birth_place: str
    gender: str
    religion: str
    governorate: str
    city: str
    address: str
    email: str
    phone: str
    faculty: str
    department: str
    level: str
    father_contact_id: int = 0
    guardian_contact_id: int = 0
    user_id: int = 0


class SecondaryPayload(CamelModel):
    student_id: int = 0
    secondary_stream: str
    total_score: Number
    percentage: Number
    grade: str


class AcademicPayload(CamelModel):
    student_id: int = 0
    current_gpa: Number = Field(alias="currentGPA")
    last_year_grade: str


class ApplicationPayload(CamelModel):
    student_type: int
    student_info: StudentPayload
    father_info: ContactPayload
    selected_guardian_relation: str
    other_guardian_info: Optional[ContactPayload] = None
    secondary_info: Optional[SecondaryPayload] = None
    academic_info: Optional[AcademicPayload] = None

    @model_validator(mode="after")
    def exactly_one_track(self):
        if self.student_type == StudentType.New:
            if self.secondary_info is None or self.academic_info is not None:
                raise ValueError("studentType 0 requires secondaryInfo and no academicInfo")
        elif self.student_type == StudentType.Continuing:
            if self.academic_info is None or self.secondary_info is not None:
                raise ValueError("studentType 1 requires academicInfo and no secondaryInfo")
        else:
            raise ValueError(f"Unknown studentType {self.student_type}")
        return self

    @model_validator(mode="after")
    def guardian_only_when_not_father(self):
        is_father = self.selected_guardian_relation == GuardianRelation.Father.value
        if is_father and self.other_guardian_info is not None:
            raise ValueError("otherGuardianInfo must be absent when the guardian is the father")
        if not is_father:
            if self.other_guardian_info is None:
                raise ValueError("otherGuardianInfo is required when the guardian is not the father")
            if self.other_guardian_info.relation != self.selected_guardian_relation:
                raise ValueError("otherGuardianInfo.relation must match selectedGuardianRelation")
        return self

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)
