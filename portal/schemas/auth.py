# portal/schemas/auth.py

import re
from typing import Optional, Union

from pydantic import BaseModel, EmailStr, Field, ValidationInfo, field_validator

from portal.core.constants import MSG_PASSWORDS_MISMATCH
from portal.schemas.application import CamelModel, Name, NationalId, PhoneNumber

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


# -------------------------------------------------------------------
# LOGIN REQUEST
# -------------------------------------------------------------------
class LoginRequest(BaseModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


# -------------------------------------------------------------------
# SIGNUP REQUEST
# -------------------------------------------------------------------
class SignupRequest(CamelModel):
    username: str = Field(min_length=3)
    student_id: str = Field(min_length=1)
    password: str = Field(min_length=6)
    confirm_password: str = Field(min_length=1)
    full_name: Name
    national_id: NationalId
    phone_number: PhoneNumber
    email: EmailStr

    @field_validator("confirm_password")
    def passwords_match(cls, v, info: ValidationInfo):
        password = info.data.get("password")
        if password and v != password:
            raise ValueError(MSG_PASSWORDS_MISMATCH)
        return v

    def to_wire(self) -> dict:
        """Body of POST /api/student/auth/register."""
        body = {
            "userName": self.username,
            "password": self.password,
            "role": "student",
        }
        # Leading integer only ("123abc" -> 123); no digits or 0 -> omitted
        match = _LEADING_INT.match(self.student_id)
        if match and int(match.group(1)):
            body["studentId"] = int(match.group(1))
        return body


# -------------------------------------------------------------------
# CACHED USER PROFILE (advisory; display only)
# -------------------------------------------------------------------
class UserProfile(CamelModel):
    id: Optional[Union[int, str]] = None
    username: str = "user"
    full_name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None
    student_id: Optional[Union[int, str]] = None
    national_id: Optional[str] = None


# -------------------------------------------------------------------
# SESSION READ
# -------------------------------------------------------------------
class SessionRead(BaseModel):
    status: str
    is_authenticated: bool
    user: Optional[dict] = None
    user_role: Optional[str] = None
