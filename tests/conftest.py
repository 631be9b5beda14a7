import os

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# ------------------------------------------------------------------
# Point the settings at a fake backend BEFORE importing portal.main,
# which builds a default app at import time.
# ------------------------------------------------------------------
os.environ["API_BASE_URL"] = "http://backend.test"
os.environ["SESSION_FILE"] = os.path.join(os.getcwd(), ".pytest_portal_session.json")

from portal.core.session_store import SessionStore
from portal.main import create_app
from portal.services.api_client import ApiClient

BACKEND_URL = "http://backend.test"


class FakeBackend:
    """
    Stand-in for the housing backend behind httpx.MockTransport.
    Routes are keyed on (method, path); unknown routes answer 404.
    """

    def __init__(self):
        self.routes = {}
        self.requests = []

    def on(self, method, path, status_code=200, json=None):
        self.routes[(method, path)] = (status_code, json)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status_code, body = self.routes.get(
            (request.method, request.url.path), (404, {"message": "Not Found"})
        )
        return httpx.Response(status_code, json=body)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def store(tmp_path):
    return SessionStore(tmp_path / "session.json")


@pytest.fixture
def logged_in(store):
    store.set_token("t1")
    store.set_current_user({"username": "ali", "role": "student"})
    return store


@pytest_asyncio.fixture
async def api_client(store, backend):
    client = ApiClient(store, base_url=BACKEND_URL, transport=httpx.MockTransport(backend.handler))
    yield client
    await client.aclose()


@pytest_asyncio.fixture
async def client(api_client):
    app = create_app(api_client=api_client)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
        yield ac


# ------------------------------------------------------------------
# FORM DATA (camelCase, as the pages post it)
# ------------------------------------------------------------------
def contact(national_id="26501011234567", **overrides):
    data = {
        "fullName": "محمد أحمد علي",
        "nationalId": national_id,
        "job": "مهندس",
        "phoneNumber": "01012345678",
        "address": "15 شارع النيل، المنصورة",
    }
    data.update(overrides)
    return data


def student(**overrides):
    data = {
        "nationalId": "30101011234567",
        "fullName": "علي محمد أحمد",
        "birthDate": "2004-05-01",
        "birthPlace": "المنصورة",
        "gender": "ذكر",
        "religion": "مسلم",
        "governorate": "الدقهلية",
        "city": "المنصورة",
        "address": "15 شارع النيل، المنصورة",
        "email": "ali@example.com",
        "phone": "01098765432",
        "faculty": "الهندسة",
        "department": "الحاسبات",
        "level": "الأولى",
    }
    data.update(overrides)
    return data


@pytest.fixture
def new_student_form():
    return {
        "studentType": 0,
        "studentInfo": student(),
        "fatherInfo": contact(),
        "selectedGuardianRelation": "father",
        "secondaryInfo": {
            "secondaryStream": "علمي رياضة",
            "totalScore": "395.5",
            "percentage": "96.46",
            "grade": "ممتاز",
        },
    }


@pytest.fixture
def continuing_student_form():
    return {
        "studentType": 1,
        "studentInfo": student(level="الثالثة"),
        "fatherInfo": contact(),
        "selectedGuardianRelation": "mother",
        "otherGuardianInfo": contact(national_id="27001011234567", fullName="فاطمة حسن"),
        "academicInfo": {
            "currentGPA": "3.4",
            "lastYearGrade": "جيد جداً",
        },
    }
