# portal/services/auth_service.py

from dataclasses import dataclass
from typing import Any

from loguru import logger

from portal.core.constants import (
    AUTH_LOGIN,
    AUTH_REGISTER,
    DEFAULT_ROLE,
    MSG_LOGIN_FAILED,
    MSG_SIGNUP_FAILED,
    PLACEHOLDER_USER,
)
from portal.core.exceptions import LoginError
from portal.core.session_store import SessionStore
from portal.models.enums import AuthStatus
from portal.schemas.auth import SignupRequest, UserProfile
from portal.services.api_client import ApiClient


# ============================================================================
# AUTH STATE (derived from persisted storage, never from the server)
# ============================================================================
@dataclass(frozen=True)
class AuthState:
    status: AuthStatus
    user: dict | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.status == AuthStatus.Authenticated

    @property
    def loading(self) -> bool:
        return self.status == AuthStatus.Loading

    @property
    def user_role(self) -> str | None:
        return (self.user or {}).get("role")


LOADING = AuthState(status=AuthStatus.Loading)


def derive_auth_state(store: SessionStore) -> AuthState:
    """
    Token present -> Authenticated (cached profile, or a placeholder).
    Token absent  -> Unauthenticated.
    """
    if store.get_token() is None:
        return AuthState(status=AuthStatus.Unauthenticated)
    user = store.get_current_user() or dict(PLACEHOLDER_USER)
    return AuthState(status=AuthStatus.Authenticated, user=user)


class AuthContext:
    """
    Process-wide auth state.

    Starts in Loading until `initialize()` reads the store once;
    `refresh()` re-syncs from the store (no network call).
    """

    def __init__(self, store: SessionStore):
        self.store = store
        self.state = LOADING

    def initialize(self) -> AuthState:
        if self.state.loading:
            self.state = derive_auth_state(self.store)
        return self.state

    def refresh(self) -> dict | None:
        self.state = derive_auth_state(self.store)
        return self.state.user

    def is_authenticated(self) -> bool:
        return self.store.is_authenticated()

    def logout(self) -> dict:
        self.store.clear()
        self.state = AuthState(status=AuthStatus.Unauthenticated)
        logger.info("Logged out; stored credentials cleared.")
        return {"success": True}


# ============================================================================
# LOGIN REPLY PARSING
# ============================================================================
def _get(value: Any, key: str) -> Any:
    return value.get(key) if isinstance(value, dict) else None


def extract_token(body: Any) -> str | None:
    """Top-level `token`, then `accessToken`, then `data.token`."""
    token = _get(body, "token") or _get(body, "accessToken") or _get(_get(body, "data"), "token")
    return token if isinstance(token, str) and token else None


def _first(source: dict, *keys: str) -> Any:
    for key in keys:
        if source.get(key):
            return source[key]
    return None


def build_profile(body: Any, username: str) -> dict:
    """
    Best-effort profile from whichever field names the login reply used.
    Falls back to the submitted username.
    """
    source = _get(body, "user") or _get(_get(body, "data"), "user") or body
    if not isinstance(source, dict):
        source = {}

    profile = UserProfile(
        id=_first(source, "id", "userId", "studentId"),
        username=_first(source, "username", "userName") or username,
        full_name=_first(source, "fullName", "name", "studentName"),
        email=source.get("email"),
        role=source.get("role") or DEFAULT_ROLE,
        student_id=source.get("studentId"),
        national_id=source.get("nationalId"),
    )
    return profile.model_dump(by_alias=True, exclude_none=True)


# ============================================================================
# LOGIN / REGISTER
# ============================================================================
async def login(client: ApiClient, auth: AuthContext, username: str, password: str) -> Any:
    body = await client.post(
        AUTH_LOGIN,
        json={"username": username, "password": password},
        fallback_message=MSG_LOGIN_FAILED,
    )

    token = extract_token(body)
    if not token:
        logger.warning(f"Login reply for '{username}' carried no token.")
        raise LoginError(MSG_LOGIN_FAILED)

    auth.store.set_token(token)
    auth.store.set_current_user(build_profile(body, username))
    auth.refresh()

    logger.info(f"User '{username}' logged in.")
    return body


async def register(client: ApiClient, data: SignupRequest) -> Any:
    body = await client.post(AUTH_REGISTER, json=data.to_wire(), fallback_message=MSG_SIGNUP_FAILED)
    logger.info(f"Registered student account '{data.username}'.")
    return body
