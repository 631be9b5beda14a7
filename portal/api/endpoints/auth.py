# portal/api/endpoints/auth.py

import httpx
from fastapi import APIRouter, Depends, HTTPException, status

from portal.api.deps import backend_http_error, get_api_client, get_auth, transport_http_error
from portal.core.exceptions import BackendError, LoginError
from portal.schemas.auth import LoginRequest, SessionRead, SignupRequest
from portal.services.api_client import ApiClient
from portal.services.auth_service import AuthContext, login, register

router = APIRouter(tags=["Auth"])


def _session_read(auth: AuthContext) -> SessionRead:
    state = auth.state
    return SessionRead(
        status=state.status.value,
        is_authenticated=state.is_authenticated,
        user=state.user,
        user_role=state.user_role,
    )


# -------------------------------------------------------------------
# LOGIN
# -------------------------------------------------------------------
@router.post("/login", response_model=SessionRead)
async def login_page(
    payload: LoginRequest,
    client: ApiClient = Depends(get_api_client),
    auth: AuthContext = Depends(get_auth),
):
    try:
        await login(client, auth, payload.username, payload.password)
    except LoginError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))
    except BackendError as e:
        raise backend_http_error(e)
    except httpx.HTTPError as e:
        raise transport_http_error(e)

    return _session_read(auth)


# -------------------------------------------------------------------
# SIGNUP
# -------------------------------------------------------------------
@router.post("/signup", status_code=status.HTTP_201_CREATED)
async def signup_page(
    payload: SignupRequest,
    client: ApiClient = Depends(get_api_client),
):
    try:
        result = await register(client, payload)
    except BackendError as e:
        raise backend_http_error(e)
    except httpx.HTTPError as e:
        raise transport_http_error(e)

    return {"result": result, "redirect": "/login"}


# -------------------------------------------------------------------
# LOGOUT / SESSION
# -------------------------------------------------------------------
@router.post("/logout")
async def logout_page(auth: AuthContext = Depends(get_auth)):
    return auth.logout()


@router.get("/session", response_model=SessionRead)
async def session_state(auth: AuthContext = Depends(get_auth)):
    auth.initialize()
    auth.refresh()
    return _session_read(auth)
