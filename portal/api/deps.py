# portal/api/deps.py

from fastapi import Depends, HTTPException, Request, status
from loguru import logger

from portal.core.constants import MSG_CONNECTION_FAILED
from portal.core.exceptions import BackendError
from portal.services.api_client import ApiClient
from portal.services.auth_service import AuthContext, AuthState

LOGIN_PATH = "/login"


# ------------------------------------------------------------
# Shared collaborators (created once in create_app)
# ------------------------------------------------------------
def get_api_client(request: Request) -> ApiClient:
    return request.app.state.api_client


def get_auth(request: Request) -> AuthContext:
    return request.app.state.auth


# ------------------------------------------------------------
# Protected pages
# ------------------------------------------------------------
async def require_session(auth: AuthContext = Depends(get_auth)) -> AuthState:
    """
    Gate for protected routes.

    The first call moves auth out of Loading; every call then re-syncs from
    the session store, so a 401 seen by any earlier request is honored.
    Unauthenticated callers are sent to the login entry point.
    """
    auth.initialize()
    auth.refresh()

    if not auth.state.is_authenticated:
        raise HTTPException(
            status_code=status.HTTP_307_TEMPORARY_REDIRECT,
            detail="Not authenticated",
            headers={"Location": LOGIN_PATH},
        )
    return auth.state


# ------------------------------------------------------------
# Error translation
# ------------------------------------------------------------
def backend_http_error(e: BackendError) -> HTTPException:
    return HTTPException(status_code=e.status_code, detail=e.message)


def transport_http_error(e: Exception) -> HTTPException:
    logger.error(f"Backend unreachable: {e}")
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=MSG_CONNECTION_FAILED)
