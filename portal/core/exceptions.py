# portal/core/exceptions.py
from typing import Any


class PortalError(Exception):
    """Base class for errors raised by the portal client."""


class InvalidNationalIdError(PortalError, ValueError):
    """Raised before any request is built when a national id is not 14 digits."""


class BackendError(PortalError):
    """
    Non-2xx reply from the housing backend.

    `message` is the backend's own `message` field when it sent one,
    otherwise the localized fallback of the failing operation.
    """

    def __init__(self, status_code: int, message: str, body: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.body = body

    @property
    def is_unauthorized(self) -> bool:
        return self.status_code == 401

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404


class LoginError(PortalError):
    """Login reply was 2xx but carried no token in any known location."""
