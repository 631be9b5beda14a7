# portal/services/api_client.py

from typing import Any

import httpx
from loguru import logger

from portal.core.config import settings
from portal.core.exceptions import BackendError
from portal.core.session_store import SessionStore


def decode_body(response: httpx.Response) -> Any:
    """JSON body of a reply, or None when it is empty or not JSON."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return None


def backend_message(body: Any, fallback: str) -> str:
    if isinstance(body, dict):
        message = body.get("message")
        if isinstance(message, str) and message:
            return message
    return fallback


class ApiClient:
    """
    Thin wrapper around httpx.AsyncClient for the housing backend.

    - Every outgoing request gets `Authorization: Bearer <token>` when a
      token is persisted (read when the request is built).
    - Any 401 reply clears the persisted token and user before the caller
      sees the response, whichever request triggered it.
    - Non-2xx replies raise BackendError; nothing is retried.
    """

    def __init__(
        self,
        store: SessionStore,
        base_url: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.store = store
        base_url = settings.API_BASE_URL if base_url is None else base_url
        if not base_url:
            logger.warning("API_BASE_URL is not set. API calls will fail.")

        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers={"Content-Type": "application/json"},
            transport=transport,
            event_hooks={
                "request": [self._attach_token],
                "response": [self._clear_on_unauthorized],
            },
        )

    # ------------------------------------------------------------
    # EVENT HOOKS
    # ------------------------------------------------------------
    async def _attach_token(self, request: httpx.Request) -> None:
        token = self.store.get_token()
        if token:
            request.headers["Authorization"] = f"Bearer {token}"

    async def _clear_on_unauthorized(self, response: httpx.Response) -> None:
        if response.status_code == 401:
            logger.warning(
                f"401 from {response.request.method} {response.request.url.path}; clearing stored credentials."
            )
            self.store.clear()

    # ------------------------------------------------------------
    # REQUESTS
    # ------------------------------------------------------------
    async def request(
        self,
        method: str,
        path: str,
        json: Any = None,
        fallback_message: str = "",
    ) -> Any:
        response = await self._client.request(method, path, json=json)
        body = decode_body(response)

        if response.is_error:
            raise BackendError(
                status_code=response.status_code,
                message=backend_message(body, fallback_message or response.reason_phrase),
                body=body,
            )
        return body

    async def get(self, path: str, fallback_message: str = "") -> Any:
        return await self.request("GET", path, fallback_message=fallback_message)

    async def post(self, path: str, json: Any = None, fallback_message: str = "") -> Any:
        return await self.request("POST", path, json=json, fallback_message=fallback_message)

    async def put(self, path: str, json: Any = None, fallback_message: str = "") -> Any:
        return await self.request("PUT", path, json=json, fallback_message=fallback_message)

    async def aclose(self) -> None:
        await self._client.aclose()
