"""HTTP client for the truck navigation backend."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..config import settings
from ..errors import AuthError, BackendError, NetworkError, NotFoundError, ParseError
from ..models.domain import Session

logger = logging.getLogger(__name__)


def _error_message(response: httpx.Response) -> str:
    """Extract the backend's ``error`` (or ``message``) text from a failed response."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        for key in ("error", "message", "detail"):
            value = body.get(key)
            if isinstance(value, str) and value.strip():
                return value
    text = response.text.strip()
    return text or response.reason_phrase or f"HTTP {response.status_code}"


class ApiClient:
    """Single-request JSON transport. Every call is attempted exactly once."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        connect_timeout: float | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        if not self.base_url:
            raise ValueError("Backend base URL is not configured.")
        self.timeout = timeout if timeout is not None else settings.request_timeout_seconds
        self.connect_timeout = connect_timeout if connect_timeout is not None else settings.connect_timeout_seconds
        self._client = client or httpx.Client(timeout=httpx.Timeout(self.timeout, connect=self.connect_timeout))

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "ApiClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def request(
        self,
        method: str,
        path: str,
        *,
        session: Session | None = None,
        json: Any = None,
    ) -> Any:
        """Send one request and return the decoded JSON body (``None`` when empty).

        Raises:
            NetworkError: timeout or connection failure.
            AuthError: 401/403.
            NotFoundError: 404.
            BackendError: any other status >= 400.
            ParseError: the success body is not valid JSON.
        """
        url = f"{self.base_url}{path}"
        headers = {"Accept": "application/json"}
        if session is not None:
            headers.update(session.authorization_header())

        logger.debug(f"{method} {url}")
        try:
            response = self._client.request(method, url, headers=headers, json=json)
        except httpx.TimeoutException as e:
            logger.warning(f"{method} {path} timed out: {e}")
            raise NetworkError(f"Request to {self.base_url} timed out.") from e
        except httpx.TransportError as e:
            logger.warning(f"{method} {path} failed: {e}")
            raise NetworkError(f"Failed to reach backend at {self.base_url}: {e}") from e

        status = response.status_code
        if status in (401, 403):
            raise AuthError(_error_message(response))
        if status == 404:
            raise NotFoundError(_error_message(response))
        if status >= 400:
            message = _error_message(response)
            logger.warning(f"{method} {path} returned {status}: {message}")
            raise BackendError(status, message)

        if status == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            logger.error(f"{method} {path} returned a non-JSON body")
            raise ParseError(f"Backend returned malformed JSON for {path}.") from e

    def get(self, path: str, *, session: Session | None = None) -> Any:
        return self.request("GET", path, session=session)

    def post(self, path: str, payload: Any, *, session: Session | None = None) -> Any:
        return self.request("POST", path, session=session, json=payload)

    def put(self, path: str, payload: Any, *, session: Session | None = None) -> Any:
        return self.request("PUT", path, session=session, json=payload)

    def delete(self, path: str, *, session: Session | None = None) -> Any:
        return self.request("DELETE", path, session=session)
