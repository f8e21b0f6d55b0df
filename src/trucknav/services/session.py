"""Session acquisition and validation."""

from __future__ import annotations

import logging
from typing import Any

from ..errors import AuthError, BackendError, ParseError
from ..models.domain import Session
from .api_client import ApiClient

LOGIN_PATH = "/api/v1/auth/login"
CURRENT_USER_PATH = "/api/v1/auth/me"

logger = logging.getLogger(__name__)


def _optional_text(value: Any) -> str | None:
    return None if value is None else str(value)


def login(api: ApiClient, email: str, password: str) -> Session:
    """Exchange credentials for a session."""
    try:
        body = api.post(LOGIN_PATH, {"email": email, "password": password})
    except BackendError as e:
        # the backend answers 400 for malformed credentials
        if e.status_code < 500:
            raise AuthError(e.message) from e
        raise

    if not isinstance(body, dict) or not body.get("accessToken"):
        raise ParseError("Login response did not include an access token.")

    session = Session(
        access_token=str(body["accessToken"]),
        token_type=str(body.get("tokenType") or "Bearer"),
        user_id=_optional_text(body.get("userId")),
        email=_optional_text(body.get("email")),
        full_name=_optional_text(body.get("fullName")),
        role=_optional_text(body.get("role")),
    )
    logger.info(f"Signed in as {session.email or session.user_id}")
    return session


def validate_session(api: ApiClient, session: Session) -> Session:
    """Confirm the session is still accepted and refresh its identity fields."""
    body = api.get(CURRENT_USER_PATH, session=session)
    if not isinstance(body, dict):
        raise ParseError("Current-user response was not an object.")
    if body.get("enabled") is False:
        raise AuthError("Account is disabled.")

    return Session(
        access_token=session.access_token,
        token_type=session.token_type,
        user_id=_optional_text(body.get("id", session.user_id)),
        email=_optional_text(body.get("email", session.email)),
        full_name=_optional_text(body.get("fullName", session.full_name)),
        role=_optional_text(body.get("role", session.role)),
    )
