"""Domain records shared across the client."""

from dataclasses import dataclass
from typing import Optional


@dataclass(slots=True, frozen=True)
class FieldIssue:
    """A single rejected field, keyed by its wire (camelCase) name."""

    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


@dataclass(slots=True)
class Session:
    """Authenticated identity that scopes every profile and route call."""

    access_token: str
    user_id: Optional[str] = None
    email: Optional[str] = None
    full_name: Optional[str] = None
    role: Optional[str] = None
    token_type: str = "Bearer"

    def authorization_header(self) -> dict[str, str]:
        return {"Authorization": f"{self.token_type} {self.access_token}"}
