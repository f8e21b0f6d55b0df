"""Error taxonomy raised by the client layers."""

from __future__ import annotations

from typing import Iterable, Optional

from pydantic import ValidationError as PydanticValidationError

from .models.domain import FieldIssue


class TruckNavError(Exception):
    """Base class for every error the client raises on purpose."""


class ValidationError(TruckNavError):
    """One or more fields were rejected, client-side or by the backend."""

    def __init__(self, issues: Iterable[FieldIssue], message: Optional[str] = None) -> None:
        self.issues: list[FieldIssue] = list(issues)
        super().__init__(message or "; ".join(str(issue) for issue in self.issues) or "Validation failed")

    @property
    def fields(self) -> list[str]:
        return [issue.field for issue in self.issues]

    @classmethod
    def from_pydantic(cls, exc: PydanticValidationError, prefix: str = "") -> "ValidationError":
        """Translate pydantic errors into field issues named by their wire location."""
        issues: list[FieldIssue] = []
        for error in exc.errors():
            location = ".".join(str(part) for part in error.get("loc", ()))
            field = ".".join(part for part in (prefix, location) if part) or "__root__"
            message = error.get("msg", "Invalid value")
            if message.startswith("Value error, "):
                message = message[len("Value error, "):]
            issues.append(FieldIssue(field, message))
        return cls(issues)


class AuthError(TruckNavError):
    """Missing, invalid or expired session."""


class QuotaExceededError(TruckNavError):
    """The owner already holds the maximum number of active profiles."""


class NotFoundError(TruckNavError):
    """The referenced resource does not exist for the current session."""


class NetworkError(TruckNavError):
    """Transport failure: timeout, DNS or connection error."""


class ParseError(TruckNavError):
    """The backend answered with a payload that does not match the contract."""


class BackendError(TruckNavError):
    """Non-success response not covered by a more specific error."""

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"Backend returned {status_code}: {message}")


class CalculationError(TruckNavError):
    """Route calculation rejected; the message is the backend's own text."""


class OperationInProgressError(TruckNavError):
    """A submission of the same kind is still pending."""
