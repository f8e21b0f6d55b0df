"""User-triggered actions with error handling at the operation boundary.

Every public method here returns an ``ActionOutcome`` instead of raising: domain
errors from the registry, builder and calculator are turned into the message a
presentation layer shows. Nothing is retried automatically.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, Mapping, Optional

from ..errors import (
    AuthError,
    CalculationError,
    NetworkError,
    NotFoundError,
    OperationInProgressError,
    ParseError,
    QuotaExceededError,
    TruckNavError,
    ValidationError,
)
from ..models.domain import FieldIssue, Session
from ..persistence.filesystem import FileStorage
from ..schemas.routing import RouteRequest, RouteResult
from ..schemas.truck_profiles import TruckProfileDraft
from .api_client import ApiClient
from .profiles.registry import ProfileRegistry
from .routing.builder import CoordinateInput, build_route_request
from .routing.service import RouteCalculator, save_route_result

LOAD_PROFILES = "load_profiles"
SAVE_PROFILE = "save_profile"
DELETE_PROFILE = "delete_profile"
CALCULATE_ROUTE = "calculate_route"

RETRY_MESSAGE = "Could not reach the route service. Please try again."

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ActionOutcome:
    success: bool
    message: str
    data: Any = None
    requires_sign_in: bool = False
    issues: list[FieldIssue] = field(default_factory=list)


def describe_error(error: TruckNavError) -> str:
    """User-facing text for a domain error."""
    if isinstance(error, ValidationError):
        return str(error)
    if isinstance(error, AuthError):
        return "Your session has expired. Please sign in again."
    if isinstance(error, QuotaExceededError):
        return f"{error} Delete a truck profile to create a new one."
    if isinstance(error, NotFoundError):
        return "The selected truck profile no longer exists. The profile list has been refreshed."
    if isinstance(error, CalculationError):
        return str(error) or "An error occurred while calculating route"
    if isinstance(error, OperationInProgressError):
        return "Please wait for the current request to finish."
    if isinstance(error, (NetworkError, ParseError)):
        return RETRY_MESSAGE
    return "An unexpected error occurred. Please try again."


class FleetWorkspace:
    """Profile management and route calculation for one signed-in operator."""

    def __init__(self, api: ApiClient, session: Session, storage: FileStorage | None = None) -> None:
        self.registry = ProfileRegistry(api, session)
        self.calculator = RouteCalculator(api, session)
        self.storage = storage
        self.last_request: RouteRequest | None = None
        self.last_result: RouteResult | None = None
        self._pending: set[str] = set()

    def is_pending(self, action: str) -> bool:
        return action in self._pending

    @property
    def can_submit_route(self) -> bool:
        """Whether the calculate trigger should be enabled."""
        return bool(self.registry.profiles) and not self.is_pending(CALCULATE_ROUTE)

    @property
    def can_create_profile(self) -> bool:
        """Advisory: False until fresh stats confirm a free slot."""
        stats = self.registry.cached_stats
        if stats is None or self.registry.is_stale or self.is_pending(SAVE_PROFILE):
            return False
        return stats.can_create_more

    @contextmanager
    def _pending_action(self, action: str) -> Iterator[None]:
        if action in self._pending:
            raise OperationInProgressError(f"{action} is already in progress")
        self._pending.add(action)
        try:
            yield
        finally:
            self._pending.discard(action)

    def _refresh_after_error(self) -> None:
        try:
            self.registry.refresh()
        except TruckNavError as e:
            logger.warning(f"Profile refresh failed, keeping previous list: {e}")

    def _run(self, action: str, operation: Callable[[], tuple[Any, str]]) -> ActionOutcome:
        try:
            with self._pending_action(action):
                data, message = operation()
        except TruckNavError as e:
            logger.warning(f"{action} failed: {type(e).__name__}: {e}")
            if isinstance(e, NotFoundError):
                self._refresh_after_error()
            return ActionOutcome(
                success=False,
                message=describe_error(e),
                requires_sign_in=isinstance(e, AuthError),
                issues=list(e.issues) if isinstance(e, ValidationError) else [],
            )
        return ActionOutcome(success=True, message=message, data=data)

    def _reload_after_mutation(self, message: str) -> str:
        try:
            self.registry.refresh()
        except TruckNavError as e:
            logger.warning(f"Refresh after mutation failed: {e}")
            return f"{message} The profile list could not be reloaded."
        return message

    def load_profiles(self) -> ActionOutcome:
        def operation() -> tuple[Any, str]:
            profiles = self.registry.refresh()
            return profiles, f"Loaded {len(profiles)} truck profiles"

        return self._run(LOAD_PROFILES, operation)

    def save_profile(
        self,
        draft: TruckProfileDraft | Mapping[str, Any],
        profile_id: Optional[str] = None,
    ) -> ActionOutcome:
        """Create a profile, or update ``profile_id`` when given."""

        def operation() -> tuple[Any, str]:
            if profile_id is None:
                profile = self.registry.create(draft)
                message = "Truck profile created successfully"
            else:
                profile = self.registry.update(profile_id, draft)
                message = "Truck profile updated successfully"
            return profile, self._reload_after_mutation(message)

        return self._run(SAVE_PROFILE, operation)

    def delete_profile(self, profile_id: str, confirm: Callable[[], bool]) -> ActionOutcome:
        """Delete after ``confirm()`` returns True; deletion cannot be undone."""
        if not confirm():
            return ActionOutcome(success=False, message="Deletion cancelled")

        def operation() -> tuple[Any, str]:
            self.registry.delete(profile_id)
            return None, self._reload_after_mutation("Truck profile deleted successfully")

        return self._run(DELETE_PROFILE, operation)

    def calculate_route(
        self,
        origin: CoordinateInput | None,
        destination: CoordinateInput | None,
        truck_profile_id: Any,
        optimization_type: Any = None,
        route_name: Optional[str] = None,
    ) -> ActionOutcome:
        def operation() -> tuple[Any, str]:
            if self.registry.profiles_stale:
                self.registry.list()
            request = build_route_request(
                origin,
                destination,
                truck_profile_id,
                optimization_type,
                route_name,
                profiles=self.registry.profiles,
            )
            self.last_result = None
            result = self.calculator.calculate(request)
            self.last_request = request
            self.last_result = result
            return result, "Route calculated successfully!"

        return self._run(CALCULATE_ROUTE, operation)

    def save_last_result(self) -> ActionOutcome:
        """Explicitly keep the most recent result on disk."""
        if self.last_result is None:
            return ActionOutcome(success=False, message="Calculate a route before saving it.")
        try:
            run_dir = save_route_result(self.last_result, self.last_request, self.storage)
        except OSError as e:
            logger.error(f"Saving route result failed: {e}")
            return ActionOutcome(success=False, message=f"Could not save route: {e}")
        return ActionOutcome(success=True, message=f"Route saved to {run_dir}", data=run_dir)
