"""CRUD façade over the session owner's truck profiles."""

from __future__ import annotations

import logging
import re
from typing import Any, Mapping

from pydantic import ValidationError as PydanticValidationError

from ...errors import BackendError, ParseError, QuotaExceededError, TruckNavError, ValidationError
from ...models.domain import FieldIssue, Session
from ...schemas.truck_profiles import ProfileStats, TruckProfile, TruckProfileDraft
from ..api_client import ApiClient
from .validation import validate_for_submission

PROFILES_PATH = "/api/v1/truck-profiles"
STATS_PATH = f"{PROFILES_PATH}/stats"

_QUOTA_PATTERN = re.compile(r"maximum limit of \d+ truck profiles|quota", re.IGNORECASE)
_LIMIT_PATTERN = re.compile(r"\btruck (height|width|length|weight) exceeds", re.IGNORECASE)
_LIMIT_FIELDS = {"height": "height", "width": "width", "length": "length", "weight": "maxWeight"}

logger = logging.getLogger(__name__)


def _parse_profile(body: Any) -> TruckProfile:
    try:
        return TruckProfile.model_validate(body)
    except PydanticValidationError as e:
        raise ParseError(f"Malformed truck profile from backend: {e.error_count()} invalid field(s).") from e


def _parse_profiles(body: Any) -> list[TruckProfile]:
    if not isinstance(body, list):
        raise ParseError("Expected a list of truck profiles from backend.")
    return [_parse_profile(item) for item in body]


def _rejected_field(message: str) -> str:
    if "already exists" in message.lower():
        return "name"
    match = _LIMIT_PATTERN.search(message)
    if match:
        return _LIMIT_FIELDS[match.group(1).lower()]
    return "profile"


def _translate_rejection(error: BackendError, *, quota_possible: bool) -> TruckNavError:
    """Map a rejected mutation onto the quota/validation taxonomy.

    Only creation can run into the profile quota; every other 4xx names a
    field problem (duplicate name, road limits) or the profile as a whole.
    """
    if error.status_code >= 500:
        return error
    if quota_possible and _QUOTA_PATTERN.search(error.message):
        return QuotaExceededError(error.message)
    issue = FieldIssue(_rejected_field(error.message), error.message)
    return ValidationError([issue], message=error.message)


class ProfileRegistry:
    """Profile collection for one session.

    The local cache is advisory: it is replaced wholesale by successful fetches
    and marked stale by every mutation attempt, successful or not.
    """

    def __init__(self, api: ApiClient, session: Session) -> None:
        self.api = api
        self.session = session
        self._profiles: tuple[TruckProfile, ...] = ()
        self._stats: ProfileStats | None = None
        self._profiles_stale = True
        self._stats_stale = True

    @property
    def profiles(self) -> tuple[TruckProfile, ...]:
        """Last successfully fetched profiles (possibly stale)."""
        return self._profiles

    @property
    def cached_stats(self) -> ProfileStats | None:
        return self._stats

    @property
    def profiles_stale(self) -> bool:
        return self._profiles_stale

    @property
    def is_stale(self) -> bool:
        return self._profiles_stale or self._stats_stale

    def invalidate(self) -> None:
        self._profiles_stale = True
        self._stats_stale = True

    def list(self) -> list[TruckProfile]:
        profiles = _parse_profiles(self.api.get(PROFILES_PATH, session=self.session))
        self._profiles = tuple(profiles)
        self._profiles_stale = False
        logger.info(f"Loaded {len(profiles)} truck profiles")
        return profiles

    def get(self, profile_id: str) -> TruckProfile:
        return _parse_profile(self.api.get(f"{PROFILES_PATH}/{profile_id}", session=self.session))

    def stats(self) -> ProfileStats:
        body = self.api.get(STATS_PATH, session=self.session)
        try:
            stats = ProfileStats.model_validate(body)
        except PydanticValidationError as e:
            raise ParseError("Malformed profile stats from backend.") from e
        self._stats = stats
        self._stats_stale = False
        return stats

    def refresh(self) -> list[TruckProfile]:
        """Re-fetch stats and the profile list; the cache only changes on success."""
        self.stats()
        return self.list()

    def can_create_more(self) -> bool:
        if self._stats is None or self._stats_stale:
            self.stats()
        return self._stats.can_create_more

    def create(self, draft: TruckProfileDraft | Mapping[str, Any]) -> TruckProfile:
        profile = validate_for_submission(draft)
        if self._stats is not None and not self._stats_stale and not self._stats.can_create_more:
            raise QuotaExceededError(f"Maximum limit of {self._stats.max_profiles} truck profiles reached")

        try:
            body = self.api.post(PROFILES_PATH, profile.to_payload(), session=self.session)
        except BackendError as e:
            raise _translate_rejection(e, quota_possible=True) from e
        finally:
            self.invalidate()

        created = _parse_profile(body)
        logger.info(f"Created truck profile '{created.name}' ({created.id})")
        return created

    def update(self, profile_id: str, draft: TruckProfileDraft | Mapping[str, Any]) -> TruckProfile:
        profile = validate_for_submission(draft)
        try:
            body = self.api.put(f"{PROFILES_PATH}/{profile_id}", profile.to_payload(), session=self.session)
        except BackendError as e:
            raise _translate_rejection(e, quota_possible=False) from e
        finally:
            self.invalidate()

        updated = _parse_profile(body)
        logger.info(f"Updated truck profile '{updated.name}' ({updated.id})")
        return updated

    def delete(self, profile_id: str) -> None:
        """Delete a profile. Irreversible; callers must confirm first."""
        try:
            self.api.delete(f"{PROFILES_PATH}/{profile_id}", session=self.session)
        finally:
            self.invalidate()
        logger.info(f"Deleted truck profile {profile_id}")
