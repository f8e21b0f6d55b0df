"""Client-side truck profile validation."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from pydantic import ValidationError as PydanticValidationError

from ...config import settings
from ...errors import ValidationError
from ...models.domain import FieldIssue
from ...schemas.truck_profiles import TruckProfileDraft

# Road limits applied by the backend's own profile check (Indian national highways).
MAX_HEIGHT_M = 4.5
MAX_WIDTH_M = 2.5
MAX_LENGTH_M = 18.75
MAX_GROSS_WEIGHT_T = 55.0

logger = logging.getLogger(__name__)


def validate_profile(draft: TruckProfileDraft | Mapping[str, Any]) -> TruckProfileDraft:
    """Validate a draft and return the normalized model.

    Accepts raw form data (camelCase or snake_case keys, numeric strings allowed)
    or an existing model, which is re-validated. Unknown enum values are rejected,
    missing permit flags become ``False``.

    Raises:
        ValidationError: with one issue per offending field.
    """
    data = draft.model_dump(exclude={"id"}) if isinstance(draft, TruckProfileDraft) else dict(draft)
    try:
        return TruckProfileDraft.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError.from_pydantic(e) from e


def check_axle_capacity(profile: TruckProfileDraft) -> list[FieldIssue]:
    """Flag a gross weight the axles cannot carry."""
    capacity = profile.max_axle_load * profile.number_of_axles
    if capacity < profile.max_weight:
        return [
            FieldIssue(
                "maxWeight",
                f"Gross weight {profile.max_weight:g} t exceeds axle capacity "
                f"{capacity:g} t ({profile.number_of_axles} x {profile.max_axle_load:g} t)",
            )
        ]
    return []


def check_legal_limits(profile: TruckProfileDraft) -> list[FieldIssue]:
    issues: list[FieldIssue] = []
    if profile.height > MAX_HEIGHT_M:
        issues.append(FieldIssue("height", f"Truck height exceeds maximum limit of {MAX_HEIGHT_M:g}m"))
    if profile.width > MAX_WIDTH_M:
        issues.append(FieldIssue("width", f"Truck width exceeds maximum limit of {MAX_WIDTH_M:g}m"))
    if profile.length > MAX_LENGTH_M:
        issues.append(FieldIssue("length", f"Truck length exceeds maximum limit of {MAX_LENGTH_M:g}m"))
    if profile.max_weight > MAX_GROSS_WEIGHT_T:
        issues.append(
            FieldIssue("maxWeight", f"Truck weight exceeds maximum limit of {MAX_GROSS_WEIGHT_T:g} tonnes")
        )
    return issues


def validate_for_submission(
    draft: TruckProfileDraft | Mapping[str, Any],
    *,
    enforce_axle_capacity: bool | None = None,
    enforce_legal_limits: bool | None = None,
) -> TruckProfileDraft:
    """Full pre-submission check: field rules plus the advisory checks.

    Advisory findings are logged as warnings unless the matching setting makes
    them blocking, in which case they are raised together as a ValidationError.
    """
    profile = validate_profile(draft)
    enforce_axles = settings.enforce_axle_capacity if enforce_axle_capacity is None else enforce_axle_capacity
    enforce_limits = settings.enforce_legal_limits if enforce_legal_limits is None else enforce_legal_limits

    blocking: list[FieldIssue] = []
    for issues, enforced in (
        (check_axle_capacity(profile), enforce_axles),
        (check_legal_limits(profile), enforce_limits),
    ):
        if not issues:
            continue
        if enforced:
            blocking.extend(issues)
        else:
            for issue in issues:
                logger.warning(f"Profile '{profile.name}': {issue}")
    if blocking:
        raise ValidationError(blocking)
    return profile
