"""Assembly and validation of route calculation requests."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence, Union

from pydantic import ValidationError as PydanticValidationError

from ...errors import NotFoundError, ValidationError
from ...models.domain import FieldIssue
from ...schemas.routing import Coordinate, OptimizationType, RouteRequest
from ...schemas.truck_profiles import TruckProfile

CoordinateInput = Union[Coordinate, Mapping[str, Any], Sequence[Any]]


def _coordinate_data(value: CoordinateInput | None) -> Any:
    if isinstance(value, Coordinate):
        return value.model_dump()
    # (lat, lon) pairs, including lists decoded from JSON
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes)) and len(value) == 2:
        return {"latitude": value[0], "longitude": value[1]}
    return value


def _profile_id(value: Any) -> tuple[str, list[FieldIssue]]:
    if value is None:
        return "", [FieldIssue("truckProfileId", "Truck profile is required")]
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        return "", [FieldIssue("truckProfileId", "Truck profile id must be an integer or string")]
    text = str(value).strip()
    if not text:
        return "", [FieldIssue("truckProfileId", "Truck profile is required")]
    return text, []


def _collect_issues(prefix: str, fn) -> tuple[Any, list[FieldIssue]]:
    try:
        return fn(), []
    except PydanticValidationError as e:
        return None, ValidationError.from_pydantic(e, prefix=prefix).issues


def build_route_request(
    origin: CoordinateInput | None,
    destination: CoordinateInput | None,
    truck_profile_id: Any,
    optimization_type: Union[OptimizationType, str, None] = None,
    route_name: Optional[str] = None,
    *,
    profiles: Sequence[TruckProfile],
) -> RouteRequest:
    """Validate form input against the cached profile list and build a request.

    ``profiles`` should come from a fresh registry fetch; the backend
    re-checks ownership regardless.

    Raises:
        ValidationError: no profiles exist, or any field is missing/out of range.
            All field issues are reported together.
        NotFoundError: the fields are valid but ``truck_profile_id`` is not
            among ``profiles``.
    """
    if not profiles:
        raise ValidationError(
            [FieldIssue("truckProfileId", "Please create a truck profile first to calculate routes.")]
        )

    issues: list[FieldIssue] = []

    if origin is None:
        origin_point, found = None, [FieldIssue("origin", "Start coordinates are required")]
    else:
        origin_point, found = _collect_issues(
            "origin", lambda: Coordinate.model_validate(_coordinate_data(origin))
        )
    issues.extend(found)

    if destination is None:
        destination_point, found = None, [FieldIssue("destination", "End coordinates are required")]
    else:
        destination_point, found = _collect_issues(
            "destination", lambda: Coordinate.model_validate(_coordinate_data(destination))
        )
    issues.extend(found)

    profile_id, found = _profile_id(truck_profile_id)
    issues.extend(found)

    strategy = OptimizationType.FASTEST
    if optimization_type is not None and optimization_type != "":
        try:
            strategy = OptimizationType(optimization_type)
        except ValueError:
            issues.append(FieldIssue("optimizationType", f"Unknown optimization type '{optimization_type}'"))

    if issues:
        raise ValidationError(issues)

    if profile_id not in {profile.id for profile in profiles}:
        raise NotFoundError(f"Truck profile {profile_id} is no longer available. Refresh the profile list.")

    return RouteRequest(
        origin=origin_point,
        destination=destination_point,
        truck_profile_id=profile_id,
        optimization_type=strategy,
        route_name=route_name if route_name and route_name.strip() else None,
    )
