"""Parsing and classification of route calculation results."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from pydantic import ValidationError as PydanticValidationError

from ...errors import ParseError
from ...schemas.routing import OptimizationType, RouteResult, TrafficLevel, Unrecognized, classify


class Severity(str, Enum):
    PRIMARY = "primary"
    SUCCESS = "success"
    WARNING = "warning"
    INFO = "info"
    DANGER = "danger"
    NEUTRAL = "neutral"


@dataclass(slots=True, frozen=True)
class Badge:
    severity: Severity
    label: str


OPTIMIZATION_BADGES: dict[OptimizationType, Badge] = {
    OptimizationType.FASTEST: Badge(Severity.PRIMARY, "Fastest"),
    OptimizationType.SHORTEST: Badge(Severity.SUCCESS, "Shortest"),
    OptimizationType.FUEL_EFFICIENT: Badge(Severity.WARNING, "Fuel Efficient"),
    OptimizationType.AVOID_TOLLS: Badge(Severity.INFO, "Toll-Free"),
}

TRAFFIC_BADGES: dict[TrafficLevel, Badge] = {
    TrafficLevel.LOW: Badge(Severity.SUCCESS, "Low Traffic"),
    TrafficLevel.MEDIUM: Badge(Severity.WARNING, "Medium Traffic"),
    TrafficLevel.HIGH: Badge(Severity.DANGER, "High Traffic"),
}


def _badge(value: Any, enum_cls: type[Enum], table: dict) -> Badge:
    try:
        kind = classify(value, enum_cls)
    except ValueError:
        return Badge(Severity.NEUTRAL, str(value))
    if isinstance(kind, Unrecognized):
        return Badge(Severity.NEUTRAL, kind.raw)
    return table[kind]


def optimization_badge(value: Union[OptimizationType, Unrecognized, str]) -> Badge:
    """Badge for a strategy; unknown values fall back to a neutral badge with the raw text."""
    return _badge(value, OptimizationType, OPTIMIZATION_BADGES)


def traffic_badge(value: Union[TrafficLevel, Unrecognized, str]) -> Badge:
    return _badge(value, TrafficLevel, TRAFFIC_BADGES)


def parse_route_result(raw: Any) -> RouteResult:
    """Validate an untrusted backend payload.

    Option order is kept exactly as received. Unknown strategy or traffic
    values survive as ``Unrecognized``; anything else malformed is rejected.
    """
    if not isinstance(raw, dict):
        raise ParseError("Route result must be a JSON object.")
    try:
        return RouteResult.model_validate(raw)
    except PydanticValidationError as e:
        details = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in e.errors()
        )
        raise ParseError(f"Malformed route result: {details}") from e
