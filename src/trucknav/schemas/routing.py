"""Route calculation request/response schemas."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, List, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel


class OptimizationType(str, Enum):
    FASTEST = "FASTEST"
    SHORTEST = "SHORTEST"
    FUEL_EFFICIENT = "FUEL_EFFICIENT"
    AVOID_TOLLS = "AVOID_TOLLS"


class TrafficLevel(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class Unrecognized:
    """A backend enum value this client does not know yet."""

    __slots__ = ("raw",)

    def __init__(self, raw: str) -> None:
        self.raw = raw

    @property
    def value(self) -> str:
        return self.raw

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Unrecognized) and other.raw == self.raw

    def __hash__(self) -> int:
        return hash(("unrecognized", self.raw))

    def __repr__(self) -> str:
        return f"Unrecognized({self.raw!r})"


E = TypeVar("E", bound=Enum)


def classify(value: Any, enum_cls: Type[E]) -> Union[E, Unrecognized]:
    """Map a raw value onto ``enum_cls``, keeping unknown strings as ``Unrecognized``."""
    if isinstance(value, (enum_cls, Unrecognized)):
        return value
    if not isinstance(value, str):
        raise ValueError(f"expected a string, got {type(value).__name__}")
    try:
        return enum_cls(value)
    except ValueError:
        return Unrecognized(value)


class Coordinate(BaseModel):
    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., ge=-90, le=90, allow_inf_nan=False)
    longitude: float = Field(..., ge=-180, le=180, allow_inf_nan=False)
    address: Optional[str] = None

    @field_validator("latitude", "longitude", mode="before")
    @classmethod
    def _reject_booleans(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError("must be a number, not a boolean")
        return value

    @field_validator("address")
    @classmethod
    def _blank_address_is_absent(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            return None
        return value


class RouteRequest(BaseModel):
    """A validated, immutable route calculation request."""

    model_config = ConfigDict(frozen=True)

    origin: Coordinate
    destination: Coordinate
    truck_profile_id: str = Field(..., min_length=1)
    optimization_type: OptimizationType = OptimizationType.FASTEST
    route_name: Optional[str] = None

    def to_payload(self) -> dict:
        """Flat body expected by ``POST /api/v1/routes/calculate``."""
        payload: dict[str, Any] = {
            "startLatitude": self.origin.latitude,
            "startLongitude": self.origin.longitude,
            "endLatitude": self.destination.latitude,
            "endLongitude": self.destination.longitude,
            "truckProfileId": self.truck_profile_id,
            "optimizationType": self.optimization_type.value,
        }
        if self.origin.address is not None:
            payload["startAddress"] = self.origin.address
        if self.destination.address is not None:
            payload["endAddress"] = self.destination.address
        if self.route_name is not None:
            payload["routeName"] = self.route_name
        return payload


class RouteOption(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        arbitrary_types_allowed=True,
    )

    name: str
    optimization_type: Union[OptimizationType, Unrecognized]
    traffic_level: Union[TrafficLevel, Unrecognized]
    total_distance: float = Field(..., ge=0, allow_inf_nan=False, description="Kilometers.")
    estimated_duration: int = Field(..., ge=0, description="Minutes.")
    estimated_fuel_cost: float = Field(..., ge=0, allow_inf_nan=False)
    estimated_toll_cost: float = Field(..., ge=0, allow_inf_nan=False)
    description: Optional[str] = None
    route_geometry: Optional[str] = None
    restrictions_count: Optional[int] = Field(default=None, ge=0)
    bypasses_used: Optional[int] = Field(default=None, ge=0)
    warnings: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)

    @field_validator("optimization_type", mode="before")
    @classmethod
    def _classify_optimization(cls, value: Any) -> Union[OptimizationType, Unrecognized]:
        return classify(value, OptimizationType)

    @field_validator("traffic_level", mode="before")
    @classmethod
    def _classify_traffic(cls, value: Any) -> Union[TrafficLevel, Unrecognized]:
        return classify(value, TrafficLevel)

    @field_validator("warnings", "recommendations", mode="before")
    @classmethod
    def _null_list_is_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_serializer("optimization_type", "traffic_level")
    def _serialize_classified(self, value: Union[Enum, Unrecognized]) -> str:
        return value.value


class RouteResult(BaseModel):
    """Backend answer: ranked route options for one request."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    calculated_at: datetime
    truck_profile_used: str
    restrictions_found: int = Field(..., ge=0)
    route_options: List[RouteOption] = Field(..., min_length=1)

    @field_validator("truck_profile_used", mode="before")
    @classmethod
    def _normalize_profile_ref(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value
