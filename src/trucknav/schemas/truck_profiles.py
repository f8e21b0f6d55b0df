"""Truck profile request/response schemas."""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, computed_field, field_validator
from pydantic.alias_generators import to_camel

from ..config import settings


class TruckType(str, Enum):
    MINI_TRUCK = "MINI_TRUCK"
    LIGHT_TRUCK = "LIGHT_TRUCK"
    MEDIUM_TRUCK = "MEDIUM_TRUCK"
    HEAVY_TRUCK = "HEAVY_TRUCK"
    MULTI_AXLE = "MULTI_AXLE"
    TRAILER = "TRAILER"


class CargoType(str, Enum):
    GENERAL = "GENERAL"
    HAZMAT = "HAZMAT"
    OVERSIZE = "OVERSIZE"
    REFRIGERATED = "REFRIGERATED"
    LIQUID = "LIQUID"


class EmissionStandard(str, Enum):
    BS3 = "BS3"
    BS4 = "BS4"
    BS6 = "BS6"


_MEASURE_FIELDS = ("height", "width", "length", "max_weight", "max_axle_load")


class TruckProfileDraft(BaseModel):
    """Profile fields as submitted by the operator, before the backend assigns an id."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    name: str = Field(..., description="Display name, unique per owner on the backend.")
    description: Optional[str] = None
    height: float = Field(..., gt=0, allow_inf_nan=False, description="Meters.")
    width: float = Field(..., gt=0, allow_inf_nan=False, description="Meters.")
    length: float = Field(..., gt=0, allow_inf_nan=False, description="Meters.")
    max_weight: float = Field(..., gt=0, allow_inf_nan=False, description="Gross weight in tonnes.")
    max_axle_load: float = Field(..., gt=0, allow_inf_nan=False, description="Tonnes per axle.")
    number_of_axles: int = Field(..., gt=0)
    truck_type: TruckType = TruckType.LIGHT_TRUCK
    cargo_type: CargoType = CargoType.GENERAL
    emission_standard: EmissionStandard = EmissionStandard.BS6
    registration_number: Optional[str] = None
    has_national_permit: bool = False
    has_oversize_permit: bool = False
    has_hazmat_permit: bool = False

    @field_validator("name")
    @classmethod
    def _require_name(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Truck profile name is required")
        return value

    @field_validator(*_MEASURE_FIELDS, "number_of_axles", mode="before")
    @classmethod
    def _reject_booleans(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError("must be a number, not a boolean")
        return value

    @field_validator("truck_type", "cargo_type", "emission_standard", mode="before")
    @classmethod
    def _default_missing_enum(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            return cls.model_fields[info.field_name].default
        return value

    @field_validator("has_national_permit", "has_oversize_permit", "has_hazmat_permit", mode="before")
    @classmethod
    def _default_missing_permit(cls, value: Any) -> Any:
        return False if value is None else value

    def to_payload(self) -> dict:
        """Request body for POST/PUT, keyed by wire names."""
        return self.model_dump(by_alias=True, mode="json", exclude={"id"})


class TruckProfile(TruckProfileDraft):
    """A profile stored by the backend."""

    id: str

    @field_validator("id", mode="before")
    @classmethod
    def _normalize_id(cls, value: Any) -> str:
        if isinstance(value, bool) or value is None:
            raise ValueError("profile id must be a string or integer")
        text = str(value).strip()
        if not text:
            raise ValueError("profile id must not be empty")
        return text

    def to_draft(self) -> TruckProfileDraft:
        """Editable copy without the server-assigned identity."""
        return TruckProfileDraft.model_validate(self.model_dump(exclude={"id"}))


class ProfileStats(BaseModel):
    """Quota summary; derived values are always recomputed from the counts."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    active_profile_count: int = Field(..., ge=0)
    max_profiles: int = Field(default_factory=lambda: settings.default_max_profiles, ge=0)

    @computed_field(alias="remainingSlots")
    @property
    def remaining_slots(self) -> int:
        return max(0, self.max_profiles - self.active_profile_count)

    @computed_field(alias="canCreateMore")
    @property
    def can_create_more(self) -> bool:
        return self.active_profile_count < self.max_profiles
