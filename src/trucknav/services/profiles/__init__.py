"""Truck profile services."""

from .registry import ProfileRegistry
from .validation import check_axle_capacity, check_legal_limits, validate_for_submission, validate_profile

__all__ = [
    "ProfileRegistry",
    "validate_profile",
    "validate_for_submission",
    "check_axle_capacity",
    "check_legal_limits",
]
