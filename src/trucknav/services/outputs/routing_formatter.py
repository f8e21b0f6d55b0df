"""Display formatting and serializers for route results."""

from __future__ import annotations

import csv
import io
from decimal import ROUND_HALF_UP, Decimal
from typing import Union

from ...config import settings
from ...schemas.routing import RouteOption, RouteResult
from ..routing.result import optimization_badge, traffic_badge

_CENT = Decimal("0.01")


def format_duration(minutes: int) -> str:
    """``90`` -> ``"1h 30m"``. Only whole, non-negative minutes are accepted."""
    if isinstance(minutes, bool) or not isinstance(minutes, (int, float)) or (
        isinstance(minutes, float) and not minutes.is_integer()
    ):
        raise ValueError(f"Duration must be a whole number of minutes, got {minutes!r}.")
    minutes = int(minutes)
    if minutes < 0:
        raise ValueError("Duration cannot be negative.")
    hours, mins = divmod(minutes, 60)
    return f"{hours}h {mins}m"


def format_currency(amount: Union[float, int, str, Decimal], symbol: str | None = None) -> str:
    """``1234.5`` -> ``"₹1234.50"``, rounded half-up to the cent."""
    value = Decimal(str(amount)).quantize(_CENT, rounding=ROUND_HALF_UP)
    return f"{settings.currency_symbol if symbol is None else symbol}{value}"


def format_distance(kilometers: float) -> str:
    return f"{float(kilometers):.1f} km"


def route_option_row(option: RouteOption, rank: int) -> dict:
    strategy = optimization_badge(option.optimization_type)
    traffic = traffic_badge(option.traffic_level)
    return {
        "rank": rank,
        "name": option.name,
        "optimization_type": option.optimization_type.value,
        "strategy_label": strategy.label,
        "strategy_severity": strategy.severity.value,
        "traffic_level": option.traffic_level.value,
        "traffic_label": traffic.label,
        "traffic_severity": traffic.severity.value,
        "total_distance_km": option.total_distance,
        "distance": format_distance(option.total_distance),
        "estimated_duration_min": option.estimated_duration,
        "duration": format_duration(option.estimated_duration),
        "fuel_cost": format_currency(option.estimated_fuel_cost),
        "toll_cost": format_currency(option.estimated_toll_cost),
    }


def route_result_to_json(result: RouteResult) -> dict:
    return {
        "calculated_at": result.calculated_at.isoformat(),
        "truck_profile_used": result.truck_profile_used,
        "restrictions_found": result.restrictions_found,
        "options": [
            {
                **route_option_row(option, rank),
                "warnings": list(option.warnings),
                "recommendations": list(option.recommendations),
            }
            for rank, option in enumerate(result.route_options, start=1)
        ],
    }


def route_result_to_csv(result: RouteResult) -> str:
    buffer = io.StringIO()
    fieldnames = [
        "rank",
        "name",
        "optimization_type",
        "strategy_label",
        "traffic_level",
        "traffic_label",
        "total_distance_km",
        "estimated_duration_min",
        "duration",
        "fuel_cost",
        "toll_cost",
    ]
    writer = csv.DictWriter(buffer, fieldnames=fieldnames, extrasaction="ignore")
    writer.writeheader()
    for rank, option in enumerate(result.route_options, start=1):
        writer.writerow(route_option_row(option, rank))
    return buffer.getvalue()
