"""Route result formatting helpers."""

from .routing_formatter import (
    format_currency,
    format_distance,
    format_duration,
    route_option_row,
    route_result_to_csv,
    route_result_to_json,
)

__all__ = [
    "format_duration",
    "format_currency",
    "format_distance",
    "route_option_row",
    "route_result_to_json",
    "route_result_to_csv",
]
