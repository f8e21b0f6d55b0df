import csv
import io

import pytest

from trucknav.services.outputs.routing_formatter import (
    format_currency,
    format_distance,
    format_duration,
    route_result_to_csv,
    route_result_to_json,
)
from trucknav.services.routing.result import parse_route_result


@pytest.mark.parametrize(
    "minutes, expected",
    [(0, "0h 0m"), (59, "0h 59m"), (60, "1h 0m"), (61, "1h 1m"), (90, "1h 30m"), (1500, "25h 0m")],
)
def test_format_duration(minutes, expected):
    assert format_duration(minutes) == expected


def test_format_duration_rejects_negative():
    with pytest.raises(ValueError):
        format_duration(-1)


@pytest.mark.parametrize("minutes", [90.9, 0.5, float("nan"), float("inf"), True, "90"])
def test_format_duration_rejects_non_integral_minutes(minutes):
    with pytest.raises(ValueError):
        format_duration(minutes)


def test_format_duration_accepts_whole_floats():
    assert format_duration(90.0) == "1h 30m"


@pytest.mark.parametrize(
    "amount, expected",
    [(1234.5, "₹1234.50"), (0, "₹0.00"), (2.005, "₹2.01"), (18000.499, "₹18000.50"), (7, "₹7.00")],
)
def test_format_currency(amount, expected):
    assert format_currency(amount) == expected


def test_format_currency_custom_symbol():
    assert format_currency(10, symbol="$") == "$10.00"


def test_format_distance():
    assert format_distance(1450.26) == "1450.3 km"


def test_route_result_to_json(route_payload):
    summary = route_result_to_json(parse_route_result(route_payload))

    assert summary["calculated_at"] == "2024-03-01T10:15:30"
    assert summary["truck_profile_used"] == "1"
    assert [option["rank"] for option in summary["options"]] == [1, 2]
    first = summary["options"][0]
    assert first["strategy_label"] == "Fuel Efficient"
    assert first["traffic_severity"] == "warning"
    assert first["duration"] == "25h 0m"
    assert first["fuel_cost"] == "₹18000.50"
    assert first["warnings"] == ["Low bridge near Vadodara"]


def test_route_result_to_csv(route_payload):
    content = route_result_to_csv(parse_route_result(route_payload))
    rows = list(csv.DictReader(io.StringIO(content)))

    assert [row["name"] for row in rows] == ["Fuel Efficient Route", "Fastest Route"]
    assert rows[1]["traffic_label"] == "High Traffic"
    assert rows[1]["duration"] == "23h 0m"
    assert rows[1]["toll_cost"] == "₹3200.75"
    assert "warnings" not in rows[0]
