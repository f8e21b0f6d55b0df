from datetime import datetime

import pytest

from trucknav.errors import ParseError
from trucknav.schemas.routing import OptimizationType, TrafficLevel, Unrecognized
from trucknav.services.routing.result import Severity, optimization_badge, parse_route_result, traffic_badge


def test_parse_keeps_backend_order(route_payload):
    result = parse_route_result(route_payload)

    assert [option.name for option in result.route_options] == ["Fuel Efficient Route", "Fastest Route"]
    assert result.calculated_at == datetime(2024, 3, 1, 10, 15, 30)
    assert result.truck_profile_used == "1"
    assert result.restrictions_found == 2


def test_parse_normalizes_optional_lists(route_payload):
    result = parse_route_result(route_payload)

    first, second = result.route_options
    assert first.warnings == ["Low bridge near Vadodara"]
    assert first.recommendations == []
    assert second.warnings == []
    assert second.restrictions_count is None


def test_parse_keeps_unknown_enum_values(route_payload):
    route_payload["routeOptions"][0]["optimizationType"] = "ECO_PLUS"
    route_payload["routeOptions"][1]["trafficLevel"] = "SEVERE"

    result = parse_route_result(route_payload)

    assert result.route_options[0].optimization_type == Unrecognized("ECO_PLUS")
    assert result.route_options[1].traffic_level == Unrecognized("SEVERE")
    assert result.route_options[0].model_dump(by_alias=True)["optimizationType"] == "ECO_PLUS"


def test_parse_known_enums(route_payload):
    option = parse_route_result(route_payload).route_options[1]

    assert option.optimization_type is OptimizationType.FASTEST
    assert option.traffic_level is TrafficLevel.HIGH


@pytest.mark.parametrize("raw", [None, [], "route", 42])
def test_parse_rejects_non_objects(raw):
    with pytest.raises(ParseError):
        parse_route_result(raw)


@pytest.mark.parametrize(
    "mutate",
    [
        lambda p: p.update(routeOptions=[]),
        lambda p: p.pop("routeOptions"),
        lambda p: p.update(calculatedAt="yesterday"),
        lambda p: p.update(restrictionsFound=-1),
        lambda p: p["routeOptions"][0].update(totalDistance=-5),
        lambda p: p["routeOptions"][0].update(estimatedDuration="long"),
        lambda p: p["routeOptions"][0].pop("name"),
        lambda p: p["routeOptions"][1].update(optimizationType=None),
    ],
)
def test_parse_rejects_malformed_payloads(route_payload, mutate):
    mutate(route_payload)

    with pytest.raises(ParseError):
        parse_route_result(route_payload)


@pytest.mark.parametrize(
    "value, severity, label",
    [
        ("FASTEST", Severity.PRIMARY, "Fastest"),
        ("SHORTEST", Severity.SUCCESS, "Shortest"),
        ("FUEL_EFFICIENT", Severity.WARNING, "Fuel Efficient"),
        ("AVOID_TOLLS", Severity.INFO, "Toll-Free"),
        ("ECO_PLUS", Severity.NEUTRAL, "ECO_PLUS"),
        (Unrecognized("SCENIC"), Severity.NEUTRAL, "SCENIC"),
    ],
)
def test_optimization_badge(value, severity, label):
    badge = optimization_badge(value)

    assert badge.severity is severity
    assert badge.label == label


@pytest.mark.parametrize(
    "value, severity, label",
    [
        (TrafficLevel.LOW, Severity.SUCCESS, "Low Traffic"),
        ("MEDIUM", Severity.WARNING, "Medium Traffic"),
        ("HIGH", Severity.DANGER, "High Traffic"),
        ("GRIDLOCK", Severity.NEUTRAL, "GRIDLOCK"),
    ],
)
def test_traffic_badge(value, severity, label):
    badge = traffic_badge(value)

    assert badge.severity is severity
    assert badge.label == label
