import json
from typing import Any, Callable, Optional

import httpx
import pytest

from trucknav.models.domain import Session
from trucknav.services.api_client import ApiClient

BASE_URL = "http://backend.test"
PROFILES = "/api/v1/truck-profiles"


def sample_route_payload(profile_id: Any = 1) -> dict:
    # deliberately not sorted by duration or cost
    return {
        "calculatedAt": "2024-03-01T10:15:30",
        "truckProfileUsed": profile_id,
        "restrictionsFound": 2,
        "routeOptions": [
            {
                "name": "Fuel Efficient Route",
                "description": "Optimized for fuel economy",
                "optimizationType": "FUEL_EFFICIENT",
                "trafficLevel": "MEDIUM",
                "totalDistance": 1450.2,
                "estimatedDuration": 1500,
                "estimatedFuelCost": 18000.5,
                "estimatedTollCost": 2100,
                "restrictionsCount": 1,
                "warnings": ["Low bridge near Vadodara"],
            },
            {
                "name": "Fastest Route",
                "optimizationType": "FASTEST",
                "trafficLevel": "HIGH",
                "totalDistance": 1420.0,
                "estimatedDuration": 1380,
                "estimatedFuelCost": 19500,
                "estimatedTollCost": 3200.75,
                "warnings": None,
            },
        ],
    }


class FakeBackend:
    """In-memory stand-in for the truck navigation REST API."""

    def __init__(self, max_profiles: int = 10) -> None:
        self.token = "token-123"
        self.email = "ops@example.com"
        self.password = "secret"
        self.max_profiles = max_profiles
        self.profiles: dict[int, dict] = {}
        self.next_id = 1
        self.calls: list[tuple[str, str]] = []
        self.overrides: dict[tuple[str, str], Callable[[httpx.Request], httpx.Response]] = {}
        self.route_error: Optional[str] = None
        self.route_payload: Optional[dict] = None
        self.on_calculate: Optional[Callable[[], None]] = None

    def seed_profile(self, **fields: Any) -> dict:
        profile = {
            "name": f"Truck {self.next_id}",
            "description": None,
            "height": 3.8,
            "width": 2.4,
            "length": 12.0,
            "maxWeight": 25.0,
            "maxAxleLoad": 10.0,
            "numberOfAxles": 3,
            "truckType": "HEAVY_TRUCK",
            "cargoType": "GENERAL",
            "emissionStandard": "BS6",
            "registrationNumber": None,
            "hasNationalPermit": False,
            "hasOversizePermit": False,
            "hasHazmatPermit": False,
        }
        profile.update(fields)
        profile["id"] = self.next_id
        profile["isActive"] = True
        self.profiles[self.next_id] = profile
        self.next_id += 1
        return profile

    def count(self, method: str, path: str) -> int:
        return sum(1 for call in self.calls if call == (method, path))

    def handler(self, request: httpx.Request) -> httpx.Response:
        method, path = request.method, request.url.path
        self.calls.append((method, path))

        override = self.overrides.get((method, path))
        if override is not None:
            return override(request)

        body = json.loads(request.content) if request.content else None

        if path == "/api/v1/auth/login":
            if body == {"email": self.email, "password": self.password}:
                return httpx.Response(
                    200,
                    json={
                        "accessToken": self.token,
                        "tokenType": "Bearer",
                        "userId": 7,
                        "email": self.email,
                        "fullName": "Fleet Operator",
                        "role": "USER",
                    },
                )
            return httpx.Response(401, json={"error": "Invalid email or password"})

        if request.headers.get("Authorization") != f"Bearer {self.token}":
            return httpx.Response(401, json={"error": "User not authenticated"})

        if path == "/api/v1/auth/me":
            return httpx.Response(
                200,
                json={"id": 7, "email": self.email, "fullName": "Fleet Operator", "role": "USER", "enabled": True},
            )
        if path == f"{PROFILES}/stats":
            active = len(self.profiles)
            return httpx.Response(
                200,
                json={
                    "activeProfileCount": active,
                    "maxProfiles": self.max_profiles,
                    "canCreateMore": active < self.max_profiles,
                    "remainingSlots": self.max_profiles - active,
                },
            )
        if path == PROFILES and method == "GET":
            return httpx.Response(200, json=list(self.profiles.values()))
        if path == PROFILES and method == "POST":
            if len(self.profiles) >= self.max_profiles:
                return httpx.Response(
                    400, json={"error": f"Maximum limit of {self.max_profiles} truck profiles reached"}
                )
            if any(p["name"] == body["name"] for p in self.profiles.values()):
                return httpx.Response(400, json={"error": "Truck profile with this name already exists"})
            return httpx.Response(201, json=self.seed_profile(**body))
        if path.startswith(f"{PROFILES}/"):
            profile_id = int(path.rsplit("/", 1)[1])
            if profile_id not in self.profiles:
                return httpx.Response(404)
            if method == "GET":
                return httpx.Response(200, json=self.profiles[profile_id])
            if method == "PUT":
                self.profiles[profile_id].update(body)
                return httpx.Response(200, json=self.profiles[profile_id])
            if method == "DELETE":
                del self.profiles[profile_id]
                return httpx.Response(204)
        if path == "/api/v1/routes/calculate":
            if self.on_calculate is not None:
                self.on_calculate()
            if self.route_error is not None:
                return httpx.Response(400, json={"error": self.route_error})
            if int(body["truckProfileId"]) not in self.profiles:
                return httpx.Response(400, json={"error": "Truck profile not found"})
            return httpx.Response(200, json=self.route_payload or sample_route_payload(int(body["truckProfileId"])))

        return httpx.Response(500, json={"error": "An unexpected error occurred"})


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def api(backend: FakeBackend):
    client = ApiClient(base_url=BASE_URL, client=httpx.Client(transport=httpx.MockTransport(backend.handler)))
    yield client
    client.close()


@pytest.fixture
def session(backend: FakeBackend) -> Session:
    return Session(access_token=backend.token, user_id="7", email=backend.email)


@pytest.fixture
def route_payload() -> dict:
    return sample_route_payload()
