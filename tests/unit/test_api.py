from __future__ import annotations

import httpx
import pytest

from triproute.adapters.api.dependencies import (
    get_city_directory,
    get_point_to_point_router,
    get_transit_catalog,
    get_transport_cost_service,
)
from triproute.app.services.point_to_point_router import PointToPointRouter
from triproute.app.services.transit_router import TransitRouter
from triproute.app.services.transport_cost_service import TransportCostService
from triproute.domain.exceptions import FeedUnavailable, RoutingEngineError
from triproute.main import app

from .fake_engines import FailingEngine, FixedEngine


@pytest.fixture
def client_for(transit_catalog, cities):
    def _make(engine) -> httpx.AsyncClient:
        router = PointToPointRouter(engine=engine)
        costs = TransportCostService(
            router=router,
            transit_router=TransitRouter(catalog=transit_catalog, cities=cities),
        )
        app.dependency_overrides[get_point_to_point_router] = lambda: router
        app.dependency_overrides[get_transport_cost_service] = lambda: costs
        app.dependency_overrides[get_transit_catalog] = lambda: transit_catalog
        app.dependency_overrides[get_city_directory] = lambda: cities

        transport = httpx.ASGITransport(app=app)
        return httpx.AsyncClient(transport=transport, base_url="http://test")

    yield _make
    app.dependency_overrides.clear()


@pytest.mark.unit
@pytest.mark.anyio
async def test_health(client_for) -> None:
    async with client_for(FixedEngine()) as client:
        resp = await client.get("/health")

    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


@pytest.mark.unit
@pytest.mark.anyio
async def test_post_routes_returns_route(client_for) -> None:
    async with client_for(FixedEngine(123.0, 456.0)) as client:
        resp = await client.post(
            "/routes",
            json={
                "points": [
                    {"lat": 44.4268, "lon": 26.1025, "name": "A"},
                    {"lat": 44.4368, "lon": 26.1125, "name": "B"},
                ],
                "profile": "walking",
            },
        )

    assert resp.status_code == 200
    payload = resp.json()
    assert payload["total_distance_m"] == 123.0
    assert payload["total_duration_s"] == 456.0
    assert payload["uses_routing_engine"] is True
    assert payload["geometry"] == [[26.1025, 44.4268], [26.1125, 44.4368]]


@pytest.mark.unit
@pytest.mark.anyio
async def test_post_routes_can_reorder_waypoints(client_for) -> None:
    engine = FixedEngine()
    async with client_for(engine) as client:
        resp = await client.post(
            "/routes",
            json={
                "points": [
                    {"lat": 44.40, "lon": 26.10, "name": "start"},
                    {"lat": 44.60, "lon": 26.10, "name": "far"},
                    {"lat": 44.42, "lon": 26.10, "name": "near"},
                ],
                "optimize_order": True,
            },
        )

    assert resp.status_code == 200
    assert [(a.name, b.name) for a, b, _ in engine.calls] == [
        ("start", "near"),
        ("near", "far"),
    ]


@pytest.mark.unit
@pytest.mark.anyio
async def test_post_routes_rejects_out_of_range_points(client_for) -> None:
    async with client_for(FixedEngine()) as client:
        resp = await client.post("/routes", json={"points": [{"lat": 95, "lon": 0}]})

    assert resp.status_code == 422


@pytest.mark.unit
@pytest.mark.anyio
async def test_post_transport_costs(client_for) -> None:
    async with client_for(FailingEngine()) as client:
        resp = await client.post(
            "/transport-costs",
            json={
                "points": [
                    {"lat": 44.4268, "lon": 26.1025, "name": "A"},
                    {"lat": 44.4368, "lon": 26.1125, "name": "B"},
                ],
                "mode": "transit",
                "city_name": "Bucharest",
            },
        )

    assert resp.status_code == 200
    payload = resp.json()
    assert payload["mode"] == "transit"
    assert payload["label"] == "Transport în comun"
    assert payload["total_cost_ron"] == 15.0
    assert payload["is_real_route_used"] is True
    assert len(payload["segments"]) == 3


@pytest.mark.unit
@pytest.mark.anyio
async def test_post_transport_costs_drops_invalid_points(client_for) -> None:
    async with client_for(FixedEngine()) as client:
        resp = await client.post(
            "/transport-costs",
            json={
                "points": [{"lat": 120, "lon": 26.1}, {"lat": 44.4, "lon": 26.1}],
                "mode": "car",
            },
        )

    assert resp.status_code == 200
    assert resp.json()["total_cost_ron"] == 0.0
    assert resp.json()["segments"] == []


@pytest.mark.unit
@pytest.mark.anyio
async def test_transit_stops_and_bounds(client_for) -> None:
    async with client_for(FixedEngine()) as client:
        everything = await client.get("/transit/Bucharest/stops")
        boxed = await client.get(
            "/transit/București/stops",
            params={"north": 44.5, "south": 44.4, "east": 26.2, "west": 26.0},
        )
        half_box = await client.get("/transit/Bucharest/stops", params={"north": 44.5})

    assert everything.status_code == 200
    assert {s["stop_id"] for s in everything.json()} == {"S1", "S2", "S3"}
    labels = {s["stop_id"]: s["route_type_label"] for s in everything.json()}
    assert labels == {"S1": "Autobuz", "S2": "Autobuz", "S3": "Tramvai"}
    assert sorted(s["stop_id"] for s in boxed.json()) == ["S1", "S2"]
    assert half_box.status_code == 422


@pytest.mark.unit
@pytest.mark.anyio
async def test_transit_routes_and_schedule(client_for) -> None:
    async with client_for(FixedEngine()) as client:
        routes = await client.get(
            "/transit/Bucharest/routes", params={"route_id": "R1"}
        )
        schedule = await client.get(
            "/transit/Bucharest/stops/S1/schedule", params={"route_id": "R1"}
        )

    assert routes.status_code == 200
    (route,) = routes.json()
    assert route["color"] == "#FF0000"
    assert route["route_type_label"] == "Autobuz"
    assert len(route["shape"]) == 3

    assert schedule.status_code == 200
    assert [e["arrival_time"] for e in schedule.json()] == ["07:30", "08:00"]


@pytest.mark.unit
@pytest.mark.anyio
async def test_unknown_city_is_not_found(client_for) -> None:
    async with client_for(FixedEngine()) as client:
        resp = await client.get("/transit/Atlantis/stops")

    assert resp.status_code == 404


class _RaisingRouter:
    def __init__(self, exc: Exception) -> None:
        self.exc = exc

    async def calculate_real_route(self, points, profile):
        raise self.exc


_TWO_POINTS = {
    "points": [
        {"lat": 44.4268, "lon": 26.1025},
        {"lat": 44.4368, "lon": 26.1125},
    ]
}


@pytest.mark.unit
@pytest.mark.anyio
@pytest.mark.parametrize(
    ("exc", "status"),
    [
        (RoutingEngineError("OSRM returned code='NoRoute'"), 502),
        (FeedUnavailable("stops.txt: HTTP 503"), 502),
        (ValueError("unknown profile"), 422),
    ],
)
async def test_domain_errors_map_to_json_statuses(
    client_for, exc: Exception, status: int
) -> None:
    async with client_for(FixedEngine()) as client:
        app.dependency_overrides[get_point_to_point_router] = lambda: _RaisingRouter(
            exc
        )
        resp = await client.post("/routes", json=_TWO_POINTS)

    assert resp.status_code == status
    assert resp.json() == {"detail": str(exc)}


@pytest.mark.unit
@pytest.mark.anyio
async def test_unexpected_errors_hide_their_message(client_for, monkeypatch) -> None:
    monkeypatch.delenv("TRIPROUTE_REVEAL_ERRORS", raising=False)
    app.dependency_overrides[get_point_to_point_router] = lambda: _RaisingRouter(
        KeyError("secret")
    )
    transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        resp = await c.post("/routes", json=_TWO_POINTS)

    assert resp.status_code == 500
    assert resp.json() == {"detail": "Internal Server Error"}
