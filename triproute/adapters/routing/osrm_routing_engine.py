from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any

import httpx

from triproute.app.ports.output import IRoutingEngine
from triproute.domain.exceptions import RoutingEngineError
from triproute.domain.models import (
    Coordinate,
    DistanceMatrix,
    RoutePoint,
    RouteSegment,
    TravelProfile,
)

DEFAULT_OSRM_BASE_URL = "https://router.project-osrm.org"


def _coordinates(points: list[RoutePoint]) -> str:
    # OSRM wants lon,lat pairs separated by ';'.
    return ";".join(f"{p.lon},{p.lat}" for p in points)


def _parse_geometry(raw: Any) -> tuple[Coordinate, ...]:
    if not isinstance(raw, dict):
        return ()
    coords = raw.get("coordinates") or ()
    out: list[Coordinate] = []
    for pair in coords:
        try:
            out.append((float(pair[0]), float(pair[1])))
        except (TypeError, ValueError, IndexError):
            continue
    return tuple(out)


def _parse_matrix(raw: Any) -> tuple[tuple[float | None, ...], ...]:
    if not isinstance(raw, list):
        return ()
    return tuple(
        tuple(float(v) if v is not None else None for v in row) for row in raw
    )


@dataclass(slots=True)
class OsrmRoutingEngine(IRoutingEngine):
    """OSRM HTTP API client (route and table services).

    Env vars:
      - OSRM_BASE_URL: server root (default: public demo server)
      - OSRM_TIMEOUT_S: request timeout (default 10)
    """

    base_url: str | None = None
    timeout_s: float = 10.0
    transport: httpx.AsyncBaseTransport | None = None

    def __post_init__(self) -> None:
        if self.base_url is None:
            self.base_url = os.getenv("OSRM_BASE_URL") or DEFAULT_OSRM_BASE_URL
        if os.getenv("OSRM_TIMEOUT_S"):
            self.timeout_s = float(os.environ["OSRM_TIMEOUT_S"])

    async def _get(
        self, url: str, params: dict[str, str] | None = None
    ) -> dict[str, Any]:
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_s, transport=self.transport
            ) as client:
                resp = await client.get(
                    url, params=params, headers={"Accept": "application/json"}
                )
                resp.raise_for_status()
                data = resp.json()
        except httpx.HTTPError as exc:
            raise RoutingEngineError(f"{type(exc).__name__}: {exc}") from exc
        except ValueError as exc:
            raise RoutingEngineError(f"Invalid OSRM response body: {exc}") from exc

        if not isinstance(data, dict):
            raise RoutingEngineError("Invalid OSRM response body")
        if data.get("code") != "Ok":
            raise RoutingEngineError(f"OSRM returned code={data.get('code')!r}")
        return data

    async def route(
        self, origin: RoutePoint, destination: RoutePoint, profile: TravelProfile
    ) -> RouteSegment:
        url = (
            f"{str(self.base_url).rstrip('/')}/route/v1/{profile.osrm_profile}/"
            f"{_coordinates([origin, destination])}"
        )
        data = await self._get(
            url, {"overview": "full", "geometries": "geojson", "steps": "false"}
        )

        routes = data.get("routes") or []
        if not routes:
            raise RoutingEngineError("OSRM returned no routes")

        best = routes[0]
        try:
            distance_m = float(best["distance"])
            duration_s = float(best["duration"])
        except (KeyError, TypeError, ValueError) as exc:
            raise RoutingEngineError("OSRM route without distance/duration") from exc

        return RouteSegment(
            distance_m=distance_m,
            duration_s=duration_s,
            geometry=_parse_geometry(best.get("geometry")),
        )

    async def table(
        self,
        sources: list[RoutePoint],
        destinations: list[RoutePoint],
        profile: TravelProfile,
    ) -> DistanceMatrix:
        points = list(sources) + list(destinations)
        url = (
            f"{str(self.base_url).rstrip('/')}/table/v1/{profile.osrm_profile}/"
            f"{_coordinates(points)}"
        )
        n = len(sources)
        # Index lists stay unescaped; OSRM splits them on a literal ';'.
        query = (
            f"sources={';'.join(str(i) for i in range(n))}"
            f"&destinations={';'.join(str(i) for i in range(n, len(points)))}"
            "&annotations=duration,distance"
        )
        data = await self._get(f"{url}?{query}")

        try:
            durations = _parse_matrix(data.get("durations"))
            distances = _parse_matrix(data.get("distances"))
        except (TypeError, ValueError) as exc:
            raise RoutingEngineError("Malformed OSRM table response") from exc

        if len(durations) != n:
            raise RoutingEngineError("OSRM table response missing durations")

        return DistanceMatrix(durations_s=durations, distances_m=distances)
