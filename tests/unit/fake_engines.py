from __future__ import annotations

from triproute.domain.exceptions import RoutingEngineError
from triproute.domain.models import (
    DistanceMatrix,
    RoutePoint,
    RouteSegment,
    TravelProfile,
)


class FixedEngine:
    """Answers every leg with the same distance/duration and a 2-point line."""

    def __init__(self, distance_m: float = 1500.0, duration_s: float = 300.0) -> None:
        self.distance_m = distance_m
        self.duration_s = duration_s
        self.calls: list[tuple[RoutePoint, RoutePoint, TravelProfile]] = []

    async def route(
        self, origin: RoutePoint, destination: RoutePoint, profile: TravelProfile
    ) -> RouteSegment:
        self.calls.append((origin, destination, profile))
        return RouteSegment(
            distance_m=self.distance_m,
            duration_s=self.duration_s,
            geometry=(origin.coordinate, destination.coordinate),
        )

    async def table(self, sources, destinations, profile) -> DistanceMatrix:
        row_durations = tuple(self.duration_s for _ in destinations)
        row_distances = tuple(self.distance_m for _ in destinations)
        return DistanceMatrix(
            durations_s=tuple(row_durations for _ in sources),
            distances_m=tuple(row_distances for _ in sources),
        )


class FailingEngine:
    """Routing engine that is always unreachable."""

    def __init__(self) -> None:
        self.calls = 0

    async def route(self, origin, destination, profile) -> RouteSegment:
        self.calls += 1
        raise RoutingEngineError("connection refused")

    async def table(self, sources, destinations, profile) -> DistanceMatrix:
        self.calls += 1
        raise RoutingEngineError("connection refused")
