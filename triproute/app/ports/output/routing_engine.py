from __future__ import annotations

from abc import ABC, abstractmethod

from triproute.domain.models import (
    DistanceMatrix,
    RoutePoint,
    RouteSegment,
    TravelProfile,
)


class IRoutingEngine(ABC):
    """Port for a road/path routing engine (e.g. OSRM)."""

    @abstractmethod
    async def route(
        self, origin: RoutePoint, destination: RoutePoint, profile: TravelProfile
    ) -> RouteSegment:
        """Route a single leg. Raises RoutingEngineError when no route is usable."""

    @abstractmethod
    async def table(
        self,
        sources: list[RoutePoint],
        destinations: list[RoutePoint],
        profile: TravelProfile,
    ) -> DistanceMatrix:
        """Durations/distances for every source/destination pair."""
