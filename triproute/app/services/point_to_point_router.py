from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

from triproute.app.ports.output import IRoutingEngine
from triproute.domain.algorithms.geo_utils import haversine_distance_m
from triproute.domain.algorithms.road_approximation import (
    ROAD_MODELS,
    approximate_distance_m,
    approximate_segment,
)
from triproute.domain.exceptions import RoutingEngineError
from triproute.domain.models import (
    Coordinate,
    DistanceMatrix,
    RoutePoint,
    RouteResult,
    RouteSegment,
    TravelProfile,
)

logger = logging.getLogger(__name__)


def stitch_geometry(
    points: list[RoutePoint], segments: list[RouteSegment]
) -> tuple[Coordinate, ...]:
    """Concatenate leg geometries into one [lon, lat] line.

    A leg without geometry contributes a straight line between its waypoints.
    The first vertex of a leg is dropped when it repeats the previous leg's
    last vertex.
    """

    coords: list[Coordinate] = []
    for (a, b), seg in zip(zip(points, points[1:]), segments):
        leg = list(seg.geometry) or [a.coordinate, b.coordinate]
        if coords and leg and coords[-1] == leg[0]:
            leg = leg[1:]
        coords.extend(leg)
    return tuple(coords)


def optimize_waypoint_order(points: list[RoutePoint]) -> list[RoutePoint]:
    """Greedy nearest-neighbour tour that keeps the first waypoint first.

    Lists of two points or fewer come back unchanged. On equal distances the
    earlier waypoint is visited first.
    """

    points = list(points)
    if len(points) <= 2:
        return points

    current, remaining = points[0], points[1:]
    ordered = [current]
    while remaining:
        here = current.to_geo_point()
        nearest = min(
            range(len(remaining)),
            key=lambda i: haversine_distance_m(here, remaining[i].to_geo_point()),
        )
        current = remaining.pop(nearest)
        ordered.append(current)
    return ordered


@dataclass(slots=True)
class PointToPointRouter:
    """Routes an ordered waypoint list leg by leg.

    Each leg asks the routing engine first and falls back to the haversine
    road approximation when the engine fails. Legs run one at a time unless
    `max_concurrency` allows more in flight.
    """

    engine: IRoutingEngine
    max_concurrency: int = 1

    async def _leg(
        self, a: RoutePoint, b: RoutePoint, profile: TravelProfile
    ) -> RouteSegment:
        try:
            return await self.engine.route(a, b, profile)
        except RoutingEngineError as exc:
            logger.warning(
                "Routing engine failed, using haversine approximation",
                extra={"profile": profile.value, "error": str(exc)},
            )
            return approximate_segment(a.to_geo_point(), b.to_geo_point(), profile)

    async def calculate_real_route(
        self, points: list[RoutePoint], profile: TravelProfile = TravelProfile.DRIVING
    ) -> RouteResult:
        points = list(points)
        if len(points) < 2:
            return RouteResult()

        profile = TravelProfile(profile)
        semaphore = asyncio.Semaphore(max(1, int(self.max_concurrency)))

        async def _bounded(a: RoutePoint, b: RoutePoint) -> RouteSegment:
            async with semaphore:
                return await self._leg(a, b, profile)

        # gather keeps input order regardless of completion order.
        segments = list(
            await asyncio.gather(*(_bounded(a, b) for a, b in zip(points, points[1:])))
        )

        return RouteResult(
            segments=tuple(segments),
            geometry=stitch_geometry(points, segments) or None,
        )

    async def distance_matrix(
        self,
        sources: list[RoutePoint],
        destinations: list[RoutePoint],
        profile: TravelProfile = TravelProfile.DRIVING,
    ) -> DistanceMatrix:
        if not sources or not destinations:
            return DistanceMatrix(durations_s=(), distances_m=())

        profile = TravelProfile(profile)
        try:
            return await self.engine.table(list(sources), list(destinations), profile)
        except RoutingEngineError as exc:
            logger.warning(
                "Routing engine table failed, using haversine approximation",
                extra={"profile": profile.value, "error": str(exc)},
            )

        speed_mps = ROAD_MODELS[profile].speed_mps
        distances = tuple(
            tuple(
                approximate_distance_m(s.to_geo_point(), d.to_geo_point(), profile)
                for d in destinations
            )
            for s in sources
        )
        durations = tuple(tuple(m / speed_mps for m in row) for row in distances)
        return DistanceMatrix(
            durations_s=durations, distances_m=distances, is_fallback=True
        )
