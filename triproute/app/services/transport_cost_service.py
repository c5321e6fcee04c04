from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from triproute.domain.algorithms.geo_utils import haversine_distance_m
from triproute.domain.algorithms.tariffs import (
    round_half_up,
    round_minutes,
    segment_cost,
)
from triproute.domain.exceptions import RoutingError
from triproute.domain.models import (
    RoutePoint,
    RouteResult,
    TransitRouteResult,
    TransportCost,
    TransportMode,
    TransportSegment,
    TravelProfile,
)

from .point_to_point_router import PointToPointRouter
from .transit_router import TransitRouter

logger = logging.getLogger(__name__)


def _clamp(value: float) -> float:
    """Negative and non-finite values count as zero."""

    value = float(value)
    if not math.isfinite(value) or value < 0:
        return 0.0
    return value


def _point_label(point: RoutePoint, index: int) -> str:
    return point.name or f"Punct {index + 1}"


class _Totals:
    __slots__ = ("segments", "distance_km", "duration_s", "cost_ron")

    def __init__(self) -> None:
        self.segments: list[TransportSegment] = []
        self.distance_km = 0.0
        self.duration_s = 0.0
        self.cost_ron = 0.0

    def add(
        self,
        origin: str,
        destination: str,
        *,
        distance_km: float,
        duration_s: float,
        cost_ron: float,
    ) -> None:
        distance_km = _clamp(distance_km)
        duration_s = _clamp(duration_s)
        cost_ron = _clamp(cost_ron)

        self.segments.append(
            TransportSegment(
                origin=origin,
                destination=destination,
                distance_km=round_half_up(distance_km, 2),
                duration_min=round_minutes(duration_s / 60.0),
                cost_ron=round_half_up(cost_ron, 2),
            )
        )
        self.distance_km += distance_km
        self.duration_s += duration_s
        self.cost_ron += cost_ron

    def result(self, mode: TransportMode, *, is_real_route_used: bool) -> TransportCost:
        return TransportCost(
            mode=mode,
            total_distance_km=round_half_up(self.distance_km, 2),
            total_duration_min=round_minutes(self.duration_s / 60.0),
            total_cost_ron=round_half_up(self.cost_ron, 2),
            segments=tuple(self.segments),
            is_real_route_used=is_real_route_used,
        )


@dataclass(slots=True)
class TransportCostService:
    """Prices and times a waypoint list for one transport mode.

    Degraded inputs never raise. Invalid waypoints are dropped and transit
    without an itinerary is priced over walking geometry.
    `is_real_route_used` is the only degradation signal.
    """

    router: PointToPointRouter
    transit_router: TransitRouter

    async def calculate_transport_costs(
        self,
        points: list[RoutePoint],
        mode: TransportMode | str,
        city_name: str | None = None,
    ) -> TransportCost:
        mode = TransportMode(mode)

        valid = [p for p in (points or []) if p is not None and p.is_valid]
        if len(valid) < 2:
            return TransportCost(mode=mode)

        if mode.uses_transit:
            itinerary = await self._transit_itinerary(valid, city_name)
            if itinerary is not None and itinerary.segments:
                return self._price_itinerary(itinerary, mode)
            route = await self.router.calculate_real_route(valid, TravelProfile.WALKING)
        else:
            route = await self.router.calculate_real_route(valid, mode.routing_profile)

        if not route.segments:
            return self._price_from_scratch(valid, mode)
        return self._price_route(valid, route, mode)

    async def _transit_itinerary(
        self, points: list[RoutePoint], city_name: str | None
    ) -> TransitRouteResult | None:
        if not city_name:
            return None
        try:
            return await self.transit_router.calculate_transit_route(
                points[0], points[-1], city_name
            )
        except RoutingError as exc:
            logger.warning(
                "Transit routing failed, falling back to walking",
                extra={"city": city_name, "error": str(exc)},
            )
            return None

    def _price_itinerary(
        self, itinerary: TransitRouteResult, mode: TransportMode
    ) -> TransportCost:
        totals = _Totals()
        for leg in itinerary.segments:
            distance_km = leg.distance_m / 1000.0
            totals.add(
                leg.origin.name,
                leg.destination.name,
                distance_km=distance_km,
                duration_s=leg.duration_s,
                cost_ron=segment_cost(distance_km, mode).cost_ron,
            )
        return totals.result(mode, is_real_route_used=True)

    def _price_route(
        self, points: list[RoutePoint], route: RouteResult, mode: TransportMode
    ) -> TransportCost:
        totals = _Totals()
        for i, seg in enumerate(route.segments):
            if i + 1 >= len(points):
                break
            distance_km = seg.distance_m / 1000.0
            totals.add(
                _point_label(points[i], i),
                _point_label(points[i + 1], i + 1),
                distance_km=distance_km,
                duration_s=seg.duration_s,
                cost_ron=segment_cost(distance_km, mode).cost_ron,
            )
        return totals.result(mode, is_real_route_used=route.uses_routing_engine)

    def _price_from_scratch(
        self, points: list[RoutePoint], mode: TransportMode
    ) -> TransportCost:
        totals = _Totals()
        for i, (a, b) in enumerate(zip(points, points[1:])):
            distance_m = haversine_distance_m(a.to_geo_point(), b.to_geo_point())
            distance_km = distance_m / 1000.0
            tariff = segment_cost(distance_km, mode)
            totals.add(
                _point_label(a, i),
                _point_label(b, i + 1),
                distance_km=distance_km,
                duration_s=tariff.duration_min * 60.0,
                cost_ron=tariff.cost_ron,
            )
        return totals.result(mode, is_real_route_used=False)
