from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from triproute.domain.algorithms.geo_utils import (
    haversine_distance_m,
    slice_polyline_between_points,
)
from triproute.domain.models import (
    BoundingBox,
    GeoPoint,
    LegKind,
    NamedPlace,
    RoutePoint,
    TransitRoute,
    TransitRouteResult,
    TransitRouteSegment,
    TransitStop,
)

from .city_feeds import CityFeedDirectory
from .transit_catalog_service import TransitCatalogService

logger = logging.getLogger(__name__)


def find_nearest_stop(
    point: GeoPoint, stops: Iterable[TransitStop], *, max_distance_m: float
) -> TransitStop | None:
    """Closest stop strictly within `max_distance_m`; first one wins ties."""

    nearest: TransitStop | None = None
    best = float(max_distance_m)
    for stop in stops:
        d = haversine_distance_m(point, stop.location)
        if d < best:
            best = d
            nearest = stop
    return nearest


def _serves(route: TransitRoute, stop: TransitStop) -> bool:
    for name in stop.route_names:
        if not name:
            continue
        if route.short_name == name or name in route.long_name:
            return True
    return False


def find_connecting_route(
    from_stop: TransitStop, to_stop: TransitStop, routes: Iterable[TransitRoute]
) -> TransitRoute | None:
    """First route whose name matches a route name listed on both stops.

    Name matching only; the route's stop sequence is never checked.
    """

    for route in routes:
        if _serves(route, from_stop) and _serves(route, to_stop):
            return route
    return None


@dataclass(slots=True)
class TransitRouter:
    """Single-leg walk, ride, walk itinerary between two points of a city.

    Returns None (never raises) when the city has no feed or when either end
    has no stop within `max_stop_distance_m`; callers fall back to another
    mode.
    """

    catalog: TransitCatalogService
    cities: CityFeedDirectory
    max_stop_distance_m: float = 1000.0
    bounds_padding_deg: float = 0.05
    walk_speed_kmh: float = 5.0
    transit_speed_kmh: float = 20.0
    schedule_limit: int = 5

    async def calculate_transit_route(
        self,
        origin: RoutePoint,
        destination: RoutePoint,
        city_name: str | None,
    ) -> TransitRouteResult | None:
        feed_path = self.cities.feed_path_for_city(city_name)
        if not feed_path:
            return None

        start = origin.to_geo_point()
        end = destination.to_geo_point()

        bounds = BoundingBox.around(start, end, padding_deg=self.bounds_padding_deg)
        stops = await self.catalog.get_transit_stops(feed_path, bounds)
        if not stops:
            logger.info(
                "No transit stops around trip",
                extra={"city": city_name, "feed_path": feed_path},
            )
            return None
        routes = await self.catalog.get_transit_routes(feed_path)

        from_stop = find_nearest_stop(
            start, stops, max_distance_m=self.max_stop_distance_m
        )
        to_stop = find_nearest_stop(end, stops, max_distance_m=self.max_stop_distance_m)
        if from_stop is None or to_stop is None:
            return None

        route = find_connecting_route(from_stop, to_stop, routes)

        walk_mps = self.walk_speed_kmh / 3.6
        ride_mps = self.transit_speed_kmh / 3.6

        origin_place = NamedPlace(name=origin.name or "Start", location=start)
        destination_place = NamedPlace(
            name=destination.name or "Destination", location=end
        )
        boarding = NamedPlace(name=from_stop.name, location=from_stop.location)
        alighting = NamedPlace(name=to_stop.name, location=to_stop.location)

        segments: list[TransitRouteSegment] = []

        walk_in_m = haversine_distance_m(start, from_stop.location)
        if walk_in_m > 0:
            segments.append(
                TransitRouteSegment(
                    kind=LegKind.WALK,
                    origin=origin_place,
                    destination=boarding,
                    distance_m=walk_in_m,
                    duration_s=walk_in_m / walk_mps,
                    stop_to=from_stop,
                    path=(start, from_stop.location),
                )
            )

        ride_m = haversine_distance_m(from_stop.location, to_stop.location)
        if ride_m > 0:
            if route is not None and len(route.shape) >= 2:
                path = slice_polyline_between_points(
                    route.shape, start=from_stop.location, end=to_stop.location
                )
            else:
                path = (from_stop.location, to_stop.location)

            schedule = ()
            if route is not None:
                schedule = tuple(
                    await self.catalog.get_stop_schedule(
                        feed_path, from_stop.id, route.id, limit=self.schedule_limit
                    )
                )

            segments.append(
                TransitRouteSegment(
                    kind=LegKind.TRANSIT,
                    origin=boarding,
                    destination=alighting,
                    distance_m=ride_m,
                    duration_s=ride_m / ride_mps,
                    route=route,
                    stop_from=from_stop,
                    stop_to=to_stop,
                    path=path,
                    schedule=schedule,
                )
            )

        walk_out_m = haversine_distance_m(to_stop.location, end)
        if walk_out_m > 0:
            segments.append(
                TransitRouteSegment(
                    kind=LegKind.WALK,
                    origin=alighting,
                    destination=destination_place,
                    distance_m=walk_out_m,
                    duration_s=walk_out_m / walk_mps,
                    stop_from=to_stop,
                    path=(to_stop.location, end),
                )
            )

        return TransitRouteResult(
            segments=tuple(segments),
            routes=(route,) if route is not None else (),
        )
