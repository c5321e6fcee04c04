from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from triproute.app.ports.output import IFeedCache
from triproute.domain.algorithms.gtfs_tables import iter_rows
from triproute.domain.exceptions import FeedUnavailable
from triproute.domain.models import (
    BoundingBox,
    GeoPoint,
    RouteType,
    StopScheduleEntry,
    TransitRoute,
    TransitStop,
)

from .feed_loader import FeedLoader

logger = logging.getLogger(__name__)

STOP_TIMES = "stop_times.txt"


def _hhmm(raw: str | None) -> str | None:
    parts = (raw or "").strip().split(":")
    if len(parts) < 2:
        return None
    try:
        return f"{int(parts[0]):02d}:{int(parts[1]):02d}"
    except ValueError:
        return None


@dataclass(frozen=True, slots=True)
class _StopTimesIndex:
    """What one stop_times sample says about stops, routes and passages."""

    routes_by_stop: dict[str, tuple[str, ...]]
    # (stop_id, route_id) -> (arrival, departure) pairs sorted by arrival.
    passages: dict[tuple[str, str], tuple[tuple[str, str], ...]]


@dataclass(slots=True)
class TransitCatalogService:
    """Answers which routes serve which stops, and what a route looks like.

    stop_times.txt is sampled, not read whole: only the first
    `stop_times_sample_bytes` / `stop_times_sample_lines` are scanned, so stops
    that only appear later in the file come back without route names. The
    sample is fetched once per feed and indexed for both the stop to route
    mapping and stop schedules.
    """

    loader: FeedLoader
    cache: IFeedCache
    stop_times_sample_bytes: int = 1_000_000
    stop_times_sample_lines: int = 10_000

    async def _build_stop_times_index(self, feed_path: str) -> _StopTimesIndex:
        index = await self.loader.load_trip_index(feed_path)
        text = await self.loader.fetch_partial(
            feed_path, STOP_TIMES, self.stop_times_sample_bytes
        )
        rows = list(iter_rows(text, max_rows=self.stop_times_sample_lines))
        if not rows:
            # Not cached: the next request samples again.
            raise FeedUnavailable(f"No stop_times rows sampled for {feed_path}")

        # dict-as-ordered-set keeps first-seen route order per stop.
        stop_to_routes: dict[str, dict[str, None]] = {}
        passages: dict[tuple[str, str], list[tuple[str, str]]] = {}
        for row in rows:
            route_id = index.route_by_trip.get(row.get("trip_id") or "")
            stop_id = row.get("stop_id") or ""
            if not route_id or not stop_id:
                continue
            stop_to_routes.setdefault(stop_id, {})[route_id] = None

            arrival = _hhmm(row.get("arrival_time"))
            if arrival:
                departure = _hhmm(row.get("departure_time")) or arrival
                passages.setdefault((stop_id, route_id), []).append(
                    (arrival, departure)
                )

        logger.info(
            "Sampled stop_times",
            extra={
                "feed_path": feed_path,
                "stops_mapped": len(stop_to_routes),
                "rows_sampled": len(rows),
            },
        )
        # _hhmm zero-pads, so HH:MM sorts lexically (GTFS hours may exceed 24).
        return _StopTimesIndex(
            routes_by_stop={k: tuple(v) for k, v in stop_to_routes.items()},
            passages={k: tuple(sorted(v)) for k, v in passages.items()},
        )

    async def _stop_times_index(self, feed_path: str) -> _StopTimesIndex | None:
        async def _build() -> _StopTimesIndex:
            return await self._build_stop_times_index(feed_path)

        try:
            return await self.cache.get_or_load(
                f"{feed_path}:stop_times_index", _build
            )
        except FeedUnavailable:
            return None

    async def _stop_routes(self, feed_path: str) -> dict[str, tuple[str, ...]]:
        sample = await self._stop_times_index(feed_path)
        return sample.routes_by_stop if sample is not None else {}

    async def get_transit_stops(
        self, feed_path: str, bounds: BoundingBox | None = None
    ) -> list[TransitStop]:
        stops = await self.loader.load_stops(feed_path)
        routes = await self.loader.load_routes(feed_path)
        if not stops:
            return []
        stop_routes = await self._stop_routes(feed_path)

        out: list[TransitStop] = []
        for stop_id, stop in stops.items():
            if bounds is not None and not bounds.contains(stop.lat, stop.lon):
                continue

            route_ids = stop_routes.get(stop_id, ())
            known = [routes[r] for r in route_ids if r in routes]
            out.append(
                TransitStop(
                    id=stop.stop_id,
                    name=stop.name,
                    lat=stop.lat,
                    lon=stop.lon,
                    description=stop.description,
                    route_ids=route_ids,
                    route_names=tuple(r.short_name for r in known),
                    route_type=known[0].route_type if known else RouteType.BUS,
                )
            )
        return out

    async def get_transit_routes(
        self, feed_path: str, route_ids: Iterable[str] | None = None
    ) -> list[TransitRoute]:
        routes = await self.loader.load_routes(feed_path)
        if not routes:
            return []
        shapes = await self.loader.load_shapes(feed_path)
        trips = await self.loader.load_trips(feed_path)

        wanted = set(route_ids) if route_ids is not None else None

        out: list[TransitRoute] = []
        for route_id, route in routes.items():
            if wanted is not None and route_id not in wanted:
                continue

            binding = trips.get(route_id)
            points = shapes.get(binding.shape_id, ()) if binding else ()
            out.append(
                TransitRoute(
                    id=route.route_id,
                    short_name=route.short_name,
                    long_name=route.long_name,
                    route_type=route.route_type,
                    color=f"#{route.color}",
                    text_color=f"#{route.text_color}",
                    shape=tuple(GeoPoint(lat=p.lat, lon=p.lon) for p in points),
                )
            )
        return out

    async def get_stop_schedule(
        self, feed_path: str, stop_id: str, route_id: str, *, limit: int = 5
    ) -> list[StopScheduleEntry]:
        """Earliest scheduled passages of `route_id` at `stop_id` (HH:MM)."""

        sample = await self._stop_times_index(feed_path)
        if sample is None:
            return []
        times = sample.passages.get((stop_id, route_id), ())
        if not times:
            return []

        routes = await self.loader.load_routes(feed_path)
        stops = await self.loader.load_stops(feed_path)
        route = routes.get(route_id)
        route_name = (route.short_name or route.long_name) if route else ""
        stop = stops.get(stop_id)
        stop_name = stop.name if stop else stop_id

        return [
            StopScheduleEntry(
                route_name=route_name or route_id,
                stop_name=stop_name,
                arrival_time=arrival,
                departure_time=departure,
            )
            for arrival, departure in times[: max(0, limit)]
        ]
