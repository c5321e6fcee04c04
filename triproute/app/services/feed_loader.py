from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, TypeVar

from triproute.app.ports.output import IFeedCache, IFeedSource
from triproute.domain.algorithms.gtfs_tables import (
    parse_routes,
    parse_shapes,
    parse_stops,
    parse_trips,
)
from triproute.domain.exceptions import FeedUnavailable
from triproute.domain.models import (
    GtfsRoute,
    GtfsStop,
    ShapePoint,
    TripBinding,
    TripIndex,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(slots=True)
class FeedLoader:
    """Loads GTFS tables of a feed into typed in-memory maps.

    Parsed tables are memoised in the injected cache, keyed per feed and
    table. A feed file that cannot be fetched yields an empty table and is
    not cached, so the next call tries again.
    """

    source: IFeedSource
    cache: IFeedCache

    async def _load(
        self,
        feed_path: str,
        name: str,
        parse: Callable[[str], T],
        empty: Callable[[], T],
    ) -> T:
        async def _fetch_and_parse() -> Any:
            text = await self.source.fetch_text(feed_path, name)
            return parse(text)

        try:
            return await self.cache.get_or_load(f"{feed_path}:{name}", _fetch_and_parse)
        except FeedUnavailable as exc:
            logger.error(
                "Failed to load feed table",
                extra={"feed_path": feed_path, "table": name, "error": str(exc)},
            )
            return empty()

    async def load_stops(self, feed_path: str) -> dict[str, GtfsStop]:
        return await self._load(feed_path, "stops.txt", parse_stops, dict)

    async def load_routes(self, feed_path: str) -> dict[str, GtfsRoute]:
        return await self._load(feed_path, "routes.txt", parse_routes, dict)

    async def load_shapes(self, feed_path: str) -> dict[str, tuple[ShapePoint, ...]]:
        return await self._load(feed_path, "shapes.txt", parse_shapes, dict)

    async def load_trip_index(self, feed_path: str) -> TripIndex:
        return await self._load(feed_path, "trips.txt", parse_trips, TripIndex)

    async def load_trips(self, feed_path: str) -> dict[str, TripBinding]:
        """Route id -> first trip binding (route + shape) seen for that route."""

        index = await self.load_trip_index(feed_path)
        return index.bindings_by_route

    async def fetch_partial(self, feed_path: str, name: str, max_bytes: int) -> str:
        """Uncached prefix read of a (large) feed file; empty string on failure.

        The source returns complete lines only.
        """

        try:
            return await self.source.fetch_text(feed_path, name, max_bytes=max_bytes)
        except FeedUnavailable as exc:
            logger.warning(
                "Could not sample feed table",
                extra={"feed_path": feed_path, "table": name, "error": str(exc)},
            )
            return ""
