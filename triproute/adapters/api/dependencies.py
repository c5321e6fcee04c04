from __future__ import annotations

import os
from functools import lru_cache

from triproute.adapters.cache import MemoryFeedCache
from triproute.adapters.feeds import feed_source_for_root
from triproute.adapters.routing import OsrmRoutingEngine
from triproute.app.services.city_feeds import (
    DEFAULT_CITY_FEEDS,
    CityFeedDirectory,
    parse_city_feeds,
)
from triproute.app.services.feed_loader import FeedLoader
from triproute.app.services.point_to_point_router import PointToPointRouter
from triproute.app.services.transit_catalog_service import TransitCatalogService
from triproute.app.services.transit_router import TransitRouter
from triproute.app.services.transport_cost_service import TransportCostService

# Services are process-wide singletons so the feed cache outlives a request.


@lru_cache(maxsize=1)
def get_feed_cache() -> MemoryFeedCache:
    return MemoryFeedCache()


@lru_cache(maxsize=1)
def get_city_directory() -> CityFeedDirectory:
    mapping = dict(DEFAULT_CITY_FEEDS)
    mapping.update(parse_city_feeds(os.getenv("CITY_FEEDS")))
    return CityFeedDirectory(mapping=mapping)


@lru_cache(maxsize=1)
def get_transit_catalog() -> TransitCatalogService:
    cache = get_feed_cache()
    loader = FeedLoader(
        source=feed_source_for_root(os.getenv("FEED_ROOT")),
        cache=cache,
    )
    catalog = TransitCatalogService(loader=loader, cache=cache)

    # Allow tuning via env without changing code.
    if os.getenv("STOP_TIMES_SAMPLE_BYTES"):
        catalog.stop_times_sample_bytes = int(os.environ["STOP_TIMES_SAMPLE_BYTES"])
    if os.getenv("STOP_TIMES_SAMPLE_LINES"):
        catalog.stop_times_sample_lines = int(os.environ["STOP_TIMES_SAMPLE_LINES"])

    return catalog


@lru_cache(maxsize=1)
def get_point_to_point_router() -> PointToPointRouter:
    router = PointToPointRouter(engine=OsrmRoutingEngine())
    if os.getenv("ROUTING_MAX_CONCURRENCY"):
        router.max_concurrency = int(os.environ["ROUTING_MAX_CONCURRENCY"])
    return router


@lru_cache(maxsize=1)
def get_transit_router() -> TransitRouter:
    return TransitRouter(catalog=get_transit_catalog(), cities=get_city_directory())


@lru_cache(maxsize=1)
def get_transport_cost_service() -> TransportCostService:
    return TransportCostService(
        router=get_point_to_point_router(),
        transit_router=get_transit_router(),
    )
