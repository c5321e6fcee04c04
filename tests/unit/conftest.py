from __future__ import annotations

import pytest

from triproute.adapters.cache import MemoryFeedCache
from triproute.app.services.city_feeds import CityFeedDirectory
from triproute.app.services.feed_loader import FeedLoader
from triproute.app.services.transit_catalog_service import TransitCatalogService

from .gtfs_samples import FEED, FakeFeedSource, feed_files


@pytest.fixture
def feed_source() -> FakeFeedSource:
    return FakeFeedSource(feed_files())


@pytest.fixture
def feed_cache() -> MemoryFeedCache:
    return MemoryFeedCache(ttl_s=0, max_entries=0)


@pytest.fixture
def feed_loader(feed_source: FakeFeedSource, feed_cache: MemoryFeedCache) -> FeedLoader:
    return FeedLoader(source=feed_source, cache=feed_cache)


@pytest.fixture
def transit_catalog(
    feed_loader: FeedLoader, feed_cache: MemoryFeedCache
) -> TransitCatalogService:
    return TransitCatalogService(loader=feed_loader, cache=feed_cache)


@pytest.fixture
def cities() -> CityFeedDirectory:
    return CityFeedDirectory(mapping={"București": FEED, "Bucharest": FEED})
