from .feed_cache import IFeedCache
from .feed_source import IFeedSource
from .routing_engine import IRoutingEngine

__all__ = [
    "IFeedCache",
    "IFeedSource",
    "IRoutingEngine",
]
