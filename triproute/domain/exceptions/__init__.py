from .routing import FeedUnavailable, RoutingEngineError, RoutingError

__all__ = ["FeedUnavailable", "RoutingEngineError", "RoutingError"]
