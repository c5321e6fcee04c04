class RoutingError(Exception):
    """Base exception for route calculation failures."""


class FeedUnavailable(RoutingError):
    """Raised when a transit feed file cannot be fetched or read."""


class RoutingEngineError(RoutingError):
    """Raised when the external routing engine gives no usable route."""
