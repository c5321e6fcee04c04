from .cost import TransportCost, TransportMode, TransportSegment
from .geo import BoundingBox, GeoPoint
from .gtfs import (
    GtfsRoute,
    GtfsStop,
    RouteType,
    ShapePoint,
    StopScheduleEntry,
    TransitRoute,
    TransitStop,
    TripBinding,
    TripIndex,
)
from .route import (
    Coordinate,
    DistanceMatrix,
    RoutePoint,
    RouteResult,
    RouteSegment,
    TravelProfile,
)
from .transit import LegKind, NamedPlace, TransitRouteResult, TransitRouteSegment

__all__ = [
    "BoundingBox",
    "Coordinate",
    "DistanceMatrix",
    "GeoPoint",
    "GtfsRoute",
    "GtfsStop",
    "LegKind",
    "NamedPlace",
    "RoutePoint",
    "RouteResult",
    "RouteSegment",
    "RouteType",
    "ShapePoint",
    "StopScheduleEntry",
    "TransitRoute",
    "TransitRouteResult",
    "TransitRouteSegment",
    "TransitStop",
    "TransportCost",
    "TransportMode",
    "TransportSegment",
    "TravelProfile",
    "TripBinding",
    "TripIndex",
]
