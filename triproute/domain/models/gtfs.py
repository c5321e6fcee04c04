from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

from .geo import GeoPoint

DEFAULT_ROUTE_COLOR = "1D71B8"
DEFAULT_ROUTE_TEXT_COLOR = "FFFFFF"


class RouteType(IntEnum):
    """GTFS routes.txt route_type (basic + trolleybus/monorail extensions)."""

    TRAM = 0
    SUBWAY = 1
    RAIL = 2
    BUS = 3
    FERRY = 4
    CABLE_CAR = 5
    GONDOLA = 6
    FUNICULAR = 7
    TROLLEYBUS = 11
    MONORAIL = 12

    @classmethod
    def parse(cls, raw: str | None) -> "RouteType":
        try:
            return cls(int((raw or "").strip() or cls.BUS))
        except ValueError:
            return cls.BUS

    @property
    def label(self) -> str:
        return _ROUTE_TYPE_LABELS[self]


_ROUTE_TYPE_LABELS = {
    RouteType.TRAM: "Tramvai",
    RouteType.SUBWAY: "Metrou",
    RouteType.RAIL: "Tren",
    RouteType.BUS: "Autobuz",
    RouteType.FERRY: "Ferry",
    RouteType.CABLE_CAR: "Cable Car",
    RouteType.GONDOLA: "Gondola",
    RouteType.FUNICULAR: "Funicular",
    RouteType.TROLLEYBUS: "Trolleybus",
    RouteType.MONORAIL: "Monorail",
}


@dataclass(frozen=True, slots=True)
class GtfsStop:
    """A boarding point from stops.txt (location_type 0 only)."""

    stop_id: str
    name: str
    lat: float
    lon: float
    description: str | None = None
    location_type: int = 0
    platform_code: str | None = None
    parent_station: str | None = None

    @property
    def location(self) -> GeoPoint:
        return GeoPoint(lat=self.lat, lon=self.lon)


@dataclass(frozen=True, slots=True)
class GtfsRoute:
    route_id: str
    agency_id: str = ""
    short_name: str = ""
    long_name: str = ""
    route_type: RouteType = RouteType.BUS
    color: str = DEFAULT_ROUTE_COLOR  # hex without '#', per GTFS
    text_color: str = DEFAULT_ROUTE_TEXT_COLOR  # hex without '#', per GTFS


@dataclass(frozen=True, slots=True)
class ShapePoint:
    shape_id: str
    lat: float
    lon: float
    sequence: int
    dist_traveled: float | None = None


@dataclass(frozen=True, slots=True)
class TripBinding:
    trip_id: str
    route_id: str
    shape_id: str


@dataclass(frozen=True, slots=True)
class TripIndex:
    """Lookups derived from trips.txt.

    bindings_by_route keeps only the first trip (with a shape) seen per route,
    so routes with several physical variants collapse to a single shape.
    """

    bindings_by_route: dict[str, TripBinding] = field(default_factory=dict)
    route_by_trip: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class TransitStop:
    id: str
    name: str
    lat: float
    lon: float
    description: str | None = None
    route_ids: tuple[str, ...] = ()
    route_names: tuple[str, ...] = ()
    route_type: RouteType = RouteType.BUS

    @property
    def location(self) -> GeoPoint:
        return GeoPoint(lat=self.lat, lon=self.lon)


@dataclass(frozen=True, slots=True)
class TransitRoute:
    id: str
    short_name: str
    long_name: str
    route_type: RouteType
    color: str  # '#RRGGBB'
    text_color: str  # '#RRGGBB'
    shape: tuple[GeoPoint, ...] = ()


@dataclass(frozen=True, slots=True)
class StopScheduleEntry:
    route_name: str
    stop_name: str
    arrival_time: str  # HH:MM
    departure_time: str  # HH:MM
