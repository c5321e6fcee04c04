from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum

from .geo import GeoPoint

# (lon, lat), GeoJSON order.
Coordinate = tuple[float, float]


class TravelProfile(str, Enum):
    WALKING = "walking"
    DRIVING = "driving"
    CYCLING = "cycling"

    @property
    def osrm_profile(self) -> str:
        return _OSRM_PROFILES[self]


_OSRM_PROFILES = {
    TravelProfile.WALKING: "foot",
    TravelProfile.DRIVING: "car",
    TravelProfile.CYCLING: "bike",
}


@dataclass(frozen=True, slots=True)
class RoutePoint:
    """Caller-supplied waypoint. Not validated on construction."""

    lat: float
    lon: float
    name: str | None = None

    @property
    def is_valid(self) -> bool:
        return (
            isinstance(self.lat, (int, float))
            and isinstance(self.lon, (int, float))
            and math.isfinite(self.lat)
            and math.isfinite(self.lon)
            and -90.0 <= self.lat <= 90.0
            and -180.0 <= self.lon <= 180.0
        )

    @property
    def coordinate(self) -> Coordinate:
        return (float(self.lon), float(self.lat))

    def to_geo_point(self) -> GeoPoint:
        return GeoPoint(lat=float(self.lat), lon=float(self.lon))


@dataclass(frozen=True, slots=True)
class RouteSegment:
    distance_m: float
    duration_s: float
    geometry: tuple[Coordinate, ...] = ()
    is_fallback: bool = False


@dataclass(frozen=True, slots=True)
class RouteResult:
    segments: tuple[RouteSegment, ...] = field(default_factory=tuple)
    geometry: tuple[Coordinate, ...] | None = None

    @property
    def total_distance_m(self) -> float:
        return float(sum(s.distance_m for s in self.segments))

    @property
    def total_duration_s(self) -> float:
        return float(sum(s.duration_s for s in self.segments))

    @property
    def uses_routing_engine(self) -> bool:
        return any(not s.is_fallback for s in self.segments)


@dataclass(frozen=True, slots=True)
class DistanceMatrix:
    """Row per source, column per destination. None marks an unroutable pair."""

    durations_s: tuple[tuple[float | None, ...], ...]
    distances_m: tuple[tuple[float | None, ...], ...]
    is_fallback: bool = False
