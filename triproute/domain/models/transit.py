from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .geo import GeoPoint
from .gtfs import StopScheduleEntry, TransitRoute, TransitStop


class LegKind(str, Enum):
    WALK = "walk"
    TRANSIT = "transit"


@dataclass(frozen=True, slots=True)
class NamedPlace:
    name: str
    location: GeoPoint


@dataclass(frozen=True, slots=True)
class TransitRouteSegment:
    kind: LegKind
    origin: NamedPlace
    destination: NamedPlace
    distance_m: float
    duration_s: float
    route: TransitRoute | None = None
    stop_from: TransitStop | None = None
    stop_to: TransitStop | None = None
    path: tuple[GeoPoint, ...] = ()
    schedule: tuple[StopScheduleEntry, ...] = ()


@dataclass(frozen=True, slots=True)
class TransitRouteResult:
    segments: tuple[TransitRouteSegment, ...]
    routes: tuple[TransitRoute, ...] = ()

    @property
    def total_distance_m(self) -> float:
        return float(sum(s.distance_m for s in self.segments))

    @property
    def total_duration_s(self) -> float:
        return float(sum(s.duration_s for s in self.segments))
