from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .route import TravelProfile


class TransportMode(str, Enum):
    WALKING = "walking"
    TRANSIT = "transit"
    WALKING_TRANSIT = "walking-transit"
    CAR = "car"
    TAXI = "taxi"

    @property
    def routing_profile(self) -> TravelProfile:
        if self in (TransportMode.CAR, TransportMode.TAXI):
            return TravelProfile.DRIVING
        return TravelProfile.WALKING

    @property
    def uses_transit(self) -> bool:
        return self in (TransportMode.TRANSIT, TransportMode.WALKING_TRANSIT)

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    TransportMode.WALKING: "Mers pe jos",
    TransportMode.TRANSIT: "Transport în comun",
    TransportMode.WALKING_TRANSIT: "Pe jos + Transport",
    TransportMode.CAR: "Mașină personală",
    TransportMode.TAXI: "Taxi/Uber/Bolt",
}


@dataclass(frozen=True, slots=True)
class TransportSegment:
    origin: str
    destination: str
    distance_km: float
    duration_min: int
    cost_ron: float


@dataclass(frozen=True, slots=True)
class TransportCost:
    mode: TransportMode
    total_distance_km: float = 0.0
    total_duration_min: int = 0
    total_cost_ron: float = 0.0
    segments: tuple[TransportSegment, ...] = field(default_factory=tuple)
    is_real_route_used: bool = False
