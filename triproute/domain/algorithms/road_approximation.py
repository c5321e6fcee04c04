from __future__ import annotations

from dataclasses import dataclass

from triproute.domain.models import GeoPoint, RouteSegment, TravelProfile

from .geo_utils import haversine_distance_m


@dataclass(frozen=True, slots=True)
class RoadModel:
    """Closed-form stand-in for a routing engine.

    curvature: how much longer the road is than the great-circle line.
    """

    curvature: float
    speed_kmh: float

    @property
    def speed_mps(self) -> float:
        return self.speed_kmh / 3.6


ROAD_MODELS: dict[TravelProfile, RoadModel] = {
    TravelProfile.WALKING: RoadModel(curvature=1.15, speed_kmh=5.0),
    TravelProfile.DRIVING: RoadModel(curvature=1.35, speed_kmh=40.0),
    TravelProfile.CYCLING: RoadModel(curvature=1.25, speed_kmh=15.0),
}


def approximate_distance_m(a: GeoPoint, b: GeoPoint, profile: TravelProfile) -> float:
    return haversine_distance_m(a, b) * ROAD_MODELS[profile].curvature


def approximate_segment(
    a: GeoPoint, b: GeoPoint, profile: TravelProfile
) -> RouteSegment:
    model = ROAD_MODELS[profile]
    distance_m = approximate_distance_m(a, b, profile)
    return RouteSegment(
        distance_m=distance_m,
        duration_s=distance_m / model.speed_mps,
        geometry=((a.lon, a.lat), (b.lon, b.lat)),
        is_fallback=True,
    )
