from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class GeoPoint:
    lat: float
    lon: float

    def __post_init__(self) -> None:
        if not (-90.0 <= self.lat <= 90.0):
            raise ValueError(f"Invalid latitude: {self.lat}")
        if not (-180.0 <= self.lon <= 180.0):
            raise ValueError(f"Invalid longitude: {self.lon}")


@dataclass(frozen=True, slots=True)
class BoundingBox:
    north: float
    south: float
    east: float
    west: float

    def contains(self, lat: float, lon: float) -> bool:
        return self.south <= lat <= self.north and self.west <= lon <= self.east

    @staticmethod
    def around(a: GeoPoint, b: GeoPoint, *, padding_deg: float) -> "BoundingBox":
        """Smallest box containing both points, padded on every side."""

        return BoundingBox(
            north=max(a.lat, b.lat) + padding_deg,
            south=min(a.lat, b.lat) - padding_deg,
            east=max(a.lon, b.lon) + padding_deg,
            west=min(a.lon, b.lon) - padding_deg,
        )
