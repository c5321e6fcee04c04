from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class GeoPointSchema(BaseModel):
    lat: float = Field(..., ge=-90.0, le=90.0)
    lon: float = Field(..., ge=-180.0, le=180.0)


class WaypointSchema(GeoPointSchema):
    name: str | None = None


class RouteRequestSchema(BaseModel):
    points: list[WaypointSchema] = Field(default_factory=list)
    profile: Literal["walking", "driving", "cycling"] = "driving"
    # Reorder intermediate waypoints by nearest neighbour before routing.
    optimize_order: bool = False


class RouteSegmentSchema(BaseModel):
    distance_m: float
    duration_s: float
    is_fallback: bool = False


class RouteSchema(BaseModel):
    segments: list[RouteSegmentSchema] = []
    # [lon, lat] pairs, GeoJSON order.
    geometry: list[tuple[float, float]] | None = None

    total_distance_m: float = 0.0
    total_duration_s: float = 0.0
    uses_routing_engine: bool = False
