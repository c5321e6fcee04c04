from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class CostWaypointSchema(BaseModel):
    """No range checks; the cost service drops invalid points itself."""

    lat: float
    lon: float
    name: str | None = None


class TransportCostRequestSchema(BaseModel):
    points: list[CostWaypointSchema] = Field(default_factory=list)
    mode: Literal["walking", "transit", "walking-transit", "car", "taxi"]
    city_name: str | None = None


class TransportSegmentSchema(BaseModel):
    origin: str
    destination: str
    distance_km: float
    duration_min: int
    cost_ron: float


class TransportCostSchema(BaseModel):
    mode: str
    label: str
    total_distance_km: float = 0.0
    total_duration_min: int = 0
    total_cost_ron: float = 0.0
    segments: list[TransportSegmentSchema] = []
    is_real_route_used: bool = False
