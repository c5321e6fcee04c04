from __future__ import annotations

from pydantic import BaseModel

from triproute.adapters.api.schemas.routes import GeoPointSchema


class TransitStopSchema(BaseModel):
    stop_id: str
    name: str
    location: GeoPointSchema
    description: str | None = None
    route_ids: list[str] = []
    route_names: list[str] = []
    route_type: int
    route_type_label: str


class TransitRouteSchema(BaseModel):
    route_id: str
    short_name: str | None = None
    long_name: str | None = None
    route_type: int
    route_type_label: str
    color: str | None = None
    text_color: str | None = None
    shape: list[GeoPointSchema] = []


class StopScheduleEntrySchema(BaseModel):
    route_name: str
    stop_name: str
    arrival_time: str
    departure_time: str
