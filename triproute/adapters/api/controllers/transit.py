from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from triproute.adapters.api.dependencies import (
    get_city_directory,
    get_transit_catalog,
)
from triproute.adapters.api.schemas.routes import GeoPointSchema
from triproute.adapters.api.schemas.transit import (
    StopScheduleEntrySchema,
    TransitRouteSchema,
    TransitStopSchema,
)
from triproute.app.services.city_feeds import CityFeedDirectory
from triproute.app.services.transit_catalog_service import TransitCatalogService
from triproute.domain.models import BoundingBox

router = APIRouter(prefix="/transit", tags=["transit"])


def _feed_path(city: str, cities: CityFeedDirectory) -> str:
    feed_path = cities.feed_path_for_city(city)
    if not feed_path:
        raise HTTPException(status_code=404, detail=f"No transit feed for {city!r}")
    return feed_path


@router.get("/{city}/stops", response_model=list[TransitStopSchema])
async def list_stops(
    city: str,
    north: float | None = Query(default=None, ge=-90.0, le=90.0),
    south: float | None = Query(default=None, ge=-90.0, le=90.0),
    east: float | None = Query(default=None, ge=-180.0, le=180.0),
    west: float | None = Query(default=None, ge=-180.0, le=180.0),
    cities: CityFeedDirectory = Depends(get_city_directory),
    catalog: TransitCatalogService = Depends(get_transit_catalog),
) -> list[TransitStopSchema]:
    feed_path = _feed_path(city, cities)

    edges = (north, south, east, west)
    if any(v is not None for v in edges) and any(v is None for v in edges):
        raise HTTPException(
            status_code=422, detail="north, south, east and west go together"
        )
    bounds = None
    if north is not None:
        bounds = BoundingBox(north=north, south=south, east=east, west=west)

    stops = await catalog.get_transit_stops(feed_path, bounds)
    return [
        TransitStopSchema(
            stop_id=s.id,
            name=s.name,
            location=GeoPointSchema(lat=s.lat, lon=s.lon),
            description=s.description,
            route_ids=list(s.route_ids),
            route_names=list(s.route_names),
            route_type=int(s.route_type),
            route_type_label=s.route_type.label,
        )
        for s in stops
    ]


@router.get("/{city}/routes", response_model=list[TransitRouteSchema])
async def list_routes(
    city: str,
    route_id: list[str] | None = Query(default=None),
    cities: CityFeedDirectory = Depends(get_city_directory),
    catalog: TransitCatalogService = Depends(get_transit_catalog),
) -> list[TransitRouteSchema]:
    feed_path = _feed_path(city, cities)
    routes = await catalog.get_transit_routes(feed_path, route_id)
    return [
        TransitRouteSchema(
            route_id=r.id,
            short_name=r.short_name,
            long_name=r.long_name,
            route_type=int(r.route_type),
            route_type_label=r.route_type.label,
            color=r.color,
            text_color=r.text_color,
            shape=[GeoPointSchema(lat=p.lat, lon=p.lon) for p in r.shape],
        )
        for r in routes
    ]


@router.get(
    "/{city}/stops/{stop_id}/schedule",
    response_model=list[StopScheduleEntrySchema],
)
async def get_stop_schedule(
    city: str,
    stop_id: str,
    route_id: str = Query(...),
    limit: int = Query(default=5, ge=1, le=50),
    cities: CityFeedDirectory = Depends(get_city_directory),
    catalog: TransitCatalogService = Depends(get_transit_catalog),
) -> list[StopScheduleEntrySchema]:
    feed_path = _feed_path(city, cities)
    entries = await catalog.get_stop_schedule(feed_path, stop_id, route_id, limit=limit)
    return [
        StopScheduleEntrySchema(
            route_name=e.route_name,
            stop_name=e.stop_name,
            arrival_time=e.arrival_time,
            departure_time=e.departure_time,
        )
        for e in entries
    ]
