from __future__ import annotations

from fastapi import APIRouter, Depends

from triproute.adapters.api.dependencies import (
    get_point_to_point_router,
    get_transport_cost_service,
)
from triproute.adapters.api.schemas.costs import (
    TransportCostRequestSchema,
    TransportCostSchema,
    TransportSegmentSchema,
)
from triproute.adapters.api.schemas.routes import (
    RouteRequestSchema,
    RouteSchema,
    RouteSegmentSchema,
)
from triproute.app.services.point_to_point_router import (
    PointToPointRouter,
    optimize_waypoint_order,
)
from triproute.app.services.transport_cost_service import TransportCostService
from triproute.domain.models import (
    RoutePoint,
    RouteResult,
    TransportCost,
    TransportMode,
    TravelProfile,
)

router = APIRouter(tags=["routes"])


def _route_to_schema(route: RouteResult) -> RouteSchema:
    return RouteSchema(
        segments=[
            RouteSegmentSchema(
                distance_m=s.distance_m,
                duration_s=s.duration_s,
                is_fallback=s.is_fallback,
            )
            for s in route.segments
        ],
        geometry=list(route.geometry) if route.geometry else None,
        total_distance_m=route.total_distance_m,
        total_duration_s=route.total_duration_s,
        uses_routing_engine=route.uses_routing_engine,
    )


def _cost_to_schema(cost: TransportCost) -> TransportCostSchema:
    return TransportCostSchema(
        mode=cost.mode.value,
        label=cost.mode.label,
        total_distance_km=cost.total_distance_km,
        total_duration_min=cost.total_duration_min,
        total_cost_ron=cost.total_cost_ron,
        segments=[
            TransportSegmentSchema(
                origin=s.origin,
                destination=s.destination,
                distance_km=s.distance_km,
                duration_min=s.duration_min,
                cost_ron=s.cost_ron,
            )
            for s in cost.segments
        ],
        is_real_route_used=cost.is_real_route_used,
    )


@router.post("/routes", response_model=RouteSchema)
async def calculate_route(
    req: RouteRequestSchema,
    service: PointToPointRouter = Depends(get_point_to_point_router),
) -> RouteSchema:
    points = [RoutePoint(lat=p.lat, lon=p.lon, name=p.name) for p in req.points]
    if req.optimize_order:
        points = optimize_waypoint_order(points)
    route = await service.calculate_real_route(points, TravelProfile(req.profile))
    return _route_to_schema(route)


@router.post("/transport-costs", response_model=TransportCostSchema)
async def calculate_transport_costs(
    req: TransportCostRequestSchema,
    service: TransportCostService = Depends(get_transport_cost_service),
) -> TransportCostSchema:
    points = [RoutePoint(lat=p.lat, lon=p.lon, name=p.name) for p in req.points]
    cost = await service.calculate_transport_costs(
        points, TransportMode(req.mode), city_name=req.city_name
    )
    return _cost_to_schema(cost)
