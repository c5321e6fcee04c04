"""Best-effort parsers for GTFS text tables.

Columns are located by header name, so column order may vary between feeds.
Rows with fewer fields than the header are skipped silently.
"""

from __future__ import annotations

import csv
from typing import Iterator

from triproute.domain.models import (
    GtfsRoute,
    GtfsStop,
    RouteType,
    ShapePoint,
    TripBinding,
    TripIndex,
)
from triproute.domain.models.gtfs import DEFAULT_ROUTE_COLOR, DEFAULT_ROUTE_TEXT_COLOR


def iter_rows(text: str, *, max_rows: int | None = None) -> Iterator[dict[str, str]]:
    """Yield header-keyed rows from CSV text.

    Quoted fields may contain commas. Blank lines are ignored and every
    field is stripped. A UTF-8 BOM on the header is tolerated.
    """

    lines = [line for line in text.splitlines() if line.strip()]
    if not lines:
        return

    reader = csv.reader(lines, skipinitialspace=True)
    try:
        headers = [h.strip().lstrip("\ufeff") for h in next(reader)]
    except (StopIteration, csv.Error):
        return

    count = 0
    while True:
        try:
            values = next(reader)
        except StopIteration:
            return
        except csv.Error:
            continue

        if len(values) < len(headers):
            continue

        yield {h: v.strip() for h, v in zip(headers, values)}

        count += 1
        if max_rows is not None and count >= max_rows:
            return


def _float(raw: str | None) -> float | None:
    try:
        return float(raw) if raw else None
    except ValueError:
        return None


def _int(raw: str | None, default: int) -> int:
    try:
        return int(raw) if raw else default
    except ValueError:
        return default


def parse_stops(text: str) -> dict[str, GtfsStop]:
    stops: dict[str, GtfsStop] = {}
    for row in iter_rows(text):
        stop_id = row.get("stop_id") or ""
        lat = _float(row.get("stop_lat"))
        lon = _float(row.get("stop_lon"))
        location_type = _int(row.get("location_type"), 0)

        # Zero coordinates mean "missing" in the feeds we consume.
        if not stop_id or not lat or not lon or location_type != 0:
            continue
        if not (-90.0 <= lat <= 90.0 and -180.0 <= lon <= 180.0):
            continue

        stops[stop_id] = GtfsStop(
            stop_id=stop_id,
            name=row.get("stop_name") or "",
            lat=lat,
            lon=lon,
            description=row.get("stop_desc") or None,
            location_type=location_type,
            platform_code=row.get("platform_code") or None,
            parent_station=row.get("parent_station") or None,
        )
    return stops


def parse_routes(text: str) -> dict[str, GtfsRoute]:
    routes: dict[str, GtfsRoute] = {}
    for row in iter_rows(text):
        route_id = row.get("route_id") or ""
        if not route_id:
            continue
        routes[route_id] = GtfsRoute(
            route_id=route_id,
            agency_id=row.get("agency_id") or "",
            short_name=row.get("route_short_name") or "",
            long_name=row.get("route_long_name") or "",
            route_type=RouteType.parse(row.get("route_type")),
            color=row.get("route_color") or DEFAULT_ROUTE_COLOR,
            text_color=row.get("route_text_color") or DEFAULT_ROUTE_TEXT_COLOR,
        )
    return routes


def parse_shapes(text: str) -> dict[str, tuple[ShapePoint, ...]]:
    tmp: dict[str, list[ShapePoint]] = {}
    for row in iter_rows(text):
        shape_id = row.get("shape_id") or ""
        lat = _float(row.get("shape_pt_lat"))
        lon = _float(row.get("shape_pt_lon"))
        if not shape_id or lat is None or lon is None:
            continue
        if not (-90.0 <= lat <= 90.0 and -180.0 <= lon <= 180.0):
            continue
        tmp.setdefault(shape_id, []).append(
            ShapePoint(
                shape_id=shape_id,
                lat=lat,
                lon=lon,
                sequence=_int(row.get("shape_pt_sequence"), 0),
                dist_traveled=_float(row.get("shape_dist_traveled")),
            )
        )

    return {
        shape_id: tuple(sorted(points, key=lambda p: p.sequence))
        for shape_id, points in tmp.items()
    }


def parse_trips(text: str) -> TripIndex:
    index = TripIndex()
    for row in iter_rows(text):
        trip_id = row.get("trip_id") or ""
        route_id = row.get("route_id") or ""
        shape_id = row.get("shape_id") or ""
        if not route_id:
            continue

        if trip_id:
            index.route_by_trip[trip_id] = route_id
        if shape_id and route_id not in index.bindings_by_route:
            index.bindings_by_route[route_id] = TripBinding(
                trip_id=trip_id, route_id=route_id, shape_id=shape_id
            )
    return index


def drop_partial_last_line(data: bytes) -> bytes:
    """Cut a byte-range read back to its last complete line."""

    if not data or data.endswith((b"\n", b"\r")):
        return data
    cut = max(data.rfind(b"\n"), data.rfind(b"\r"))
    return data[: cut + 1] if cut >= 0 else b""
