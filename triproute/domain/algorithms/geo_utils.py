from __future__ import annotations

import math

from triproute.domain.models import GeoPoint

EARTH_RADIUS_M = 6371000.0


def haversine_distance_m(a: GeoPoint, b: GeoPoint) -> float:
    """Great-circle distance in meters."""

    lat1 = math.radians(a.lat)
    lon1 = math.radians(a.lon)
    lat2 = math.radians(b.lat)
    lon2 = math.radians(b.lon)

    dlat = lat2 - lat1
    dlon = lon2 - lon1

    s = (
        math.sin(dlat / 2.0) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2.0) ** 2
    )
    return 2.0 * EARTH_RADIUS_M * math.asin(math.sqrt(min(1.0, s)))


def polyline_distance_m(points: tuple[GeoPoint, ...]) -> float:
    if len(points) < 2:
        return 0.0
    total = 0.0
    for a, b in zip(points, points[1:]):
        total += float(haversine_distance_m(a, b))
    return float(total)


def slice_polyline_between_points(
    points: tuple[GeoPoint, ...], *, start: GeoPoint, end: GeoPoint
) -> tuple[GeoPoint, ...]:
    """Return only the polyline segment between start and end.

    Snap start/end to nearest points on the shape and slice the list.
    Ensures returned polyline begins at start and ends at end.
    """

    if len(points) < 2:
        return (start, end)

    def nearest_index(target: GeoPoint) -> int:
        best_i = 0
        best_d = float("inf")
        for i, p in enumerate(points):
            d = float(haversine_distance_m(p, target))
            if d < best_d:
                best_d = d
                best_i = i
        return best_i

    i0 = nearest_index(start)
    i1 = nearest_index(end)
    if i0 == i1:
        return (start, end)

    if i0 < i1:
        seg = list(points[i0 : i1 + 1])
    else:
        seg = list(points[i1 : i0 + 1])
        seg.reverse()

    seg[0] = start
    seg[-1] = end
    return tuple(seg)
