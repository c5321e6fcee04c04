from __future__ import annotations

import pytest

from triproute.domain.algorithms.geo_utils import (
    haversine_distance_m,
    polyline_distance_m,
    slice_polyline_between_points,
)
from triproute.domain.models import BoundingBox, GeoPoint


@pytest.mark.unit
def test_geo_point_rejects_out_of_range() -> None:
    with pytest.raises(ValueError):
        GeoPoint(lat=91.0, lon=0.0)
    with pytest.raises(ValueError):
        GeoPoint(lat=0.0, lon=-181.0)


@pytest.mark.unit
def test_bounding_box_around_pads_both_points() -> None:
    a = GeoPoint(lat=44.42, lon=26.10)
    b = GeoPoint(lat=44.44, lon=26.12)

    box = BoundingBox.around(a, b, padding_deg=0.05)

    assert box.north == pytest.approx(44.49)
    assert box.south == pytest.approx(44.37)
    assert box.east == pytest.approx(26.17)
    assert box.west == pytest.approx(26.05)
    assert box.contains(44.43, 26.11)
    assert not box.contains(44.60, 26.50)


@pytest.mark.unit
def test_haversine_zero_for_identical_points() -> None:
    p = GeoPoint(lat=44.4268, lon=26.1025)
    assert haversine_distance_m(p, p) == 0.0


@pytest.mark.unit
def test_haversine_is_symmetric_and_reasonable_scale() -> None:
    # Rough sanity check: 1 degree of latitude is about 111km.
    a = GeoPoint(lat=0.0, lon=0.0)
    b = GeoPoint(lat=1.0, lon=0.0)

    d1 = haversine_distance_m(a, b)
    d2 = haversine_distance_m(b, a)

    assert abs(d1 - d2) < 1e-6
    assert 100_000.0 < d1 < 120_000.0


@pytest.mark.unit
def test_haversine_grows_with_separation() -> None:
    origin = GeoPoint(lat=44.4268, lon=26.1025)
    previous = 0.0
    for step in range(1, 20):
        d = haversine_distance_m(
            origin, GeoPoint(lat=44.4268 + step * 0.01, lon=26.1025 + step * 0.01)
        )
        assert d > previous
        previous = d


@pytest.mark.unit
def test_polyline_distance_sums_pieces() -> None:
    pts = (
        GeoPoint(lat=0.0, lon=0.0),
        GeoPoint(lat=0.0, lon=0.01),
        GeoPoint(lat=0.0, lon=0.02),
    )
    assert polyline_distance_m(pts) == pytest.approx(
        haversine_distance_m(pts[0], pts[1]) + haversine_distance_m(pts[1], pts[2])
    )
    assert polyline_distance_m(pts[:1]) == 0.0


@pytest.mark.unit
def test_slice_polyline_reverses_when_travelling_backwards() -> None:
    shape = (
        GeoPoint(lat=0.0, lon=0.0),
        GeoPoint(lat=0.0, lon=0.01),
        GeoPoint(lat=0.0, lon=0.02),
        GeoPoint(lat=0.0, lon=0.03),
    )
    start = GeoPoint(lat=0.0001, lon=0.0299)
    end = GeoPoint(lat=0.0001, lon=0.0101)

    out = slice_polyline_between_points(shape, start=start, end=end)

    assert out == (start, shape[2], end)
