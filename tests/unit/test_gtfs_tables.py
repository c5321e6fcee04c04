from __future__ import annotations

import pytest

from triproute.domain.algorithms.gtfs_tables import (
    drop_partial_last_line,
    iter_rows,
    parse_routes,
    parse_shapes,
    parse_stops,
    parse_trips,
)
from triproute.domain.models import RouteType

from .gtfs_samples import ROUTES_TXT, SHAPES_TXT, STOPS_TXT, TRIPS_TXT


@pytest.mark.unit
def test_minimal_stops_file_yields_one_stop() -> None:
    text = "stop_id,stop_name,stop_lat,stop_lon,location_type\nA,Alpha,44.1,26.1,0\n"
    stops = parse_stops(text)

    assert list(stops) == ["A"]
    assert stops["A"].name == "Alpha"
    assert stops["A"].lat == 44.1


@pytest.mark.unit
def test_station_rows_are_not_stops() -> None:
    text = "stop_id,stop_name,stop_lat,stop_lon,location_type\nA,Alpha,44.1,26.1,1\n"
    assert parse_stops(text) == {}


@pytest.mark.unit
def test_stops_without_usable_coordinates_are_skipped() -> None:
    text = (
        "stop_id,stop_name,stop_lat,stop_lon\n"
        "A,Zero,0,0\n"
        "B,Broken,abc,26.1\n"
        "C,Outside,95.0,26.1\n"
        "D,Good,44.2,26.2\n"
    )
    assert list(parse_stops(text)) == ["D"]


@pytest.mark.unit
def test_columns_are_found_by_name_and_quotes_keep_commas() -> None:
    stops = parse_stops(STOPS_TXT)

    assert set(stops) == {"S1", "S2", "S3"}
    assert stops["S2"].description == "Bd. Regina Elisabeta, nord"
    assert stops["S1"].description is None

    reordered = 'stop_lon,stop_lat,stop_name,stop_id\n26.1,44.1,"Alpha, Beta",A\n'
    stop = parse_stops(reordered)["A"]
    assert (stop.lat, stop.lon, stop.name) == (44.1, 26.1, "Alpha, Beta")


@pytest.mark.unit
def test_short_rows_and_blank_lines_are_skipped() -> None:
    text = "\ufeffa,b,c\n1,2,3\n\n4,5\n 6 , 7 ,8\n"
    rows = list(iter_rows(text))

    assert rows == [{"a": "1", "b": "2", "c": "3"}, {"a": "6", "b": "7", "c": "8"}]
    assert list(iter_rows(text, max_rows=1)) == rows[:1]
    assert list(iter_rows("")) == []


@pytest.mark.unit
def test_routes_fill_defaults() -> None:
    routes = parse_routes(ROUTES_TXT)

    assert routes["R1"].short_name == "336"
    assert routes["R1"].color == "FF0000"
    assert routes["R1"].route_type is RouteType.BUS
    assert routes["R2"].color == "1D71B8"
    assert routes["R2"].text_color == "FFFFFF"
    assert routes["R2"].route_type is RouteType.TRAM


@pytest.mark.unit
def test_unknown_route_type_falls_back_to_bus() -> None:
    assert RouteType.parse("715") is RouteType.BUS
    assert RouteType.parse("") is RouteType.BUS
    assert RouteType.parse(" 11 ") is RouteType.TROLLEYBUS


@pytest.mark.unit
def test_route_types_have_display_labels() -> None:
    assert RouteType.TRAM.label == "Tramvai"
    assert RouteType.SUBWAY.label == "Metrou"
    assert RouteType.BUS.label == "Autobuz"
    assert RouteType.parse("11").label == "Trolleybus"
    assert all(t.label for t in RouteType)


@pytest.mark.unit
def test_shapes_are_ordered_by_sequence() -> None:
    shapes = parse_shapes(SHAPES_TXT)

    assert [p.sequence for p in shapes["SH1"]] == [1, 2, 3]
    assert shapes["SH1"][0].lat == 44.4270


@pytest.mark.unit
def test_trips_index_every_trip_and_first_shape_per_route() -> None:
    index = parse_trips(TRIPS_TXT)

    assert index.route_by_trip == {"T1": "R1", "T2": "R1", "T3": "R2"}
    assert index.bindings_by_route["R1"].trip_id == "T1"
    assert index.bindings_by_route["R1"].shape_id == "SH1"
    assert "R2" not in index.bindings_by_route


@pytest.mark.unit
def test_drop_partial_last_line() -> None:
    assert drop_partial_last_line(b"a,b\n1,2\n3,") == b"a,b\n1,2\n"
    assert drop_partial_last_line(b"a,b\n1,2\n") == b"a,b\n1,2\n"
    assert drop_partial_last_line(b"a,b\r1,2") == b"a,b\r"
    assert drop_partial_last_line(b"a,b") == b""
