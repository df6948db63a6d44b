"""
Tests for polygon area and bounds helpers
"""
import pytest

from turfwars.core.geo import bounding_box, closed_ring, distinct_vertex_count, polygon_area_m2
from turfwars.models import Coordinate

from conftest import square


# R * radians(0.01°) squared
EQUATOR_SQUARE_M2 = 1_236_431.0


def test_area_equator_square():
    """0.01° square at the equator ≈ 1.236 km²"""
    assert polygon_area_m2(square(0.0, 0.0)) == pytest.approx(EQUATOR_SQUARE_M2, rel=1e-3)


def test_area_shrinks_with_latitude():
    """Same angular square covers less ground at 60°N (cos 60° ≈ 0.5)"""
    high = polygon_area_m2(square(60.0, 10.0))
    assert high == pytest.approx(EQUATOR_SQUARE_M2 * 0.5, rel=1e-2)


def test_area_independent_of_winding():
    path = square(37.77, -122.42)
    assert polygon_area_m2(path) == pytest.approx(polygon_area_m2(list(reversed(path))))


def test_area_degenerate():
    """Collinear points and short paths enclose nothing"""
    line = [Coordinate(lat=0, lng=0), Coordinate(lat=0, lng=0.01), Coordinate(lat=0, lng=0.02)]
    assert polygon_area_m2(line) == 0.0
    assert polygon_area_m2(line[:2]) == 0.0


def test_area_across_antimeridian():
    """A square straddling 180° is not stretched around the globe"""
    path = [
        Coordinate(lat=0.01, lng=179.995),
        Coordinate(lat=0.01, lng=-179.995),
        Coordinate(lat=0.0, lng=-179.995),
        Coordinate(lat=0.0, lng=179.995),
    ]
    assert polygon_area_m2(path) == pytest.approx(EQUATOR_SQUARE_M2, rel=1e-3)


def test_distinct_vertex_count():
    a = Coordinate(lat=1, lng=1)
    b = Coordinate(lat=2, lng=2)
    assert distinct_vertex_count([a, b, a, b]) == 2


def test_closed_ring():
    path = square(0.0, 0.0)
    ring = closed_ring(path)
    assert len(ring) == 5
    assert ring[0] == ring[-1]
    assert closed_ring(ring) == ring


def test_bounding_box_padding_and_clamp():
    box = bounding_box([Coordinate(lat=89.999, lng=10), Coordinate(lat=80, lng=20)], padding_deg=0.5)
    assert box.north == 90.0
    assert box.south == 79.5
    assert box.west == 9.5
    assert box.east == 20.5


def test_bounding_box_empty():
    assert bounding_box([]) is None
