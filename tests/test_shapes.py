import pytest
from shapely.geometry import LineString, Polygon, box

from perimeter_grid.exceptions import NullPerimeterError
from perimeter_grid.shapes import (
    as_polygon,
    covers,
    fit_most,
    largest_polygon,
    line_end,
    line_plane_intersection,
    line_start,
    offset_polygon,
    polygon_parts,
    rotate,
)
from perimeter_grid.vectors import Vector3


def test_as_polygon_accepts_vertices():
    polygon = as_polygon([(0, 0), (4, 0), (4, 2), (0, 2)])
    assert isinstance(polygon, Polygon)
    assert polygon.area == pytest.approx(8.0)


def test_as_polygon_rejects_none():
    with pytest.raises(NullPerimeterError):
        as_polygon(None)
    with pytest.raises(TypeError):
        as_polygon(None)


def test_as_polygon_rejects_other_geometry():
    with pytest.raises(TypeError):
        as_polygon(LineString([(0, 0), (1, 1)]))


def test_as_polygon_rejects_bow_tie():
    with pytest.raises(ValueError):
        as_polygon([(0, 0), (2, 2), (2, 0), (0, 2)])


def test_rotate_about_global_origin():
    line = rotate(LineString([(1, 0), (2, 0)]), 90.0)
    assert line_start(line).isclose(Vector3(0.0, 1.0))
    assert line_end(line).isclose(Vector3(0.0, 2.0))


def test_rotation_is_inverse_consistent(l_shape):
    back = rotate(rotate(l_shape, -30.0), 30.0)
    assert back.symmetric_difference(l_shape).area == pytest.approx(0.0, abs=1e-9)


def test_offset_shrinks_and_vanishes():
    cell = box(0, 0, 4, 2)
    loops = offset_polygon(cell, -0.5)
    assert len(loops) == 1
    assert loops[0].area == pytest.approx(3.0 * 1.0)
    assert offset_polygon(cell, -1.5) == []


def test_offset_can_split_into_loops():
    dumbbell = Polygon(
        [(0, 0), (3, 0), (3, 1.4), (5, 1.4), (5, 0), (8, 0),
         (8, 3), (5, 3), (5, 1.6), (3, 1.6), (3, 3), (0, 3)]
    )
    loops = offset_polygon(dumbbell, -0.5)
    assert len(loops) == 2


def test_largest_polygon_picks_by_area():
    small = box(0, 0, 1, 1)
    large = box(5, 5, 8, 8)
    assert largest_polygon(small.union(large)).equals(large)
    assert largest_polygon(Polygon()) is None


def test_fit_most(l_shape):
    inside = box(1, 1, 2, 2)
    assert fit_most(inside, l_shape).equals(inside)
    clipped = fit_most(box(3, 3, 5, 5), l_shape)
    assert clipped.area == pytest.approx(3.0)
    assert fit_most(box(6, 6, 8, 8), l_shape) is None
    # Touching along an edge only shares no area.
    assert fit_most(box(10, 0, 12, 2), l_shape) is None


def test_covers_includes_boundary(square):
    assert covers(square, Vector3(0.0, 0.0))
    assert covers(square, Vector3(-5.0, -5.0))
    assert not covers(square, Vector3(6.0, 0.0))


def test_line_plane_intersection():
    row = LineString([(-5, 1), (5, 1)])
    column = LineString([(2, -5), (2, 5)])
    assert line_plane_intersection(row, column).isclose(Vector3(2.0, 1.0))
    # The plane extends past the column's ends.
    short = LineString([(-3, 8), (-3, 9)])
    assert line_plane_intersection(row, short).isclose(Vector3(-3.0, 1.0))


def test_line_plane_intersection_parallel_is_nan():
    a = LineString([(0, 0), (1, 0)])
    b = LineString([(0, 1), (1, 1)])
    assert line_plane_intersection(a, b).is_nan


def test_polygon_parts_flattens_collections():
    pair = box(0, 0, 1, 1).union(box(5, 5, 6, 6))
    parts = polygon_parts(pair)
    assert len(parts) == 2
    assert all(isinstance(part, Polygon) for part in parts)
    assert polygon_parts(LineString([(0, 0), (1, 1)])) == []
    assert polygon_parts(Polygon()) == []
