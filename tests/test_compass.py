import pytest
from shapely.geometry import Polygon

from perimeter_grid.compass import compass_box
from perimeter_grid.vectors import Vector3


def test_compass_points(l_shape):
    cps = compass_box(l_shape)
    assert cps.sw == Vector3(0.0, 0.0)
    assert cps.ne == Vector3(10.0, 10.0)
    assert cps.nw == Vector3(0.0, 10.0)
    assert cps.se == Vector3(10.0, 0.0)
    assert cps.n == Vector3(5.0, 10.0)
    assert cps.s == Vector3(5.0, 0.0)
    assert cps.e == Vector3(10.0, 5.0)
    assert cps.w == Vector3(0.0, 5.0)
    assert cps.c == Vector3(5.0, 5.0)
    assert cps.size_x == 10.0
    assert cps.size_y == 10.0


def test_compass_of_empty_geometry_raises():
    with pytest.raises(ValueError):
        compass_box(Polygon())
