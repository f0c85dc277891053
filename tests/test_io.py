import geopandas as gpd
import pytest
from shapely.geometry import box

from perimeter_grid import grid_to_frames, load_perimeter, make_grid, save_grid


def test_grid_to_frames(square):
    grid = make_grid(square, 5.0, 5.0)
    lines, cells = grid_to_frames(grid)
    assert len(lines) == 4
    assert list(lines["axis"]) == ["x", "x", "y", "y"]
    assert list(lines["index"]) == [0, 1, 0, 1]
    assert len(cells) == 9
    assert cells["area"].sum() == pytest.approx(100.0)
    assert list(cells["index"]) == list(range(9))


def test_save_grid_writes_lines_and_cells(square, tmp_path):
    grid = make_grid(square, 5.0, 5.0)
    path = save_grid(grid, tmp_path / "grid.geojson")
    assert path.exists()
    written = gpd.read_file(path)
    assert (written["kind"] == "line").sum() == 4
    assert (written["kind"] == "cell").sum() == 9


def test_load_perimeter_keeps_largest_polygon(tmp_path):
    gdf = gpd.GeoDataFrame(
        {"name": ["a", "b", "c"]},
        geometry=[box(0, 0, 4, 4), box(2, 2, 6, 6), box(20, 20, 21, 21)],
    )
    path = tmp_path / "perimeter.geojson"
    gdf.to_file(path, driver="GeoJSON")
    perimeter = load_perimeter(path)
    assert perimeter.area == pytest.approx(16.0 + 16.0 - 4.0)


def test_load_perimeter_round_trips_saved_cells(square, tmp_path):
    grid = make_grid(square, 5.0, 5.0)
    path = save_grid(grid, tmp_path / "grid.geojson")
    perimeter = load_perimeter(path)
    assert perimeter.area == pytest.approx(square.area)
