"""Vector input and output for grid perimeters and generated grids."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Tuple, Union

import geopandas as gpd
import pandas as pd
from shapely.geometry import Polygon
from shapely.ops import unary_union

from .grid import Grid
from .shapes import largest_polygon, polygon_parts


__all__ = ["load_perimeter", "grid_to_frames", "save_grid"]

logger = logging.getLogger(__name__)


def load_perimeter(filepath: Union[str, Path]) -> Polygon:
    """Load a grid perimeter from a vector dataset.

    Reads any GeoPandas-compatible file, unions its polygonal geometries and
    keeps the largest resulting polygon.

    Args:
        filepath: Path to the vector file (e.g., GeoJSON).

    Returns:
        The perimeter polygon in the dataset's CRS.

    Raises:
        ValueError: If the file has no geometries or none of them are polygons.
    """

    gdf = gpd.read_file(filepath)
    if gdf.empty:
        raise ValueError("The provided file contains no geometries")

    polygons = []
    for geom in gdf.geometry:
        if geom is not None:
            polygons.extend(polygon_parts(geom))
    if not polygons:
        raise ValueError("The provided file contains no polygon geometry")
    if len(polygons) > 1:
        logger.debug("Merging %d polygons from %s", len(polygons), filepath)

    perimeter = largest_polygon(unary_union(polygons))
    if perimeter is None:
        raise ValueError("The provided polygons have no area")
    return perimeter


def grid_to_frames(
    grid: Grid, crs: Optional[str] = None
) -> Tuple[gpd.GeoDataFrame, gpd.GeoDataFrame]:
    """Tabulate the lines and cells of a grid.

    Args:
        grid: Grid to convert.
        crs: Optional coordinate reference system for both frames.

    Returns:
        ``(lines, cells)``. Lines carry ``axis`` (``"x"`` for rows, ``"y"``
        for columns) and their ``index`` on that axis; cells carry ``index``
        and ``area``.
    """

    lines = gpd.GeoDataFrame(
        {
            "axis": ["x"] * grid.rows + ["y"] * grid.columns,
            "index": list(range(grid.rows)) + list(range(grid.columns)),
        },
        geometry=grid.lines,
        crs=crs,
    )
    cells = gpd.GeoDataFrame(
        {
            "index": list(range(len(grid.cells))),
            "area": [cell.area for cell in grid.cells],
        },
        geometry=list(grid.cells),
        crs=crs,
    )
    return lines, cells


def save_grid(
    grid: Grid,
    filepath: Union[str, Path],
    crs: Optional[str] = None,
    driver: str = "GeoJSON",
) -> Path:
    """Write grid lines and cells to a single vector layer.

    Args:
        grid: Grid to write.
        filepath: Destination file.
        crs: Optional coordinate reference system.
        driver: OGR driver name passed to GeoPandas.

    Returns:
        The path written.
    """

    path = Path(filepath)
    lines, cells = grid_to_frames(grid, crs=crs)
    lines["kind"] = "line"
    cells["kind"] = "cell"
    combined = gpd.GeoDataFrame(
        pd.concat([lines, cells], ignore_index=True), geometry="geometry", crs=crs
    )
    combined.to_file(path, driver=driver)
    return path
