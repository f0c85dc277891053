r"""Bounded grid generation over arbitrary simple polygons.

A grid is laid out in a *working frame*: the perimeter is rotated by the
negative of the requested angle so that rows and columns can be stepped
along the coordinate axes. Row lines, column lines and rectangular cells
are derived in that frame, cells are optionally shrunk, split and fitted to
the true perimeter, and everything is finally rotated back by the angle
into the caller's frame.

The builder :func:`make_grid` is pure. The :class:`Grid` it returns is a
frozen record and every accessor computes fresh lists from its line tuples.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, Tuple, Union

from shapely.geometry import LineString, Polygon

from .compass import CompassBox, compass_box
from .exceptions import GridIndexError, InvalidIntervalError
from .shapes import (
    PolygonLike,
    as_polygon,
    covers,
    fit_most,
    line_end,
    line_plane_intersection,
    line_start,
    offset_polygon,
    rotate,
)
from .vectors import TOLERANCE, Vector3, dedupe_points


__all__ = ["GridPosition", "Grid", "make_grid", "SORT_DIGITS"]

logger = logging.getLogger(__name__)

# Decimal places kept in ordering keys after re-rotation.
SORT_DIGITS = 9


class GridPosition(Enum):
    """Placement of the grid origin relative to the perimeter's bounding box.

    ``span`` below is the box center moved half an interval along an axis.
    """

    CENTER = "center"
    CENTER_X = "center_x"  # x at center, y at span
    CENTER_Y = "center_y"  # x at span, y at center
    CENTER_XY = "center_xy"  # span on both axes
    MAX_X = "max_x"
    MAX_Y = "max_y"
    MAX_XY = "max_xy"
    MIN_X = "min_x"
    MIN_Y = "min_y"
    MIN_XY = "min_xy"


def _intersection(
    lines_x: Sequence[LineString],
    lines_y: Sequence[LineString],
    grid_x: int,
    grid_y: int,
) -> Vector3:
    if grid_x < 0 or grid_y < 0:
        raise GridIndexError("Grid line indices must not be negative")
    if grid_x > len(lines_x) - 1 or grid_y > len(lines_y) - 1:
        return Vector3.nan()
    return line_plane_intersection(lines_x[grid_x], lines_y[grid_y])


def _points_along_x(
    lines_x: Sequence[LineString], lines_y: Sequence[LineString], index: int
) -> List[Vector3]:
    if index < 0:
        raise GridIndexError("Grid line index must not be negative")
    if index >= len(lines_x):
        return []
    points = [line_start(lines_x[index])]
    points.extend(
        _intersection(lines_x, lines_y, index, i) for i in range(len(lines_y))
    )
    points.append(line_end(lines_x[index]))
    return points


def _points_along_y(
    lines_x: Sequence[LineString], lines_y: Sequence[LineString], index: int
) -> List[Vector3]:
    if index < 0:
        raise GridIndexError("Grid line index must not be negative")
    if index >= len(lines_y):
        return []
    points = [line_start(lines_y[index])]
    points.extend(
        _intersection(lines_x, lines_y, i, index) for i in range(len(lines_x))
    )
    points.append(line_end(lines_y[index]))
    return points


@dataclass(frozen=True)
class Grid:
    """Rows, columns and cells of a grid fitted to a perimeter.

    Attributes:
        perimeter: The caller's polygon boundary.
        interval_x: Spacing between column lines in the working frame.
        interval_y: Spacing between row lines in the working frame.
        angle: Rotation of the grid in degrees about the global origin.
        position: Origin placement policy used to anchor the lines.
        lines_x: Row lines, ordered by start Y.
        lines_y: Column lines, ordered by start X.
        cells: Cell polygons, ordered by centroid X then Y.
        working_perimeter: The perimeter rotated into the working frame.
    """

    perimeter: Polygon
    interval_x: float
    interval_y: float
    angle: float
    position: GridPosition
    lines_x: Tuple[LineString, ...]
    lines_y: Tuple[LineString, ...]
    cells: Tuple[Polygon, ...]
    working_perimeter: Polygon = field(repr=False, compare=False)

    @property
    def rows(self) -> int:
        return len(self.lines_x)

    @property
    def columns(self) -> int:
        return len(self.lines_y)

    @property
    def lines(self) -> List[LineString]:
        """Row lines followed by column lines."""
        return list(self.lines_x) + list(self.lines_y)

    @property
    def starts_x(self) -> List[Vector3]:
        return [line_start(line) for line in self.lines_x]

    @property
    def starts_y(self) -> List[Vector3]:
        return [line_start(line) for line in self.lines_y]

    @property
    def ends_x(self) -> List[Vector3]:
        return [line_end(line) for line in self.lines_x]

    @property
    def ends_y(self) -> List[Vector3]:
        return [line_end(line) for line in self.lines_y]

    def intersection(self, grid_x: int, grid_y: int) -> Vector3:
        """Return the point where row ``grid_x`` crosses column ``grid_y``.

        The column line is treated as a vertical plane so that the row line
        always meets it unless the two are parallel.

        Args:
            grid_x: Index into :attr:`lines_x`.
            grid_y: Index into :attr:`lines_y`.

        Returns:
            The intersection point, or an all-NaN :class:`Vector3` when either
            index is past the last line.

        Raises:
            GridIndexError: If either index is negative.
        """

        return _intersection(self.lines_x, self.lines_y, grid_x, grid_y)

    @property
    def intersections(self) -> List[Vector3]:
        """All line crossings, row by row in order of increasing row index."""
        return [
            self.intersection(x, y)
            for x in range(len(self.lines_x))
            for y in range(len(self.lines_y))
        ]

    @property
    def points(self) -> List[Vector3]:
        """Line ends and crossings.

        Column starts come first, then for each row its start, its crossings
        and its end, and finally the column ends.
        """

        points = self.starts_y
        for x in range(len(self.lines_x)):
            points.extend(self.points_along_x(x))
        points.extend(self.ends_y)
        return points

    def points_along_x(self, index: int) -> List[Vector3]:
        """Start, crossings and end of row ``index``; empty past the last row."""
        return _points_along_x(self.lines_x, self.lines_y, index)

    def points_along_y(self, index: int) -> List[Vector3]:
        """Start, crossings and end of column ``index``; empty past the last column."""
        return _points_along_y(self.lines_x, self.lines_y, index)


def _origin(
    compass: CompassBox,
    working: Polygon,
    interval_x: float,
    interval_y: float,
    position: GridPosition,
) -> Vector3:
    """Pick the anchor point for line stepping.

    Falls back to the bounding-box center when the chosen point is not
    covered by the working perimeter.
    """

    center = compass.c
    span_x = center.x + interval_x * 0.5
    span_y = center.y + interval_y * 0.5
    candidates = {
        GridPosition.CENTER: center,
        GridPosition.CENTER_X: Vector3(center.x, span_y),
        GridPosition.CENTER_Y: Vector3(span_x, center.y),
        GridPosition.CENTER_XY: Vector3(span_x, span_y),
        GridPosition.MAX_X: Vector3(compass.e.x, span_y),
        GridPosition.MAX_Y: Vector3(span_x, compass.n.y),
        GridPosition.MAX_XY: compass.ne,
        GridPosition.MIN_X: Vector3(compass.w.x, span_y),
        GridPosition.MIN_Y: Vector3(span_x, compass.s.y),
        GridPosition.MIN_XY: compass.sw,
    }
    origin = candidates[position]
    if not covers(working, origin):
        logger.debug(
            "Origin %s for %s lies outside the perimeter; using center %s",
            origin.xy,
            position.value,
            center.xy,
        )
        return center
    return origin


def _through_points(
    origin: Vector3, compass: CompassBox, interval_x: float, interval_y: float
) -> List[Vector3]:
    r"""Walk diagonally away from ``origin`` in steps of \((i_x, i_y)\).

    Both walks continue while either coordinate is short of its bound, so
    the longer axis is always covered even when the shorter one overshoots.
    """

    step = Vector3(interval_x, interval_y)
    points = [origin]
    point = origin + step
    while point.x < compass.e.x or point.y < compass.n.y:
        points.append(point)
        point = point + step
    point = origin - step
    while point.x > compass.w.x or point.y > compass.s.y:
        points.append(point)
        point = point - step
    return points


def _split(cell: Polygon) -> List[Polygon]:
    """Split a cell into north and south halves of its bounding box."""
    cps = compass_box(cell)
    north = Polygon([cps.w.xy, cps.e.xy, cps.ne.xy, cps.nw.xy])
    south = Polygon([cps.sw.xy, cps.se.xy, cps.e.xy, cps.w.xy])
    return [north, south]


def _make_cells(
    working: Polygon,
    compass: CompassBox,
    lines_x: Sequence[LineString],
    lines_y: Sequence[LineString],
    cell_offset: float,
    split_cells: bool,
    fit: bool,
) -> List[Polygon]:
    """Build rectangular cells between consecutive line crossings.

    South-west corners are the box corner, the column starts and every
    crossing but the last along each row. North-east corners are every
    crossing but the first along each row, the column ends and the box
    corner. Paired index for index they tile the bounding box.
    """

    sw = [compass.sw] + [line_start(line) for line in lines_y]
    ne: List[Vector3] = []
    for i in range(len(lines_x)):
        along = _points_along_x(lines_x, lines_y, i)
        sw.extend(along[:-1])
        ne.extend(along[1:])
    ne.extend(line_end(line) for line in lines_y)
    ne.append(compass.ne)
    sw = dedupe_points(sw)
    ne = dedupe_points(ne)
    if len(sw) != len(ne):
        logger.debug(
            "Unbalanced cell corners (%d south-west, %d north-east)", len(sw), len(ne)
        )

    cells: List[Polygon] = []
    shrunk_away = 0
    for low, high in zip(sw, ne):
        if high.x - low.x <= TOLERANCE or high.y - low.y <= TOLERANCE:
            continue
        cell = Polygon([low.xy, (high.x, low.y), high.xy, (low.x, high.y)])
        if cell_offset != 0.0:
            loops = offset_polygon(cell, -cell_offset)
            if not loops:
                shrunk_away += 1
                continue
            cell = max(loops, key=lambda loop: abs(loop.area))
        if split_cells:
            cells.extend(_split(cell))
            continue
        cells.append(cell)
    if shrunk_away:
        logger.debug("Cell offset %.6g removed %d cells", cell_offset, shrunk_away)

    if not fit:
        return [cell for cell in cells if abs(cell.area) > TOLERANCE]

    fitted: List[Polygon] = []
    for cell in cells:
        polygon = fit_most(cell, working)
        if polygon is None:
            continue
        fitted.append(polygon)
    logger.debug(
        "Fitted %d of %d cells to the perimeter", len(fitted), len(cells)
    )
    return fitted


def _sort_key(point: Vector3) -> Tuple[float, float]:
    return (round(point.x, SORT_DIGITS), round(point.y, SORT_DIGITS))


def make_grid(
    perimeter: Optional[PolygonLike],
    interval_x: float,
    interval_y: float,
    angle: float = 0.0,
    cell_offset: float = 0.0,
    split_cells: bool = False,
    fit: bool = True,
    position: Union[GridPosition, str] = GridPosition.CENTER_XY,
) -> Grid:
    r"""Build a grid of lines and cells bounded by ``perimeter``.

    The perimeter is rotated by ``-angle`` about the origin. In that frame
    anchor points are stepped diagonally from the origin chosen by
    ``position``; their Y values give the row lines and their X values the
    column lines, keeping only lines strictly inside the bounding box.
    Cells are spanned between consecutive crossings, shrunk by
    ``cell_offset``, optionally split into north and south halves and,
    when ``fit`` is set, clipped to the perimeter. Lines and cells are then
    rotated by ``angle`` and sorted.

    Args:
        perimeter: Simple polygon, or its vertices, bounding the grid.
        interval_x: Spacing between column lines, \(> 0\).
        interval_y: Spacing between row lines, \(> 0\).
        angle: Grid rotation in degrees about the global origin.
        cell_offset: Inward shrink applied to every cell, \(\ge 0\).
        split_cells: Replace each cell by its north and south halves.
        fit: Clip cells to the perimeter and drop cells outside it.
        position: Origin placement policy, as a :class:`GridPosition` or its
            value.

    Returns:
        The immutable :class:`Grid`.

    Raises:
        InvalidIntervalError: If either interval is not positive.
        NullPerimeterError: If ``perimeter`` is ``None``.
        ValueError: If ``cell_offset`` is negative or the perimeter is not a
            valid polygon.
    """

    if not (interval_x > 0.0 and interval_y > 0.0):
        raise InvalidIntervalError(
            f"Grid intervals must be positive, got ({interval_x}, {interval_y})"
        )
    polygon = as_polygon(perimeter)
    if cell_offset < 0.0:
        raise ValueError(f"Cell offset must not be negative, got {cell_offset}")
    position = GridPosition(position)

    working = rotate(polygon, -angle)
    compass = compass_box(working)
    logger.debug(
        "Working frame extents x=[%.6g, %.6g] y=[%.6g, %.6g] (%.6g by %.6g)",
        compass.w.x,
        compass.e.x,
        compass.s.y,
        compass.n.y,
        compass.size_x,
        compass.size_y,
    )

    origin = _origin(compass, working, interval_x, interval_y, position)
    thru_points = _through_points(origin, compass, interval_x, interval_y)
    lines_x: List[LineString] = []
    lines_y: List[LineString] = []
    for point in thru_points:
        if compass.s.y < point.y < compass.n.y:
            lines_x.append(LineString([(compass.w.x, point.y), (compass.e.x, point.y)]))
        if compass.w.x < point.x < compass.e.x:
            lines_y.append(LineString([(point.x, compass.s.y), (point.x, compass.n.y)]))
    lines_x.sort(key=lambda line: line.coords[0][1])
    lines_y.sort(key=lambda line: line.coords[0][0])
    logger.debug(
        "%d anchor points gave %d row and %d column lines",
        len(thru_points),
        len(lines_x),
        len(lines_y),
    )

    cells = _make_cells(
        working, compass, lines_x, lines_y, cell_offset, split_cells, fit
    )

    rotated_x = sorted(
        (rotate(line, angle) for line in lines_x),
        key=lambda line: round(line.coords[0][1], SORT_DIGITS),
    )
    rotated_y = sorted(
        (rotate(line, angle) for line in lines_y),
        key=lambda line: round(line.coords[0][0], SORT_DIGITS),
    )
    rotated_cells = sorted(
        (rotate(cell, angle) for cell in cells),
        key=lambda cell: _sort_key(Vector3(cell.centroid.x, cell.centroid.y)),
    )

    return Grid(
        perimeter=polygon,
        interval_x=float(interval_x),
        interval_y=float(interval_y),
        angle=float(angle),
        position=position,
        lines_x=tuple(rotated_x),
        lines_y=tuple(rotated_y),
        cells=tuple(rotated_cells),
        working_perimeter=working,
    )
