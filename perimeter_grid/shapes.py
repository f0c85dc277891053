r"""Polygon and line primitives consumed by the grid builder.

The helpers here adapt Shapely's predicates and constructive operations to
the small vocabulary the grid needs: rotation about the global origin,
inward offsets that may split a polygon into several loops, fitting a cell
to a boundary, and intersecting a row line with the vertical plane through
a column line.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Union

import numpy as np
from shapely import affinity
from shapely.geometry import LineString, Point, Polygon
from shapely.geometry.base import BaseGeometry

from .exceptions import NullPerimeterError
from .vectors import TOLERANCE, Vector3


PolygonLike = Union[Polygon, Sequence[Sequence[float]]]


__all__ = [
    "as_polygon",
    "rotate",
    "offset_polygon",
    "polygon_parts",
    "largest_polygon",
    "fit_most",
    "covers",
    "line_plane_intersection",
    "line_start",
    "line_end",
]


def as_polygon(perimeter: Optional[PolygonLike]) -> Polygon:
    """Coerce a perimeter into a valid Shapely polygon.

    Args:
        perimeter: A polygon or a sequence of ``(x, y)`` vertices.

    Returns:
        The perimeter as a :class:`shapely.geometry.Polygon`.

    Raises:
        NullPerimeterError: If ``perimeter`` is ``None``.
        TypeError: If ``perimeter`` is a non-polygonal geometry.
        ValueError: If the polygon is empty, degenerate or self-intersecting.
    """

    if perimeter is None:
        raise NullPerimeterError("Perimeter polygon must not be None")
    if isinstance(perimeter, Polygon):
        polygon = perimeter
    elif isinstance(perimeter, BaseGeometry):
        raise TypeError(f"Unsupported perimeter type: {perimeter.geom_type}")
    else:
        polygon = Polygon([tuple(coord)[:2] for coord in perimeter])
    if polygon.is_empty or polygon.area <= TOLERANCE:
        raise ValueError("Perimeter polygon has no area")
    if not polygon.is_valid:
        raise ValueError("Perimeter polygon must be simple and valid")
    return polygon


def rotate(geometry: BaseGeometry, angle: float) -> BaseGeometry:
    """Rotate a geometry by ``angle`` degrees about the global origin."""
    return affinity.rotate(geometry, angle, origin=(0.0, 0.0), use_radians=False)


def polygon_parts(geometry: BaseGeometry) -> List[Polygon]:
    """Collect polygon components from any geometry."""

    if geometry.is_empty:
        return []
    if isinstance(geometry, Polygon):
        return [geometry]
    if hasattr(geometry, "geoms"):
        parts: List[Polygon] = []
        for geom in geometry.geoms:
            parts.extend(polygon_parts(geom))
        return parts
    return []


def offset_polygon(polygon: Polygon, distance: float) -> List[Polygon]:
    """Offset a polygon outward (positive) or inward (negative).

    An inward offset can split a polygon into several loops or consume it
    entirely, so every surviving loop is returned.

    Args:
        polygon: Polygon to offset.
        distance: Signed offset distance.

    Returns:
        The non-degenerate loops of the offset result, possibly empty.
    """

    result = polygon.buffer(distance, join_style="mitre")
    return [part for part in polygon_parts(result) if abs(part.area) > TOLERANCE]


def largest_polygon(geometry: BaseGeometry) -> Optional[Polygon]:
    """Return the polygon component with the largest absolute area.

    Args:
        geometry: Result of a Shapely operation.

    Returns:
        The largest non-degenerate polygon, or ``None`` if there is none.
    """

    parts = [part for part in polygon_parts(geometry) if abs(part.area) > TOLERANCE]
    if not parts:
        return None
    return max(parts, key=lambda part: abs(part.area))


def fit_most(polygon: Polygon, boundary: Polygon) -> Optional[Polygon]:
    """Clip ``polygon`` to ``boundary`` and keep the largest piece.

    Args:
        polygon: Shape to fit, typically a rectangular grid cell.
        boundary: The true perimeter shape.

    Returns:
        The largest part of ``polygon`` inside ``boundary``, or ``None``
        when they share no area.
    """

    if not polygon.intersects(boundary):
        return None
    return largest_polygon(polygon.intersection(boundary))


def covers(polygon: Polygon, point: Vector3) -> bool:
    """Test whether ``point`` lies inside or on the boundary of ``polygon``."""
    return bool(polygon.covers(Point(point.xy)))


def line_start(line: LineString) -> Vector3:
    return Vector3(*line.coords[0][:2])


def line_end(line: LineString) -> Vector3:
    return Vector3(*line.coords[-1][:2])


def line_plane_intersection(line: LineString, through: LineString) -> Vector3:
    r"""Intersect ``line`` with the vertical plane erected through ``through``.

    In the plane this reduces to intersecting the supporting lines of the two
    segments: with \(p + t r\) and \(q + u s\) the parameter is
    \(t = ((q - p) \times s) / (r \times s)\).

    Args:
        line: The line to intersect.
        through: The line the vertical plane passes through.

    Returns:
        The intersection point, or the all-NaN sentinel when the lines are
        parallel.
    """

    p = np.asarray(line.coords[0][:2], dtype=float)
    r = np.asarray(line.coords[-1][:2], dtype=float) - p
    q = np.asarray(through.coords[0][:2], dtype=float)
    s = np.asarray(through.coords[-1][:2], dtype=float) - q
    denom = r[0] * s[1] - r[1] * s[0]
    if abs(denom) <= TOLERANCE:
        return Vector3.nan()
    qp = q - p
    t = (qp[0] * s[1] - qp[1] * s[0]) / denom
    x, y = p + t * r
    return Vector3(float(x), float(y))
