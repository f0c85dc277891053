r"""Bounding-box compass points.

A :class:`CompassBox` names the corners, edge midpoints and center of a
geometry's axis-aligned bounding box. It is derived once from
``geometry.bounds`` and never updated, so it cannot go stale against the
geometry it was computed from.
"""

from __future__ import annotations

from dataclasses import dataclass

from shapely.geometry.base import BaseGeometry

from .vectors import Vector3


__all__ = ["CompassBox", "compass_box"]


@dataclass(frozen=True)
class CompassBox:
    r"""Named extremes of a bounding box \([x_0, x_1] \times [y_0, y_1]\).

    Attributes:
        n: Midpoint of the north edge.
        s: Midpoint of the south edge.
        e: Midpoint of the east edge.
        w: Midpoint of the west edge.
        ne: North-east corner.
        nw: North-west corner.
        se: South-east corner.
        sw: South-west corner.
        c: Center of the box.
    """

    n: Vector3
    s: Vector3
    e: Vector3
    w: Vector3
    ne: Vector3
    nw: Vector3
    se: Vector3
    sw: Vector3
    c: Vector3

    @property
    def size_x(self) -> float:
        return self.e.x - self.w.x

    @property
    def size_y(self) -> float:
        return self.n.y - self.s.y


def compass_box(geometry: BaseGeometry) -> CompassBox:
    """Compute the compass points of a geometry's bounding box.

    Args:
        geometry: Any non-empty Shapely geometry.

    Returns:
        The :class:`CompassBox` of ``geometry.bounds``.

    Raises:
        ValueError: If the geometry is empty.
    """

    if geometry.is_empty:
        raise ValueError("Cannot compute the compass of an empty geometry")
    minx, miny, maxx, maxy = geometry.bounds
    midx = (minx + maxx) * 0.5
    midy = (miny + maxy) * 0.5
    return CompassBox(
        n=Vector3(midx, maxy),
        s=Vector3(midx, miny),
        e=Vector3(maxx, midy),
        w=Vector3(minx, midy),
        ne=Vector3(maxx, maxy),
        nw=Vector3(minx, maxy),
        se=Vector3(maxx, miny),
        sw=Vector3(minx, miny),
        c=Vector3(midx, midy),
    )
