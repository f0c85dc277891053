r"""Point values used by the grid builder.

Grid intersections are reported as :class:`Vector3` values rather than
Shapely points so that the all-NaN sentinel returned for off-grid queries
keeps every component intact.
"""

from __future__ import annotations

from dataclasses import dataclass
from itertools import product
from math import floor, isclose, isfinite, isnan
from typing import Dict, Iterable, List, Tuple


__all__ = ["TOLERANCE", "Vector3", "dedupe_points"]

TOLERANCE = 1e-9


@dataclass(frozen=True)
class Vector3:
    """Immutable point in the plane with an optional elevation.

    Attributes:
        x: X coordinate.
        y: Y coordinate.
        z: Z coordinate, zero for planar grids.
    """

    x: float
    y: float
    z: float = 0.0

    @classmethod
    def nan(cls) -> "Vector3":
        """Return the sentinel used for intersections beyond the grid."""
        return cls(float("nan"), float("nan"), float("nan"))

    def __add__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    @property
    def xy(self) -> Tuple[float, float]:
        return (self.x, self.y)

    @property
    def is_nan(self) -> bool:
        return isnan(self.x) and isnan(self.y) and isnan(self.z)

    def isclose(self, other: "Vector3", tolerance: float = TOLERANCE) -> bool:
        """Compare two points component-wise within ``tolerance``."""
        return (
            isclose(self.x, other.x, rel_tol=0.0, abs_tol=tolerance)
            and isclose(self.y, other.y, rel_tol=0.0, abs_tol=tolerance)
            and isclose(self.z, other.z, rel_tol=0.0, abs_tol=tolerance)
        )


def dedupe_points(
    points: Iterable[Vector3], tolerance: float = TOLERANCE
) -> List[Vector3]:
    """Drop points that repeat an earlier point within ``tolerance``.

    Order is preserved and the first occurrence wins. Points are bucketed on a
    lattice of spacing ``tolerance`` so each one is only compared with the
    kept points in its own and the adjacent buckets.

    Args:
        points: Candidate points.
        tolerance: Absolute per-component tolerance.

    Returns:
        The unique points in their original order.
    """

    unique: List[Vector3] = []
    buckets: Dict[Tuple[int, int, int], List[Vector3]] = {}
    for point in points:
        coords = (point.x, point.y, point.z)
        if not all(isfinite(v) for v in coords):
            # never equal to anything, the NaN sentinel included
            unique.append(point)
            continue
        key = tuple(floor(v / tolerance) for v in coords)
        neighbours = product(*(range(k - 1, k + 2) for k in key))
        if any(
            point.isclose(kept, tolerance)
            for near in neighbours
            for kept in buckets.get(near, ())
        ):
            continue
        buckets.setdefault(key, []).append(point)
        unique.append(point)
    return unique
