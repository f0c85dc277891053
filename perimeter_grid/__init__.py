"""Rotated, offset grids of lines and cells fitted to polygon perimeters."""

from .vectors import TOLERANCE, Vector3, dedupe_points
from .compass import CompassBox, compass_box
from .exceptions import (
    GridError,
    GridIndexError,
    InvalidIntervalError,
    NullPerimeterError,
)
from .grid import SORT_DIGITS, Grid, GridPosition, make_grid
from .io import grid_to_frames, load_perimeter, save_grid
from .plots import plot_grid

__all__ = [
    "TOLERANCE",
    "SORT_DIGITS",
    "Vector3",
    "dedupe_points",
    "CompassBox",
    "compass_box",
    "GridError",
    "GridIndexError",
    "InvalidIntervalError",
    "NullPerimeterError",
    "Grid",
    "GridPosition",
    "make_grid",
    "load_perimeter",
    "grid_to_frames",
    "save_grid",
    "plot_grid",
]
