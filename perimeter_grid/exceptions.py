"""Exceptions raised while building or querying a grid."""


class GridError(Exception):
    """Base grid error."""


class InvalidIntervalError(GridError, ValueError):
    """Raised when a grid spacing is zero or negative."""


class NullPerimeterError(GridError, TypeError):
    """Raised when no perimeter polygon is supplied."""


class GridIndexError(GridError, IndexError):
    """Raised when a grid line index is negative."""
