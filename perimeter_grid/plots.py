"""Plotting utilities for generated grids."""

from __future__ import annotations

from pathlib import Path

import matplotlib.pyplot as plt

from .grid import Grid


__all__ = ["plot_grid"]


def plot_grid(
    grid: Grid,
    title: str = "Grid",
    save_path: Path | None = None,
    show_perimeter: bool = True,
) -> Path | None:
    """Plot the perimeter, grid lines and cells.

    Args:
        grid: Grid to plot.
        title: Plot title.
        save_path: Optional save path.
        show_perimeter: Draw the perimeter outline.

    Returns:
        ``save_path`` if the figure was saved, otherwise ``None``.
    """
    fig, ax = plt.subplots(figsize=(6, 6))
    for cell in grid.cells:
        xs, ys = cell.exterior.xy
        ax.fill(xs, ys, color="lightsteelblue", alpha=0.5, linewidth=0)
        ax.plot(xs, ys, color="steelblue", linewidth=0.8)
    for line in grid.lines_x:
        xs, ys = line.xy
        ax.plot(xs, ys, color="crimson", linewidth=0.8, linestyle="--")
    for line in grid.lines_y:
        xs, ys = line.xy
        ax.plot(xs, ys, color="darkorange", linewidth=0.8, linestyle="--")
    if show_perimeter:
        xs, ys = grid.perimeter.exterior.xy
        ax.plot(xs, ys, color="black", linewidth=1.5)
    ax.set_title(title)
    ax.set_aspect("equal", adjustable="datalim")
    ax.set_xlabel("X")
    ax.set_ylabel("Y")
    if save_path:
        fig.savefig(save_path, dpi=300, bbox_inches="tight")
        plt.close(fig)
        return save_path
    plt.show()
    return None
