r"""Example script laying grids over a square and an L-shaped perimeter.

The square grid reproduces the textbook case of two rows and two columns
splitting a side-10 square into nine cells. The L-shaped perimeter shows
the origin falling back to the box center, cells being clipped to the notch
and the whole lattice rotated about the global origin.
"""

from pathlib import Path

from shapely.geometry import Polygon, box

from perimeter_grid import GridPosition, make_grid, plot_grid

SQUARE = box(-5.0, -5.0, 5.0, 5.0)
L_SHAPE = Polygon([(0, 0), (10, 0), (10, 4), (4, 4), (4, 10), (0, 10)])
ANGLES = [0.0, 15.0, 30.0, 45.0]


def main():
    square = make_grid(SQUARE, 5.0, 5.0)
    print(f"Square: {square.rows} rows, {square.columns} columns, {len(square.cells)} cells")
    plot_grid(square, title="Square grid", save_path=Path("square_grid.png"))

    # Shrinking and splitting cells leaves gaps between the halves.
    split = make_grid(SQUARE, 5.0, 5.0, cell_offset=0.25, split_cells=True)
    plot_grid(split, title="Square grid, offset and split", save_path=Path("square_split.png"))

    for angle in ANGLES:
        grid = make_grid(L_SHAPE, 1.5, 2.0, angle=angle, position=GridPosition.MIN_XY)
        print(
            f"L-shape at {angle:4.1f}°: {grid.rows} rows, {grid.columns} columns, "
            f"{len(grid.cells)} cells, covered area {sum(c.area for c in grid.cells):.2f}"
        )
        plot_grid(grid, title=f"L-shape rotated {angle:.0f}°", save_path=Path(f"l_grid_{angle:.0f}.png"))


if __name__ == "__main__":
    main()
