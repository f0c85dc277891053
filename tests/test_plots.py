from perimeter_grid import make_grid, plot_grid


def test_plot_grid_saves_figure(l_shape, tmp_path):
    grid = make_grid(l_shape, 2.0, 2.0, angle=15.0)
    target = tmp_path / "grid.png"
    assert plot_grid(grid, title="L grid", save_path=target) == target
    assert target.exists()
    assert target.stat().st_size > 0
