import matplotlib

matplotlib.use("Agg")

import pytest
from shapely.geometry import Polygon, box


@pytest.fixture
def square():
    """Side 10, centered on the origin."""
    return box(-5.0, -5.0, 5.0, 5.0)


@pytest.fixture
def l_shape():
    return Polygon([(0, 0), (10, 0), (10, 4), (4, 4), (4, 10), (0, 10)])
