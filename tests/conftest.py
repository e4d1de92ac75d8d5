import matplotlib
matplotlib.use("Agg")

import pytest


@pytest.fixture
def square():
    return [(0, 0), (0, 10), (10, 10), (10, 0)]


@pytest.fixture
def random_points():
    from tsp_utils import generate_simulated_coords
    return generate_simulated_coords(12, seed=3)
