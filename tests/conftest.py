"""
Shared fixtures for the danger grid tests.
"""
import math

import matplotlib
matplotlib.use("Agg")

import pytest

from danger_grid_core import Aircraft


@pytest.fixture
def northbound_aircraft():
    """
    Owner 0 parked at (0, 0); aircraft 1 at (5, 5) flying due north to (5, 0)
    """
    return [
        Aircraft.heading_straight_to(0, location=(0, 0), final_destination=(0, 0)),
        Aircraft(
            plane_id=1,
            location=(5, 5),
            bearing=0.0,
            destination=(5, 0),
            final_destination=(5, 0),
        ),
    ]


@pytest.fixture
def plane_danger_10x10():
    """Plane danger of a 10 x 10 square grid with the default scale"""
    return math.sqrt(10 ** 2 + 10 ** 2) * 2.5
