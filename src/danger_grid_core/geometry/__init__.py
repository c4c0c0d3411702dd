"""
Geometry utilities for the danger grid
"""

from .bearings import (
    name_bearing,
    reverse_bearing,
    bearing_to_string,
    euclidean_bearing,
    leg_angle,
)

from .geodesy import (
    width_in_squares,
    height_in_squares,
    distance_between_points,
    initial_bearing,
    initial_bearing_rad,
    destination_point,
    latlon_to_grid,
    grid_to_latlon,
)

__all__ = [
    # bearings
    'name_bearing',
    'reverse_bearing',
    'bearing_to_string',
    'euclidean_bearing',
    'leg_angle',
    # geodesy
    'width_in_squares',
    'height_in_squares',
    'distance_between_points',
    'initial_bearing',
    'initial_bearing_rad',
    'destination_point',
    'latlon_to_grid',
    'grid_to_latlon',
]
