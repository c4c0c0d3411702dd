"""
Trajectory prediction for the danger grid
"""

from .branching import (
    neighboring_angles,
    closest_and_other,
    split_weight,
    placement_directions,
)
from .predictor import TrajectoryPredictor

__all__ = [
    'TrajectoryPredictor',
    'neighboring_angles',
    'closest_and_other',
    'split_weight',
    'placement_directions',
]
