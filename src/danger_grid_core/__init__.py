"""
Danger Grid Core - Time-layered collision-risk fields for aircraft path planning

Projects the probable trajectories of nearby aircraft onto a discretised
(x, y, time) grid and fuses the resulting danger with the distance to a goal,
producing the cost surface a planner searches.
"""

from .aircraft import Aircraft
from .config import DangerGridConfig, DEFAULT_CONFIG
from .grid.danger_grid import DangerGrid
from .grid.spatial_layer import SpatialLayer
from .trajectory.predictor import TrajectoryPredictor
from .types import BearingOctant, SpreadPolicy, Position, PositionEstimate, TIME_MARKER
from .exceptions import (
    DangerGridError,
    ConfigurationError,
    TimeOffsetError,
    CellIndexError,
    NegativeDangerError,
    DistanceCostsNotComputedError,
    DistanceCostsAlreadyComputedError,
    CourseFileError,
)


__version__ = "0.1.0"
__author__ = "Autonomous Aircraft Lab"

__all__ = [
    # Main classes
    "DangerGrid",
    "SpatialLayer",
    "TrajectoryPredictor",
    "Aircraft",
    "DangerGridConfig",
    "DEFAULT_CONFIG",

    # Types and enums
    "BearingOctant",
    "SpreadPolicy",
    "Position",
    "PositionEstimate",
    "TIME_MARKER",

    # Errors
    "DangerGridError",
    "ConfigurationError",
    "TimeOffsetError",
    "CellIndexError",
    "NegativeDangerError",
    "DistanceCostsNotComputedError",
    "DistanceCostsAlreadyComputedError",
    "CourseFileError",
]
