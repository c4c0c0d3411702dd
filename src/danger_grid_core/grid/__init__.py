"""
Time-layered danger grid and its building blocks
"""

from .spatial_layer import SpatialLayer
from .field_spreader import (
    DirectionalFieldSpreader,
    ISOTROPIC_NEIGHBOURS,
    GATED_NEIGHBOURS,
)
from .distance_costs import DistanceCostFuser
from .danger_grid import DangerGrid

__all__ = [
    'SpatialLayer',
    'DirectionalFieldSpreader',
    'ISOTROPIC_NEIGHBOURS',
    'GATED_NEIGHBOURS',
    'DistanceCostFuser',
    'DangerGrid',
]
