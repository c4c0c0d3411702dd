"""
Danger field spreading (minimum-separation buffer around predicted cells)
"""
from typing import Optional, Tuple

from ..geometry.bearings import name_bearing
from ..types import BearingOctant, SpreadPolicy
from .spatial_layer import SpatialLayer

Offset = Tuple[int, int]

ISOTROPIC_NEIGHBOURS: Tuple[Offset, ...] = (
    (-1, -1), (0, -1), (1, -1),
    (-1, 0),           (1, 0),
    (-1, 1),  (0, 1),  (1, 1),
)

# 5 neighbours facing the direction of travel, per octant
GATED_NEIGHBOURS = {
    BearingOctant.N: ((-1, 0), (-1, -1), (0, -1), (1, -1), (1, 0)),
    BearingOctant.NE: ((-1, -1), (0, -1), (1, -1), (1, 0), (1, 1)),
    BearingOctant.E: ((0, -1), (1, -1), (1, 0), (1, 1), (0, 1)),
    BearingOctant.SE: ((1, -1), (1, 0), (1, 1), (0, 1), (-1, 1)),
    BearingOctant.S: ((1, 0), (1, 1), (0, 1), (-1, 1), (-1, 0)),
    BearingOctant.SW: ((1, 1), (0, 1), (-1, 1), (-1, 0), (-1, -1)),
    BearingOctant.W: ((0, 1), (-1, 1), (-1, 0), (-1, -1), (0, -1)),
    BearingOctant.NW: ((-1, 1), (-1, 0), (-1, -1), (0, -1), (1, -1)),
}


class DirectionalFieldSpreader:
    """
    Spreads a fraction of a deposit into the neighbouring cells

    ``ISOTROPIC_8`` (default) feeds all 8 neighbours regardless of bearing.
    ``BEARING_GATED_5`` only feeds the 5 neighbours facing the direction of
    travel; directional planners tend to slip through its diagonal gaps.

    Attributes:
        field_weight: Multiplier applied to the deposit before spreading
        policy: SpreadPolicy
    """

    def __init__(self, field_weight: float = 0.7, policy: SpreadPolicy = SpreadPolicy.ISOTROPIC_8):
        self.field_weight = field_weight
        self.policy = policy

    def neighbours(self, bearing: Optional[float] = None) -> Tuple[Offset, ...]:
        """
        Neighbour offsets that receive the spread

        Args:
            bearing: Direction of travel (degrees); required for BEARING_GATED_5
        """
        if self.policy is SpreadPolicy.ISOTROPIC_8:
            return ISOTROPIC_NEIGHBOURS
        if bearing is None:
            raise ValueError("BEARING_GATED_5 spreading needs the aircraft bearing")
        return GATED_NEIGHBOURS[name_bearing(bearing)]

    def spread(
        self,
        layer: SpatialLayer,
        x: int,
        y: int,
        danger: float,
        bearing: Optional[float] = None
    ) -> int:
        """
        Add ``field_weight * danger`` to the neighbours of (x, y)

        Neighbours outside the layer are skipped.

        Returns:
            Number of neighbour cells that were updated
        """
        field_danger = danger * self.field_weight
        updated = 0
        for dx, dy in self.neighbours(bearing):
            if layer.safely_add_danger_at(x + dx, y + dy, field_danger):
                updated += 1
        return updated
