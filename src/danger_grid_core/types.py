"""
Danger grid 공용 타입 정의 (bearing octants, spread policies, position estimates)
"""
from enum import Enum
from typing import NamedTuple


class BearingOctant(Enum):
    """
    8방위 (45° sector, centered on each compass point)

    Grid convention: x grows to the east, y grows to the south,
    so "north" is the neighbour at (x, y - 1).
    """
    N = 0
    NE = 1
    E = 2
    SE = 3
    S = 4
    SW = 5
    W = 6
    NW = 7

    @property
    def offset(self):
        """(dx, dy) of the neighbouring cell in this direction"""
        return OCTANT_OFFSETS[self]


OCTANT_OFFSETS = {
    BearingOctant.N: (0, -1),
    BearingOctant.NE: (1, -1),
    BearingOctant.E: (1, 0),
    BearingOctant.SE: (1, 1),
    BearingOctant.S: (0, 1),
    BearingOctant.SW: (-1, 1),
    BearingOctant.W: (-1, 0),
    BearingOctant.NW: (-1, -1),
}


class SpreadPolicy(Enum):
    """
    Danger spreading policy around a deposited cell
    """
    ISOTROPIC_8 = "isotropic_8"          # all 8 neighbours
    BEARING_GATED_5 = "bearing_gated_5"  # 5 neighbours facing the direction of travel


class Position(NamedTuple):
    """
    Grid cell coordinates (x=east, y=south)
    """
    x: int
    y: int


class PositionEstimate(NamedTuple):
    """
    Probability-weighted predicted cell for one future second.

    A weight below zero marks a time-step boundary rather than a cell.
    """
    x: int
    y: int
    weight: float

    @property
    def is_time_marker(self) -> bool:
        return self.weight < 0


TIME_MARKER = PositionEstimate(0, 0, -1.0)
