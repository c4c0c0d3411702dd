"""
Aircraft state consumed by the danger grid (read-only input)
"""
from dataclasses import dataclass
from typing import Tuple, Union

from .geometry.bearings import euclidean_bearing
from .types import Position

PointLike = Union[Position, Tuple[int, int]]


@dataclass(frozen=True)
class Aircraft:
    """
    Current state and route of one aircraft, in grid squares

    Attributes:
        plane_id: Unique aircraft identifier
        location: Current cell
        bearing: Current bearing (degrees, 0=North, clockwise)
        destination: Next waypoint
        final_destination: Last waypoint of the route
    """
    plane_id: int
    location: Position
    bearing: float
    destination: Position
    final_destination: Position

    def __post_init__(self):
        # accept plain (x, y) tuples
        for name in ("location", "destination", "final_destination"):
            value = getattr(self, name)
            if not isinstance(value, Position):
                x, y = value
                object.__setattr__(self, name, Position(int(x), int(y)))

    @property
    def bearing_to_destination(self) -> float:
        """
        Grid bearing from the current cell to the final destination

        Falls back to the current bearing once the aircraft sits on its
        final destination.
        """
        if self.location == self.final_destination:
            return self.bearing
        return euclidean_bearing(self.location.x, self.location.y,
                                 self.final_destination.x, self.final_destination.y)

    @classmethod
    def heading_straight_to(cls, plane_id: int, location: PointLike,
                            final_destination: PointLike) -> "Aircraft":
        """Aircraft with no intermediate waypoint, already pointing at its goal"""
        location = Position(*location)
        final_destination = Position(*final_destination)
        if location == final_destination:
            bearing = 0.0
        else:
            bearing = euclidean_bearing(location.x, location.y,
                                        final_destination.x, final_destination.y)
        return cls(plane_id, location, bearing, final_destination, final_destination)
