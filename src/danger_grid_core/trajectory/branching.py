"""
한 스텝(1초) 궤적 분기 계산

Each predicted second splits the probability mass between the two 45°
grid directions that bracket the heading to the target:

    angle -> (first, second) bracket -> (closest, other) -> weight split
          -> (majority cell, remainder cell)
"""
from typing import Tuple

from ..types import BearingOctant

N, NE, E, SE, S, SW, W, NW = (
    BearingOctant.N, BearingOctant.NE, BearingOctant.E, BearingOctant.SE,
    BearingOctant.S, BearingOctant.SW, BearingOctant.W, BearingOctant.NW,
)

# (closest, other or None for "any other") -> (majority direction, remainder direction)
# Scanned in order, first match wins.
EASTERN_PLACEMENT = (
    (0.0, None, N, NE),
    (45.0, 0.0, NE, N),
    (45.0, None, NE, E),
    (90.0, 45.0, E, NE),
    (90.0, None, E, SE),
    (135.0, 90.0, SE, E),
    (135.0, None, SE, S),
    (None, None, S, SE),
)

WESTERN_PLACEMENT = (
    (0.0, None, N, NW),
    (-45.0, 0.0, NW, N),
    (-45.0, None, NW, W),
    (-90.0, -45.0, W, NW),
    (-90.0, None, W, SW),
    (-135.0, -90.0, SW, W),
    (-135.0, None, SW, S),
    (None, None, S, SW),
)


def neighboring_angles(angle: float) -> Tuple[float, float]:
    """
    The two 45° grid bearings bracketing an angle

    Args:
        angle: Leg angle in degrees, [-180, 180] (see ``leg_angle``)

    Returns:
        (first, second), first being the bracket nearer to north.
        An exact multiple of 45° opens the next bracket away from north
        (90 -> (90, 135)); 0 -> (0, 45).
    """
    if angle >= 0:
        if angle < 45:
            return 0.0, 45.0
        elif angle < 90:
            return 45.0, 90.0
        elif angle < 135:
            return 90.0, 135.0
        elif angle <= 180:
            return 135.0, 180.0
    else:
        if angle > -45:
            return 0.0, -45.0
        elif angle > -90:
            return -45.0, -90.0
        elif angle > -135:
            return -90.0, -135.0
        elif angle >= -180:
            return -135.0, -180.0
    raise ValueError(f"Angle must be within [-180, 180], got {angle}")


def closest_and_other(angle: float, first: float, second: float) -> Tuple[float, float]:
    """
    Order a bracket as (closest, other); ties go to ``second``
    """
    if abs(angle - first) >= abs(angle - second):
        return second, first
    return first, second


def split_weight(angle: float, closest: float, other: float) -> float:
    """
    Share of the probability mass that goes to the ``closest`` direction

    The closest == 0 case uses the distance to the other bracket instead,
    so a leg heading due north never divides by zero.
    """
    if abs(angle) > abs(closest) and closest != 0:
        return closest / angle
    elif closest != 0:
        return angle / closest
    return 1 - (angle / other)


def placement_directions(
    angle: float,
    closest: float,
    other: float
) -> Tuple[BearingOctant, BearingOctant]:
    """
    (majority, remainder) neighbour directions for one step

    Eastern angles (> 0) and western angles (<= 0) use mirrored tables.
    """
    table = EASTERN_PLACEMENT if angle > 0 else WESTERN_PLACEMENT
    for want_closest, want_other, majority, remainder in table:
        if want_closest is not None and closest != want_closest:
            continue
        if want_other is not None and other != want_other:
            continue
        return majority, remainder
    raise LookupError(f"No placement for angle={angle}, closest={closest}, other={other}")
