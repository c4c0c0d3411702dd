"""
그리드 방위 계산 유틸리티

Grid convention: x grows to the east, y grows to the south, bearings are
measured in degrees from north, clockwise.
"""
import math

from ..types import BearingOctant
from ..utils import WrapTo360, is_zero

RAD_TO_DEG = 180.0 / math.pi


def name_bearing(the_bearing: float) -> BearingOctant:
    """
    Bucket a bearing into one of the 8 compass octants

    Sectors are 45° wide and centered on each compass point; the upper
    boundary belongs to the sector (N covers (-22.5, 22.5], NE covers
    (22.5, 67.5], and so on).

    Args:
        the_bearing: Bearing in degrees (0=North, clockwise). Negative
            values and values beyond one turn are accepted.

    Returns:
        BearingOctant
    """
    bearing = WrapTo360(math.fmod(the_bearing, 360.0))
    index = math.ceil((bearing - 22.5) / 45.0) % 8
    return BearingOctant(index)


def reverse_bearing(octant: BearingOctant) -> BearingOctant:
    """Opposite octant (N -> S, SE -> NW, ...)"""
    return BearingOctant((octant.value + 4) % 8)


def bearing_to_string(octant: BearingOctant) -> str:
    """"N", "NE", "E", ..."""
    return octant.name


def euclidean_bearing(x_1: float, y_1: float, x_2: float, y_2: float) -> float:
    """
    Grid bearing from point 1 to point 2

    Returns:
        Bearing in degrees, [0, 360), 0=North (towards smaller y), clockwise
    """
    d_y = y_2 - y_1
    d_x = x_2 - x_1
    return WrapTo360(math.degrees(math.atan2(d_y, d_x)) + 90.0)


def leg_angle(x_1: int, y_1: int, x_2: int, y_2: int) -> float:
    """
    Signed heading of a leg, as used by the trajectory prediction

    angle = 180 - asin(|dx| / distance) for targets to the south,
    asin(|dx| / distance) for targets to the north (y_2 < y_1),
    negated when the target lies to the west.

    Returns:
        Angle in degrees, [-180, 180], 0=North, positive=east of north

    Raises:
        ValueError: both points are the same cell
    """
    x_distance = math.fabs(float(x_2) - x_1)
    y_distance = math.fabs(float(y_2) - y_1)
    if is_zero(x_distance) and is_zero(y_distance):
        raise ValueError(f"Leg from ({x_1}, {y_1}) to itself has no heading")

    distance = math.sqrt(x_distance * x_distance + y_distance * y_distance)
    ratio = min(x_distance / distance, 1.0)

    angle = 180.0 - RAD_TO_DEG * math.asin(ratio)
    if y_2 < y_1:
        angle = RAD_TO_DEG * math.asin(ratio)

    # west of the start: the angle runs from -180 to +180
    if (x_2 - x_1) < 0:
        angle = -angle
    return angle

