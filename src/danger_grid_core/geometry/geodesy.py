"""
위경도 <-> 그리드 변환 및 측지 계산 (haversine)

Used to build the static map and to place course-file waypoints on the
grid. The per-second trajectory prediction works purely in grid squares
and does not use these helpers.
"""
import math
from typing import Tuple

from ..types import Position
from ..exceptions import ConfigurationError
from ..utils import WrapTo360

EARTH_RADIUS_M = 6371000.0  # meters, on average

METERS_TO_FEET = 3.28083989501312

# Conversion factors from meters
UNIT_FACTORS = {
    "feet": METERS_TO_FEET,
    "yards": METERS_TO_FEET / 3.0,
    "miles": METERS_TO_FEET / 5280.0,
    "meters": 1.0,
    "kilometers": 1.0 / 1000.0,
    "attoparsecs": 32.4077649,
}


def width_in_squares(width_of_field: float, map_resolution: float) -> int:
    """
    Width of the field in grid squares (partial squares count as whole)

    Args:
        width_of_field: Width of the flyable area (any unit)
        map_resolution: Edge length of one square (same unit)
    """
    _check_field(width_of_field, map_resolution)
    return int(math.ceil(width_of_field / map_resolution) + 0.1)


def height_in_squares(height_of_field: float, map_resolution: float) -> int:
    """Height of the field in grid squares (partial squares count as whole)"""
    _check_field(height_of_field, map_resolution)
    return int(math.ceil(height_of_field / map_resolution) + 0.1)


def _check_field(extent: float, map_resolution: float):
    if map_resolution <= 0:
        raise ConfigurationError(f"Map resolution must be positive, got {map_resolution}")
    if extent <= 0:
        raise ConfigurationError(f"Field extent must be positive, got {extent}")


def distance_between_points(
    latitude_1: float,
    longitude_1: float,
    latitude_2: float,
    longitude_2: float,
    units: str = "meters"
) -> float:
    """
    Haversine distance between two lat/long points

    Args:
        latitude_1, longitude_1: Point 1 (decimal degrees)
        latitude_2, longitude_2: Point 2 (decimal degrees)
        units: 'feet', 'yards', 'miles', 'meters', 'kilometers' or
            'attoparsecs'. Unknown units fall back to meters.

    Returns:
        Distance in the requested units
    """
    d_lat = math.radians(latitude_2 - latitude_1)
    d_lon = math.radians(longitude_2 - longitude_1)
    sin_d_lat = math.sin(d_lat / 2)
    sin_d_lon = math.sin(d_lon / 2)
    a = (sin_d_lat * sin_d_lat
         + math.cos(math.radians(latitude_1)) * math.cos(math.radians(latitude_2))
         * sin_d_lon * sin_d_lon)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    the_distance = math.fabs(EARTH_RADIUS_M * c)
    return the_distance * UNIT_FACTORS.get(units, 1.0)


def initial_bearing_rad(
    latitude_1: float,
    longitude_1: float,
    latitude_2: float,
    longitude_2: float
) -> float:
    """
    Initial great-circle bearing from point 1 to point 2

    Returns:
        Bearing in radians, (-pi, pi], 0=North, clockwise
    """
    lat_1 = math.radians(latitude_1)
    lat_2 = math.radians(latitude_2)
    delta_lon = math.radians(longitude_2 - longitude_1)

    y = math.sin(delta_lon) * math.cos(lat_2)
    x = math.cos(lat_1) * math.sin(lat_2) - math.sin(lat_1) * math.cos(lat_2) * math.cos(delta_lon)
    return math.atan2(y, x)


def initial_bearing(
    latitude_1: float,
    longitude_1: float,
    latitude_2: float,
    longitude_2: float
) -> float:
    """
    Initial great-circle bearing from point 1 to point 2

    Returns:
        Bearing in degrees, [0, 360), 0=North, clockwise
    """
    return WrapTo360(math.degrees(
        initial_bearing_rad(latitude_1, longitude_1, latitude_2, longitude_2)
    ))


def destination_point(
    latitude: float,
    longitude: float,
    distance_in_meters: float,
    bearing_in_deg: float
) -> Tuple[float, float]:
    """
    Lat/long reached after travelling a distance along a bearing

    Args:
        latitude, longitude: Start point (decimal degrees)
        distance_in_meters: Distance travelled
        bearing_in_deg: Initial bearing (0=North, clockwise)

    Returns:
        (latitude, longitude) in decimal degrees
    """
    ang_dist = distance_in_meters / EARTH_RADIUS_M
    bearing = math.radians(bearing_in_deg)
    lat_1 = math.radians(latitude)
    lon_1 = math.radians(longitude)

    lat_2 = math.asin(
        math.sin(lat_1) * math.cos(ang_dist)
        + math.cos(lat_1) * math.sin(ang_dist) * math.cos(bearing)
    )
    lon_2 = lon_1 + math.atan2(
        math.sin(bearing) * math.sin(ang_dist) * math.cos(lat_1),
        math.cos(ang_dist) - math.sin(lat_1) * math.sin(lat_2)
    )
    return math.degrees(lat_2), math.degrees(lon_2)


def latlon_to_grid(
    latitude: float,
    longitude: float,
    origin_latitude: float,
    origin_longitude: float,
    resolution: float
) -> Position:
    """
    Place a lat/long point on the grid

    The origin is the upper-left (north-west) corner of the field; x grows
    to the east and y grows to the south, one unit per ``resolution`` meters.

    Returns:
        Position (x, y) in grid squares
    """
    if resolution <= 0:
        raise ConfigurationError(f"Map resolution must be positive, got {resolution}")

    east_m = distance_between_points(origin_latitude, origin_longitude,
                                     origin_latitude, longitude)
    south_m = distance_between_points(origin_latitude, origin_longitude,
                                      latitude, origin_longitude)
    east_m = math.copysign(east_m, longitude - origin_longitude)
    south_m = math.copysign(south_m, origin_latitude - latitude)

    return Position(math.floor(east_m / resolution), math.floor(south_m / resolution))


def grid_to_latlon(
    x: float,
    y: float,
    origin_latitude: float,
    origin_longitude: float,
    resolution: float
) -> Tuple[float, float]:
    """
    Lat/long of the north-west corner of grid square (x, y)

    Inverse of :func:`latlon_to_grid` up to the square's extent.
    """
    lat, _ = destination_point(origin_latitude, origin_longitude, y * resolution, 180.0)
    _, lon = destination_point(origin_latitude, origin_longitude, x * resolution, 90.0)
    return lat, lon
