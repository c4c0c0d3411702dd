"""
Course files: randomly generated test scenarios for the 500 m test field

A course file is plain text, one ``planeID latitude longitude altitude``
entry per line. ``#`` starts a comment line and blank lines are allowed.
The first entry of every aircraft is its starting position; the following
entries of the same aircraft are its waypoints, in order.
"""
import logging
import random
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Tuple, Union

from ..aircraft import Aircraft
from ..exceptions import ConfigurationError, CourseFileError
from ..geometry.geodesy import initial_bearing, latlon_to_grid

logger = logging.getLogger(__name__)

# 500 m x 500 m test field
FIELD_UPPER_LEFT_LATITUDE = 37.244956
FIELD_UPPER_LEFT_LONGITUDE = -115.808173
FIELD_WIDTH_DEG_LONGITUDE = 0.005653
FIELD_HEIGHT_DEG_LATITUDE = -0.004516

# random offsets are drawn in 1e-9 degree steps
_LONGITUDE_STEPS = 5652999
_LATITUDE_STEPS = 4515999
_DEGREE_STEP = 1e-9

_COLUMNS = "#ID\t\tLat\t\t\tLong\t\t\tAlt"


@dataclass(frozen=True)
class CourseWaypoint:
    """One course file entry"""
    plane_id: int
    latitude: float
    longitude: float
    altitude: float


@dataclass
class Course:
    """
    Parsed course file

    Attributes:
        waypoints: Entries in file order
    """
    waypoints: List[CourseWaypoint] = field(default_factory=list)

    @property
    def plane_ids(self) -> Tuple[int, ...]:
        return tuple(sorted({wp.plane_id for wp in self.waypoints}))

    def route(self, plane_id: int) -> List[CourseWaypoint]:
        """All entries of one aircraft, starting position first"""
        return [wp for wp in self.waypoints if wp.plane_id == plane_id]

    def starting_positions(self) -> Dict[int, CourseWaypoint]:
        starts: Dict[int, CourseWaypoint] = {}
        for wp in self.waypoints:
            starts.setdefault(wp.plane_id, wp)
        return starts

    def to_aircraft(
        self,
        resolution: float,
        origin_latitude: float = FIELD_UPPER_LEFT_LATITUDE,
        origin_longitude: float = FIELD_UPPER_LEFT_LONGITUDE
    ) -> List[Aircraft]:
        """
        Aircraft at their starting positions, placed on a grid

        Each aircraft points at its first waypoint, which becomes its next
        destination; the last waypoint is its final destination. An aircraft
        without waypoints stays where it is.

        Args:
            resolution: Edge length of one grid square (meters)
            origin_latitude, origin_longitude: Upper-left corner of the grid
        """
        def to_grid(wp):
            return latlon_to_grid(wp.latitude, wp.longitude,
                                  origin_latitude, origin_longitude, resolution)

        aircraft = []
        for plane_id in self.plane_ids:
            route = self.route(plane_id)
            start = route[0]
            next_wp = route[1] if len(route) > 1 else start
            final_wp = route[-1]

            if next_wp is start:
                bearing = 0.0
            else:
                bearing = initial_bearing(start.latitude, start.longitude,
                                          next_wp.latitude, next_wp.longitude)
            aircraft.append(Aircraft(
                plane_id=plane_id,
                location=to_grid(start),
                bearing=bearing,
                destination=to_grid(next_wp),
                final_destination=to_grid(final_wp),
            ))
        return aircraft


def _random_point(rng: random.Random, min_alt: int, max_alt: int) -> Tuple[float, float, int]:
    longitude = FIELD_UPPER_LEFT_LONGITUDE + rng.randrange(_LONGITUDE_STEPS) * _DEGREE_STEP
    latitude = FIELD_UPPER_LEFT_LATITUDE - rng.randrange(_LATITUDE_STEPS) * _DEGREE_STEP
    altitude = min_alt + rng.randrange(max_alt - min_alt)
    return latitude, longitude, altitude


def _entry(plane_id: int, latitude: float, longitude: float, altitude) -> str:
    return f"{plane_id}\t\t{latitude!r}\t{longitude!r}\t{altitude}"


def generate_course(
    seed: int = 803,
    num_planes: int = 32,
    num_waypoints: int = 20,
    min_alt: int = 1400,
    max_alt: int = 1401
) -> str:
    """
    Random course for the 500 m test field

    Args:
        seed: Random seed (same seed, same course)
        num_planes: Number of aircraft, IDs start at 0
        num_waypoints: Waypoints per aircraft (after its starting position)
        min_alt: Lowest assigned altitude (inclusive)
        max_alt: Highest assigned altitude (exclusive)

    Returns:
        Course file text

    Raises:
        ConfigurationError: invalid plane count, waypoint count or altitude range
    """
    if not 1 <= num_planes < 10000:
        raise ConfigurationError(f"num_planes must be in [1, 10000), got {num_planes}")
    if num_waypoints < 1:
        raise ConfigurationError(f"num_waypoints must be >= 1, got {num_waypoints}")
    if max_alt <= min_alt:
        raise ConfigurationError(
            f"max_alt must be greater than min_alt, got {min_alt}..{max_alt}"
        )

    rng = random.Random(seed)
    lines = [
        "# A course file generated by the danger-grid-core course generator",
        '# By default, all points are located in the "FINAL" test field.',
        "# Data format:",
        "#     planeID latitude longitude altitude",
        "# ",
        "# (As you may have noticed, a '#' begins a commented line)",
        "# (Also, blank lines are allowed in these files)",
        "# ",
        "# Since files are parsed linearly, you should start out by",
        "# initializing all aircraft's positions. Then you can cluster",
        "# points by aircraft ID, as seen below.",
        "",
        "# Note: This file was created with the following settings:",
        f"#     Random seed {seed}",
        f"#     Number of planes {num_planes}",
        f"#     Number of waypoints {num_waypoints}",
        f"#     Altitude between {min_alt} and {max_alt}",
        "#  ",
        f"#     Latitude between {FIELD_UPPER_LEFT_LATITUDE + FIELD_HEIGHT_DEG_LATITUDE!r}"
        f" and {FIELD_UPPER_LEFT_LATITUDE!r}",
        f"#     Longitude between {FIELD_UPPER_LEFT_LONGITUDE!r}"
        f" and {FIELD_UPPER_LEFT_LONGITUDE + FIELD_WIDTH_DEG_LONGITUDE!r}",
        "",
        "# Starting positions:",
        _COLUMNS,
    ]
    for plane_id in range(num_planes):
        lines.append(_entry(plane_id, *_random_point(rng, min_alt, max_alt)))

    for plane_id in range(num_planes):
        lines.append("")
        lines.append(f"# Plane ID == {plane_id}")
        lines.append(_COLUMNS)
        for _ in range(num_waypoints):
            lines.append(_entry(plane_id, *_random_point(rng, min_alt, max_alt)))

    return "\n".join(lines) + "\n\n"


def write_course_file(path: Union[str, Path], **kwargs) -> Path:
    """
    Generate a course and write it to ``path``

    Keyword arguments are passed to :func:`generate_course`.
    """
    path = Path(path)
    text = generate_course(**kwargs)
    path.write_text(text)
    logger.info("Course file written to %s (%s)", path,
                ", ".join(f"{key}={value}" for key, value in sorted(kwargs.items())) or "defaults")
    return path


def parse_course(text: str) -> Course:
    """
    Parse course file text

    Raises:
        CourseFileError: a line is not ``planeID latitude longitude altitude``
    """
    course = Course()
    for line_number, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue

        fields = line.split()
        if len(fields) != 4:
            raise CourseFileError(
                f"Expected 4 fields on line {line_number}, got {len(fields)}",
                line_number, raw,
            )
        try:
            plane_id = int(fields[0])
            latitude, longitude, altitude = (float(value) for value in fields[1:])
        except ValueError as e:
            raise CourseFileError(f"Malformed entry on line {line_number}: {e}",
                                  line_number, raw) from e
        if plane_id < 0:
            raise CourseFileError(f"Negative plane ID on line {line_number}", line_number, raw)
        if not -90.0 <= latitude <= 90.0 or not -180.0 <= longitude <= 180.0:
            raise CourseFileError(f"Coordinates out of range on line {line_number}",
                                  line_number, raw)

        course.waypoints.append(CourseWaypoint(plane_id, latitude, longitude, altitude))

    logger.debug("Parsed %d course entries for %d aircraft",
                 len(course.waypoints), len(course.plane_ids))
    return course


def read_course_file(path: Union[str, Path]) -> Course:
    """Read and parse a course file"""
    return parse_course(Path(path).read_text())
