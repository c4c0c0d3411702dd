"""
Course file generation and parsing
"""

from .course_file import (
    Course,
    CourseWaypoint,
    generate_course,
    write_course_file,
    parse_course,
    read_course_file,
    FIELD_UPPER_LEFT_LATITUDE,
    FIELD_UPPER_LEFT_LONGITUDE,
    FIELD_WIDTH_DEG_LONGITUDE,
    FIELD_HEIGHT_DEG_LATITUDE,
)

__all__ = [
    'Course',
    'CourseWaypoint',
    'generate_course',
    'write_course_file',
    'parse_course',
    'read_course_file',
    'FIELD_UPPER_LEFT_LATITUDE',
    'FIELD_UPPER_LEFT_LONGITUDE',
    'FIELD_WIDTH_DEG_LONGITUDE',
    'FIELD_HEIGHT_DEG_LATITUDE',
]
