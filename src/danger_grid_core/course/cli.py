"""
generate-course: write a random course file for the 500 m test field

    generate-course --seed 803 --planes 32 --waypoints 20 --output final_32_500m.course
"""
import argparse
import logging
import sys

from ..exceptions import DangerGridError
from .course_file import generate_course, write_course_file

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="generate-course",
        description="Create a random course file on the 500 m by 500 m field"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=803,
        help="Random seed"
    )
    parser.add_argument(
        "--planes",
        type=int,
        default=32,
        help="Number of planes to generate (IDs start at 0)"
    )
    parser.add_argument(
        "--waypoints",
        type=int,
        default=20,
        help="Number of waypoints per plane"
    )
    parser.add_argument(
        "--min-alt",
        type=int,
        default=1400,
        help="Minimum assigned altitude"
    )
    parser.add_argument(
        "--max-alt",
        type=int,
        default=1401,
        help="Maximum assigned altitude (exclusive)"
    )
    parser.add_argument(
        "--output",
        default=None,
        help="Output file, '-' for stdout (default: final_<planes>_500m.course)"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging"
    )
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    settings = dict(
        seed=args.seed,
        num_planes=args.planes,
        num_waypoints=args.waypoints,
        min_alt=args.min_alt,
        max_alt=args.max_alt,
    )
    try:
        if args.output == "-":
            sys.stdout.write(generate_course(**settings))
            return 0
        output = args.output or f"final_{args.planes}_500m.course"
        path = write_course_file(output, **settings)
    except DangerGridError as e:
        logger.error("Could not create course: %s", e)
        return 2

    print(f"Course file created: {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
