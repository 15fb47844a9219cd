#!/usr/bin/env python3
"""Look up ground elevations for one or more coordinates.

Usage:
    python scripts/elevation_at.py 37.77 -122.4
    python scripts/elevation_at.py 46.55 7.98 45.83 6.86 --cache-dir /tmp/hgt -v

Output:
    One ``latitude,longitude,elevation`` line per point; ``nan`` where no
    tile is published or no valid sample is reachable.

Requirements:
    pip install -e .
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from domain.elevation.errors import ElevationError
from infrastructure.elevation import ElevationSettings, create_engine


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Resolve latitude/longitude pairs to ground elevation."
    )
    parser.add_argument(
        "coordinates",
        type=float,
        nargs="+",
        metavar="COORD",
        help="LAT LON pairs in decimal degrees",
    )
    parser.add_argument("--cache-dir", type=Path, help="Archive cache directory")
    parser.add_argument("--base-url", help="Tile catalog base URL")
    parser.add_argument("--timeout", type=float, help="HTTP timeout in seconds")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    args = parser.parse_args(argv)
    if len(args.coordinates) % 2:
        parser.error("coordinates must be given as LAT LON pairs")
    return args


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    overrides = {
        "cache_dir": args.cache_dir,
        "base_url": args.base_url,
        "timeout_s": args.timeout,
    }
    settings = ElevationSettings(
        **{key: value for key, value in overrides.items() if value is not None}
    )
    engine = create_engine(settings)

    coords = args.coordinates
    points = list(zip(coords[0::2], coords[1::2]))
    try:
        for lat, lon in points:
            print(f"{lat},{lon},{engine.elevation_at(lat, lon)}")
    except ElevationError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
