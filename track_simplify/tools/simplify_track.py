#!/usr/bin/env python3
"""Simplify a GPS track file from the command line.

Reads a JSON or GPX track, keeps the points needed to preserve its shape
within ``--epsilon`` and optionally re-inserts original samples so that no
two output points are more than ``--max-gap`` seconds apart.

Usage examples:

    # JSON list of {"lat": .., "lon": ..} records, tolerance 5 metres
    python -m track_simplify.tools.simplify_track track.json \
        --epsilon 5 --unit m

    # Nested records with timestamps, at most 30 s between output points
    python -m track_simplify.tools.simplify_track track.json \
        --lat-path point.lat --lon-path point.lon \
        --time-path point.time --max-gap 30 --output-file reduced.json

    # GPX in, GPX out
    python -m track_simplify.tools.simplify_track ride.gpx \
        --epsilon 0.01 --output-format gpx --output-file ride_small.gpx

Defaults come from the ``TRACK_SIMPLIFY_*`` environment variables (see
``track_simplify.config``).
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any, Callable, List, Optional, Sequence
from xml.etree.ElementTree import ParseError

from track_simplify.config import (
    EARTH_RADIUS_BY_UNIT,
    TRACK_SIMPLIFY_EPSILON,
    TRACK_SIMPLIFY_EPSILON_UNIT,
    TRACK_SIMPLIFY_LAT_PATH,
    TRACK_SIMPLIFY_LON_PATH,
    TRACK_SIMPLIFY_MAX_GAP_SECONDS,
    TRACK_SIMPLIFY_TIME_PATH,
)
from track_simplify.errors import TrackSimplifyError
from track_simplify.field_path import resolve_float, resolve_timestamp
from track_simplify.simplifier import TrackSimplifier
from track_simplify.tools._gpx import build_gpx_tree, gpx_to_string, load_gpx_points

LOGGER = logging.getLogger("simplify_track")


def _infer_format(path: Path) -> str:
    return "gpx" if path.suffix.lower() == ".gpx" else "json"


def load_points(path: Path, input_format: Optional[str] = None) -> List[Any]:
    """Load track records from a JSON or GPX file."""

    fmt = input_format or _infer_format(path)
    if fmt == "gpx":
        return load_gpx_points(path)
    with open(path, "r", encoding="utf-8") as f:
        payload = json.load(f)
    if isinstance(payload, dict):
        payload = payload.get("points")
    if not isinstance(payload, list):
        raise ValueError(
            "JSON track must be a list of points or an object with 'points'"
        )
    return payload


def _optional_value(
    point: Any, path: str, reader: Callable[[Any, str], float]
) -> Optional[float]:
    try:
        return reader(point, path)
    except TrackSimplifyError:
        return None


def render_output(
    points: Sequence[Any],
    simplifier: TrackSimplifier,
    output_format: str,
    *,
    source_count: int,
) -> str:
    """Serialise the simplified records as JSON or GPX text."""

    if output_format == "json":
        return json.dumps(
            {
                "source_point_count": source_count,
                "point_count": len(points),
                "points": list(points),
            },
            indent=2,
            default=str,
        )

    cfg = simplifier.config
    coords = [
        (resolve_float(p, cfg.latitude_path), resolve_float(p, cfg.longitude_path))
        for p in points
    ]
    elevations = [_optional_value(p, "ele", resolve_float) for p in points]
    timestamps: List[Optional[float]]
    if cfg.timestamp_path:
        timestamps = [resolve_timestamp(p, cfg.timestamp_path) for p in points]
    else:
        timestamps = [_optional_value(p, "time", resolve_timestamp) for p in points]
    tree = build_gpx_tree(coords, elevations=elevations, timestamps=timestamps)
    return gpx_to_string(tree)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Reduce the number of points in a GPS track while keeping its shape"
    )
    parser.add_argument("input", type=Path, help="Track file (JSON or GPX)")
    parser.add_argument(
        "--epsilon",
        type=float,
        default=TRACK_SIMPLIFY_EPSILON,
        help=f"Tolerance in --unit (default: {TRACK_SIMPLIFY_EPSILON})",
    )
    parser.add_argument(
        "--unit",
        default=TRACK_SIMPLIFY_EPSILON_UNIT,
        help=(
            "Tolerance unit: "
            + ", ".join(sorted(EARTH_RADIUS_BY_UNIT))
            + f" (default: {TRACK_SIMPLIFY_EPSILON_UNIT})"
        ),
    )
    parser.add_argument(
        "--lat-path",
        default=TRACK_SIMPLIFY_LAT_PATH,
        help="Dot-separated path to latitude inside each point",
    )
    parser.add_argument(
        "--lon-path",
        default=TRACK_SIMPLIFY_LON_PATH,
        help="Dot-separated path to longitude inside each point",
    )
    parser.add_argument(
        "--time-path",
        default=TRACK_SIMPLIFY_TIME_PATH,
        help="Dot-separated path to the timestamp (GPX input uses 'time')",
    )
    parser.add_argument(
        "--max-gap",
        type=float,
        default=TRACK_SIMPLIFY_MAX_GAP_SECONDS,
        help="Maximum seconds between output points; 0 disables (default: 0)",
    )
    parser.add_argument(
        "--input-format",
        choices=["json", "gpx"],
        help="Input format (default: inferred from the file suffix)",
    )
    parser.add_argument(
        "--output-format",
        choices=["json", "gpx"],
        default="json",
        help="Output format (default: json)",
    )
    parser.add_argument(
        "--output-file",
        type=Path,
        help="Write output here instead of stdout",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging verbosity (default: INFO)",
    )
    return parser


def run(argv: Optional[Sequence[str]] = None) -> int:
    """Execute the tool and return a process exit status."""

    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
    )

    input_format = args.input_format or _infer_format(args.input)
    time_path = args.time_path
    if time_path is None and input_format == "gpx" and args.max_gap > 0:
        time_path = "time"

    try:
        simplifier = TrackSimplifier(
            latitude_path=args.lat_path,
            longitude_path=args.lon_path,
            epsilon=args.epsilon,
            epsilon_unit=args.unit,
            timestamp_path=time_path,
            gap_threshold_seconds=args.max_gap,
        )
        points = load_points(args.input, input_format)
        LOGGER.info("Loaded %d points from %s", len(points), args.input)
        simplified = simplifier.simplify(points)
        output = render_output(
            simplified, simplifier, args.output_format, source_count=len(points)
        )
    except (TrackSimplifyError, OSError, ParseError, ValueError) as exc:
        LOGGER.error("Failed to simplify %s: %s", args.input, exc)
        return 1

    LOGGER.info("Kept %d of %d points", len(simplified), len(points))
    if args.output_file:
        args.output_file.parent.mkdir(parents=True, exist_ok=True)
        with open(args.output_file, "w", encoding="utf-8") as f:
            f.write(output)
        LOGGER.info("Output written to %s", args.output_file)
    else:
        print(output)
    return 0


def main() -> None:
    """Entry point for the simplify_track tool."""

    raise SystemExit(run())


if __name__ == "__main__":
    main()
