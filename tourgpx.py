#!/usr/bin/env python3
"""
TourGpX — Tour to GPX Converter
================================
Download a public tour page and save its route as a GPX track.

Usage:
    python tourgpx.py -o tour.gpx https://www.komoot.com/tour/123456
    python tourgpx.py --output tour.gpx URL --info      # Convert + show info
    python tourgpx.py -o tour.gpx URL --retries 5 --retry-delay 1
"""

from __future__ import annotations
import argparse
import dataclasses
import logging
import math
import sys

from config import default_config
from converter import Converter
from errors import TourError
from formats import SOFT_FULL_NAME, read_gpx
from models import GpxDocument


class _ArgumentParser(argparse.ArgumentParser):
    """Exits with status 1 on usage errors, like every other failure."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def _positive_float(text: str) -> float:
    value = float(text)
    if not (value > 0 and math.isfinite(value)):
        raise argparse.ArgumentTypeError(f"must be a positive number: {text}")
    return value


def _positive_int(text: str) -> int:
    value = int(text)
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1: {text}")
    return value


def format_distance(meters: float) -> str:
    """Format distance in human-readable form."""
    if meters >= 1000:
        return f"{meters / 1000:.2f} km"
    return f"{meters:.0f} m"


def show_info(document: GpxDocument, filepath: str = ""):
    """Display information about the converted tour."""
    if filepath:
        print(f"\n📁 File: {filepath}")
    print(f"   Creator: {document.creator}  (GPX {document.version})")

    for i, track in enumerate(document.tracks):
        points = track.points()
        print(f"\n   [{i+1}] 📍 Track: {track.name or '(unnamed)'}")
        print(f"       Points: {len(points)}")

        if points:
            print(f"       Distance: {format_distance(points.total_distance())}")
            min_lat, min_lng, max_lat, max_lng = points.bounds()
            print(f"       Bounds: ({min_lat:.6f}, {min_lng:.6f}) → ({max_lat:.6f}, {max_lng:.6f})")

            first = points[0]
            last = points[-1]
            print(f"       Start: {first.lat:.6f}, {first.lng:.6f}  {first.alt:.0f} m")
            if len(points) > 1:
                print(f"       End:   {last.lat:.6f}, {last.lng:.6f}  {last.alt:.0f} m")


def build_parser() -> argparse.ArgumentParser:
    defaults = default_config()
    parser = _ArgumentParser(
        prog="tourgpx",
        description=f"{SOFT_FULL_NAME} — Tour to GPX Converter",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s -o tour.gpx https://www.komoot.com/tour/123456
  %(prog)s --output tour.gpx URL --info     Convert and show track info
        """)

    parser.add_argument("urls", nargs="*", metavar="URL", help="Tour page URL")
    parser.add_argument("-o", "--output", help="The GPX file to create")
    parser.add_argument("--info", action="store_true", help="Show track info after converting")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")

    http_group = parser.add_argument_group("HTTP options")
    http_group.add_argument("--user-agent", default=defaults.user_agent,
                            help=f"User-Agent header (default: {defaults.user_agent})")
    http_group.add_argument("--timeout", type=_positive_float, default=defaults.http_timeout,
                            help=f"Per-request timeout in seconds (default: {defaults.http_timeout:g})")
    http_group.add_argument("--retries", type=_positive_int, default=defaults.max_retries,
                            help=f"Download attempts (default: {defaults.max_retries})")
    http_group.add_argument("--retry-delay", type=_positive_float, default=defaults.retry_interval,
                            help=f"Seconds between attempts (default: {defaults.retry_interval:g})")
    http_group.add_argument("--deadline", type=_positive_float, default=defaults.deadline,
                            help=f"Overall time limit in seconds (default: {defaults.deadline:g})")
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if len(args.urls) != 1:
        print("Please provide exactly one tour URL", file=sys.stderr)
        parser.print_usage(sys.stderr)
        return 1

    if not args.output:
        print("Please specify an output file using -o or --output", file=sys.stderr)
        parser.print_usage(sys.stderr)
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="tourgpx: %(asctime)s %(message)s",
        stream=sys.stderr,
    )

    config = dataclasses.replace(
        default_config(),
        user_agent=args.user_agent,
        http_timeout=args.timeout,
        max_retries=args.retries,
        retry_interval=args.retry_delay,
        deadline=args.deadline,
    )

    try:
        document = Converter(config).convert(args.urls[0], args.output)
    except TourError as e:
        print(f"❌ Error converting tour: {e}", file=sys.stderr)
        return 1

    points = sum(len(track.points()) for track in document.tracks)
    print(f"✅ Converted → {args.output} ({points} points)")
    if args.info:
        try:
            show_info(read_gpx(args.output), args.output)
        except TourError as e:
            print(f"❌ Error reading {args.output}: {e}", file=sys.stderr)
            return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
