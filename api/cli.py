#!/usr/bin/env python3
"""
ZONECHECK CLI Tool.

Command-line interface for offline geometry checks:
- Parse a stored geometry payload into canonical vertices
- Check a candidate polygon against a file of existing zones

Usage:
    python -m api.cli parse geometry.json
    python -m api.cli check-overlaps --candidate draft.json --zones zones.json
    python -m api.cli check-overlaps --candidate draft.json --zones zones.geojson --exclude-id 12

Exit codes for check-overlaps: 0 no conflict, 1 overlaps found,
2 unreadable input.
"""
import argparse
import json
import sys
from pathlib import Path
from typing import Any, Optional

from zonecheck.config import settings
from zonecheck.data.commercial_zones import load_zones_file, resolve_zone_id
from zonecheck.geometry.overlap import find_overlapping_zones, format_overlap_warning
from zonecheck.geometry.polygon_parser import is_usable_polygon, parse_polygon

EXIT_OK = 0
EXIT_OVERLAP = 1
EXIT_BAD_INPUT = 2


def _read_geometry(filepath: Path) -> Any:
    """Read a geometry file, returning its text when it is not plain JSON."""
    text = filepath.read_text(encoding="utf-8")
    try:
        return json.loads(text)
    except (ValueError, RecursionError):
        # Let the parser decide; unreadable geometry parses to nothing
        return text


def parse_geometry(filepath: Path) -> int:
    """Print the canonical vertices of a geometry file."""
    try:
        raw = _read_geometry(filepath)
    except (OSError, UnicodeDecodeError) as e:
        print(f"\nError: cannot read {filepath}: {e}", file=sys.stderr)
        return EXIT_BAD_INPUT

    vertices = parse_polygon(raw)

    print(f"\nVertices: {len(vertices)}")
    print(f"Usable polygon: {'Yes' if is_usable_polygon(vertices) else 'No'}")
    print("-" * 40)
    for i, v in enumerate(vertices):
        print(f"{i:>4}  lat={v.lat:<14.8f} lng={v.lng:<14.8f}")
    print()
    return EXIT_OK


def check_overlaps(
    candidate_path: Path,
    zones_path: Path,
    exclude_id: Optional[str] = None,
    all_parts: bool = False,
) -> int:
    """Check a candidate polygon file against a zones file."""
    try:
        candidate = _read_geometry(candidate_path)
        zones = load_zones_file(zones_path)
    except (OSError, ValueError) as e:
        print(f"\nError: {e}", file=sys.stderr)
        return EXIT_BAD_INPUT

    matches = find_overlapping_zones(
        candidate,
        zones,
        exclude_id=resolve_zone_id(zones, exclude_id),
        all_parts=all_parts,
    )

    print(f"\nChecked {len(zones)} zone(s)")
    if not matches:
        print("No overlapping zones.\n")
        return EXIT_OK

    print(format_overlap_warning(matches))
    print("-" * 40)
    for match in matches:
        print(f"  {str(match.id):<12} {match.name}")
    print()
    return EXIT_OVERLAP


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="ZONECHECK CLI Tool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  Show the canonical vertices of a stored geometry:
    python -m api.cli parse zone_12.json

  Check a drawn polygon against existing zones:
    python -m api.cli check-overlaps --candidate draft.json --zones zones.json

  Check an edited zone, ignoring its own stored polygon:
    python -m api.cli check-overlaps --candidate draft.json --zones zones.json --exclude-id 12
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # parse
    parse_parser = subparsers.add_parser("parse", help="Parse a geometry file")
    parse_parser.add_argument("file", type=Path, help="JSON or GeoJSON geometry file")

    # check-overlaps
    check_parser = subparsers.add_parser("check-overlaps", help="Find overlapping zones")
    check_parser.add_argument("--candidate", required=True, type=Path, help="Candidate geometry file")
    check_parser.add_argument(
        "--zones",
        required=True,
        type=Path,
        help="JSON list of zone records or GeoJSON FeatureCollection"
    )
    check_parser.add_argument("--exclude-id", help="Id of the zone being edited")
    check_parser.add_argument(
        "--all-parts",
        action="store_true",
        default=settings.check_all_parts,
        help="Test every MultiPolygon part (default: ZONE_CHECK_ALL_PARTS)"
    )

    args = parser.parse_args(argv)
    settings.configure_logging()

    if args.command == "parse":
        return parse_geometry(args.file)
    elif args.command == "check-overlaps":
        return check_overlaps(args.candidate, args.zones, args.exclude_id, args.all_parts)

    parser.print_help()
    return EXIT_BAD_INPUT


if __name__ == "__main__":
    sys.exit(main())
