"""
Zone Overlap Detection.

Finds the existing commercial zones whose polygon overlaps a newly drawn
or edited zone polygon.

All math is planar: latitude and longitude are treated as Cartesian
coordinates, which is accurate enough for city-scale zones. Polygons
are simple (no holes), implicitly closed vertex rings.

Degenerate input (fewer than 3 vertices, unparseable geometry) never
raises; it simply cannot overlap anything.
"""

import logging
from dataclasses import dataclass
from typing import Any, Hashable, Iterable, List, Mapping, Optional, Sequence, Union

from zonecheck.data.commercial_zones import Zone, as_zone
from zonecheck.geometry.polygon_parser import (
    MIN_POLYGON_VERTICES,
    Vertex,
    extract_polygons,
    parse_polygon,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OverlapMatch:
    """A zone reported as overlapping the candidate polygon."""
    id: Hashable
    name: str

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name}


def _ccw(a: Vertex, b: Vertex, c: Vertex) -> bool:
    """True if a -> b -> c turns counter-clockwise."""
    return (c.lng - a.lng) * (b.lat - a.lat) > (b.lng - a.lng) * (c.lat - a.lat)


def segments_intersect(p1: Vertex, p2: Vertex, p3: Vertex, p4: Vertex) -> bool:
    """
    Check if segment p1-p2 properly crosses segment p3-p4.

    Each segment's endpoints must lie on opposite sides of the other.
    Collinear and merely touching segments are not reported.
    """
    return (
        _ccw(p1, p3, p4) != _ccw(p2, p3, p4)
        and _ccw(p1, p2, p3) != _ccw(p1, p2, p4)
    )


def point_in_polygon(point: Vertex, polygon: Sequence[Vertex]) -> bool:
    """
    Check if point is inside polygon using ray casting (even-odd rule).

    Args:
        point: Point to test
        polygon: Implicitly closed vertex ring

    Returns:
        True if point is inside polygon
    """
    n = len(polygon)
    if n < MIN_POLYGON_VERTICES:
        return False

    inside = False

    j = n - 1
    for i in range(n):
        yi, xi = polygon[i].lat, polygon[i].lng
        yj, xj = polygon[j].lat, polygon[j].lng

        if ((yi > point.lat) != (yj > point.lat)) and \
           (point.lng < (xj - xi) * (point.lat - yi) / (yj - yi) + xi):
            inside = not inside

        j = i

    return inside


def _edges(polygon: Sequence[Vertex]):
    n = len(polygon)
    for i in range(n):
        yield polygon[i], polygon[(i + 1) % n]


def polygons_overlap(a: Sequence[Vertex], b: Sequence[Vertex]) -> bool:
    """
    Check if two polygons share any area.

    Detects crossing edges first, then falls back to containment so a
    zone nested entirely inside another is still reported.
    """
    if len(a) < MIN_POLYGON_VERTICES or len(b) < MIN_POLYGON_VERTICES:
        return False

    for p1, p2 in _edges(a):
        for p3, p4 in _edges(b):
            if segments_intersect(p1, p2, p3, p4):
                return True

    # No crossings: overlap only if one polygon lies inside the other
    return point_in_polygon(a[0], b) or point_in_polygon(b[0], a)


def _zone_overlaps(candidate: List[Vertex], zone: Zone, all_parts: bool) -> bool:
    if not all_parts:
        polygon = parse_polygon(zone.geometry)
        return len(polygon) >= MIN_POLYGON_VERTICES and polygons_overlap(candidate, polygon)

    return any(
        polygons_overlap(candidate, part)
        for part in extract_polygons(zone.geometry)
        if len(part) >= MIN_POLYGON_VERTICES
    )


def find_overlapping_zones(
    candidate: Any,
    zones: Iterable[Union[Zone, Mapping[str, Any]]],
    exclude_id: Optional[Hashable] = None,
    all_parts: bool = False,
) -> List[OverlapMatch]:
    """
    Find zones that overlap the candidate polygon.

    Args:
        candidate: Raw geometry of the zone being drawn or edited
        zones: Other known zones (Zone instances or records)
        exclude_id: Id of the zone being edited, never reported
        all_parts: Test every part of MultiPolygon zones instead of
            only the first ring

    Returns:
        Overlapping zones in input order. Empty means no conflict.
    """
    candidate_polygon = parse_polygon(candidate)
    if len(candidate_polygon) < MIN_POLYGON_VERTICES:
        return []

    overlapping = []
    for zone in zones:
        try:
            zone = as_zone(zone)
        except ValueError as e:
            logger.debug(f"Skipping malformed zone record: {e}")
            continue

        # Skip the zone being edited
        if exclude_id is not None and zone.id == exclude_id:
            continue

        if _zone_overlaps(candidate_polygon, zone, all_parts):
            overlapping.append(OverlapMatch(id=zone.id, name=zone.name))

    if overlapping:
        logger.debug(f"Candidate polygon overlaps {len(overlapping)} zone(s)")
    return overlapping


def format_overlap_warning(matches: Sequence[OverlapMatch]) -> Optional[str]:
    """Build the user-facing overlap warning, or None if there is no conflict."""
    if not matches:
        return None
    names = ", ".join(m.name for m in matches)
    noun = "zone" if len(matches) == 1 else "zones"
    return f"Polygon overlaps {noun}: {names}"
