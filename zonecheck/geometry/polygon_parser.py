"""
Zone Polygon Parser.

Normalizes the polygon encodings found in stored and transmitted zone
records into a canonical, implicitly closed list of vertices:

- JSON strings (possibly wrapping further JSON strings)
- Arrays of {lat, lng} objects, as produced by the map editor
- GeoJSON Polygon / MultiPolygon geometries and Features

GeoJSON stores coordinates as [lng, lat]; vertices are (lat, lng).

Malformed or unexpected geometry never raises. It parses to an empty
list, which callers treat as "no geometry".
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

logger = logging.getLogger(__name__)

# A polygon needs at least this many vertices to enclose an area
MIN_POLYGON_VERTICES = 3


@dataclass(frozen=True)
class Vertex:
    """A polygon vertex in (lat, lng) order."""
    lat: float
    lng: float

    def to_dict(self) -> Dict[str, float]:
        return {"lat": self.lat, "lng": self.lng}

    def to_geojson(self) -> List[float]:
        """GeoJSON position ([lng, lat])."""
        return [self.lng, self.lat]


def _is_number(value: Any) -> bool:
    # bool is an int subclass but never a coordinate
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _lat_lng_of(item: Any) -> Optional[Vertex]:
    """Read a {lat, lng} mapping or an object with lat/lng attributes."""
    if isinstance(item, dict):
        lat, lng = item.get("lat"), item.get("lng")
    else:
        lat, lng = getattr(item, "lat", None), getattr(item, "lng", None)

    if _is_number(lat) and _is_number(lng):
        return Vertex(lat=float(lat), lng=float(lng))
    return None


def _pair_to_vertex(pair: Any) -> Optional[Vertex]:
    """Convert a GeoJSON [lng, lat] position, or None if malformed."""
    if not isinstance(pair, (list, tuple)) or len(pair) < 2:
        return None
    lng, lat = pair[0], pair[1]
    if not _is_number(lat) or not _is_number(lng):
        return None
    return Vertex(lat=float(lat), lng=float(lng))


def _ring_to_vertices(ring: Any) -> List[Vertex]:
    if not isinstance(ring, (list, tuple)):
        return []
    vertices = [_pair_to_vertex(pair) for pair in ring]
    return [v for v in vertices if v is not None]


def _first_ring(coordinates: Any) -> Any:
    """
    Descend through Polygon / MultiPolygon nesting to the first flat ring.

    Stops at the first list whose first element is a position
    (a list starting with a number).
    """
    if not isinstance(coordinates, (list, tuple)) or not coordinates:
        return None

    ring = coordinates[0]
    while (
        isinstance(ring, (list, tuple))
        and ring
        and isinstance(ring[0], (list, tuple))
        and not (ring[0] and _is_number(ring[0][0]))
    ):
        ring = ring[0]
    return ring


def _dedupe_closing_vertex(vertices: List[Vertex]) -> List[Vertex]:
    """Drop an explicit closing vertex (exact match with the first)."""
    if len(vertices) >= 2 and vertices[0] == vertices[-1]:
        return vertices[:-1]
    return vertices


def _canonical_ring(vertices: List[Vertex]) -> List[Vertex]:
    """Deduplicate the seam; rings too small to enclose an area become empty."""
    ring = _dedupe_closing_vertex(vertices)
    if len(ring) < MIN_POLYGON_VERTICES:
        return []
    return ring


def _decode(raw: Any) -> Any:
    """
    Unwrap JSON strings and GeoJSON Features down to a geometry value.

    Returns None when a string is not valid JSON.
    """
    while True:
        if isinstance(raw, str):
            text = raw.strip()
            if not text:
                return None
            try:
                raw = json.loads(text)
            except (ValueError, RecursionError):
                logger.debug("Discarding zone geometry that is not valid JSON: %.80r", raw)
                return None
            continue

        if isinstance(raw, dict) and "coordinates" not in raw and isinstance(raw.get("geometry"), (dict, str)):
            raw = raw["geometry"]
            continue

        return raw


def parse_polygon(raw: Any) -> List[Vertex]:
    """
    Parse any supported geometry payload into a vertex list.

    Args:
        raw: JSON string, list of {lat, lng} objects, GeoJSON geometry or
            Feature, or None

    Returns:
        Vertices in (lat, lng) order without the closing duplicate.
        Empty when the payload is missing or cannot be interpreted.
    """
    if not raw:
        return []

    value = _decode(raw)
    if not value:
        return []

    if isinstance(value, (list, tuple)):
        vertices = [_lat_lng_of(item) for item in value]
        if any(v is None for v in vertices):
            return []
        return _canonical_ring(vertices)

    if isinstance(value, dict) and "coordinates" in value:
        ring = _first_ring(value["coordinates"])
        return _canonical_ring(_ring_to_vertices(ring))

    return []


def extract_polygons(raw: Any) -> List[List[Vertex]]:
    """
    Parse every part of a geometry payload.

    A MultiPolygon yields the outer ring of each of its polygons; every
    other payload yields at most the single polygon from parse_polygon().
    Empty parts are dropped.
    """
    if not raw:
        return []

    value = _decode(raw)
    if (
        isinstance(value, dict)
        and str(value.get("type", "")).lower() == "multipolygon"
        and isinstance(value.get("coordinates"), (list, tuple))
    ):
        parts = []
        for polygon in value["coordinates"]:
            ring = _canonical_ring(_ring_to_vertices(_first_ring(polygon)))
            if ring:
                parts.append(ring)
        return parts

    polygon = parse_polygon(value)
    return [polygon] if polygon else []


def is_usable_polygon(vertices: Sequence[Vertex]) -> bool:
    """True if the polygon has enough vertices for overlap testing."""
    return len(vertices) >= MIN_POLYGON_VERTICES


def ensure_closed_ring(vertices: Sequence[Vertex]) -> List[Vertex]:
    """Return the ring with its first vertex repeated at the end."""
    ring = _dedupe_closing_vertex(list(vertices))
    if not ring:
        return ring
    return ring + [ring[0]]


def to_geojson_polygon(vertices: Sequence[Vertex]) -> Optional[Dict]:
    """Serialize vertices as a closed GeoJSON Polygon, or None if degenerate."""
    if not is_usable_polygon(_dedupe_closing_vertex(list(vertices))):
        return None
    ring = [v.to_geojson() for v in ensure_closed_ring(vertices)]
    return {"type": "Polygon", "coordinates": [ring]}


def to_multipolygon(vertices: Sequence[Vertex]) -> Optional[Dict]:
    """Serialize vertices as a single-part GeoJSON MultiPolygon."""
    polygon = to_geojson_polygon(vertices)
    if polygon is None:
        return None
    return {"type": "MultiPolygon", "coordinates": [polygon["coordinates"]]}
