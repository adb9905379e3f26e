"""
Commercial zone records.

A commercial zone is a sales territory drawn as a polygon on the map.
Zone records reach the overlap checker from several sources:

- API request bodies ({id, name, geometry})
- Stored zone rows ({id, nombre, poligono_geografico} or zona_geom)
- GeoJSON FeatureCollections exported by the map

This module converts all of them into Zone instances. The geometry is
kept raw; parsing it is the polygon parser's job.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Hashable, Iterable, List, Mapping, Optional, Union

from zonecheck.geometry.polygon_parser import (
    Vertex,
    extract_polygons,
    parse_polygon,
    to_multipolygon,
)

logger = logging.getLogger(__name__)

# Storage keys seen for each field, in lookup order
_NAME_KEYS = ("name", "nombre", "displayName", "display_name")
_GEOMETRY_KEYS = ("geometry", "poligono_geografico", "zona_geom", "zonaGeom", "rawGeometry")


@dataclass(frozen=True)
class Zone:
    """A commercial zone snapshot supplied by the caller."""
    id: Hashable
    name: str
    # Raw geometry payload in any encoding the parser accepts
    geometry: Any = None
    code: Optional[str] = None

    @property
    def polygon(self) -> List[Vertex]:
        """Canonical outer ring (first ring only)."""
        return parse_polygon(self.geometry)

    @property
    def parts(self) -> List[List[Vertex]]:
        """Outer ring of every polygon part."""
        return extract_polygons(self.geometry)

    def to_geojson(self) -> Dict:
        """Convert to a GeoJSON Feature with a MultiPolygon geometry."""
        return {
            "type": "Feature",
            "id": self.id,
            "properties": {
                "name": self.name,
                "code": self.code,
            },
            "geometry": to_multipolygon(self.polygon),
        }

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Zone":
        """
        Create a Zone from a storage or API record.

        Raises:
            ValueError: If the record has no id
        """
        if record.get("id") is None:
            raise ValueError(f"Zone record has no id: {sorted(record.keys())}")

        name = next((record[k] for k in _NAME_KEYS if record.get(k) is not None), "")
        geometry = next((record[k] for k in _GEOMETRY_KEYS if record.get(k) is not None), None)

        return cls(
            id=record["id"],
            name=str(name),
            geometry=geometry,
            code=record.get("codigo", record.get("code")),
        )

    @classmethod
    def from_geojson(cls, feature: Mapping[str, Any]) -> "Zone":
        """Create a Zone from a GeoJSON Feature."""
        props = feature.get("properties") or {}
        zone_id = feature.get("id", props.get("id"))
        if zone_id is None:
            raise ValueError("GeoJSON feature has no id")

        return cls(
            id=zone_id,
            name=str(props.get("name", props.get("nombre", ""))),
            geometry=feature.get("geometry"),
            code=props.get("code", props.get("codigo")),
        )


def as_zone(value: Union[Zone, Mapping[str, Any]]) -> Zone:
    """Accept a Zone or a record mapping."""
    if isinstance(value, Zone):
        return value
    if not isinstance(value, Mapping):
        raise ValueError(f"Unsupported zone record: {type(value).__name__}")
    return Zone.from_record(value)


def resolve_zone_id(zones: Iterable[Zone], zone_id: Any) -> Any:
    """
    Match an id given as text against the ids of loaded zones.

    Ids read from JSON may be numbers while ids from a command line or a
    query are strings; "12" resolves to 12 when a zone carries that id.
    Returns zone_id unchanged when no zone matches.
    """
    if zone_id is None:
        return None
    zones = list(zones)
    for zone in zones:
        if zone.id == zone_id:
            return zone.id
    for zone in zones:
        if str(zone.id) == str(zone_id):
            return zone.id
    return zone_id


def load_zones(payload: Any) -> List[Zone]:
    """
    Build zones from a list of records or a GeoJSON FeatureCollection.

    Raises:
        ValueError: If the payload is neither a list nor a FeatureCollection
    """
    if isinstance(payload, dict):
        if payload.get("type") != "FeatureCollection":
            raise ValueError("Expected a list of zone records or a GeoJSON FeatureCollection")
        features = payload.get("features") or []
        if not all(isinstance(f, dict) for f in features):
            raise ValueError("FeatureCollection features must be objects")
        return [Zone.from_geojson(f) for f in features]

    if isinstance(payload, list):
        return [as_zone(record) for record in payload]

    raise ValueError(f"Unsupported zones payload: {type(payload).__name__}")


def load_zones_file(filepath: Path) -> List[Zone]:
    """Load zones from a JSON file (record list or FeatureCollection)."""
    with open(filepath, "r", encoding="utf-8") as f:
        try:
            payload = json.load(f)
        except RecursionError:
            raise ValueError(f"{filepath} is nested too deeply to load")

    zones = load_zones(payload)
    logger.info(f"Loaded {len(zones)} zones from {filepath}")
    return zones


def export_geojson(zones: Iterable[Zone]) -> Dict:
    """Export zones as a GeoJSON FeatureCollection."""
    return {
        "type": "FeatureCollection",
        "features": [zone.to_geojson() for zone in zones],
    }
