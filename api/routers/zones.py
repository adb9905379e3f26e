"""
Commercial zones API router.

Advisory geometry checks for the zone editor:
- canonicalize stored geometry into a vertex list
- find existing zones overlapping a drawn polygon
- serialize editor vertices as GeoJSON

Zones are supplied in each request; nothing is stored here.
"""

import logging

from fastapi import APIRouter, HTTPException

from api.config import settings
from api.schemas.zones import (
    GeoJsonRequest,
    OverlapCheckRequest,
    OverlapCheckResponse,
    OverlappingZone,
    ParsePolygonRequest,
    ParsePolygonResponse,
)
from zonecheck.config import settings as engine_settings
from zonecheck.data.commercial_zones import Zone, resolve_zone_id
from zonecheck.geometry.overlap import find_overlapping_zones, format_overlap_warning
from zonecheck.geometry.polygon_parser import (
    Vertex,
    is_usable_polygon,
    parse_polygon,
    to_geojson_polygon,
    to_multipolygon,
)

router = APIRouter(prefix="/api/zones", tags=["zones"])

logger = logging.getLogger(__name__)


@router.post("/parse", response_model=ParsePolygonResponse)
async def parse_zone_geometry(request: ParsePolygonRequest):
    """
    Canonicalize a geometry payload.

    Unreadable geometry returns an empty vertex list, never an error.
    """
    vertices = parse_polygon(request.geometry)
    return ParsePolygonResponse(
        vertices=[v.to_dict() for v in vertices],
        count=len(vertices),
        is_usable=is_usable_polygon(vertices),
    )


@router.post("/overlaps", response_model=OverlapCheckResponse)
async def check_zone_overlaps(request: OverlapCheckRequest):
    """
    Find existing zones overlapping the candidate polygon.

    Pass exclude_id when editing a zone so it is not reported against
    itself; "12" matches a zone whose id is 12. A candidate with fewer
    than 3 vertices never conflicts.
    """
    if len(request.zones) > settings.max_zones_per_request:
        raise HTTPException(
            status_code=413,
            detail=f"Too many zones: {len(request.zones)} (max {settings.max_zones_per_request})"
        )

    all_parts = request.all_parts
    if all_parts is None:
        all_parts = engine_settings.check_all_parts

    zones = [Zone(id=z.id, name=z.name, geometry=z.geometry) for z in request.zones]
    matches = find_overlapping_zones(
        request.candidate,
        zones,
        exclude_id=resolve_zone_id(zones, request.exclude_id),
        all_parts=all_parts,
    )

    if matches:
        logger.info(f"Overlap check found {len(matches)} conflicting zone(s)")

    return OverlapCheckResponse(
        overlapping=[OverlappingZone(id=m.id, name=m.name) for m in matches],
        count=len(matches),
        has_conflict=bool(matches),
        warning=format_overlap_warning(matches),
    )


@router.post("/geojson")
async def vertices_to_geojson(request: GeoJsonRequest):
    """
    Serialize editor vertices as a closed GeoJSON geometry.

    Coordinates are emitted in GeoJSON [lng, lat] order.
    """
    vertices = [Vertex(lat=v.lat, lng=v.lng) for v in request.vertices]
    geometry = to_multipolygon(vertices) if request.multi else to_geojson_polygon(vertices)

    if geometry is None:
        raise HTTPException(status_code=400, detail="A zone polygon needs at least 3 distinct vertices")

    return geometry
