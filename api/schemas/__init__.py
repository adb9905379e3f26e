"""
ZONECHECK API Pydantic schemas.

Re-exports all schema classes:
    from api.schemas import OverlapCheckRequest, ...
"""

# Common
from .common import LatLng, VertexModel  # noqa: F401

# Zones
from .zones import (  # noqa: F401
    ZoneRecord,
    ParsePolygonRequest,
    ParsePolygonResponse,
    OverlapCheckRequest,
    OverlappingZone,
    OverlapCheckResponse,
    GeoJsonRequest,
)
