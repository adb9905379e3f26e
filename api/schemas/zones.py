"""Commercial zone API schemas."""

from typing import Any, List, Optional, Union

from pydantic import BaseModel, Field

from .common import LatLng, VertexModel

ZoneId = Union[int, str]


class ZoneRecord(BaseModel):
    """An existing zone to check against."""
    id: ZoneId
    name: str = ""
    geometry: Any = Field(None, description="GeoJSON, {lat, lng} list, or JSON string")


class ParsePolygonRequest(BaseModel):
    """Request to canonicalize a raw geometry payload."""
    geometry: Any = None


class ParsePolygonResponse(BaseModel):
    """Canonical vertex list for a geometry payload."""
    vertices: List[VertexModel]
    count: int
    is_usable: bool


class OverlapCheckRequest(BaseModel):
    """Request to check a candidate polygon against existing zones."""
    candidate: Any = Field(None, description="Geometry of the zone being drawn or edited")
    zones: List[ZoneRecord] = Field(default_factory=list)
    exclude_id: Optional[ZoneId] = Field(None, description="Id of the zone being edited")
    all_parts: Optional[bool] = Field(None, description="Test every MultiPolygon part")


class OverlappingZone(BaseModel):
    id: ZoneId
    name: str


class OverlapCheckResponse(BaseModel):
    """Zones overlapping the candidate polygon."""
    overlapping: List[OverlappingZone]
    count: int
    has_conflict: bool
    warning: Optional[str] = None


class GeoJsonRequest(BaseModel):
    """Request to serialize map vertices as GeoJSON."""
    vertices: List[LatLng]
    multi: bool = Field(True, description="MultiPolygon instead of Polygon")
