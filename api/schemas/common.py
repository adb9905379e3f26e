"""Common shared schemas."""

from pydantic import BaseModel, Field


class LatLng(BaseModel):
    """A polygon vertex as exchanged with the map editor."""
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)


class VertexModel(BaseModel):
    """A canonical vertex. Stored geometry is not range-checked."""
    lat: float
    lng: float
