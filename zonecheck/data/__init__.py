"""Zone record adapters."""

from .commercial_zones import (
    Zone,
    as_zone,
    export_geojson,
    load_zones,
    load_zones_file,
    resolve_zone_id,
)

__all__ = [
    'Zone',
    'as_zone',
    'export_geojson',
    'load_zones',
    'load_zones_file',
    'resolve_zone_id',
]
