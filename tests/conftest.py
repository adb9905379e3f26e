"""
Shared pytest fixtures for ZONECHECK tests.

Environment variables are set before any api.* import so the cached
settings pick them up.
"""

import os

import pytest
from fastapi.testclient import TestClient

# ---------------------------------------------------------------------------
# Section 1: Environment setup (before ANY api.* imports)
# ---------------------------------------------------------------------------
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("LOG_LEVEL", "warning")
os.environ.setdefault("MAX_ZONES_PER_REQUEST", "50")

from zonecheck.data.commercial_zones import Zone  # noqa: E402
from zonecheck.geometry.polygon_parser import Vertex  # noqa: E402


def square(lat0, lng0, size):
    """Axis-aligned square as (lat, lng) vertices, counter-clockwise from the corner."""
    return [
        Vertex(lat0, lng0),
        Vertex(lat0, lng0 + size),
        Vertex(lat0 + size, lng0 + size),
        Vertex(lat0 + size, lng0),
    ]


def as_geojson_polygon(vertices):
    """Closed GeoJSON Polygon with [lng, lat] positions."""
    ring = [[v.lng, v.lat] for v in vertices] + [[vertices[0].lng, vertices[0].lat]]
    return {"type": "Polygon", "coordinates": [ring]}


def as_lat_lng_list(vertices):
    return [{"lat": v.lat, "lng": v.lng} for v in vertices]


# ---------------------------------------------------------------------------
# Section 2: Geometry fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def square_a():
    """Square (0,0)-(2,2)."""
    return square(0, 0, 2)


@pytest.fixture
def square_b():
    """Square (1,1)-(3,3), partially overlapping square_a."""
    return square(1, 1, 2)


@pytest.fixture
def square_c():
    """Square (10,10)-(12,12), disjoint from square_a."""
    return square(10, 10, 2)


@pytest.fixture
def inner_square():
    """Square (0.5,0.5)-(1.5,1.5), nested inside square_a."""
    return square(0.5, 0.5, 1)


@pytest.fixture
def zones(square_a, square_b, square_c, inner_square):
    """Existing zones stored in the encodings seen in production data."""
    import json

    return [
        Zone(id=1, name="Centro", geometry=as_geojson_polygon(square_a)),
        Zone(id=2, name="Norte", geometry=json.dumps(as_geojson_polygon(square_b))),
        Zone(id=3, name="Costa", geometry=as_lat_lng_list(square_c)),
        Zone(id=4, name="Plaza", geometry={
            "type": "MultiPolygon",
            "coordinates": [as_geojson_polygon(inner_square)["coordinates"]],
        }),
    ]


# ---------------------------------------------------------------------------
# Section 3: API client
# ---------------------------------------------------------------------------


@pytest.fixture
def client():
    """Create a FastAPI TestClient."""
    from api.main import app

    with TestClient(app) as test_client:
        yield test_client
