"""
Unit tests for commercial zone records.
"""

import json

import pytest

from zonecheck.data.commercial_zones import (
    Zone,
    as_zone,
    export_geojson,
    load_zones,
    load_zones_file,
    resolve_zone_id,
)
from zonecheck.geometry.polygon_parser import Vertex

RING = [[-70.60, -33.40], [-70.50, -33.40], [-70.50, -33.50], [-70.60, -33.40]]
POLYGON = [Vertex(-33.40, -70.60), Vertex(-33.40, -70.50), Vertex(-33.50, -70.50)]


class TestZoneRecord:
    """Tests for building zones from storage records."""

    def test_english_keys(self):
        zone = Zone.from_record({"id": 3, "name": "Centro", "geometry": {"coordinates": [RING]}})
        assert zone.id == 3
        assert zone.name == "Centro"
        assert zone.polygon == POLYGON

    def test_legacy_storage_keys(self):
        zone = Zone.from_record({
            "id": 12,
            "codigo": "ZN-012",
            "nombre": "Providencia",
            "poligono_geografico": json.dumps({"type": "Polygon", "coordinates": [RING]}),
        })
        assert zone.name == "Providencia"
        assert zone.code == "ZN-012"
        assert zone.polygon == POLYGON

    def test_zona_geom_key(self):
        zone = Zone.from_record({"id": 1, "nombre": "Norte", "zona_geom": {"coordinates": [RING]}})
        assert zone.polygon == POLYGON

    def test_missing_geometry(self):
        zone = Zone.from_record({"id": 1, "nombre": "Vacia"})
        assert zone.geometry is None
        assert zone.polygon == []

    def test_missing_id_rejected(self):
        with pytest.raises(ValueError):
            Zone.from_record({"nombre": "Sin id"})

    def test_as_zone_passthrough(self):
        zone = Zone(id=1, name="Centro")
        assert as_zone(zone) is zone

    def test_as_zone_rejects_non_mapping(self):
        with pytest.raises(ValueError):
            as_zone(["id", 1])

    def test_parts(self):
        far = [[10.0, 10.0], [11.0, 10.0], [11.0, 11.0], [10.0, 10.0]]
        zone = Zone(id=1, name="Dos", geometry={"type": "MultiPolygon", "coordinates": [[RING], [far]]})
        assert len(zone.parts) == 2
        assert zone.polygon == POLYGON


class TestZoneGeoJSON:
    """Tests for GeoJSON import and export."""

    def test_to_geojson(self):
        zone = Zone(id=5, name="Centro", geometry={"coordinates": [RING]}, code="ZN-005")
        feature = zone.to_geojson()

        assert feature["type"] == "Feature"
        assert feature["id"] == 5
        assert feature["properties"] == {"name": "Centro", "code": "ZN-005"}
        assert feature["geometry"] == {"type": "MultiPolygon", "coordinates": [[RING]]}

    def test_to_geojson_without_geometry(self):
        assert Zone(id=5, name="Vacia").to_geojson()["geometry"] is None

    def test_feature_round_trip(self):
        zone = Zone(id=5, name="Centro", geometry=[v.to_dict() for v in POLYGON])
        restored = Zone.from_geojson(zone.to_geojson())
        assert restored.id == 5
        assert restored.name == "Centro"
        assert restored.polygon == POLYGON

    def test_feature_without_id_rejected(self):
        with pytest.raises(ValueError):
            Zone.from_geojson({"type": "Feature", "properties": {}, "geometry": None})

    def test_feature_id_from_properties(self):
        zone = Zone.from_geojson({"type": "Feature", "properties": {"id": 8, "nombre": "Sur"}, "geometry": None})
        assert zone.id == 8
        assert zone.name == "Sur"


class TestLoadZones:
    """Tests for load_zones() and load_zones_file()."""

    def test_record_list(self):
        zones = load_zones([{"id": 1, "nombre": "A"}, {"id": 2, "name": "B"}])
        assert [z.name for z in zones] == ["A", "B"]

    def test_feature_collection(self):
        collection = export_geojson([
            Zone(id=1, name="A", geometry={"coordinates": [RING]}),
            Zone(id=2, name="B"),
        ])
        zones = load_zones(collection)
        assert [z.id for z in zones] == [1, 2]
        assert zones[0].polygon == POLYGON

    @pytest.mark.parametrize("payload", [
        {"type": "Polygon", "coordinates": [RING]},
        {"type": "FeatureCollection", "features": ["not a feature"]},
        "zones",
        42,
        None,
    ])
    def test_unsupported_payload(self, payload):
        with pytest.raises(ValueError):
            load_zones(payload)

    def test_load_file(self, tmp_path):
        path = tmp_path / "zones.json"
        path.write_text(json.dumps([{"id": 1, "nombre": "A", "poligono_geografico": {"coordinates": [RING]}}]))
        zones = load_zones_file(path)
        assert len(zones) == 1
        assert zones[0].polygon == POLYGON

    def test_load_invalid_json_file(self, tmp_path):
        path = tmp_path / "zones.json"
        path.write_text("{not json")
        with pytest.raises(ValueError):
            load_zones_file(path)


class TestResolveZoneId:
    """Tests for matching textual ids against loaded zones."""

    ZONES = [Zone(id=12, name="Norte"), Zone(id="zona-7", name="Editada")]

    def test_text_matches_numeric_id(self):
        assert resolve_zone_id(self.ZONES, "12") == 12

    def test_exact_id_kept(self):
        assert resolve_zone_id(self.ZONES, 12) == 12
        assert resolve_zone_id(self.ZONES, "zona-7") == "zona-7"

    def test_exact_match_preferred(self):
        zones = [Zone(id=12, name="Numero"), Zone(id="12", name="Texto")]
        assert resolve_zone_id(zones, "12") == "12"

    def test_unknown_id_unchanged(self):
        assert resolve_zone_id(self.ZONES, "99") == "99"

    def test_none(self):
        assert resolve_zone_id(self.ZONES, None) is None
