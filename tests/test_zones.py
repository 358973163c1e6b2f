"""Tests for zone catalog loading and validation."""

import warnings
from pathlib import Path

import pytest

from delivery_pricing.config import CatalogLoadError, ConfigurationError
from delivery_pricing.zones import (
    Zone,
    ZoneCatalog,
    build_zone_catalog,
    check_catalog_warnings,
    load_zone_catalog,
)

FIXTURES_DIR = Path(__file__).parent / "fixtures"


class TestLoadZoneCatalog:
    """Test loading catalogs from disk."""

    def test_load_json_catalog(self):
        catalog = load_zone_catalog(FIXTURES_DIR / "valid_zones.json")

        assert len(catalog) == 3
        assert [zone.zone_id for zone in catalog] == [1, 2, 3]
        assert catalog.get(1).keywords == ("Wuse", "Wuse Zone 2")
        assert catalog.get(1).name == "Central"
        assert catalog.get(2).price == 2000

    def test_load_yaml_catalog(self):
        catalog = load_zone_catalog(FIXTURES_DIR / "valid_zones.yaml")

        assert [zone.zone_id for zone in catalog] == [10, 11]
        assert catalog.get(11).name == "Island"
        assert catalog.get(11).keywords == ("Lekki", "Victoria Island")

    def test_missing_file(self, tmp_path):
        with pytest.raises(CatalogLoadError) as exc_info:
            load_zone_catalog(tmp_path / "nope.json")

        assert "Zone catalog not found" in str(exc_info.value)
        assert exc_info.value.suggestions

    def test_malformed_json(self):
        with pytest.raises(CatalogLoadError) as exc_info:
            load_zone_catalog(FIXTURES_DIR / "malformed_zones.json")

        assert "Failed to parse zone catalog" in str(exc_info.value)
        assert exc_info.value.__cause__ is not None

    def test_invalid_records_are_all_reported(self):
        with pytest.raises(CatalogLoadError) as exc_info:
            load_zone_catalog(FIXTURES_DIR / "invalid_zones.json")

        errors = exc_info.value.errors
        assert len(errors) == 3
        assert errors[0].startswith("record 0:") and "price" in errors[0]
        assert errors[1].startswith("record 1:") and "zoneId" in errors[1]
        assert "duplicate zoneId 3" in errors[2]

    def test_invalid_records_are_keyed_by_index(self):
        path = FIXTURES_DIR / "invalid_zones.json"
        with pytest.raises(CatalogLoadError) as exc_info:
            load_zone_catalog(path)

        error = exc_info.value
        assert error.failed_records == [0, 1, 3]
        assert error.record_errors[3] == ["duplicate zoneId 3 (first defined by record 2)"]
        assert error.source == str(path)
        assert str(error).splitlines()[0] == f"Zone catalog has 3 invalid record(s) [{path}]"

    def test_missing_file_names_source(self, tmp_path):
        path = tmp_path / "nope.json"
        with pytest.raises(CatalogLoadError) as exc_info:
            load_zone_catalog(path)

        assert exc_info.value.source == str(path)
        assert exc_info.value.failed_records == []

    def test_catalog_load_error_is_configuration_error(self, tmp_path):
        with pytest.raises(ConfigurationError):
            load_zone_catalog(tmp_path / "missing.yaml")


class TestBuildZoneCatalog:
    """Test validation of parsed catalog data."""

    def test_preserves_record_order(self):
        catalog = build_zone_catalog(
            [
                {"zoneId": 7, "price": 100, "locations": ["B"]},
                {"zoneId": 3, "price": 200, "locations": ["A"]},
            ]
        )
        assert [zone.zone_id for zone in catalog.zones] == [7, 3]

    def test_top_level_must_be_list(self):
        with pytest.raises(CatalogLoadError) as exc_info:
            build_zone_catalog({"zoneId": 1, "price": 100, "locations": []})

        assert "must be a list" in str(exc_info.value)
        assert exc_info.value.source == "<memory>"

    @pytest.mark.parametrize("price", [0, -100, 12.5, "1500", True])
    def test_price_must_be_positive_integer(self, price):
        with pytest.raises(CatalogLoadError):
            build_zone_catalog([{"zoneId": 1, "price": price, "locations": ["Wuse"]}])

    def test_locations_must_be_strings(self):
        with pytest.raises(CatalogLoadError):
            build_zone_catalog([{"zoneId": 1, "price": 100, "locations": ["Wuse", 4]}])

    def test_missing_zone_id(self):
        with pytest.raises(CatalogLoadError) as exc_info:
            build_zone_catalog([{"price": 100, "locations": ["Wuse"]}])

        assert "Missing required field: zoneId" in exc_info.value.errors[0]

    def test_default_zone_name(self):
        catalog = build_zone_catalog([{"zoneId": 5, "price": 100, "locations": ["Kubwa"]}])
        assert catalog.get(5).name == "Zone 5"

    def test_empty_catalog(self):
        catalog = build_zone_catalog([])
        assert len(catalog) == 0
        assert catalog.entries == ()

    def test_entries_are_normalized_in_catalog_order(self):
        catalog = build_zone_catalog(
            [
                {"zoneId": 1, "price": 100, "locations": ["Wuse Zone II", "Garki"]},
                {"zoneId": 2, "price": 200, "locations": ["Lúgbè"]},
            ]
        )
        assert [(e.zone.zone_id, e.keyword, e.normalized) for e in catalog.entries] == [
            (1, "Wuse Zone II", "wuse zone 2"),
            (1, "Garki", "garki"),
            (2, "Lúgbè", "lugbe"),
        ]


class TestCatalogWarnings:
    """Test warnings for legal but suspicious catalogs."""

    def test_shared_keyword_warns(self):
        with pytest.warns(UserWarning, match="shared by zones"):
            build_zone_catalog(
                [
                    {"zoneId": 1, "price": 100, "locations": ["Garki"]},
                    {"zoneId": 2, "price": 200, "locations": ["GARKI"]},
                ]
            )

    def test_keyword_empty_after_normalization_warns(self):
        with pytest.warns(UserWarning, match="empty after normalization"):
            build_zone_catalog([{"zoneId": 1, "price": 100, "locations": ["Wuse", "--"]}])

    def test_repeated_keyword_is_dropped_with_warning(self):
        with pytest.warns(UserWarning, match="more than once"):
            catalog = build_zone_catalog(
                [{"zoneId": 1, "price": 100, "locations": ["Wuse", "Wuse"]}]
            )
        assert catalog.get(1).keywords == ("Wuse",)

    def test_clean_catalog_has_no_warnings(self):
        data = [
            {"zoneId": 1, "price": 100, "locations": ["Wuse"]},
            {"zoneId": 2, "price": 200, "locations": ["Maitama"]},
        ]
        zones = [
            Zone(zone_id=1, price=100, keywords=("Wuse",), name="Zone 1"),
            Zone(zone_id=2, price=200, keywords=("Maitama",), name="Zone 2"),
        ]
        assert check_catalog_warnings(data, zones) == []

        with warnings.catch_warnings():
            warnings.simplefilter("error")
            build_zone_catalog(data)


class TestZoneCatalog:
    """Test the immutable catalog container."""

    def test_get_unknown_zone(self, abuja_catalog):
        assert abuja_catalog.get(99) is None

    def test_zones_are_frozen(self, abuja_catalog):
        zone = abuja_catalog.get(1)
        with pytest.raises(AttributeError):
            zone.price = 1

    def test_repr(self):
        catalog = ZoneCatalog([Zone(zone_id=1, price=100, keywords=("A", "B"), name="Zone 1")])
        assert repr(catalog) == "ZoneCatalog(zones=1, keywords=2)"
