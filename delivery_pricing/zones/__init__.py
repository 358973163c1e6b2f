"""Delivery zone catalog.

This module provides:
- Zone: A priced delivery region and its keywords
- ZoneCatalog: Immutable, ordered collection of zones shared by the matcher
- load_zone_catalog / build_zone_catalog: Validated catalog construction
"""

from .catalog import ZoneCatalog
from .loader import build_zone_catalog, check_catalog_warnings, load_zone_catalog
from .models import Zone, ZoneKeyword, ZoneRecord

__all__ = [
    "Zone",
    "ZoneKeyword",
    "ZoneRecord",
    "ZoneCatalog",
    "load_zone_catalog",
    "build_zone_catalog",
    "check_catalog_warnings",
]
