"""Zone catalog loading and validation.

The catalog file is an ordered list of records:

    [
      {"zoneId": 1, "price": 1500, "locations": ["Wuse", "Wuse Zone 2"]},
      {"zoneId": 2, "price": 2500, "locations": ["Gwarinpa"]}
    ]

Files ending in .json are parsed as JSON, anything else as YAML. Any problem
raises CatalogLoadError; loading is a startup step and there is no partial
catalog.
"""

import json
import warnings
from collections import defaultdict
from pathlib import Path
from typing import Any, Dict, List

import yaml
from pydantic import ValidationError

from delivery_pricing.config.exceptions import CatalogLoadError
from delivery_pricing.config.loader import format_validation_errors
from delivery_pricing.logging import get_logger
from delivery_pricing.normalization import normalize

from .catalog import ZoneCatalog
from .models import Zone, ZoneRecord

logger = get_logger(__name__, component="zones")


def load_zone_catalog(path: Path) -> ZoneCatalog:
    """
    Load, validate and freeze the zone catalog stored at path.

    Args:
        path: Path to a JSON or YAML catalog file

    Returns:
        ZoneCatalog preserving the file's record order

    Raises:
        CatalogLoadError: If the file is missing, unparsable or invalid
    """
    path = Path(path)

    try:
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix.lower() == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise CatalogLoadError(
            "Zone catalog not found",
            source=str(path),
            suggestions=[
                "Set zones_file in config.yaml or the ZONES_FILE environment variable",
                "Copy data/delivery_zones.json from the repository as a starting point",
            ],
        ) from e
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise CatalogLoadError(
            f"Failed to parse zone catalog: {e}",
            source=str(path),
            suggestions=["Check the file syntax with a JSON/YAML validator"],
        ) from e
    except OSError as e:
        raise CatalogLoadError(
            f"Failed to read zone catalog: {e}",
            source=str(path),
            suggestions=[f"Ensure {path} is readable"],
        ) from e

    catalog = build_zone_catalog(data, source=str(path))

    logger.info(
        f"Loaded {len(catalog)} delivery zones",
        extra={
            "event": "catalog.loaded",
            "zones_file": str(path),
            "zone_count": len(catalog),
            "keyword_count": len(catalog.entries),
        },
    )
    return catalog


def build_zone_catalog(data: Any, source: str = "<memory>") -> ZoneCatalog:
    """
    Validate already-parsed catalog data and build a ZoneCatalog.

    Args:
        data: Parsed catalog document (expected: a list of records)
        source: Label used in error messages

    Returns:
        ZoneCatalog preserving record order

    Raises:
        CatalogLoadError: If the document or any record is invalid
    """
    if not isinstance(data, list):
        raise CatalogLoadError(
            "Zone catalog must be a list of zone records",
            source=source,
            errors=[f"Got {type(data).__name__} at the top level"],
            suggestions=['Wrap the records in a list: [{"zoneId": 1, ...}]'],
        )

    record_errors: Dict[int, List[str]] = defaultdict(list)
    zones: List[Zone] = []
    seen_ids: Dict[int, int] = {}

    for index, item in enumerate(data):
        try:
            record = ZoneRecord.model_validate(item)
        except ValidationError as e:
            record_errors[index].extend(format_validation_errors(e))
            continue

        if record.zone_id in seen_ids:
            record_errors[index].append(
                f"duplicate zoneId {record.zone_id} "
                f"(first defined by record {seen_ids[record.zone_id]})"
            )
            continue

        seen_ids[record.zone_id] = index
        zones.append(Zone.from_record(record))

    if record_errors:
        raise CatalogLoadError(
            f"Zone catalog has {len(record_errors)} invalid record(s)",
            source=source,
            record_errors=record_errors,
            suggestions=[
                "Each record needs an integer zoneId, a positive integer price and a list of locations",
                "zoneId values must be unique",
            ],
        )

    catalog_warnings = check_catalog_warnings(data, zones)
    for message in catalog_warnings:
        warnings.warn(message, UserWarning, stacklevel=2)

    return ZoneCatalog(zones)


def check_catalog_warnings(data: List[Any], zones: List[Zone]) -> List[str]:
    """
    Find legal but suspicious catalog content.

    Reports zones without keywords, repeated keywords within a zone,
    keywords that normalize to nothing and keywords shared by several zones.
    Shared keywords are allowed; the earlier zone wins ties.

    Args:
        data: Raw records (used to spot repeats dropped by Zone.from_record)
        zones: Validated zones in catalog order

    Returns:
        List of warning messages
    """
    warning_messages = []
    owners: Dict[str, List[int]] = defaultdict(list)

    for raw, zone in zip(data, zones):
        if not zone.keywords:
            warning_messages.append(f"Zone {zone.zone_id} has no locations and can never match")

        raw_locations = raw.get("locations", []) if isinstance(raw, dict) else []
        if len(raw_locations) != len(zone.keywords):
            warning_messages.append(f"Zone {zone.zone_id} lists some locations more than once")

        for keyword in zone.keywords:
            normalized = normalize(keyword)
            if not normalized:
                warning_messages.append(
                    f"Zone {zone.zone_id} location {keyword!r} is empty after normalization"
                )
                continue
            if zone.zone_id not in owners[normalized]:
                owners[normalized].append(zone.zone_id)

    for normalized, zone_ids in owners.items():
        if len(zone_ids) > 1:
            warning_messages.append(
                f"Location '{normalized}' is shared by zones {zone_ids}; zone {zone_ids[0]} wins ties"
            )

    return warning_messages
