"""Data models for the delivery zone catalog.

ZoneRecord validates one entry of the catalog file; Zone and ZoneKeyword
are the immutable values the matcher works with once the catalog is loaded.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field, field_validator


class ZoneRecord(BaseModel):
    """A single record of the zone catalog file.

    Field names follow the file format (camelCase zoneId), e.g.:
        {"zoneId": 1, "price": 1500, "locations": ["Wuse", "Wuse Zone 2"]}
    """

    zone_id: int = Field(..., alias="zoneId", description="Unique zone identifier")
    price: int = Field(..., gt=0, description="Flat delivery price in minor currency units")
    locations: List[str] = Field(
        default_factory=list, description="Keywords that identify addresses in this zone"
    )
    name: Optional[str] = Field(None, description="Optional display name")

    model_config = {"populate_by_name": True, "strict": True}

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: Optional[str]) -> Optional[str]:
        """Treat a blank name as unset."""
        if v is None:
            return None
        stripped = v.strip()
        return stripped or None


@dataclass(frozen=True)
class Zone:
    """A priced delivery region identified by its keywords.

    Attributes:
        zone_id: Unique zone identifier
        price: Flat delivery price in minor currency units
        keywords: Keywords as written in the catalog, in catalog order
        name: Display name ("Zone <id>" unless the catalog names it)
    """

    zone_id: int
    price: int
    keywords: Tuple[str, ...]
    name: str

    @classmethod
    def from_record(cls, record: ZoneRecord) -> "Zone":
        """Build a Zone from a validated record, dropping repeated keywords."""
        keywords = tuple(dict.fromkeys(record.locations))
        return cls(
            zone_id=record.zone_id,
            price=record.price,
            keywords=keywords,
            name=record.name or f"Zone {record.zone_id}",
        )


@dataclass(frozen=True)
class ZoneKeyword:
    """One keyword of one zone, with its normalized form precomputed.

    Attributes:
        zone: Zone the keyword belongs to
        keyword: Keyword as written in the catalog
        normalized: normalize(keyword)
    """

    zone: Zone
    keyword: str
    normalized: str
