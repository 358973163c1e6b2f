"""Immutable in-memory delivery zone catalog."""

from typing import Iterable, Iterator, Optional, Tuple

from delivery_pricing.normalization import normalize

from .models import Zone, ZoneKeyword


class ZoneCatalog:
    """Ordered, read-only collection of delivery zones.

    The catalog is built once at startup and shared by reference across
    concurrent requests. Nothing mutates it after construction, so readers
    need no locking.

    Zone order is significant: it is the tie-break order used by the matcher.
    Every keyword is normalized once here, in (zone, keyword) catalog order.
    """

    __slots__ = ("_zones", "_entries")

    def __init__(self, zones: Iterable[Zone] = ()):
        self._zones: Tuple[Zone, ...] = tuple(zones)
        self._entries: Tuple[ZoneKeyword, ...] = tuple(
            ZoneKeyword(zone=zone, keyword=keyword, normalized=normalize(keyword))
            for zone in self._zones
            for keyword in zone.keywords
        )

    @property
    def zones(self) -> Tuple[Zone, ...]:
        """Zones in catalog order."""
        return self._zones

    @property
    def entries(self) -> Tuple[ZoneKeyword, ...]:
        """All keywords of all zones, in catalog order."""
        return self._entries

    def get(self, zone_id: int) -> Optional[Zone]:
        """Return the zone with the given identifier, or None."""
        for zone in self._zones:
            if zone.zone_id == zone_id:
                return zone
        return None

    def __len__(self) -> int:
        return len(self._zones)

    def __iter__(self) -> Iterator[Zone]:
        return iter(self._zones)

    def __repr__(self) -> str:
        return f"ZoneCatalog(zones={len(self._zones)}, keywords={len(self._entries)})"
