"""Data models for the zone matching engine.

A match attempt produces exactly one of MatchResult or NoMatchResult. Both
are frozen, request-scoped values; to_dict() renders the wire format used by
the HTTP and CLI surfaces.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Tuple


class MatchedBy(str, Enum):
    """Which matching phase produced a MatchResult."""

    EXACT = "exact"
    FUZZY = "fuzzy"


@dataclass(frozen=True)
class MatchResult:
    """An address resolved to a delivery zone.

    Attributes:
        zone_id: Identifier of the matched zone
        zone_name: Display name of the matched zone
        matched_keyword: Zone keyword that matched, as written in the catalog
        matched_by: Phase that produced the match
        confidence: 1.0 for exact matches, the similarity score for fuzzy ones
        price: Delivery price of the zone in minor currency units
    """

    zone_id: int
    zone_name: str
    matched_keyword: str
    matched_by: MatchedBy
    confidence: float
    price: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "zoneId": self.zone_id,
            "zoneName": self.zone_name,
            "matchedKeyword": self.matched_keyword,
            "matchedBy": self.matched_by.value,
            "confidence": self.confidence,
            "price": self.price,
        }


@dataclass(frozen=True)
class Suggestion:
    """A candidate zone offered when an address could not be matched."""

    zone_id: int
    keyword: str
    price: int
    confidence: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "zoneId": self.zone_id,
            "keyword": self.keyword,
            "price": self.price,
            "confidence": self.confidence,
        }


@dataclass(frozen=True)
class NoMatchResult:
    """No zone matched; carries up to three ranked suggestions.

    Attributes:
        message: Fixed human-readable explanation
        suggestions: Best-scoring keywords, highest confidence first
    """

    message: str
    suggestions: Tuple[Suggestion, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "matchedBy": "none",
            "message": self.message,
            "suggestions": [suggestion.to_dict() for suggestion in self.suggestions],
        }
