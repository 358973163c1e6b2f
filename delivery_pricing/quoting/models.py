"""Outcomes of the order confirmation step."""

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

from delivery_pricing.matching.models import MatchedBy, Suggestion

CONFIRMED_MESSAGE = "Order delivery price confirmed"
PRICE_MISMATCH_MESSAGE = "Client price does not match computed delivery price"
NO_ZONE_MESSAGE = "Address cannot be matched to any delivery zone"


@dataclass(frozen=True)
class ConfirmedPrice:
    """The client's price equals the freshly recomputed price."""

    address_id: str
    confirmed_price: int
    zone_id: int
    zone_name: str
    matched_by: MatchedBy
    confidence: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": True,
            "message": CONFIRMED_MESSAGE,
            "addressId": self.address_id,
            "confirmedPrice": self.confirmed_price,
            "zoneId": self.zone_id,
            "zoneName": self.zone_name,
            "matchedBy": self.matched_by.value,
            "confidence": self.confidence,
        }


@dataclass(frozen=True)
class PriceConflict:
    """The client's price disagrees with the recomputed price.

    The server price is never substituted; the caller has to fetch a new
    estimate and retry.
    """

    address_id: str
    client_price: int
    computed_price: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": "price_mismatch",
            "message": PRICE_MISMATCH_MESSAGE,
        }


@dataclass(frozen=True)
class NoZone:
    """The address matches no zone; carries the suggestions an estimate would."""

    address_id: str
    suggestions: Tuple[Suggestion, ...] = field(default_factory=tuple)
    message: str = NO_ZONE_MESSAGE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": "no_delivery_zone",
            "message": self.message,
            "suggestions": [suggestion.to_dict() for suggestion in self.suggestions],
        }
