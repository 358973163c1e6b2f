"""Two-phase delivery pricing: advisory estimate, authoritative confirm.

Both operations run the same address lookup and matcher pipeline through
_compute_quote(). Confirmation never trusts a price the client cached from
an earlier estimate: it recomputes from scratch and only confirms on exact
equality.
"""

import logging
from typing import Optional, Union

from delivery_pricing.logging import get_logger
from delivery_pricing.logging.context import log_context
from delivery_pricing.matching import MatchResult, NoMatchResult, ZoneMatcher
from delivery_pricing.persistence import AddressLookup

from .models import ConfirmedPrice, NoZone, PriceConflict

logger = get_logger(__name__, component="quoting")


class InvalidPriceError(ValueError):
    """Raised when a confirmation carries a non-positive or non-integer price."""


class QuoteService:
    """Estimates and confirms delivery prices for stored addresses.

    Responsibilities:
    - Resolve the address through the lookup collaborator
    - Run the shared matcher on the address text
    - Compare client prices against the recomputed price at confirm time
    """

    def __init__(
        self,
        matcher: ZoneMatcher,
        address_lookup: AddressLookup,
        logger_instance: Optional[logging.Logger] = None,
    ):
        """Initialize QuoteService.

        Args:
            matcher: Matcher shared by all requests
            address_lookup: Address store collaborator
            logger_instance: Optional logger instance (defaults to module logger)
        """
        self.matcher = matcher
        self.address_lookup = address_lookup
        self.logger = logger_instance or logger

    def estimate(self, owner_id: str, address_id: str) -> Union[MatchResult, NoMatchResult]:
        """Quote a delivery price for one of the owner's addresses.

        Args:
            owner_id: Identity of the requesting user
            address_id: Identifier of a stored address

        Returns:
            MatchResult, or NoMatchResult with suggestions

        Raises:
            AddressNotFoundError: If the address is missing or owned by someone else
        """
        with log_context(operation="estimate", owner_id=owner_id, address_id=address_id):
            result = self._compute_quote(owner_id, address_id)

            if isinstance(result, MatchResult):
                self.logger.info(
                    f"Estimated delivery price {result.price} for zone {result.zone_id}",
                    extra={
                        "event": "quote.estimated",
                        "zone_id": result.zone_id,
                        "price": result.price,
                        "matched_by": result.matched_by.value,
                        "confidence": result.confidence,
                    },
                )
            else:
                self.logger.info(
                    "No delivery zone for address",
                    extra={
                        "event": "quote.no_zone",
                        "suggestion_count": len(result.suggestions),
                    },
                )
            return result

    def confirm_order(
        self, owner_id: str, address_id: str, client_price: int
    ) -> Union[ConfirmedPrice, PriceConflict, NoZone]:
        """Re-verify the client's delivery price before an order is placed.

        Args:
            owner_id: Identity of the requesting user
            address_id: Identifier of a stored address
            client_price: Price the client intends to pay, in minor units

        Returns:
            ConfirmedPrice on exact equality, PriceConflict on any difference,
            NoZone when the address no longer matches a zone

        Raises:
            InvalidPriceError: If client_price is not a positive integer
            AddressNotFoundError: If the address is missing or owned by someone else
        """
        if isinstance(client_price, bool) or not isinstance(client_price, int) or client_price <= 0:
            raise InvalidPriceError(f"clientPrice must be a positive integer, got {client_price!r}")

        with log_context(operation="confirm", owner_id=owner_id, address_id=address_id):
            result = self._compute_quote(owner_id, address_id)

            if isinstance(result, NoMatchResult):
                self.logger.info(
                    "Confirmation rejected: no delivery zone",
                    extra={"event": "quote.confirm.no_zone", "client_price": client_price},
                )
                return NoZone(address_id=address_id, suggestions=result.suggestions)

            if client_price != result.price:
                self.logger.warning(
                    "Confirmation rejected: price mismatch",
                    extra={
                        "event": "quote.price_conflict",
                        "zone_id": result.zone_id,
                        "client_price": client_price,
                        "computed_price": result.price,
                    },
                )
                return PriceConflict(
                    address_id=address_id,
                    client_price=client_price,
                    computed_price=result.price,
                )

            self.logger.info(
                f"Confirmed delivery price {result.price} for zone {result.zone_id}",
                extra={
                    "event": "quote.confirmed",
                    "zone_id": result.zone_id,
                    "price": result.price,
                },
            )
            return ConfirmedPrice(
                address_id=address_id,
                confirmed_price=result.price,
                zone_id=result.zone_id,
                zone_name=result.zone_name,
                matched_by=result.matched_by,
                confidence=result.confidence,
            )

    def _compute_quote(self, owner_id: str, address_id: str) -> Union[MatchResult, NoMatchResult]:
        address = self.address_lookup.get_by_id(owner_id, address_id)
        return self.matcher.match_address(address.text)
