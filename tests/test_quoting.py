"""Tests for the estimate/confirm protocol."""

import logging

import pytest

from delivery_pricing.matching import MatchedBy, MatchResult, NoMatchResult, ZoneMatcher
from delivery_pricing.persistence import AddressNotFoundError
from delivery_pricing.quoting import (
    ConfirmedPrice,
    InvalidPriceError,
    NoZone,
    PriceConflict,
    QuoteService,
)
from delivery_pricing.zones import build_zone_catalog


class TestEstimate:
    """Test suite for QuoteService.estimate()."""

    @pytest.mark.parametrize(
        "address_id,zone_id,price,keyword",
        [
            ("ADDR-1", 1, 1500, "Wuse Zone 2"),
            ("ADDR-2", 3, 2500, "Gwarinpa"),
            ("ADDR-3", 4, 3500, "Lugbe"),
            ("ADDR-4", 2, 2000, "Maitama"),
        ],
    )
    def test_seeded_addresses(self, quote_service, address_id, zone_id, price, keyword):
        result = quote_service.estimate("U-TEST", address_id)

        assert isinstance(result, MatchResult)
        assert result.zone_id == zone_id
        assert result.price == price
        assert result.matched_keyword == keyword

    def test_fuzzy_address(self, quote_service):
        result = quote_service.estimate("U-TEST", "ADDR-5")

        assert result.matched_by == MatchedBy.FUZZY
        assert result.zone_id == 2

    def test_unmatched_address(self, quote_service):
        result = quote_service.estimate("U-TEST", "ADDR-6")

        assert isinstance(result, NoMatchResult)
        assert len(result.suggestions) == 3

    def test_unknown_address(self, quote_service):
        with pytest.raises(AddressNotFoundError) as exc_info:
            quote_service.estimate("U-TEST", "ADDR-404")

        assert exc_info.value.address_id == "ADDR-404"

    def test_foreign_address_looks_missing(self, quote_service):
        with pytest.raises(AddressNotFoundError):
            quote_service.estimate("U-TEST", "ADDR-OTHER")

        # The owner can still see it
        assert quote_service.estimate("U-OTHER", "ADDR-OTHER").zone_id == 1

    def test_logs_estimate_with_context(self, quote_service, caplog):
        with caplog.at_level(logging.INFO, logger="delivery_pricing.quoting.service"):
            quote_service.estimate("U-TEST", "ADDR-4")

        record = next(r for r in caplog.records if getattr(r, "event", None) == "quote.estimated")
        assert record.zone_id == 2
        assert record.price == 2000
        assert record.component == "quoting"


class TestConfirmOrder:
    """Test suite for QuoteService.confirm_order()."""

    @pytest.mark.parametrize("address_id", ["ADDR-1", "ADDR-2", "ADDR-3", "ADDR-4", "ADDR-5"])
    def test_confirm_with_estimated_price(self, quote_service, address_id):
        estimate = quote_service.estimate("U-TEST", address_id)
        result = quote_service.confirm_order("U-TEST", address_id, estimate.price)

        assert isinstance(result, ConfirmedPrice)
        assert result.confirmed_price == estimate.price
        assert result.zone_id == estimate.zone_id
        assert result.zone_name == estimate.zone_name
        assert result.matched_by == estimate.matched_by
        assert result.confidence == estimate.confidence

    @pytest.mark.parametrize("delta", [1, -1, 500])
    def test_any_difference_is_a_conflict(self, quote_service, delta):
        estimate = quote_service.estimate("U-TEST", "ADDR-1")
        result = quote_service.confirm_order("U-TEST", "ADDR-1", estimate.price + delta)

        assert isinstance(result, PriceConflict)
        assert result.client_price == estimate.price + delta
        assert result.computed_price == estimate.price

    def test_conflict_never_substitutes_server_price(self, quote_service):
        payload = quote_service.confirm_order("U-TEST", "ADDR-1", 1).to_dict()

        assert payload == {
            "error": "price_mismatch",
            "message": "Client price does not match computed delivery price",
        }

    def test_no_zone_carries_estimate_suggestions(self, quote_service):
        estimate = quote_service.estimate("U-TEST", "ADDR-6")
        result = quote_service.confirm_order("U-TEST", "ADDR-6", 1500)

        assert isinstance(result, NoZone)
        assert result.suggestions == estimate.suggestions
        assert result.to_dict()["error"] == "no_delivery_zone"

    def test_unknown_address(self, quote_service):
        with pytest.raises(AddressNotFoundError):
            quote_service.confirm_order("U-TEST", "ADDR-404", 1500)

    @pytest.mark.parametrize("price", [0, -1500, 1500.0, "1500", True, None])
    def test_invalid_client_price(self, quote_service, price):
        with pytest.raises(InvalidPriceError):
            quote_service.confirm_order("U-TEST", "ADDR-1", price)

    def test_invalid_price_is_value_error(self):
        assert issubclass(InvalidPriceError, ValueError)

    def test_confirmed_to_dict(self, quote_service):
        payload = quote_service.confirm_order("U-TEST", "ADDR-4", 2000).to_dict()

        assert payload["success"] is True
        assert payload["message"] == "Order delivery price confirmed"
        assert payload["addressId"] == "ADDR-4"
        assert payload["confirmedPrice"] == 2000
        assert payload["zoneId"] == 2
        assert payload["matchedBy"] == "exact"

    def test_conflict_is_logged_as_warning(self, quote_service, caplog):
        with caplog.at_level(logging.WARNING, logger="delivery_pricing.quoting.service"):
            quote_service.confirm_order("U-TEST", "ADDR-1", 1501)

        assert any(getattr(r, "event", None) == "quote.price_conflict" for r in caplog.records)


class TestCatalogIsolation:
    """Estimate and confirm follow the catalog the service was built with."""

    def test_confirm_rejects_price_from_other_catalog(self, address_repository):
        cheap = QuoteService(
            ZoneMatcher(build_zone_catalog([{"zoneId": 1, "price": 100, "locations": ["Wuse"]}])),
            address_repository,
        )
        dear = QuoteService(
            ZoneMatcher(build_zone_catalog([{"zoneId": 1, "price": 900, "locations": ["Wuse"]}])),
            address_repository,
        )

        stale_price = cheap.estimate("U-TEST", "ADDR-1").price
        result = dear.confirm_order("U-TEST", "ADDR-1", stale_price)

        assert isinstance(result, PriceConflict)
        assert result.computed_price == 900
