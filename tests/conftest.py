"""Shared fixtures for the delivery pricing test suite."""

import pytest

from delivery_pricing.domain.models import Address
from delivery_pricing.logging.context import clear_log_context
from delivery_pricing.matching import ZoneMatcher
from delivery_pricing.persistence import InMemoryAddressRepository
from delivery_pricing.quoting import QuoteService
from delivery_pricing.zones import build_zone_catalog


ABUJA_ZONES = [
    {"zoneId": 1, "price": 1500, "locations": ["Wuse", "Wuse Zone 2", "Garki"]},
    {"zoneId": 2, "price": 2000, "locations": ["Maitama", "Asokoro"]},
    {"zoneId": 3, "price": 2500, "locations": ["Gwarinpa", "Life Camp"]},
    {"zoneId": 4, "price": 3500, "locations": ["Lugbe", "FCT"]},
]


@pytest.fixture(autouse=True)
def clean_context():
    """Clear logging context before and after each test."""
    clear_log_context()
    yield
    clear_log_context()


@pytest.fixture
def abuja_catalog():
    return build_zone_catalog(ABUJA_ZONES)


@pytest.fixture
def lagos_catalog():
    """Two zones whose keywords overlap: "Lagos" is a prefix of "Lagos Island"."""
    return build_zone_catalog(
        [
            {"zoneId": 1, "price": 1000, "locations": ["Lagos"]},
            {"zoneId": 2, "price": 1500, "locations": ["Lagos Island"]},
        ]
    )


@pytest.fixture
def address_repository():
    return InMemoryAddressRepository(
        [
            Address(id="ADDR-1", owner_id="U-TEST", text="No. 4, Wuse Zone II, Abuja"),
            Address(id="ADDR-2", owner_id="U-TEST", text="Block 8, Gwarinpa 6th Ave, Abuja"),
            Address(id="ADDR-3", owner_id="U-TEST", text="River Park Lugbe Estate, FCT"),
            Address(id="ADDR-4", owner_id="U-TEST", text="House 2, Maitama Abuja"),
            Address(id="ADDR-5", owner_id="U-TEST", text="Maitamma"),
            Address(id="ADDR-6", owner_id="U-TEST", text="12 Unknown Street, Kano"),
            Address(id="ADDR-OTHER", owner_id="U-OTHER", text="Wuse Market, Abuja"),
        ]
    )


@pytest.fixture
def quote_service(abuja_catalog, address_repository):
    return QuoteService(ZoneMatcher(abuja_catalog), address_repository)
