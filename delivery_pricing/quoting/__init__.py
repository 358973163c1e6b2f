"""Quote/confirm protocol for delivery pricing.

This module provides:
- QuoteService: estimate() and confirm_order() over one shared computation
- ConfirmedPrice / PriceConflict / NoZone: confirmation outcomes
- InvalidPriceError: rejected client price input
"""

from .models import ConfirmedPrice, NoZone, PriceConflict
from .service import InvalidPriceError, QuoteService

__all__ = [
    "QuoteService",
    "ConfirmedPrice",
    "PriceConflict",
    "NoZone",
    "InvalidPriceError",
]
