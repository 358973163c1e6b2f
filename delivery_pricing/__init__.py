"""Delivery pricing: resolve customer addresses to priced delivery zones.

Estimates are advisory; every order confirmation recomputes the price from
the stored address and rejects any client price that differs.
"""

__version__ = "0.1.0"
