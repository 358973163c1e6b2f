"""Domain models for the delivery pricing service."""

from .models import Address, format_address_text

__all__ = ["Address", "format_address_text"]
