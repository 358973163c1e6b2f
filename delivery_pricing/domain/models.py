"""Domain models consumed from the address store.

Addresses are owned by the customer-facing system; the pricing core only
reads them.
"""

from typing import Optional

from pydantic import BaseModel, Field


class Address(BaseModel):
    """A stored customer address, as seen by the pricing core."""

    id: str = Field(..., min_length=1, description="Opaque address identifier")
    owner_id: str = Field(..., min_length=1, description="Identifier of the owning user")
    text: str = Field("", description="Free-text address used for zone matching")

    model_config = {
        "frozen": True,
        "json_schema_extra": {"example": {
            "id": "ADDR-1",
            "owner_id": "U-TEST",
            "text": "No. 4, Wuse Zone II, Abuja",
        }},
    }


def format_address_text(
    street: Optional[str],
    city: Optional[str] = None,
    state: Optional[str] = None,
    country: Optional[str] = None,
) -> str:
    """Join structured address parts into the free text the matcher expects.

    Blank parts are skipped.

    Example:
        >>> format_address_text("Plot 12 Adetokunbo Ademola Crescent", "Wuse 2", "", "Nigeria")
        'Plot 12 Adetokunbo Ademola Crescent, Wuse 2, Nigeria'
    """
    parts = [part.strip() for part in (street, city, state, country) if part and part.strip()]
    return ", ".join(parts)
