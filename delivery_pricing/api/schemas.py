"""Pydantic request/response schemas for the delivery pricing API."""

from __future__ import annotations

from pydantic import BaseModel, Field, StrictInt

# --- Request Schemas ---
#
# Required fields are declared optional so that a missing value yields the
# API's own 400 validation_error instead of FastAPI's generic 422, which is
# reserved for "no delivery zone". clientPrice is strict: JSON booleans,
# numeric strings and floats are rejected rather than coerced.


class EstimateRequest(BaseModel):
    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {"examples": [{"addressId": "ADDR-1"}]},
    }

    address_id: str | None = Field(None, alias="addressId", max_length=255)
    user_id: str | None = Field(None, alias="userId", max_length=255)


class ConfirmRequest(BaseModel):
    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {"examples": [{"addressId": "ADDR-1", "clientPrice": 1500}]},
    }

    address_id: str | None = Field(None, alias="addressId", max_length=255)
    client_price: StrictInt | None = Field(None, alias="clientPrice")
    user_id: str | None = Field(None, alias="userId", max_length=255)


# --- Response Schemas ---


class ErrorResponse(BaseModel):
    error: str
    message: str = ""


class HealthResponse(BaseModel):
    status: str = "ok"
    zones: int
