"""Configuration schema models using Pydantic."""

from enum import Enum
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


class AddressSeed(BaseModel):
    """A stored customer address used to seed the in-memory address store."""

    id: str = Field(..., min_length=1, description="Address identifier")
    owner_id: str = Field(..., min_length=1, description="Identifier of the owning user")
    text: str = Field(..., description="Free-text address as entered by the customer")

    @field_validator("id", "owner_id")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        """Strip whitespace from identifier fields."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("Field cannot be empty or whitespace-only")
        return stripped


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(
        LogFormat.KEY_VALUE, description="Log output format (json or key-value)"
    )

    model_config = {"use_enum_values": True}


class ApiConfig(BaseModel):
    """HTTP server settings used by the `serve` command."""

    host: str = Field("127.0.0.1", min_length=1, description="Interface to bind")
    port: int = Field(8000, ge=1, le=65535, description="TCP port to listen on")


class AppConfig(BaseModel):
    """Root configuration object for the delivery pricing service."""

    zones_file: Path = Field(
        Path("data/delivery_zones.json"),
        description="Path to the delivery zone catalog (JSON or YAML)",
    )
    default_owner_id: Optional[str] = Field(
        None,
        description="Owner used when a request carries no user identity",
    )
    addresses: List[AddressSeed] = Field(
        default_factory=list,
        description="Addresses loaded into the in-memory address store",
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
    api: ApiConfig = Field(default_factory=ApiConfig, description="HTTP server settings")

    @field_validator("default_owner_id")
    @classmethod
    def strip_owner(cls, v: Optional[str]) -> Optional[str]:
        """Treat a blank default owner as unset."""
        if v is None:
            return None
        stripped = v.strip()
        return stripped or None

    @model_validator(mode="after")
    def validate_unique_addresses(self):
        """Reject seed lists that reuse an address identifier."""
        seen = set()
        for address in self.addresses:
            if address.id in seen:
                raise ValueError(f"Duplicate address id: {address.id} appears multiple times")
            seen.add(address.id)
        return self
