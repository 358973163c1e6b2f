"""Environment variable loading and validation."""

import os
from pathlib import Path
from typing import Optional

from .exceptions import ConfigurationError

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class EnvironmentConfig:
    """Environment variable configuration holder."""

    def __init__(
        self,
        zones_file: Optional[Path] = None,
        database_url: Optional[str] = None,
        log_level: Optional[str] = None,
        environment: Optional[str] = None,
    ):
        self.zones_file = zones_file
        self.database_url = database_url
        self.log_level = log_level
        self.environment = environment or "local"


def load_environment_config() -> EnvironmentConfig:
    """
    Load and validate environment variables.

    All variables are optional:
    - ZONES_FILE: Overrides the zone catalog path from the config file
    - DATABASE_URL: SQLAlchemy URL of the address store. When unset, the
      in-memory store seeded from the config file is used
    - LOG_LEVEL: Override log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - ENVIRONMENT: Environment label attached to every log record

    Returns:
        EnvironmentConfig object with validated values

    Raises:
        ConfigurationError: If a variable is set to an invalid value
    """
    errors = []

    zones_file = os.getenv("ZONES_FILE")
    database_url = os.getenv("DATABASE_URL")
    log_level = os.getenv("LOG_LEVEL")
    environment = os.getenv("ENVIRONMENT")

    if zones_file is not None and not zones_file.strip():
        errors.append("ZONES_FILE is set but empty")

    if database_url and "://" not in database_url:
        errors.append(
            f"Invalid DATABASE_URL: '{database_url}'. Expected a URL such as sqlite:///./data/addresses.db"
        )

    if log_level:
        if log_level.upper() not in VALID_LOG_LEVELS:
            errors.append(
                f"Invalid LOG_LEVEL: '{log_level}'. Must be one of: {', '.join(VALID_LOG_LEVELS)}"
            )
        else:
            log_level = log_level.upper()

    if errors:
        raise ConfigurationError(
            "Environment variable validation failed",
            errors=errors,
            suggestions=[
                "Copy .env.example to .env and adjust the values",
                "Unset variables you do not need; all of them are optional",
            ],
        )

    return EnvironmentConfig(
        zones_file=Path(zones_file) if zones_file else None,
        database_url=database_url or None,
        log_level=log_level or None,
        environment=environment,
    )
