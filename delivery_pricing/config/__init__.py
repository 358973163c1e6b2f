"""Configuration management module for the delivery pricing service."""

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import CatalogLoadError, ConfigurationError
from .loader import format_validation_errors, load_config
from .models import (
    AddressSeed,
    ApiConfig,
    AppConfig,
    LogFormat,
    LoggingConfig,
    LogLevel,
)

__all__ = [
    # Loader functions
    "load_config",
    "load_environment_config",
    "format_validation_errors",
    # Configuration models
    "AppConfig",
    "AddressSeed",
    "ApiConfig",
    "LoggingConfig",
    "EnvironmentConfig",
    # Enums
    "LogLevel",
    "LogFormat",
    # Exceptions
    "ConfigurationError",
    "CatalogLoadError",
]
