"""Configuration loader for the delivery pricing service."""

from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import ValidationError

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .models import AppConfig
from .validators import check_for_warnings, emit_warnings


def load_config(config_path: Optional[Path] = None) -> tuple[AppConfig, EnvironmentConfig]:
    """
    Load and validate configuration from a YAML file and environment variables.

    Config file lookup order:
    1. The provided config_path, if given
    2. config.yaml in the current directory
    3. ./config/config.yaml

    A relative zones_file in the config file is resolved against the config
    file's directory. ZONES_FILE from the environment overrides it as-is.

    Args:
        config_path: Optional path to configuration file

    Returns:
        Tuple of (AppConfig, EnvironmentConfig) with validated configuration

    Raises:
        ConfigurationError: If configuration is invalid or file not found
    """
    config_file = _find_config_file(config_path)

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            config_dict = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigurationError(
            "Configuration file not found",
            source=str(config_file),
            suggestions=[
                "Copy config.example.yaml to config.yaml",
                f"Ensure {config_file} exists and is readable",
            ],
        )
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Failed to parse YAML configuration: {e}",
            source=str(config_file),
            suggestions=[
                "Check YAML syntax in your config file",
                "Ensure proper indentation (use spaces, not tabs)",
            ],
        )
    except OSError as e:
        raise ConfigurationError(
            f"Failed to read configuration file: {e}",
            source=str(config_file),
            suggestions=[
                f"Ensure {config_file} is readable",
                "Check file permissions",
            ],
        )

    # An empty file is a valid "all defaults" configuration
    if config_dict is None:
        config_dict = {}

    if not isinstance(config_dict, dict):
        raise ConfigurationError(
            "Configuration file must contain a mapping at the top level",
            source=str(config_file),
            suggestions=["Review config.example.yaml for the expected layout"],
        )

    warnings = check_for_warnings(config_dict)
    if warnings:
        emit_warnings(warnings)

    try:
        app_config = AppConfig.model_validate(config_dict)
    except ValidationError as e:
        raise ConfigurationError(
            "Configuration validation failed",
            errors=format_validation_errors(e),
            source=str(config_file),
            suggestions=[
                "Review config.example.yaml for correct format",
                "Verify field types match the expected schema",
            ],
        ) from e

    if not app_config.zones_file.is_absolute():
        app_config.zones_file = config_file.parent / app_config.zones_file

    env_config = load_environment_config()
    if env_config.zones_file is not None:
        app_config.zones_file = env_config.zones_file

    return app_config, env_config


def format_validation_errors(error: ValidationError) -> List[str]:
    """Turn pydantic validation errors into user-friendly messages.

    Args:
        error: ValidationError raised by a model_validate call

    Returns:
        One message per failing field, prefixed by its location path
    """
    messages = []
    for detail in error.errors():
        field_path = " -> ".join(str(loc) for loc in detail["loc"])
        error_type = detail["type"]

        if error_type == "missing":
            messages.append(f"Missing required field: {field_path}")
        elif error_type in ("string_type", "int_type", "int_parsing", "bool_type", "list_type"):
            expected_type = error_type.split("_")[0]
            messages.append(
                f"Invalid type for '{field_path}': expected {expected_type}, got {detail.get('input')!r}"
            )
        elif field_path:
            messages.append(f"{field_path}: {detail['msg']}")
        else:
            messages.append(detail["msg"])
    return messages


def _find_config_file(config_path: Optional[Path] = None) -> Path:
    """
    Find the configuration file using the fallback order of load_config().

    Raises:
        ConfigurationError: If no config file is found
    """
    if config_path:
        if not config_path.exists():
            raise ConfigurationError(
                f"Specified configuration file not found: {config_path}",
                suggestions=[
                    f"Ensure {config_path} exists",
                    "Copy config.example.yaml to config.yaml",
                ],
            )
        return config_path

    candidates = [
        Path("config.yaml"),
        Path("config") / "config.yaml",
    ]

    for candidate in candidates:
        if candidate.exists():
            return candidate

    raise ConfigurationError(
        "Configuration file not found",
        errors=[
            "Tried: config.yaml",
            "Tried: config/config.yaml",
        ],
        suggestions=[
            "Copy config.example.yaml to config.yaml",
            "Use --config flag to specify a custom location",
        ],
    )
