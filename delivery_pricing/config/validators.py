"""Additional validation utilities for configuration."""

import warnings
from typing import Any, Dict, List


def check_for_warnings(config_dict: Dict[str, Any]) -> List[str]:
    """
    Check raw configuration for legal but suspicious settings.

    Args:
        config_dict: Raw configuration dictionary

    Returns:
        List of warning messages
    """
    warning_messages = []

    addresses = config_dict.get("addresses", [])
    owners = set()
    if isinstance(addresses, list):
        for address in addresses:
            if not isinstance(address, dict):
                continue
            owners.add(address.get("owner_id"))
            text = address.get("text")
            if isinstance(text, str) and not text.strip():
                warning_messages.append(
                    f"Address '{address.get('id', 'Unknown')}' has empty text and can never match a zone"
                )

    default_owner = config_dict.get("default_owner_id")
    if isinstance(default_owner, str) and default_owner.strip() and addresses:
        if default_owner.strip() not in owners:
            warning_messages.append(
                f"default_owner_id '{default_owner.strip()}' owns none of the configured addresses"
            )

    return warning_messages


def emit_warnings(warning_messages: List[str]) -> None:
    """Emit warning messages using Python's warnings module."""
    for message in warning_messages:
        warnings.warn(message, UserWarning, stacklevel=2)
