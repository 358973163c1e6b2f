"""Structured logging helpers for the delivery pricing service."""

import logging
from typing import Optional


class ComponentLoggerAdapter(logging.LoggerAdapter):
    """LoggerAdapter that merges a default component into per-call extras."""

    def process(self, msg, kwargs):
        """Merge the adapter's extra with the call's extra (call wins)."""
        extra = kwargs.get("extra", {})
        kwargs["extra"] = {**self.extra, **extra}
        return msg, kwargs


def get_logger(name: str, component: Optional[str] = None):
    """Get a logger, optionally tagging every record with a component.

    Args:
        name: Logger name (typically __name__)
        component: Optional component identifier to inject into all logs

    Returns:
        Logger or ComponentLoggerAdapter instance

    Example:
        >>> logger = get_logger(__name__, component="matching")
        >>> logger.info("Zone matched", extra={"event": "matching.zone.matched"})
    """
    logger = logging.getLogger(name)

    if component:
        return ComponentLoggerAdapter(logger, {"component": component})

    return logger
