"""Context propagation for structured logging.

Request-scoped fields (owner_id, address_id, operation) are kept in a
ContextVar so every record emitted while serving a quote carries them,
across threads and asyncio tasks alike.
"""

from contextvars import ContextVar, Token
from typing import Any, Dict, Optional


LogContextVar: ContextVar[Dict[str, Any]] = ContextVar("log_context", default={})


def get_log_context() -> Dict[str, Any]:
    """Return a copy of the current logging context."""
    return LogContextVar.get().copy()


def push_log_context(**kwargs) -> Token:
    """Merge new fields into the logging context.

    Args:
        **kwargs: Key-value pairs to add to the logging context

    Returns:
        Token that restores the previous context via pop_log_context()

    Example:
        >>> token = push_log_context(owner_id="U-TEST", address_id="ADDR-1")
        >>> pop_log_context(token)
    """
    current = LogContextVar.get()
    return LogContextVar.set({**current, **kwargs})


def pop_log_context(token: Token) -> None:
    """Restore the logging context to the state captured by token."""
    LogContextVar.reset(token)


def clear_log_context() -> None:
    """Clear all logging context fields (mostly useful in tests)."""
    LogContextVar.set({})


class log_context:
    """Context manager for scoped logging context.

    Example:
        >>> with log_context(operation="estimate", address_id="ADDR-1"):
        ...     logger.info("Estimating delivery price")
    """

    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.token: Optional[Token] = None

    def __enter__(self):
        self.token = push_log_context(**self.kwargs)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.token is not None:
            pop_log_context(self.token)
        return False
