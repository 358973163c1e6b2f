"""Address store used by the pricing core to resolve customer addresses.

Public API:
    # Database lifecycle (only needed for the SQL-backed store)
    - init_database(database_url: str) -> None
    - get_session() -> ContextManager[Session]
    - close_database() -> None

    # Address lookup
    - AddressLookup: protocol consumed by the quote service
    - InMemoryAddressRepository: seeded, lock-guarded dict store
    - SqlAddressRepository: address rows within a session
    - DatabaseAddressLookup: AddressLookup over SqlAddressRepository

    # Exceptions
    - PersistenceError, DatabaseConnectionError, RecordNotFoundError,
      AddressNotFoundError

Example usage:
    >>> from delivery_pricing.persistence import init_database, DatabaseAddressLookup
    >>> init_database("sqlite:///./data/addresses.db")
    >>> lookup = DatabaseAddressLookup()
    >>> address = lookup.get_by_id("U-TEST", "1")
"""

from .database import close_database, get_session, init_database
from .exceptions import (
    AddressNotFoundError,
    DatabaseConnectionError,
    PersistenceError,
    RecordNotFoundError,
)
from .repositories import (
    AddressLookup,
    DatabaseAddressLookup,
    InMemoryAddressRepository,
    SqlAddressRepository,
)

__all__ = [
    # Database functions
    "init_database",
    "get_session",
    "close_database",
    # Repositories
    "AddressLookup",
    "InMemoryAddressRepository",
    "SqlAddressRepository",
    "DatabaseAddressLookup",
    # Exceptions
    "PersistenceError",
    "DatabaseConnectionError",
    "RecordNotFoundError",
    "AddressNotFoundError",
]
