"""Persistence layer exceptions.

All persistence exceptions inherit from PersistenceError so callers can
catch every store failure with a single except clause.
"""


class PersistenceError(Exception):
    """Base exception for all persistence layer errors."""

    pass


class DatabaseConnectionError(PersistenceError):
    """Raised when database connection or initialization fails.

    Examples:
    - Invalid database URL format
    - Database file not accessible
    - Database used before init_database() was called
    """

    pass


class RecordNotFoundError(PersistenceError):
    """Raised when a required record is not found."""

    pass


class AddressNotFoundError(RecordNotFoundError):
    """Raised when an address does not exist or belongs to another owner.

    Both cases deliberately look the same to the caller, so address ids
    cannot be discovered across owners.
    """

    def __init__(self, owner_id: str, address_id: str):
        self.owner_id = owner_id
        self.address_id = address_id
        super().__init__(f"Address {address_id} not found for owner {owner_id}")

