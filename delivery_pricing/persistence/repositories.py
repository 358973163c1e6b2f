"""Address lookup repositories.

The pricing core resolves addresses through the AddressLookup protocol.
Two implementations are provided:
- InMemoryAddressRepository: seeded from configuration, guarded by a lock
- DatabaseAddressLookup: SQLAlchemy-backed, one session per lookup
"""

import logging
import threading
from typing import Callable, ContextManager, Dict, Iterable, List, Optional, Protocol

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from delivery_pricing.domain.models import Address

from .database import get_session
from .exceptions import AddressNotFoundError, PersistenceError
from .schema import AddressModel

logger = logging.getLogger(__name__)


class AddressLookup(Protocol):
    """Capability the pricing core needs from the address store."""

    def get_by_id(self, owner_id: str, address_id: str) -> Address:
        """Return the owner's address or raise AddressNotFoundError."""
        ...

    def list_by_owner(self, owner_id: str) -> List[Address]:
        """Return every address belonging to owner_id."""
        ...


class InMemoryAddressRepository:
    """Dict-backed address store.

    Reads and writes may come from several request threads, so the map is
    guarded by a lock.
    """

    def __init__(self, addresses: Iterable[Address] = ()):
        self._addresses: Dict[str, Address] = {}
        self._lock = threading.RLock()
        for address in addresses:
            self.add(address)

    def add(self, address: Address) -> Address:
        """Insert or replace an address."""
        with self._lock:
            self._addresses[address.id] = address
        return address

    def get_by_id(self, owner_id: str, address_id: str) -> Address:
        with self._lock:
            address = self._addresses.get(address_id)

        if address is None or address.owner_id != owner_id:
            raise AddressNotFoundError(owner_id, address_id)
        return address

    def list_by_owner(self, owner_id: str) -> List[Address]:
        with self._lock:
            return [a for a in self._addresses.values() if a.owner_id == owner_id]

    def __len__(self) -> int:
        with self._lock:
            return len(self._addresses)


class SqlAddressRepository:
    """Repository for address rows within a caller-managed session."""

    def __init__(self, session: Session):
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy session for database operations
        """
        self.session = session

    def find(self, owner_id: str, address_id: str) -> Optional[Address]:
        """Retrieve an owner's address by id.

        Args:
            owner_id: Owner the address must belong to
            address_id: Address identifier (the row id as a string)

        Returns:
            Address if found and owned by owner_id, None otherwise

        Raises:
            PersistenceError: If database error occurs
        """
        # Row ids are integers; anything else cannot exist
        if not (address_id.isascii() and address_id.isdigit()):
            return None

        try:
            stmt = select(AddressModel).where(
                AddressModel.id == int(address_id),
                AddressModel.owner_id == owner_id,
            )
            model = self.session.execute(stmt).scalar_one_or_none()
            return model.to_domain() if model is not None else None

        except SQLAlchemyError as e:
            logger.error(f"Error retrieving address {address_id}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to retrieve address: {e}") from e

    def list_by_owner(self, owner_id: str) -> List[Address]:
        """Return all addresses of an owner ordered by id.

        Raises:
            PersistenceError: If database error occurs
        """
        try:
            stmt = (
                select(AddressModel)
                .where(AddressModel.owner_id == owner_id)
                .order_by(AddressModel.id)
            )
            return [model.to_domain() for model in self.session.execute(stmt).scalars().all()]

        except SQLAlchemyError as e:
            logger.error(f"Error listing addresses for owner {owner_id}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to list addresses: {e}") from e


class DatabaseAddressLookup:
    """AddressLookup over the relational store, one short session per call."""

    def __init__(self, session_scope: Callable[[], ContextManager[Session]] = get_session):
        """Initialize the lookup.

        Args:
            session_scope: Factory for transactional session scopes
        """
        self.session_scope = session_scope

    def get_by_id(self, owner_id: str, address_id: str) -> Address:
        with self.session_scope() as session:
            address = SqlAddressRepository(session).find(owner_id, address_id)

        if address is None:
            raise AddressNotFoundError(owner_id, address_id)
        return address

    def list_by_owner(self, owner_id: str) -> List[Address]:
        with self.session_scope() as session:
            return SqlAddressRepository(session).list_by_owner(owner_id)
