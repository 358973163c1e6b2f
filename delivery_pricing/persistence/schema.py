"""Database schema definition and ORM models for the address store."""

import logging

from sqlalchemy import Column, Index, Integer, String, Text, inspect
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base

from delivery_pricing.domain.models import Address, format_address_text

logger = logging.getLogger(__name__)

Base = declarative_base()


class AddressModel(Base):
    """ORM model for the addresses table.

    Addresses are stored as structured parts; the matcher sees them joined
    into a single line by format_address_text().
    """

    __tablename__ = "addresses"

    id = Column(Integer, primary_key=True, autoincrement=True)
    owner_id = Column(String(64), nullable=False)

    street = Column(Text, nullable=False, default="")
    city = Column(String(255), nullable=False, default="")
    state = Column(String(255), nullable=False, default="")
    country = Column(String(255), nullable=False, default="")

    __table_args__ = (Index("idx_addresses_owner", "owner_id"),)

    def to_domain(self) -> Address:
        """Convert ORM model to domain model."""
        return Address(
            id=str(self.id),
            owner_id=self.owner_id,
            text=format_address_text(self.street, self.city, self.state, self.country),
        )


def create_schema(engine: Engine) -> None:
    """Create all tables and indexes if they don't exist (idempotent).

    Args:
        engine: SQLAlchemy engine instance
    """
    logger.info("Creating database schema if not exists")

    try:
        Base.metadata.create_all(engine, checkfirst=True)
        tables = inspect(engine).get_table_names()
        logger.info(f"Database schema ready. Tables: {', '.join(tables)}")
    except Exception as e:
        logger.error(f"Failed to create database schema: {e}", exc_info=True)
        raise
