"""
Base database model with common fields and functionality.

This module contains the base SQLAlchemy model for transactional tables
(daily weather, weekly dengue cases) with a surrogate id and ingestion
timestamps.
"""

from sqlalchemy import BigInteger, Column, DateTime, Integer
from sqlalchemy.orm import declared_attr
from sqlalchemy.sql import func

from dengue_watch.database import Base


class BaseModel(Base):
    """
    Base model with common database fields.

    Transactional models inherit from this class to get an automatic id
    together with created_at and updated_at fields. Master data keyed by
    external identifiers (PSGC codes, WMO weather codes) derives from Base
    directly.
    """

    __abstract__ = True

    # BIGINT on PostgreSQL, INTEGER on SQLite so autoincrement keeps working
    id = Column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        index=True,
        autoincrement=True,
    )

    @declared_attr
    def created_at(cls):
        """Timestamp when record was ingested."""
        return Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    @declared_attr
    def updated_at(cls):
        """Timestamp when record was last updated."""
        return Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(id={self.id})>"
