"""
Base read operations.

This module contains generic read operations shared by the model-specific
query classes. The aggregation engine never writes, so only lookups are
provided.
"""

from typing import Any, Generic, Optional, Type, TypeVar
from sqlalchemy.ext.asyncio import AsyncSession

from dengue_watch.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class CRUDBase(Generic[ModelType]):
    """
    Base read operations class.

    Provides generic lookups that can be used by specific model query classes.
    """

    def __init__(self, model: Type[ModelType]):
        """
        Initialize read operations for a specific model.

        Args:
            model: The SQLAlchemy model class
        """
        self.model = model

    async def get(self, db: AsyncSession, id: Any) -> Optional[ModelType]:
        """
        Get a single record by primary key.

        Args:
            db: Database session
            id: Primary key value

        Returns:
            Model instance or None if not found
        """
        return await db.get(self.model, id)

