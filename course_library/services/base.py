import logging
import uuid
from typing import Generic, List, Optional, Type, TypeVar

from sqlalchemy.orm import selectinload
from sqlmodel import func, select
from sqlmodel.ext.asyncio.session import AsyncSession

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType")


class BaseCRUDService(Generic[ModelType]):
    """Unit-of-work style CRUD operations on a SQLModel table.

    ``add`` and ``delete`` only stage changes on the session; nothing is
    written until ``save`` commits the request's work in one go.
    """

    def __init__(self, session: AsyncSession, model: Type[ModelType]):
        self.session = session
        self.model = model

    async def get_by_id(
        self,
        id: uuid.UUID,
        relationships: Optional[List[str]] = None,
    ) -> Optional[ModelType]:
        """Get a single record by ID with optional relationship loading.

        Args:
            id: Record ID
            relationships: List of relationship attribute names to eager load

        Returns:
            Model instance, or None if not found
        """
        query = select(self.model).where(self.model.id == id)

        # Eager load relationships if specified
        if relationships:
            for rel in relationships:
                query = query.options(selectinload(getattr(self.model, rel)))

        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def exists(self, id: uuid.UUID) -> bool:
        query = select(func.count()).select_from(self.model).where(self.model.id == id)
        result = await self.session.execute(query)
        return result.scalar_one() > 0

    def add(self, obj: ModelType) -> ModelType:
        """Stage a new record for insertion."""
        self.session.add(obj)
        return obj

    async def delete(self, obj: ModelType) -> None:
        """Stage a record for deletion, cascading along its relationships."""
        await self.session.delete(obj)

    async def save(self) -> None:
        """Commit all staged changes."""
        try:
            await self.session.commit()
        except Exception:
            logger.error(f"Failed to save {self.model.__name__} changes", exc_info=True)
            await self.session.rollback()
            raise
