# pta_dashboard/services/base_service.py
"""Base service with common CRUD operations."""
import logging
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from typing import Type, Any, Dict, Optional, List, TypeVar, Generic

from ..core.exceptions import ConflictError, DatabaseError, NotFoundError
from ..utils.cache_invalidation import invalidate_statistics_cache

logger = logging.getLogger(__name__)

# Define generic type
T = TypeVar('T')


class BaseService(Generic[T]):
    resource_name = "Resource"

    def __init__(self, model: Type[T], db: AsyncSession):
        self.model = model
        self.db = db

    async def get(self, id: Any) -> Optional[T]:
        stmt = select(self.model).where(self.model.id == id)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_or_404(self, id: Any) -> T:
        obj = await self.get(id)
        if obj is None:
            raise NotFoundError(self.resource_name, id)
        return obj

    async def get_all(self, order_by: str = None, **filters) -> List[T]:
        stmt = select(self.model)

        for key, value in filters.items():
            if hasattr(self.model, key) and value is not None:
                stmt = stmt.where(getattr(self.model, key) == value)

        if order_by and hasattr(self.model, order_by):
            stmt = stmt.order_by(getattr(self.model, order_by))

        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def commit(self, action: str = "save"):
        """Commit the unit of work, translating database failures."""
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.error("Integrity error during %s %s: %s", action, self.resource_name, e)
            raise ConflictError(f"Could not {action} {self.resource_name.lower()}: conflicting data")
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("Database error during %s %s: %s", action, self.resource_name, e)
            raise DatabaseError(f"Database error occurred while trying to {action} {self.resource_name.lower()}")
        await invalidate_statistics_cache()

    async def create(self, obj_in: Dict) -> T:
        obj = self.model(**obj_in)
        self.db.add(obj)
        await self.commit("create")
        await self.db.refresh(obj)
        logger.info("Created %s %s", self.resource_name, obj.id)
        return obj

    async def update(self, id: Any, obj_in: Dict) -> T:
        obj = await self.get_or_404(id)
        for key, value in obj_in.items():
            setattr(obj, key, value)
        await self.commit("update")
        await self.db.refresh(obj)
        logger.info("Updated %s %s", self.resource_name, id)
        return obj

    async def delete(self, id: Any) -> bool:
        """Permanently delete record from database"""
        obj = await self.get_or_404(id)
        await self.db.delete(obj)
        await self.commit("delete")
        logger.info("Deleted %s %s", self.resource_name, id)
        return True

    async def get_total_count(self) -> int:
        stmt = select(func.count()).select_from(self.model)
        result = await self.db.execute(stmt)
        return result.scalar()
