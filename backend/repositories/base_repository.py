"""
Generic repository interface and its SQLAlchemy implementation.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Generic, TypeVar, List, Optional, Type, Any
from sqlalchemy.orm import Session

T = TypeVar('T')


class IRepository(ABC, Generic[T]):
    """
    Async data-access contract for one entity type.

    Implementations only stage changes; committing them belongs to the
    owning context (ApiDbContext.save_changes).
    """

    @abstractmethod
    async def get_all(self, limit: Optional[int] = None, offset: int = 0) -> List[T]:
        """
        Retrieve all persisted entities.

        Args:
            limit: Maximum number of records to return
            offset: Number of records to skip

        Returns:
            List of entities
        """
        pass

    @abstractmethod
    async def get_record_by_id(self, id: int) -> Optional[T]:
        """
        Retrieve the entity with the given id.

        Args:
            id: Primary key value

        Returns:
            Entity or None if not found
        """
        pass

    @abstractmethod
    async def create(self, obj: T) -> T:
        """Stage a new entity and flush it so its id is assigned."""
        pass

    @abstractmethod
    async def update(self, obj: T) -> T:
        """Flush pending changes made to an entity."""
        pass

    @abstractmethod
    async def delete(self, obj: T) -> None:
        """Stage removal of an entity."""
        pass


class BaseRepository(IRepository[T]):
    """
    Generic base repository providing common CRUD operations.
    All specific repositories should inherit from this class.

    Queries run on the synchronous session in a worker thread so callers can
    await them.
    """

    def __init__(self, db: Session, model: Type[T]):
        """
        Initialize the repository.

        Args:
            db: SQLAlchemy database session
            model: SQLAlchemy model class
        """
        self.db = db
        self.model = model

    async def _run(self, func, *args, **kwargs):
        return await asyncio.to_thread(func, *args, **kwargs)

    def _get_all(self, limit: Optional[int], offset: int) -> List[T]:
        query = self.db.query(self.model).order_by(self.model.id)
        if limit:
            query = query.limit(limit)
        if offset:
            query = query.offset(offset)
        return query.all()

    def _get_by_id(self, id: int) -> Optional[T]:
        return self.db.query(self.model).filter(self.model.id == id).first()

    def _create(self, obj: T) -> T:
        self.db.add(obj)
        self.db.flush()
        return obj

    def _delete(self, obj: T) -> None:
        self.db.delete(obj)
        self.db.flush()

    def _filter_by(self, filters: dict) -> List[T]:
        query = self.db.query(self.model)
        for key, value in filters.items():
            if hasattr(self.model, key):
                query = query.filter(getattr(self.model, key) == value)
        return query.order_by(self.model.id).all()

    async def get_all(self, limit: Optional[int] = None, offset: int = 0) -> List[T]:
        return await self._run(self._get_all, limit, offset)

    async def get_record_by_id(self, id: int) -> Optional[T]:
        return await self._run(self._get_by_id, id)

    async def create(self, obj: T) -> T:
        return await self._run(self._create, obj)

    async def update(self, obj: T) -> T:
        await self._run(self.db.flush)
        return obj

    async def delete(self, obj: T) -> None:
        await self._run(self._delete, obj)

    async def delete_by_id(self, id: int) -> bool:
        """
        Delete a record by its ID.

        Args:
            id: Primary key value

        Returns:
            True if deleted, False if not found
        """
        obj = await self.get_record_by_id(id)
        if obj:
            await self.delete(obj)
            return True
        return False

    async def count(self) -> int:
        """
        Count total records.

        Returns:
            Total number of records
        """
        return await self._run(self.db.query(self.model).count)

    async def exists(self, id: int) -> bool:
        """
        Check if a record exists by ID.

        Args:
            id: Primary key value

        Returns:
            True if exists, False otherwise
        """
        query = self.db.query(self.model).filter(self.model.id == id)
        return await self._run(query.count) > 0

    async def filter_by(self, **filters: Any) -> List[T]:
        """
        Filter records by arbitrary criteria. Unknown attribute names are ignored.

        Args:
            **filters: Keyword arguments for filtering

        Returns:
            List of matching model instances
        """
        return await self._run(self._filter_by, filters)
