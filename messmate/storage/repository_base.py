"""Repository base interface."""

from abc import ABC, abstractmethod
from typing import Any, Generic, Optional, TypeVar

T = TypeVar("T")


class RepositoryBase(ABC, Generic[T]):
    """Base repository interface. Rows are never deleted through it."""

    @abstractmethod
    async def get_by_id(self, id: str) -> Optional[T]:
        """Retrieve entity by ID."""
        pass

    @abstractmethod
    async def create(self, entity: Any) -> T:
        """Create new entity from its input model."""
        pass

    @abstractmethod
    async def update(self, entity: T) -> T:
        """Update existing entity."""
        pass

    @abstractmethod
    async def list_all(self) -> list[T]:
        """Retrieve every entity."""
        pass
