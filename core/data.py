"""
Data Layer Base Classes.

The data layer provides the Repository pattern for data access.
This abstracts away the specific data store (JSON file, in-memory, etc.)
and provides a clean interface for the workflow.

Key principles:
- Repositories handle storage operations only
- No business logic in repositories
- Return domain objects, not raw dicts
- Support for different backends via dependency injection
"""

from abc import ABC, abstractmethod
from typing import Generic, List, Optional, TypeVar

# Type variable for entity types
T = TypeVar("T")


class KeyValueStore(ABC):
    """
    Abstract namespaced key-value store holding text values.

    Both operations are asynchronous and may fail with StoreError.
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """
        Read the value stored under a key.

        Args:
            key: The storage key

        Returns:
            The stored text, or None if nothing is stored under the key
        """
        pass

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """
        Store a value under a key, replacing any previous value.

        Args:
            key: The storage key
            value: The text to store
        """
        pass


class AppendOnlyRepository(ABC, Generic[T]):
    """
    Abstract base class for append-only repositories.

    Records are only ever added; there is no update or delete path.

    Example:
        class AuditRepository(AppendOnlyRepository[AuditEntry]):
            async def append(self, entity: AuditEntry) -> None:
                entries = await self.list_all()
                entries.append(entity)
                await self._store.set(self._key, dump(entries))
    """

    @abstractmethod
    async def list_all(self) -> List[T]:
        """
        Get every stored entity, oldest first.

        Returns:
            The stored entities (empty if none exist yet)
        """
        pass

    @abstractmethod
    async def append(self, entity: T) -> None:
        """
        Add an entity to the end of the collection.

        Args:
            entity: The entity to add
        """
        pass
