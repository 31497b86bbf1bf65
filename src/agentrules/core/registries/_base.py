"""Base registry for read-only entity lookup.

Registries are built once and only provide read operations: no create,
save or delete.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, List, Optional, TypeVar

T = TypeVar("T")


class BaseRegistry(Generic[T], ABC):
    """Read-only entity registry.

    Subclasses must implement:
    - exists(entity_id) - Check if entity exists
    - get(entity_id) - Get entity by ID
    - get_all() - Get all entities
    - list_names() - List all entity names
    - _not_found(entity_id) - Exception raised by get_or_raise()
    """

    entity_type: str = "entity"

    @abstractmethod
    def exists(self, entity_id: str) -> bool:
        pass

    @abstractmethod
    def get(self, entity_id: str) -> Optional[T]:
        pass

    @abstractmethod
    def get_all(self) -> List[T]:
        pass

    @abstractmethod
    def list_names(self) -> List[str]:
        """List all entity names/IDs.

        Returns:
            Sorted list of entity identifiers
        """
        pass

    @abstractmethod
    def _not_found(self, entity_id: str) -> Exception:
        pass

    def get_or_raise(self, entity_id: str) -> T:
        """Get an entity by ID, raising the registry's not-found error."""
        entity = self.get(entity_id)
        if entity is None:
            raise self._not_found(entity_id)
        return entity


__all__ = ["BaseRegistry"]
