"""Generic repository interface (Dependency Inversion Principle).

Provides ``IRepository[T]``, the base abstract class that all
domain-specific repository interfaces extend.  Service-layer code
depends on this abstraction, never on Django ORM directly.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, List, Optional, TypeVar

T = TypeVar("T")


class IRepository(ABC, Generic[T]):
    """Base generic repository contract.

    Type parameter ``T`` represents the domain entity managed by the
    repository (e.g. ``Subscription``, ``RecurrenceProduct``).
    """

    @abstractmethod
    def find(self, id: str) -> Optional[T]:
        """Retrieve an entity by its primary key, ``None`` when missing."""

    @abstractmethod
    def save(self, entity: T) -> T:
        """Persist (create or update) an entity."""

    @abstractmethod
    def list_entities(self, limit: int = 0, list_disabled: bool = False) -> List[T]:
        """List entities.

        ``limit`` of ``0`` means no limit.  Soft-deleted entities are only
        included when ``list_disabled`` is set.
        """
