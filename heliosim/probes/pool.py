"""
Entity Pool
===========

Bounded, insertion-ordered arena for entities that own render resources.
"""

import logging
from collections import OrderedDict
from typing import Dict, Generic, Iterator, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar('T')


class EntityPool(Generic[T]):
    """
    Fixed-capacity arena keyed by integer entity id.

    Entities must expose ``entity_id`` and ``dispose()``. Removal is a
    single explicit operation that disposes the entity once and drops
    it from the arena; admitting an entity into a full pool first
    evicts the oldest one (FIFO).
    """

    def __init__(self, capacity: Optional[int] = None, name: str = "pool"):
        """
        Initialize pool.

        Args:
            capacity: Maximum live entities, None for unbounded
            name: Label used in log messages
        """
        if capacity is not None and capacity < 1:
            raise ValueError(f"Pool capacity must be at least 1, got {capacity}")
        self.capacity = capacity
        self.name = name
        self._entities: "OrderedDict[int, T]" = OrderedDict()

    def add(self, entity: T) -> Optional[T]:
        """
        Admit an entity as the newest entry.

        Returns:
            The evicted entity, if the pool was full
        """
        evicted = None
        if self.capacity is not None and len(self._entities) >= self.capacity:
            oldest_id = next(iter(self._entities))
            evicted = self.remove(oldest_id)
            logger.debug("%s full (%d), evicted oldest entity %d",
                         self.name, self.capacity, oldest_id)

        self._entities[entity.entity_id] = entity
        return evicted

    def remove(self, entity_id: int) -> Optional[T]:
        """
        Dispose an entity and drop it from the pool.

        Returns:
            The removed entity, or None if it was not present
        """
        entity = self._entities.pop(entity_id, None)
        if entity is not None:
            entity.dispose()
        return entity

    def get(self, entity_id: int) -> Optional[T]:
        return self._entities.get(entity_id)

    def oldest(self) -> Optional[T]:
        if not self._entities:
            return None
        return next(iter(self._entities.values()))

    def newest(self) -> Optional[T]:
        if not self._entities:
            return None
        return next(reversed(self._entities.values()))

    def clear(self) -> Dict[int, T]:
        """Dispose and remove every entity."""
        removed = dict(self._entities)
        for entity_id in list(self._entities):
            self.remove(entity_id)
        return removed

    @property
    def is_full(self) -> bool:
        return self.capacity is not None and len(self._entities) >= self.capacity

    def __iter__(self) -> Iterator[T]:
        # Snapshot so removal during iteration is safe
        return iter(list(self._entities.values()))

    def __len__(self) -> int:
        return len(self._entities)

    def __contains__(self, entity_id: int) -> bool:
        return entity_id in self._entities
