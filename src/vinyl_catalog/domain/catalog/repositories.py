"""Catalog Context Repository Interfaces.

This module defines the repository interface for the vinyl collection and the
key-value backing store it writes through.
"""

from abc import ABC, abstractmethod
from typing import List, Mapping, Optional, Union, Any

from .entities import VinylData, VinylRecord

RecordInput = Union[VinylData, Mapping[str, Any]]


class KeyValueStore(ABC):
    """Persistent key-value slots holding UTF-8 strings."""

    @abstractmethod
    async def get_item(self, key: str) -> Optional[str]:
        """Return the value stored under key, or None if the slot is empty."""
        pass

    @abstractmethod
    async def set_item(self, key: str, value: str) -> None:
        """Replace the value stored under key."""
        pass

    @abstractmethod
    async def remove_item(self, key: str) -> None:
        """Clear the slot; clearing an empty slot is not an error."""
        pass


class RecordRepository(ABC):
    """Repository for VinylRecord entities."""

    @abstractmethod
    async def list_records(self) -> List[VinylRecord]:
        """Return every record in storage order."""
        pass

    @abstractmethod
    async def get_record(self, record_id: str) -> VinylRecord:
        """Return the record with the given id or raise NotFoundError."""
        pass

    @abstractmethod
    async def create_record(self, data: RecordInput) -> VinylRecord:
        """Create and persist a new record."""
        pass

    @abstractmethod
    async def update_record(self, record_id: str, updates: RecordInput) -> VinylRecord:
        """Merge updates onto an existing record and persist it."""
        pass

    @abstractmethod
    async def delete_record(self, record_id: str) -> None:
        """Remove a record; unknown ids are ignored."""
        pass

    @abstractmethod
    async def count(self) -> int:
        """Get total count of records."""
        pass
