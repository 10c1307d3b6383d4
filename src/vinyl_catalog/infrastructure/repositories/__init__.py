"""
Repository Implementations - Infrastructure Layer

This package contains repository implementations for data access,
following the Repository pattern from Domain-Driven Design.
"""

from .collection_store import CollectionStore, current_time_millis

__all__ = [
    "CollectionStore",
    "current_time_millis",
]
