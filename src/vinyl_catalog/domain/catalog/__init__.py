"""
Catalog Context - the user's vinyl collection.

This bounded context is responsible for:
- Defining the vinyl record entity and its partial field sets
- Declaring the repository and backing store interfaces
"""

from .entities import UNSET, VinylData, VinylRecord, is_set
from .repositories import KeyValueStore, RecordRepository

__all__ = [
    # Entities
    "VinylRecord",
    "VinylData",
    "UNSET",
    "is_set",
    # Repositories
    "RecordRepository",
    "KeyValueStore",
]
