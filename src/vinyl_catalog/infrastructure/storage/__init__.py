"""
Key-Value Storage - Infrastructure Layer

Backing stores for the collection, addressed by a single string key.
"""

from .key_value_store import FileKeyValueStore, InMemoryKeyValueStore

__all__ = [
    "FileKeyValueStore",
    "InMemoryKeyValueStore",
]
