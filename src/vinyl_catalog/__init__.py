"""Vinyl Catalog

A personal catalogue of vinyl records with Discogs metadata lookup.
"""

__version__ = "0.1.0"

from .exceptions import (
    VinylCatalogError,
    ConfigurationError,
    LookupClientError,
    LookupHttpError,
    LookupTransportError,
    LookupResponseError,
    NotFoundError,
    PersistenceError,
)
from .models.config import Config, DiscogsConfig, StorageConfig, load_config
from .domain.catalog.entities import UNSET, VinylData, VinylRecord
from .infrastructure.storage.key_value_store import FileKeyValueStore, InMemoryKeyValueStore
from .infrastructure.repositories.collection_store import CollectionStore
from .infrastructure.external.discogs_adapter import DiscogsAdapter
from .infrastructure.external.discogs_models import SearchType
from .application.collection_service import CollectionService, build_collection_service

__all__ = [
    # Errors
    "VinylCatalogError",
    "ConfigurationError",
    "LookupClientError",
    "LookupHttpError",
    "LookupTransportError",
    "LookupResponseError",
    "NotFoundError",
    "PersistenceError",

    # Configuration
    "Config",
    "DiscogsConfig",
    "StorageConfig",
    "load_config",

    # Collection
    "VinylRecord",
    "VinylData",
    "UNSET",
    "CollectionStore",
    "FileKeyValueStore",
    "InMemoryKeyValueStore",

    # Lookup
    "DiscogsAdapter",
    "SearchType",

    # Workflows
    "CollectionService",
    "build_collection_service",
]
