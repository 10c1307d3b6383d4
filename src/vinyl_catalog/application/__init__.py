"""
Application Layer

Workflows that connect Discogs lookups to the user's collection.
"""

from .collection_service import CollectionService, build_collection_service
from .release_mapper import MATRIX_RUNOUT, release_to_vinyl_data, select_cover_image

__all__ = [
    "CollectionService",
    "build_collection_service",
    "MATRIX_RUNOUT",
    "release_to_vinyl_data",
    "select_cover_image",
]
