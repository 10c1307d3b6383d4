"""
External Services - Infrastructure Layer

This package contains the adapter for the Discogs API, implementing the
Anti-Corruption Layer pattern to protect domain integrity.
"""

from .discogs_adapter import DiscogsAdapter
from .discogs_models import (
    DiscogsArtist,
    DiscogsFormat,
    DiscogsIdentifier,
    DiscogsImage,
    DiscogsLabel,
    DiscogsMasterRelease,
    DiscogsPagination,
    DiscogsReleaseDetails,
    DiscogsSearchResponse,
    DiscogsSearchResult,
    DiscogsTrack,
    SearchType,
)

__all__ = [
    "DiscogsAdapter",
    "DiscogsArtist",
    "DiscogsFormat",
    "DiscogsIdentifier",
    "DiscogsImage",
    "DiscogsLabel",
    "DiscogsMasterRelease",
    "DiscogsPagination",
    "DiscogsReleaseDetails",
    "DiscogsSearchResponse",
    "DiscogsSearchResult",
    "DiscogsTrack",
    "SearchType",
]
