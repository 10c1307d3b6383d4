"""
Collection Service - workflows between Discogs lookups and the collection.

Accepting a lookup result fetches the release details, maps them onto record
fields, creates the record and hands back the freshly re-read collection.
Mutations are awaited one at a time; the service adds no locking of its own.
"""

import logging
from pathlib import Path
from typing import List, Optional

from ..domain.catalog.entities import UNSET, VinylData, VinylRecord, is_set
from ..domain.catalog.repositories import RecordInput, RecordRepository
from ..infrastructure.external.discogs_adapter import DiscogsAdapter
from ..infrastructure.external.discogs_models import (
    DiscogsReleaseDetails,
    DiscogsSearchResponse,
    SearchType,
)
from ..infrastructure.repositories.collection_store import CollectionStore
from ..infrastructure.storage.key_value_store import FileKeyValueStore
from ..models.config import Config
from .release_mapper import release_to_vinyl_data

logger = logging.getLogger(__name__)


class CollectionService:
    """Coordinates the Discogs adapter and the record repository."""

    def __init__(self, repository: RecordRepository, lookup: DiscogsAdapter):
        self.repository = repository
        self.lookup = lookup

    async def load_records(self) -> List[VinylRecord]:
        """Return the current collection."""
        return await self.repository.list_records()

    async def search_releases(self, query: str, page: int = 1) -> DiscogsSearchResponse:
        """Search Discogs releases for a trimmed free-text query."""
        query = query.strip()
        if not query:
            raise ValueError("Search query must not be empty")
        return await self.lookup.search(query, SearchType.RELEASE, page)

    async def fetch_release(self, release_id: int) -> DiscogsReleaseDetails:
        """Fetch the details shown before a release is accepted."""
        return await self.lookup.get_release_details(release_id)

    async def add_release(self, release: DiscogsReleaseDetails) -> List[VinylRecord]:
        """Create a record from release details and return the collection."""
        record = await self.repository.create_record(release_to_vinyl_data(release))
        logger.info(f"Added '{record.album_name}' (Discogs {release.id}) as {record.id}")
        return await self.load_records()

    async def add_release_by_id(self, release_id: int) -> List[VinylRecord]:
        """Fetch a release, add it to the collection and return the collection.

        Lookup failures propagate before anything is written.
        """
        release = await self.fetch_release(release_id)
        return await self.add_release(release)

    async def add_manual_record(
        self,
        data: RecordInput,
        image_url: Optional[str] = UNSET,
    ) -> List[VinylRecord]:
        """Save entered data with an optional local or remote image.

        An explicit ``image_url`` replaces any image already in ``data``.
        """
        values = data if isinstance(data, VinylData) else VinylData.from_dict(data)
        if is_set(image_url):
            values = VinylData(**{**values.set_fields(), "image_url": image_url})
        record = await self.repository.create_record(values)
        logger.info(f"Added record {record.id}")
        return await self.load_records()

    async def edit_record(self, record_id: str, updates: RecordInput) -> List[VinylRecord]:
        """Apply updates to a record and return the collection."""
        await self.repository.update_record(record_id, updates)
        return await self.load_records()

    async def remove_record(self, record_id: str) -> List[VinylRecord]:
        """Delete a record and return the collection."""
        await self.repository.delete_record(record_id)
        logger.info(f"Removed record {record_id}")
        return await self.load_records()


def build_collection_service(config: Optional[Config] = None) -> CollectionService:
    """Wire a CollectionService onto the file store and a Discogs adapter."""
    config = config or Config.from_env()
    backing_store = FileKeyValueStore(Path(config.storage.data_dir))
    repository = CollectionStore(backing_store, storage_key=config.storage.storage_key)
    return CollectionService(repository, DiscogsAdapter.from_config(config.discogs))
