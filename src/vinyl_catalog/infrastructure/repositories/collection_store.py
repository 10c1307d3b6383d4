"""
Collection Store.

CRUD over the user's vinyl collection, persisted as a JSON array of records
in a single slot of a key-value backing store. Every mutation re-reads the
whole collection, changes it in memory and writes the whole array back.

The store does no locking: callers must await one mutation before issuing the
next, otherwise concurrent read-modify-write cycles lose updates.
"""

import json
import logging
import time
from typing import Callable, List, Optional
from uuid import uuid4

from ...domain.catalog.entities import VinylData, VinylRecord
from ...domain.catalog.repositories import KeyValueStore, RecordInput, RecordRepository
from ...exceptions import NotFoundError, PersistenceError
from ...models.config import DEFAULT_STORAGE_KEY

logger = logging.getLogger(__name__)


def current_time_millis() -> int:
    """Current wall clock time in epoch milliseconds."""
    return int(time.time() * 1000)


def _as_vinyl_data(data: Optional[RecordInput]) -> VinylData:
    if data is None:
        return VinylData()
    if isinstance(data, VinylData):
        return data
    return VinylData.from_dict(data)


class CollectionStore(RecordRepository):
    """Collection of VinylRecords stored in one key-value slot."""

    def __init__(
        self,
        backing_store: KeyValueStore,
        storage_key: str = DEFAULT_STORAGE_KEY,
        clock: Callable[[], int] = current_time_millis,
    ):
        self.backing_store = backing_store
        self.storage_key = storage_key
        self._clock = clock

    async def _read_all(self) -> List[VinylRecord]:
        """Load the collection; unreadable or malformed data reads as empty."""
        try:
            stored = await self.backing_store.get_item(self.storage_key)
        except Exception as e:
            logger.warning(f"Could not read collection '{self.storage_key}': {e}")
            return []

        if not stored:
            return []

        try:
            data = json.loads(stored)
        except (ValueError, TypeError, RecursionError) as e:
            logger.warning(f"Collection '{self.storage_key}' is not valid JSON: {e}")
            return []

        if not isinstance(data, list):
            logger.warning(
                f"Collection '{self.storage_key}' is not a list "
                f"(got {type(data).__name__}); treating it as empty"
            )
            return []

        records = []
        for index, item in enumerate(data):
            try:
                records.append(VinylRecord.from_dict(item))
            except ValueError as e:
                logger.warning(f"Skipping malformed record at position {index}: {e}")
        return records

    async def _write_all(self, records: List[VinylRecord]) -> None:
        payload = json.dumps([record.to_dict() for record in records], ensure_ascii=False)
        try:
            await self.backing_store.set_item(self.storage_key, payload)
        except Exception as e:
            logger.error(f"Failed to save collection '{self.storage_key}': {e}")
            raise PersistenceError("Failed to save data", cause=e) from e

    def _new_id(self, now: int, taken: set) -> str:
        while True:
            record_id = f"record_{now}_{uuid4().hex[:12]}"
            if record_id not in taken:
                return record_id

    async def list_records(self) -> List[VinylRecord]:
        """Return every record in storage order."""
        return await self._read_all()

    async def get_record(self, record_id: str) -> VinylRecord:
        """Return the record with the given id."""
        for record in await self._read_all():
            if record.id == record_id:
                return record
        raise NotFoundError(record_id)

    async def create_record(self, data: Optional[RecordInput] = None) -> VinylRecord:
        """
        Create a record and append it to the collection.

        Missing descriptive fields become empty strings and a missing or empty
        image reference becomes None. Enrichment fields are copied as given;
        fields that were not provided stay unset.
        """
        values = _as_vinyl_data(data).set_fields()
        records = await self._read_all()
        now = self._clock()

        record = VinylRecord(
            id=self._new_id(now, {r.id for r in records}),
            artist_name=values.pop("artist_name", None) or "",
            album_name=values.pop("album_name", None) or "",
            serial_number=values.pop("serial_number", None) or "",
            matrix_runout=values.pop("matrix_runout", None) or "",
            image_url=values.pop("image_url", None) or None,
            created_at=now,
            updated_at=now,
            **values,
        )

        records.append(record)
        await self._write_all(records)
        logger.debug(f"Created record {record.id}")
        return record

    async def update_record(self, record_id: str, updates: RecordInput) -> VinylRecord:
        """Shallow-merge updates onto a record and refresh its updated_at."""
        patch = _as_vinyl_data(updates)
        records = await self._read_all()

        for index, existing in enumerate(records):
            if existing.id == record_id:
                updated_at = max(self._clock(), existing.updated_at)
                updated = existing.merged(patch, updated_at)
                records[index] = updated
                await self._write_all(records)
                logger.debug(f"Updated record {record_id}")
                return updated

        raise NotFoundError(record_id)

    async def delete_record(self, record_id: str) -> None:
        """Remove every record with the given id; unknown ids are a no-op."""
        records = await self._read_all()
        remaining = [r for r in records if r.id != record_id]
        await self._write_all(remaining)
        if len(remaining) != len(records):
            logger.debug(f"Deleted record {record_id}")

    async def count(self) -> int:
        """Get total count of records."""
        return len(await self._read_all())
