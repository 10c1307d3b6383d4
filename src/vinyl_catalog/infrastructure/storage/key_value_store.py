"""
Key-value backing stores.

``FileKeyValueStore`` keeps one UTF-8 file per key inside a data directory.
Writes go to a temporary sibling file that is then moved over the target, so
an interrupted write leaves the previous value in place.
"""

import logging
import re
from pathlib import Path
from typing import Dict, Optional
from uuid import uuid4

import aiofiles
import aiofiles.os

from ...domain.catalog.repositories import KeyValueStore

logger = logging.getLogger(__name__)

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


class InMemoryKeyValueStore(KeyValueStore):
    """In-memory implementation of KeyValueStore for testing and development."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._items: Dict[str, str] = dict(initial or {})

    async def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    async def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    async def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class FileKeyValueStore(KeyValueStore):
    """File-based implementation of KeyValueStore."""

    def __init__(self, storage_dir: Path, suffix: str = ".json"):
        self.storage_dir = Path(storage_dir).expanduser()
        self.suffix = suffix

    def path_for(self, key: str) -> Path:
        """Return the file backing a key."""
        if not _KEY_PATTERN.match(key) or key in (".", ".."):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.storage_dir / f"{key}{self.suffix}"

    async def get_item(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        if not await aiofiles.os.path.exists(path):
            return None

        async with aiofiles.open(path, 'r', encoding='utf-8') as f:
            return await f.read()

    async def set_item(self, key: str, value: str) -> None:
        path = self.path_for(key)
        await aiofiles.os.makedirs(self.storage_dir, exist_ok=True)

        tmp_path = path.with_name(f".{path.name}.{uuid4().hex}.tmp")
        try:
            async with aiofiles.open(tmp_path, 'w', encoding='utf-8') as f:
                await f.write(value)
                await f.flush()
            await aiofiles.os.replace(tmp_path, path)
        except BaseException:
            if await aiofiles.os.path.exists(tmp_path):
                try:
                    await aiofiles.os.remove(tmp_path)
                except OSError as cleanup_error:
                    logger.warning(f"Could not remove temporary file {tmp_path}: {cleanup_error}")
            raise

        logger.debug(f"Wrote {len(value)} characters to {path}")

    async def remove_item(self, key: str) -> None:
        path = self.path_for(key)
        if await aiofiles.os.path.exists(path):
            await aiofiles.os.remove(path)
