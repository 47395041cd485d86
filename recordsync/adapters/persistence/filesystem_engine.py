# recordsync/adapters/persistence/filesystem_engine.py
import json
import os
from pathlib import Path

import aiofiles
import aiofiles.os
import structlog

from recordsync.adapters.persistence.base import BaseStorageEngine, Records, StoreKey
from recordsync.adapters.persistence.errors import StorageEngineError, StoreCorruptedError

logger = structlog.get_logger()

class FileSystemStorageEngine(BaseStorageEngine):
    """
    Concrete Storage Engine using local JSON files.
    """

    def __init__(self, base_path: str):
        super().__init__()
        self.base_path = Path(base_path) / "data"
        self.base_path.mkdir(parents=True, exist_ok=True)

    def _get_file_path(self, key: StoreKey) -> Path:
        # Structure: .../data/notes-db/notes.json
        profile_id, store_name = key
        return self.base_path / profile_id / f"{store_name}.json"

    async def _read_store(self, key: StoreKey) -> Records:
        """Loads one store; a missing file is an empty store."""
        path = self._get_file_path(key)
        if not path.exists():
            return {}

        try:
            async with aiofiles.open(path, mode='r', encoding='utf-8') as f:
                content = await f.read()
            data = json.loads(content) if content else {}
        except (OSError, ValueError) as e:
            logger.error("store_read_failed", path=str(path), error=str(e))
            raise StoreCorruptedError(str(path), str(e)) from e

        if not isinstance(data, dict):
            logger.error("store_read_failed", path=str(path), error="top-level value is not an object")
            raise StoreCorruptedError(str(path), "top-level value is not an object")
        return data

    async def _write_store(self, key: StoreKey, records: Records) -> None:
        path = self._get_file_path(key)

        # Ensure the profile subdirectory exists
        path.parent.mkdir(parents=True, exist_ok=True)

        # The live file is only ever swapped, never truncated in place
        tmp_path = path.with_name(f".{path.name}.tmp")
        try:
            content = json.dumps(records, indent=2, ensure_ascii=False)
            async with aiofiles.open(tmp_path, mode='w', encoding='utf-8') as f:
                await f.write(content)
            await aiofiles.os.replace(tmp_path, path)
        except (OSError, TypeError, ValueError) as e:
            logger.error("store_write_failed", path=str(path), error=str(e))
            if tmp_path.exists():
                tmp_path.unlink()
            raise StorageEngineError(f"Could not save store '{key[1]}' of profile '{key[0]}'") from e

    async def health_check(self) -> bool:
        """Checks if the data directory is accessible."""
        return self.base_path.exists() and os.access(self.base_path, os.R_OK | os.W_OK)
