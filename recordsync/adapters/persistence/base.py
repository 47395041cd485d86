# recordsync/adapters/persistence/base.py
import asyncio
import copy
import uuid
from typing import Any, Dict, List, Mapping, Optional, Tuple

import structlog

from recordsync.core.ports.storage_engine import IStorageEngine
from recordsync.core.domain.models import RequestOptions, StorageOperation
from recordsync.adapters.persistence.errors import UnsupportedOperationError

logger = structlog.get_logger()

StoreKey = Tuple[str, str]
Records = Dict[str, Dict[str, Any]]

DEFAULT_ID_ATTRIBUTE = "id"

def matches_conditions(record: Mapping[str, Any], conditions: Any) -> bool:
    """A record matches when every condition key equals the record's value for that key."""
    if not conditions:
        return True
    if not isinstance(conditions, Mapping):
        raise UnsupportedOperationError(StorageOperation.FIND.value, "conditions must be a mapping")
    return all(key in record and record[key] == value for key, value in conditions.items())

class BaseStorageEngine(IStorageEngine):
    """
    Shared request handling for the bundled engines.

    Subclasses only know how to load and persist one store (an ordered
    mapping of record id -> payload); this class validates requests, routes
    operation names and implements the four operations on top of that.
    Every access to one store, reads included, is serialized by a per-store
    lock, so a reader never observes a store that is halfway through a write.
    """

    def __init__(self) -> None:
        self._locks: Dict[StoreKey, asyncio.Lock] = {}

    # --- Storage primitives (implemented by subclasses) ---

    async def _read_store(self, key: StoreKey) -> Records:
        raise NotImplementedError

    async def _write_store(self, key: StoreKey, records: Records) -> None:
        raise NotImplementedError

    async def health_check(self) -> bool:
        """Returns True if the underlying storage is accessible."""
        return True

    # --- Interface Implementation ---

    async def request(self, op_name: str, args: List[Dict[str, Any]]) -> Any:
        try:
            operation = StorageOperation(op_name)
        except ValueError:
            raise UnsupportedOperationError(str(op_name)) from None

        if not isinstance(args, (list, tuple)) or len(args) != 1 or not isinstance(args[0], Mapping):
            raise UnsupportedOperationError(operation.value, "expected a single options mapping")

        options = RequestOptions.model_validate(args[0])
        handlers = {
            StorageOperation.FIND: self._find,
            StorageOperation.FIND_ITEM: self._find_item,
            StorageOperation.SAVE: self._save,
            StorageOperation.REMOVE_ITEM: self._remove_item,
        }
        return await handlers[operation](options)

    async def _find(self, options: RequestOptions) -> List[Dict[str, Any]]:
        key = self._store_key(options)
        async with self._lock(key):
            records = await self._read_store(key)
            return [copy.deepcopy(r) for r in records.values() if matches_conditions(r, options.conditions)]

    async def _find_item(self, options: RequestOptions) -> Optional[Dict[str, Any]]:
        record_id = self._record_id(options)
        if record_id is None:
            return None

        key = self._store_key(options)
        async with self._lock(key):
            records = await self._read_store(key)
            record = records.get(str(record_id))
            return copy.deepcopy(record) if record is not None else None

    async def _save(self, options: RequestOptions) -> Dict[str, Any]:
        key = self._store_key(options)
        id_attribute = options.id_attribute or DEFAULT_ID_ATTRIBUTE
        record = copy.deepcopy(options.data or {})

        record_id = self._record_id(options)
        if record_id is None:
            record_id = uuid.uuid4().hex
        record[id_attribute] = record_id

        async with self._lock(key):
            records = await self._read_store(key)
            records[str(record_id)] = record
            await self._write_store(key, records)

        logger.info("storage_record_saved", profile=key[0], store=key[1], record_id=record_id)
        return copy.deepcopy(record)

    async def _remove_item(self, options: RequestOptions) -> Optional[Dict[str, Any]]:
        key = self._store_key(options)
        record_id = self._record_id(options)
        if record_id is None:
            return None

        async with self._lock(key):
            records = await self._read_store(key)
            removed = records.pop(str(record_id), None)
            if removed is not None:
                await self._write_store(key, records)

        logger.info("storage_record_removed", profile=key[0], store=key[1], record_id=record_id, existed=removed is not None)
        return removed

    # --- Helpers ---

    def _lock(self, key: StoreKey) -> asyncio.Lock:
        lock = self._locks.get(key)
        if lock is None:
            lock = self._locks[key] = asyncio.Lock()
        return lock

    @staticmethod
    def _store_key(options: RequestOptions) -> StoreKey:
        if not options.profile_id or not options.store_name:
            raise UnsupportedOperationError("request", "profileId and storeName are required")
        return str(options.profile_id), str(options.store_name)

    @staticmethod
    def _record_id(options: RequestOptions) -> Any:
        """The explicit id wins; otherwise the id is read from the payload being written."""
        if options.has_identity() and options.id is not None:
            return options.id
        id_attribute = options.id_attribute or DEFAULT_ID_ATTRIBUTE
        return (options.data or {}).get(id_attribute)
