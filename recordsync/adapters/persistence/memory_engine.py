# recordsync/adapters/persistence/memory_engine.py
from typing import Any, Dict, Optional

from recordsync.adapters.persistence.base import BaseStorageEngine, Records, StoreKey

class InMemoryStorageEngine(BaseStorageEngine):
    """
    Concrete Storage Engine keeping every store in process memory.

    Stores are ordered dicts keyed by record id, so `find` returns records
    in insertion order. Meant for tests and local tooling; nothing survives
    the process.
    """

    def __init__(self, seed: Optional[Dict[StoreKey, Dict[str, Dict[str, Any]]]] = None):
        super().__init__()
        self._stores: Dict[StoreKey, Records] = {}
        for key, records in (seed or {}).items():
            self._stores[key] = dict(records)

    async def _read_store(self, key: StoreKey) -> Records:
        return self._stores.setdefault(key, {})

    async def _write_store(self, key: StoreKey, records: Records) -> None:
        self._stores[key] = records
