# recordsync\adapters\persistence\__init__.py
"""
Persistence Adapters.

This package implements the Storage Engine port defined in the Core Domain.
It answers the four storage operations (find, findItem, save, removeItem)
issued by the SyncAdapter.

Components:
- InMemoryStorageEngine: process-local stores, for tests and tooling.
- FileSystemStorageEngine: one JSON file per store under <base_path>/data/<profile>/.
"""

from typing import Union

from recordsync.shared.config import StorageBackend

from .base import BaseStorageEngine
from .filesystem_engine import FileSystemStorageEngine
from .memory_engine import InMemoryStorageEngine


def create_storage_engine(backend: Union[StorageBackend, str], base_path: str = ".") -> BaseStorageEngine:
    """Builds the engine selected by the STORAGE_BACKEND setting."""
    backend = StorageBackend(backend)
    if backend == StorageBackend.FILESYSTEM:
        return FileSystemStorageEngine(base_path)
    return InMemoryStorageEngine()


__all__ = [
    "BaseStorageEngine",
    "FileSystemStorageEngine",
    "InMemoryStorageEngine",
    "create_storage_engine",
]
