# recordsync\core\ports\__init__.py
"""
Core Ports (Interfaces).

This package defines the Protocols that the sync layer consumes. They allow
the Core Domain to talk to a storage engine and to the model/collection
layer without knowing the implementation details.
"""

from .storage_engine import IStorageEngine
from .sync_target import ISyncCollection, ISyncModel

__all__ = [
    "IStorageEngine",
    "ISyncCollection",
    "ISyncModel",
]
