# recordsync\core\use_cases\__init__.py
"""
Core Use Cases (Application Logic).

This package contains the "Interactors" of the system. They orchestrate
the flow of data between the Domain Entities and the Infrastructure Ports.
"""

from .sync import SyncAdapter

__all__ = [
    "SyncAdapter",
]
