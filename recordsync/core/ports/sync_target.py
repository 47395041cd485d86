# recordsync\core\ports\sync_target.py
from typing import Any, Dict, List, Optional, Protocol

class ISyncModel(Protocol):
    """
    Port for a single record as seen by the sync layer.

    `id_attribute` names the identifying field; None means the target is
    collection-style and reads go through the multi-record path.
    """

    profile_id: Any
    store_name: Any
    id_attribute: Optional[str]

    def get(self, name: str) -> Any:
        """Returns the current value of one field."""
        ...

    def set(self, payload: Dict[str, Any]) -> Any:
        """Bulk-sets fields from a payload returned by the storage engine."""
        ...

    def serialize(self) -> Dict[str, Any]:
        """Returns the plain payload written on save/delete."""
        ...

class ISyncCollection(Protocol):
    """Port for an ordered group of records of one store."""

    profile_id: Any
    store_name: Any

    def add(self, payloads: List[Dict[str, Any]]) -> Any:
        """Appends newly fetched records, keeping the given order."""
        ...
