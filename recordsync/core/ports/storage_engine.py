# recordsync\core\ports\storage_engine.py
from typing import Any, Dict, List, Protocol

class IStorageEngine(Protocol):
    """
    Port for the backing Storage Engine.

    The engine is a stateless, reentrant capability: any number of requests
    may be in flight at once. Query execution, indexing and consistency of
    concurrent writes are entirely its responsibility.
    """

    async def request(self, op_name: str, args: List[Dict[str, Any]]) -> Any:
        """
        Executes one storage operation.

        Args:
            op_name: One of 'find', 'findItem', 'save', 'removeItem'.
            args: A one-element list holding the request options
                (profileId, storeName, and optionally conditions,
                idAttribute, id, data).

        Returns:
            - find: a possibly-empty ordered list of record payloads.
            - findItem: a single payload, or a falsy value when not found.
            - save: the persisted record's current payload.
            - removeItem: engine-defined; callers must not inspect it.
        """
        ...
