# recordsync/core/domain/exceptions.py
from typing import Any, Optional

NOT_FOUND = "not found"

class DomainError(Exception):
    """Base class for all domain-level exceptions."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)

# --- Dispatch Errors ---

class UnsupportedVerbError(DomainError):
    """Raised when a sync call names a verb that has no handler."""
    def __init__(self, verb: Any):
        self.verb = verb
        super().__init__(f"Unsupported sync verb: {verb!r}.")

# --- Entity Not Found Errors ---

class RecordNotFoundError(DomainError):
    """
    Raised when the storage engine answers a single-record lookup with nothing.

    This is the only failure the sync layer produces on its own; every other
    failure comes straight from the storage engine. `signal` always holds the
    literal 'not found' so callers can tell the two apart without isinstance.
    """
    signal = NOT_FOUND

    def __init__(self, store_name: Optional[str] = None, record_id: Any = None):
        self.store_name = store_name
        self.record_id = record_id
        super().__init__(NOT_FOUND)

# --- Strategy Errors ---

class SyncStrategyMissingError(DomainError):
    """Raised when a record or collection is persisted without a registered sync strategy."""
    def __init__(self, target: str):
        super().__init__(f"No sync strategy registered for {target}.")
