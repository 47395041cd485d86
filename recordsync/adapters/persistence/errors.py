# recordsync\adapters\persistence\errors.py
"""
persistence/errors.py
---------------------

Custom exception types for the bundled storage engines.

The sync layer never catches these: they travel unchanged to whoever
awaited the sync call, which lets callers distinguish between

    - a record that does not exist (RecordNotFoundError, raised by the
      sync layer itself), and
    - the engine being unable to serve the request (StorageEngineError).

Typical usage:

    from recordsync.adapters.persistence.errors import StorageEngineError

    try:
        await note.fetch()
    except RecordNotFoundError:
        ...
    except StorageEngineError as e:
        log.error("storage unavailable", error=str(e))
"""

from __future__ import annotations


class StorageEngineError(Exception):
    """
    Base class for all storage engine errors.

    Catch this if you want to handle any engine problem in a single
    place; catch subclasses for more fine-grained handling.
    """


class UnsupportedOperationError(StorageEngineError):
    """
    Raised when a request names an unknown operation or carries a
    malformed argument list.
    """

    def __init__(self, operation: str, detail: str | None = None) -> None:
        msg = f"Unsupported storage operation '{operation}'."
        if detail:
            msg += f" Detail: {detail}"
        super().__init__(msg)
        self.operation = operation
        self.detail = detail


class StoreCorruptedError(StorageEngineError):
    """
    Raised when a persisted store cannot be read back (unreadable file,
    invalid JSON, wrong top-level shape).
    """

    def __init__(self, path: str, detail: str | None = None) -> None:
        msg = f"Store at '{path}' could not be read."
        if detail:
            msg += f" Detail: {detail}"
        super().__init__(msg)
        self.path = path
        self.detail = detail


__all__ = [
    "StorageEngineError",
    "UnsupportedOperationError",
    "StoreCorruptedError",
]
