# recordsync/core/use_cases/sync.py
import structlog
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Union

from recordsync.core.domain.models import RequestOptions, StorageOperation, SyncVerb
from recordsync.core.domain.exceptions import RecordNotFoundError, UnsupportedVerbError
from recordsync.core.ports.storage_engine import IStorageEngine
from recordsync.core.ports.sync_target import ISyncCollection, ISyncModel
from recordsync.shared.observability import get_tracer

logger = structlog.get_logger()
tracer = get_tracer(__name__)

Handler = Callable[[Any, RequestOptions], Awaitable[Any]]

class SyncAdapter:
    """
    Use Case: Persists records by translating sync verbs into storage requests.

    Responsibilities:
    1. Builds a fresh RequestOptions value for every call.
    2. Routes the verb to its handler (read/create/update/delete).
    3. Issues exactly one request against the Storage Engine Port.
    4. Applies the result to the target in place.

    The adapter holds no state besides the engine handle. It mutates the
    target it is given on success; callers that need the original untouched
    must clone it first. Engine failures are logged and re-raised unchanged.
    """

    def __init__(self, engine: IStorageEngine):
        # We inject the interface (Port), not a concrete engine
        self.engine = engine
        self._handlers: Dict[SyncVerb, Handler] = {
            SyncVerb.READ: self.read,
            SyncVerb.CREATE: self.create,
            SyncVerb.UPDATE: self.update,
            SyncVerb.DELETE: self.delete,
        }

    @classmethod
    def use(cls, engine: IStorageEngine) -> Callable[..., Awaitable[Any]]:
        """
        Returns the `dispatch` of a new adapter, ready to be registered as the
        sync strategy of a Record or RecordCollection.
        """
        return cls(engine).dispatch

    async def __call__(self, verb: Union[SyncVerb, str], target: Any, options: Optional[Mapping[str, Any]] = None) -> Any:
        return await self.dispatch(verb, target, options)

    async def dispatch(self, verb: Union[SyncVerb, str], target: Any, options: Optional[Mapping[str, Any]] = None) -> Any:
        """
        Executes one sync call.

        Args:
            verb: 'read', 'create', 'update' or 'delete'.
            target: The record or collection to persist.
            options: Caller options; only `conditions` is forwarded.

        Returns:
            The updated target for read/create/update, the engine's own
            result for delete.

        Raises:
            UnsupportedVerbError: If the verb has no handler.
            RecordNotFoundError: If a single-record read finds nothing.
        """
        try:
            sync_verb = SyncVerb(verb)
        except ValueError:
            raise UnsupportedVerbError(verb) from None

        handler = self._handlers[sync_verb]
        request_options = RequestOptions.build(target, options)

        with tracer.start_as_current_span("sync.dispatch") as span, structlog.contextvars.bound_contextvars(
            sync_verb=sync_verb.value,
            profile=request_options.profile_id,
            store=request_options.store_name,
        ):
            span.set_attribute("sync.verb", sync_verb.value)
            span.set_attribute("sync.profile_id", str(request_options.profile_id))
            span.set_attribute("sync.store_name", str(request_options.store_name))

            logger.debug("sync_dispatch", record_id=request_options.id)
            return await handler(target, request_options)

    # --- Read path ---

    async def read(self, target: Any, options: RequestOptions) -> Any:
        """Single-record lookup when the target has an identifying field, list lookup otherwise."""
        if getattr(target, "id_attribute", None):
            return await self.find_item(target, options)

        return await self.find(target, options)

    async def find_item(self, model: ISyncModel, options: RequestOptions) -> ISyncModel:
        payload = await self._request(StorageOperation.FIND_ITEM, options)
        if not payload:
            logger.info("sync_record_not_found", record_id=options.id)
            raise RecordNotFoundError(options.store_name, options.id)

        model.set(payload)
        return model

    async def find(self, collection: ISyncCollection, options: RequestOptions) -> ISyncCollection:
        """Adds every found record to the collection in engine order. An empty result is not an error."""
        payloads = await self._request(StorageOperation.FIND, options)
        if payloads:
            collection.add(payloads)

        return collection

    # --- Write path ---

    async def save(self, model: ISyncModel, options: RequestOptions) -> ISyncModel:
        payload = await self._request(StorageOperation.SAVE, options.with_data(model.serialize()))
        model.set(payload)
        return model

    # Insert and overwrite are told apart by the engine, not here.
    create = save
    update = save

    async def delete(self, model: ISyncModel, options: RequestOptions) -> Any:
        return await self._request(StorageOperation.REMOVE_ITEM, options.with_data(model.serialize()))

    async def _request(self, operation: StorageOperation, options: RequestOptions) -> Any:
        try:
            return await self.engine.request(operation.value, [options.to_request()])
        except Exception as e:
            logger.error("sync_request_failed", operation=operation.value, error=str(e))
            raise
