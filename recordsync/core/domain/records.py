# recordsync/core/domain/records.py
"""
Reference model/collection layer.

`Record` and `RecordCollection` are deliberately small: they keep plain
attribute dicts and hand every persistence verb to a registered sync
strategy, typically `SyncAdapter.use(engine)`. Dirty tracking, validation
and change events are out of their scope.

Typical usage:

    class Note(Record):
        store_name = "notes"

    Note.sync = SyncAdapter.use(engine)
    note = Note({"title": "x"}, profile_id="notes-db")
    await note.save()
    await note.fetch()
"""

from __future__ import annotations

import copy
from typing import Any, Awaitable, Callable, ClassVar, Dict, Iterable, Iterator, List, Optional, Type

from recordsync.core.domain.exceptions import SyncStrategyMissingError
from recordsync.core.domain.models import SyncVerb

SyncStrategy = Callable[..., Awaitable[Any]]


class Record:
    """
    One logical record of a store.

    Class attributes give the defaults shared by every record of a kind;
    `profile_id` may be overridden per instance.
    """

    profile_id: ClassVar[Optional[str]] = None
    store_name: ClassVar[Optional[str]] = None
    id_attribute: ClassVar[Optional[str]] = "id"
    defaults: ClassVar[Dict[str, Any]] = {}
    sync: ClassVar[Optional[SyncStrategy]] = None

    def __init__(self, attributes: Optional[Dict[str, Any]] = None, profile_id: Optional[str] = None) -> None:
        self.attributes: Dict[str, Any] = copy.deepcopy(self.defaults)
        if attributes:
            self.attributes.update(attributes)
        if profile_id is not None:
            self.profile_id = profile_id  # type: ignore[misc]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.attributes!r})"

    def get(self, name: str) -> Any:
        return self.attributes.get(name)

    def set(self, payload: Optional[Dict[str, Any]]) -> "Record":
        if payload:
            self.attributes.update(payload)
        return self

    def serialize(self) -> Dict[str, Any]:
        return copy.deepcopy(self.attributes)

    @property
    def id(self) -> Any:
        return self.get(self.id_attribute) if self.id_attribute else None

    def is_new(self) -> bool:
        return self.id is None

    async def fetch(self, **options: Any) -> "Record":
        return await self._sync(SyncVerb.READ, options)

    async def save(self, attributes: Optional[Dict[str, Any]] = None, **options: Any) -> "Record":
        """Applies `attributes` locally, then creates or updates depending on `is_new()`."""
        self.set(attributes)
        verb = SyncVerb.CREATE if self.is_new() else SyncVerb.UPDATE
        return await self._sync(verb, options)

    async def destroy(self, **options: Any) -> Any:
        return await self._sync(SyncVerb.DELETE, options)

    async def _sync(self, verb: SyncVerb, options: Dict[str, Any]) -> Any:
        strategy = type(self).sync
        if strategy is None:
            raise SyncStrategyMissingError(type(self).__name__)
        return await strategy(verb, self, options)


class RecordCollection:
    """
    An ordered group of records of one store.

    Collections have no identifying field, so reads always go through the
    multi-record path and may be filtered with `conditions`.
    """

    record_class: ClassVar[Type[Record]] = Record
    id_attribute: ClassVar[Optional[str]] = None
    sync: ClassVar[Optional[SyncStrategy]] = None

    def __init__(
        self,
        records: Optional[Iterable[Dict[str, Any]]] = None,
        profile_id: Optional[str] = None,
        store_name: Optional[str] = None,
    ) -> None:
        self.profile_id = profile_id if profile_id is not None else self.record_class.profile_id
        self.store_name = store_name if store_name is not None else self.record_class.store_name
        self.records: List[Record] = []
        if records:
            self.add(records)

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[Record]:
        return iter(self.records)

    def add(self, payloads: Iterable[Any]) -> List[Record]:
        """Appends payloads (or ready-made records) in the given order."""
        added = []
        for payload in payloads:
            record = payload if isinstance(payload, Record) else self.record_class(payload, profile_id=self.profile_id)
            self.records.append(record)
            added.append(record)
        return added

    def to_list(self) -> List[Dict[str, Any]]:
        return [record.serialize() for record in self.records]

    async def fetch(self, conditions: Any = None, **options: Any) -> "RecordCollection":
        if conditions is not None:
            options["conditions"] = conditions

        strategy = type(self).sync
        if strategy is None:
            raise SyncStrategyMissingError(type(self).__name__)
        return await strategy(SyncVerb.READ, self, options)
