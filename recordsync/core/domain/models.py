# recordsync\core\domain\models.py
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

# --- Enums ---

class SyncVerb(str, Enum):
    """The generic persistence actions requested by the model/collection layer."""
    READ = "read"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"

class StorageOperation(str, Enum):
    """Operation names understood by a storage engine."""
    FIND = "find"               # Multi-record lookup, filtered by conditions
    FIND_ITEM = "findItem"      # Single-record lookup by id
    SAVE = "save"               # Insert or overwrite
    REMOVE_ITEM = "removeItem"  # Delete by id

# --- Value Objects ---

class RequestOptions(BaseModel):
    """
    The normalized, per-call payload sent to the storage engine.

    A fresh instance is built for every sync call and discarded once the
    storage request resolves. Only the keys that were explicitly set are
    sent over the wire (see `to_request`), using the engine's camelCase
    names.

    Attributes:
        conditions: Filter copied verbatim from the caller options.
        profile_id: Logical database/workspace of the target, passed through as given.
        store_name: Table/bucket within the profile (e.g. 'notes').
        id_attribute: Name of the identifying field (single-record targets only).
        id: Current value of the identifying field; may be None for new records.
        data: Serialized record, present on write paths only.
    """
    conditions: Optional[Any] = None
    profile_id: Optional[Any] = Field(None, alias="profileId")
    store_name: Optional[Any] = Field(None, alias="storeName")
    id_attribute: Optional[str] = Field(None, alias="idAttribute")
    id: Optional[Any] = None
    data: Optional[Dict[str, Any]] = None

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @classmethod
    def build(cls, target: Any, caller_options: Optional[Mapping[str, Any]] = None) -> "RequestOptions":
        """
        Builds the options for one sync call.

        Only `conditions` is taken from the caller options; every other
        caller-supplied key is discarded. `profileId` and `storeName` come
        from the target, and `idAttribute`/`id` are added only when the
        target declares an identifying field.
        """
        fields: Dict[str, Any] = {}
        if caller_options and "conditions" in caller_options:
            fields["conditions"] = caller_options["conditions"]

        fields["profile_id"] = target.profile_id
        fields["store_name"] = target.store_name

        id_attribute = getattr(target, "id_attribute", None)
        if id_attribute:
            fields["id_attribute"] = id_attribute
            fields["id"] = target.get(id_attribute)

        return cls(**fields)

    def with_data(self, data: Dict[str, Any]) -> "RequestOptions":
        """Returns a copy carrying `data`; keys already set here win on conflict."""
        return RequestOptions(**{"data": data, **self.model_dump(exclude_unset=True)})

    def has_identity(self) -> bool:
        return "id_attribute" in self.model_fields_set

    def to_request(self) -> Dict[str, Any]:
        """Plain dict with the engine's wire names, restricted to the keys that were set."""
        return self.model_dump(by_alias=True, exclude_unset=True)
