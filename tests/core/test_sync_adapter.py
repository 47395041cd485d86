# tests\core\test_sync_adapter.py
import asyncio

import pytest
from unittest.mock import AsyncMock, MagicMock

from recordsync.core.domain.exceptions import NOT_FOUND, RecordNotFoundError, UnsupportedVerbError
from recordsync.core.domain.models import SyncVerb
from recordsync.core.use_cases.sync import SyncAdapter

def make_model(attributes=None, serialized=None, id_attribute="id"):
    """A bare model double exposing only what the sync layer consumes."""
    attributes = dict(attributes or {})
    model = MagicMock()
    model.profile_id = "p1"
    model.store_name = "notes"
    model.id_attribute = id_attribute
    model.get.side_effect = attributes.get
    model.serialize.return_value = serialized if serialized is not None else attributes
    return model

def make_collection():
    collection = MagicMock()
    collection.profile_id = "p1"
    collection.store_name = "notes"
    collection.id_attribute = None
    return collection


@pytest.mark.asyncio
class TestDispatch:

    async def test_read_scenario_routes_to_find_item(self, adapter, mock_engine):
        """
        Scenario: model with id '42' in profile 'p1', store 'notes' is read.
        Expected: one findItem request with the identity options, no conditions key.
        """
        # Arrange
        model = make_model({"id": "42"})
        mock_engine.request.return_value = {"id": "42", "title": "x"}

        # Act
        result = await adapter.dispatch("read", model, {})

        # Assert
        assert result is model
        mock_engine.request.assert_awaited_once_with(
            "findItem",
            [{"profileId": "p1", "storeName": "notes", "idAttribute": "id", "id": "42"}],
        )

    async def test_save_scenario_sends_serialized_data(self, adapter, mock_engine):
        """
        Scenario: the same model is saved and serializes to {'title': 'x'}.
        Expected: one save request with data plus the identity options.
        """
        model = make_model({"id": "42"}, serialized={"title": "x"})
        mock_engine.request.return_value = {"id": "42", "title": "x"}

        await adapter.dispatch("update", model, {})

        mock_engine.request.assert_awaited_once_with(
            "save",
            [{
                "data": {"title": "x"},
                "profileId": "p1",
                "storeName": "notes",
                "idAttribute": "id",
                "id": "42",
            }],
        )

    async def test_only_conditions_survive_from_caller_options(self, adapter, mock_engine):
        collection = make_collection()
        mock_engine.request.return_value = []

        await adapter.dispatch(
            "read",
            collection,
            {"conditions": {"trash": 0}, "profileId": "evil", "data": {"x": 1}, "success": print},
        )

        mock_engine.request.assert_awaited_once_with(
            "find", [{"conditions": {"trash": 0}, "profileId": "p1", "storeName": "notes"}]
        )

    async def test_conditions_are_passed_verbatim(self, adapter, mock_engine):
        conditions = {"notebookId": "0", "tags": ["a", "b"]}
        mock_engine.request.return_value = []

        await adapter.dispatch("read", make_collection(), {"conditions": conditions})

        sent = mock_engine.request.call_args[0][1][0]
        assert sent["conditions"] == conditions

    async def test_new_model_sends_explicit_null_id(self, adapter, mock_engine):
        model = make_model({"title": "draft"})
        mock_engine.request.return_value = {"id": "1", "title": "draft"}

        await adapter.dispatch("create", model)

        sent = mock_engine.request.call_args[0][1][0]
        assert sent["idAttribute"] == "id"
        assert "id" in sent and sent["id"] is None

    async def test_custom_identifying_field(self, adapter, mock_engine):
        model = make_model({"uuid": "u-1"}, id_attribute="uuid")
        mock_engine.request.return_value = {"uuid": "u-1"}

        await adapter.dispatch(SyncVerb.READ, model)

        sent = mock_engine.request.call_args[0][1][0]
        assert sent["idAttribute"] == "uuid"
        assert sent["id"] == "u-1"

    @pytest.mark.parametrize("verb", ["patch", "READ", "", None, 3])
    async def test_unsupported_verb(self, adapter, mock_engine, verb):
        with pytest.raises(UnsupportedVerbError) as excinfo:
            await adapter.dispatch(verb, make_model({"id": "1"}), {})

        assert excinfo.value.verb == verb
        mock_engine.request.assert_not_called()

    async def test_options_are_fresh_per_call(self, adapter, mock_engine):
        mock_engine.request.return_value = {"id": "1"}
        caller_options = {"conditions": {"a": 1}}

        await adapter.dispatch("read", make_model({"id": "1"}), caller_options)
        await adapter.dispatch("read", make_model({"id": "2"}), caller_options)

        first = mock_engine.request.call_args_list[0][0][1][0]
        second = mock_engine.request.call_args_list[1][0][1][0]
        assert first is not second
        assert (first["id"], second["id"]) == ("1", "2")
        assert caller_options == {"conditions": {"a": 1}}

    async def test_adapter_is_callable(self, adapter, mock_engine):
        mock_engine.request.return_value = []
        collection = make_collection()

        assert await adapter("read", collection) is collection

    async def test_use_returns_bound_dispatch(self, mock_engine):
        sync = SyncAdapter.use(mock_engine)
        mock_engine.request.return_value = {"id": "9"}
        model = make_model({"id": "9"})

        assert await sync("read", model, {}) is model
        mock_engine.request.assert_awaited_once()

    async def test_concurrent_calls_do_not_share_options(self, adapter, mock_engine):
        async def echo(op_name, args):
            await asyncio.sleep(0)
            return {"id": args[0]["id"]}

        mock_engine.request.side_effect = echo
        models = [make_model({"id": str(i)}) for i in range(5)]

        await asyncio.gather(*(adapter.dispatch("read", m) for m in models))

        for i, model in enumerate(models):
            model.set.assert_called_once_with({"id": str(i)})


@pytest.mark.asyncio
class TestReadPath:

    async def test_routing_depends_only_on_identifying_field(self, adapter, mock_engine):
        mock_engine.request.return_value = {"id": "1"}
        await adapter.read(make_model({"id": "1"}), MagicMock())
        assert mock_engine.request.call_args[0][0] == "findItem"

        mock_engine.request.return_value = []
        await adapter.dispatch("read", make_model({}, id_attribute=None))
        assert mock_engine.request.call_args[0][0] == "find"

    async def test_find_item_sets_payload_on_model(self, adapter, mock_engine):
        model = make_model({"id": "42"})
        payload = {"id": "42", "title": "x", "tags": ["a"]}
        mock_engine.request.return_value = payload

        result = await adapter.dispatch("read", model)

        assert result is model
        model.set.assert_called_once_with(payload)

    @pytest.mark.parametrize("payload", [None, False, 0, "", {}])
    async def test_find_item_falsy_payload_is_not_found(self, adapter, mock_engine, payload):
        model = make_model({"id": "42"})
        mock_engine.request.return_value = payload

        with pytest.raises(RecordNotFoundError) as excinfo:
            await adapter.dispatch("read", model)

        assert excinfo.value.signal == NOT_FOUND
        assert str(excinfo.value) == "not found"
        assert excinfo.value.store_name == "notes"
        assert excinfo.value.record_id == "42"
        model.set.assert_not_called()

    async def test_find_adds_records_in_engine_order(self, adapter, mock_engine):
        collection = make_collection()
        payloads = [{"id": "3"}, {"id": "1"}, {"id": "2"}]
        mock_engine.request.return_value = payloads

        result = await adapter.dispatch("read", collection)

        assert result is collection
        collection.add.assert_called_once_with(payloads)

    @pytest.mark.parametrize("payloads", [[], None])
    async def test_find_empty_result_leaves_collection_untouched(self, adapter, mock_engine, payloads):
        collection = make_collection()
        mock_engine.request.return_value = payloads

        result = await adapter.dispatch("read", collection)

        assert result is collection
        collection.add.assert_not_called()


@pytest.mark.asyncio
class TestWritePath:

    async def test_create_update_save_are_identical(self, mock_engine):
        calls = []
        results = []
        for verb in ("create", "update"):
            engine = MagicMock()
            engine.request = AsyncMock(return_value={"id": "42", "title": "y"})
            model = make_model({"id": "42"}, serialized={"title": "x"})
            results.append(await SyncAdapter(engine).dispatch(verb, model, {"conditions": None}))
            calls.append(engine.request.call_args)
            model.set.assert_called_once_with({"id": "42", "title": "y"})

        assert calls[0] == calls[1]
        assert SyncAdapter.create is SyncAdapter.save
        assert SyncAdapter.update is SyncAdapter.save

    async def test_save_returns_updated_model(self, adapter, mock_engine):
        model = make_model({"id": "42"})
        mock_engine.request.return_value = {"id": "42", "updated": 1}

        result = await adapter.dispatch("update", model)

        assert result is model
        model.set.assert_called_once_with({"id": "42", "updated": 1})

    async def test_delete_sends_serialized_model(self, adapter, mock_engine):
        model = make_model({"id": "42"}, serialized={"id": "42", "title": "x"})
        mock_engine.request.return_value = "removed"

        result = await adapter.dispatch("delete", model, {"conditions": {"a": 1}})

        assert result == "removed"
        mock_engine.request.assert_awaited_once_with(
            "removeItem",
            [{
                "data": {"id": "42", "title": "x"},
                "conditions": {"a": 1},
                "profileId": "p1",
                "storeName": "notes",
                "idAttribute": "id",
                "id": "42",
            }],
        )
        model.set.assert_not_called()

    async def test_caller_data_option_cannot_replace_payload(self, adapter, mock_engine):
        model = make_model({"id": "42"}, serialized={"title": "real"})
        mock_engine.request.return_value = {"id": "42"}

        await adapter.dispatch("update", model, {"data": {"title": "injected"}})

        sent = mock_engine.request.call_args[0][1][0]
        assert sent["data"] == {"title": "real"}


@pytest.mark.asyncio
class TestEngineFailures:

    @pytest.mark.parametrize("verb", ["read", "create", "update", "delete"])
    async def test_engine_errors_propagate_unchanged(self, adapter, mock_engine, verb):
        error = ConnectionError("engine down")
        mock_engine.request.side_effect = error
        model = make_model({"id": "42"})

        with pytest.raises(ConnectionError) as excinfo:
            await adapter.dispatch(verb, model)

        assert excinfo.value is error
        assert mock_engine.request.await_count == 1
        model.set.assert_not_called()

    async def test_find_failure_does_not_touch_collection(self, adapter, mock_engine):
        mock_engine.request.side_effect = RuntimeError("boom")
        collection = make_collection()

        with pytest.raises(RuntimeError):
            await adapter.dispatch("read", collection)

        collection.add.assert_not_called()
