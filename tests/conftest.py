# tests\conftest.py
import pytest
from unittest.mock import AsyncMock, MagicMock

from recordsync.shared.container import Container
from recordsync.core.domain.records import Record, RecordCollection
from recordsync.core.ports.storage_engine import IStorageEngine
from recordsync.core.use_cases.sync import SyncAdapter

class Note(Record):
    profile_id = "p1"
    store_name = "notes"

class Notes(RecordCollection):
    record_class = Note

@pytest.fixture(scope="function")
def mock_engine():
    """Returns a mock implementation of the Storage Engine."""
    engine = MagicMock(spec=IStorageEngine)
    # Async methods must be mocked with AsyncMock
    engine.request = AsyncMock(return_value=None)
    return engine

@pytest.fixture(scope="function")
def adapter(mock_engine):
    return SyncAdapter(mock_engine)

@pytest.fixture(scope="function")
def container(mock_engine):
    """
    Sets up the Dependency Injection Container for testing.
    It overrides the real storage engine with the mock defined above.
    """
    container = Container()
    container.storage_engine.override(mock_engine)

    yield container

    # Clean up overrides after test
    container.storage_engine.reset_override()

@pytest.fixture
def note():
    """Provides a stored note: id '42' in profile 'p1', store 'notes'."""
    return Note({"id": "42", "title": "x"})

@pytest.fixture
def notes():
    return Notes()
