# recordsync\shared\container.py
from dependency_injector import containers, providers

from recordsync.shared.config import settings
from recordsync.adapters.persistence import create_storage_engine
from recordsync.core.use_cases.sync import SyncAdapter

class Container(containers.DeclarativeContainer):
    """
    Dependency Injection Container.

    This declarative container defines the assembly instructions for the application.
    """

    # 1. Configuration
    # We load settings directly, but wrapping them allows overriding in tests.
    config = providers.Configuration(pydantic_settings=[settings])

    # 2. Gateways (Infrastructure Adapters)

    # Storage Engine (Singleton: one handle shared by every sync call)
    storage_engine = providers.Singleton(
        create_storage_engine,
        backend=config.STORAGE_BACKEND,
        base_path=config.FILESYSTEM_REPO_PATH,
    )

    # 3. Use Cases (Application Logic)

    # Factory: the adapter is stateless, so a fresh one per request is free,
    # while the engine stays a Singleton.
    sync_adapter = providers.Factory(
        SyncAdapter,
        engine=storage_engine,
    )

# Instantiate the container for global access (e.g. by the CLI)
container = Container()
