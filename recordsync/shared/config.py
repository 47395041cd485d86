# recordsync\shared\config.py
from enum import Enum
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

class AppEnv(str, Enum):
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TESTING = "testing"

class StorageBackend(str, Enum):
    MEMORY = "memory"
    FILESYSTEM = "filesystem"

class Settings(BaseSettings):
    """
    Central Configuration Registry.
    Strictly typed and validated via Pydantic.
    """

    # --- Application Meta ---
    APP_NAME: str = "record-sync"
    APP_ENV: AppEnv = AppEnv.DEVELOPMENT
    DEBUG: bool = False

    # --- Logging & Observability ---
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"
    OTEL_SERVICE_NAME: str = "record-sync"
    OTEL_EXPORTER_OTLP_ENDPOINT: Optional[str] = None

    # --- Persistence ---
    STORAGE_BACKEND: StorageBackend = StorageBackend.MEMORY

    # FILESYSTEM CONFIG
    # Stores are written below <FILESYSTEM_REPO_PATH>/data/<profile>/
    FILESYSTEM_REPO_PATH: str = "."

    # Profile used by tooling when none is given explicitly
    DEFAULT_PROFILE_ID: str = "notes-db"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
