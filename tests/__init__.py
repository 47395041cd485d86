# tests\__init__.py
"""
Test Suite for Record Sync.

Organization:
- `core`: Tests for the SyncAdapter, domain models and records with a mocked storage engine.
- `adapters`: Tests for the bundled storage engines (in-memory and filesystem).
- top level: configuration, container wiring and the CLI.
"""
