# recordsync\adapters\__init__.py
"""
Infrastructure Adapters.

This package contains the concrete implementations of the Ports defined in `recordsync.core.ports`.
- `persistence`: Secondary Adapters (Driven) - storage engines answering
  `find`, `findItem`, `save` and `removeItem` requests.

In Hexagonal Architecture, dependencies point INWARD. These modules depend on `recordsync.core`,
but `recordsync.core` never imports from here.
"""
