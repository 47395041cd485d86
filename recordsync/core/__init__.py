# recordsync\core\__init__.py
"""
Core Domain Layer.

This package contains the sync logic and the entities it works with.
It strictly follows the Hexagonal Architecture (Ports & Adapters) pattern:
- No dependencies on infrastructure (FileSystem, in-memory stores).
- Defines Interfaces (Ports) that the Infrastructure layer must implement.
"""
