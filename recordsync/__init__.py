# recordsync\__init__.py
"""
Record Sync - asynchronous persistence adapter for record models.

This package translates the generic CRUD verbs of a model/collection layer
into single requests against a pluggable storage engine, following
Hexagonal Architecture (Ports & Adapters).
"""

__version__ = "1.0.0"
