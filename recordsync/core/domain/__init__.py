# recordsync\core\domain\__init__.py
"""
Domain Entities and Value Objects.

These models represent the vocabulary of the sync layer
(verbs, storage operations, request options, records) and are devoid
of any storage logic.
"""
