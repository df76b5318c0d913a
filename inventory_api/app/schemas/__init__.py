"""
Pydantic schema definitions for API payloads.

Schemas are separated from the storage layer so the API representation
can be validated independently of how records are persisted.
"""
