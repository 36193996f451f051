"""
Pydantic schema definitions for API payloads.

Schemas are separated from the storage layer so that the API
representation of a product does not depend on how it is persisted.
"""
