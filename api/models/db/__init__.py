"""Database models."""
from api.models.db.stored_value import StoredValue

__all__ = [
    "StoredValue",
]
