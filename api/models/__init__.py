"""Pydantic models."""
from api.models.imports import ColumnMappingRequest, SaveImportRequest

__all__ = [
    "ColumnMappingRequest",
    "SaveImportRequest",
]
