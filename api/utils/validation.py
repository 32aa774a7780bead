"""Validation utilities."""
from pathlib import Path

from fastapi import HTTPException

from models import DifficultyLevel


def validate_id(name: str, value: str) -> str:
    """Validate ID string (no path traversal)."""
    if not isinstance(value, str):
        raise HTTPException(status_code=400, detail=f"{name} is required")
    cleaned = value.strip()
    if not cleaned:
        raise HTTPException(status_code=400, detail=f"{name} is required")
    if Path(cleaned).name != cleaned or "/" in cleaned or "\\" in cleaned:
        raise HTTPException(status_code=400, detail=f"Invalid {name}")
    return cleaned


def validate_level(value: str) -> DifficultyLevel:
    """Validate difficulty level name."""
    try:
        return DifficultyLevel(value)
    except ValueError:
        allowed = ", ".join(level.value for level in DifficultyLevel)
        raise HTTPException(
            status_code=400, detail=f"Invalid level, expected one of: {allowed}"
        )
