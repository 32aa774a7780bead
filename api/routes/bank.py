"""Question bank endpoints."""
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session as DbSession

from api.database import get_db
from api.services import bank_service
from api.utils import validate_level
from errors import BankStorageError
from serialization import serialize_bank_summary

router = APIRouter(prefix="/api/bank", tags=["bank"])


@router.get("")
def get_bank_summary(
    db: Annotated[DbSession, Depends(get_db)],
) -> dict[str, object]:
    """Question counts per level."""
    try:
        bank = bank_service.load_bank(db)
    except BankStorageError as e:
        raise HTTPException(status_code=503, detail=e.message)
    return serialize_bank_summary(bank)


@router.get("/{level}")
def get_level(
    level: str,
    db: Annotated[DbSession, Depends(get_db)],
) -> dict[str, object]:
    """Questions stored in one level."""
    difficulty = validate_level(level)
    try:
        bank = bank_service.load_bank(db)
    except BankStorageError as e:
        raise HTTPException(status_code=503, detail=e.message)
    questions = bank[difficulty.value]
    return {"level": difficulty.value, "questions": questions}
