"""Service for the difficulty-leveled question bank."""
import logging
from typing import Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session as DbSession

from api.config import BANK_STORAGE_KEY
from api.models.db.stored_value import StoredValue
from api.utils import json_dump, json_load
from errors import BankStorageError
from models import DifficultyLevel, Question
from serialization import question_to_payload

logger = logging.getLogger(__name__)

Bank = dict[str, list[dict[str, object]]]


def empty_bank() -> Bank:
    """Bank with every level present and empty."""
    return {level.value: [] for level in DifficultyLevel}


def load_bank(db: DbSession, key: str = BANK_STORAGE_KEY) -> Bank:
    """Read the whole bank. A missing key reads as an empty bank."""
    try:
        record = db.get(StoredValue, key)
    except SQLAlchemyError as e:
        logger.error(f"Failed to read question bank: {e}")
        raise BankStorageError("Failed to load the question bank") from e

    bank = empty_bank()
    if record is None:
        return bank

    try:
        stored = json_load(record.value)
    except ValueError as e:
        logger.error(f"Question bank under {key!r} is not valid JSON: {e}")
        raise BankStorageError("Failed to load the question bank") from e
    if not isinstance(stored, dict):
        raise BankStorageError("Failed to load the question bank")

    for level, questions in stored.items():
        if not isinstance(questions, list):
            logger.error(f"Question bank level {level!r} is not a list")
            raise BankStorageError("Failed to load the question bank")
        bank[level] = list(questions)
    return bank


def append_questions(
    bank: Bank, level: DifficultyLevel, questions: Sequence[Question]
) -> Bank:
    """Return a new bank with ``questions`` added to ``level``.

    New ids continue from the level size: M existing questions get
    M+1 ... M+N in parse order.
    """
    existing = list(bank.get(level.value, []))
    added = []
    for position, question in enumerate(questions, start=1):
        payload = question_to_payload(question)
        payload["id"] = len(existing) + position
        added.append(payload)

    updated = {name: list(items) for name, items in bank.items()}
    updated[level.value] = existing + added
    return updated


def save_bank(db: DbSession, bank: Bank, key: str = BANK_STORAGE_KEY) -> None:
    """Write the whole bank back under ``key`` (last writer wins)."""
    try:
        record = db.get(StoredValue, key)
        if record is None:
            db.add(StoredValue(key=key, value=json_dump(bank)))
        else:
            record.value = json_dump(bank)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to save question bank: {e}")
        raise BankStorageError("Failed to save the questions") from e


def store_questions(
    db: DbSession,
    level: DifficultyLevel,
    questions: Sequence[Question],
    key: str = BANK_STORAGE_KEY,
) -> Bank:
    """Append questions to a level and persist the bank."""
    bank = append_questions(load_bank(db, key), level, questions)
    save_bank(db, bank, key)
    logger.info(
        f"Saved {len(questions)} questions to level {level.value!r} "
        f"({len(bank[level.value])} total)"
    )
    return bank
