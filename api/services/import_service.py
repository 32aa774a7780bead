"""Service for CSV import sessions.

An import moves through ``ImportStage``:
idle -> headers_detected -> columns_mapped -> previewed -> saving -> saved.
Sessions live in process memory only; the bank is the only persisted state.
"""
import logging
import threading
import uuid
from datetime import datetime, timedelta, timezone

from sqlalchemy.orm import Session as DbSession

from api.services import bank_service
from api.utils import parse_iso_timestamp, utc_now
from csv_import import detect_delimiter, parse_questions_from_csv
from errors import (
    BankStorageError,
    FileReadError,
    ImportStageError,
    SessionNotFoundError,
)
from models import ColumnMapping, DifficultyLevel, ImportSession, ImportStage

logger = logging.getLogger(__name__)

_sessions: dict[str, ImportSession] = {}
_lock = threading.Lock()

MAPPABLE_STAGES = {
    ImportStage.HEADERS_DETECTED,
    ImportStage.COLUMNS_MAPPED,
    ImportStage.PREVIEWED,
}


def start_import(filename: str, data: bytes) -> ImportSession:
    """Decode an uploaded file and detect its delimiter and headers."""
    try:
        text = data.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        logger.warning(f"Could not decode {filename!r}: {e}")
        raise FileReadError("Failed to read the file") from e

    delimiter, headers = detect_delimiter(text)
    session = ImportSession(
        session_id=uuid.uuid4().hex,
        filename=filename,
        text=text,
        delimiter=delimiter,
        headers=headers,
        stage=ImportStage.HEADERS_DETECTED,
        created_at=utc_now(),
    )
    with _lock:
        _sessions[session.session_id] = session
    logger.info(
        f"Import {session.session_id} started from {filename!r}: "
        f"{len(headers)} columns, delimiter={delimiter!r}"
    )
    return session


def get_session(session_id: str) -> ImportSession:
    with _lock:
        session = _sessions.get(session_id)
    if session is None:
        raise SessionNotFoundError("Import session not found")
    return session


def discard_session(session_id: str) -> None:
    with _lock:
        removed = _sessions.pop(session_id, None)
    if removed is None:
        raise SessionNotFoundError("Import session not found")


def apply_mapping(
    session_id: str,
    mapping: ColumnMapping,
    reletter_options: bool = False,
) -> ImportSession:
    """Confirm the column mapping and build the preview from the raw text."""
    session = get_session(session_id)
    with _lock:
        if session.stage not in MAPPABLE_STAGES:
            raise ImportStageError("This import can no longer be changed")

        # an invalid mapping leaves the previous state untouched
        mapping.validate(session.headers)

        session.mapping = mapping
        session.questions = []
        session.stage = ImportStage.COLUMNS_MAPPED

        session.questions = parse_questions_from_csv(
            session.text, mapping, reletter_options
        )
        session.stage = ImportStage.PREVIEWED
        if session.questions:
            session.message = f"Parsed {len(session.questions)} questions successfully"
        else:
            session.message = "No valid questions were found in the file"
    return session


def save_import(
    db: DbSession,
    session_id: str,
    level: DifficultyLevel,
) -> tuple[ImportSession, int]:
    """Append the parsed questions to ``level``.

    Returns the session and the new size of the level. A saved session is
    dropped from the registry. On a storage failure the parsed questions
    are kept so the save can be retried.
    """
    session = get_session(session_id)
    with _lock:
        if session.stage == ImportStage.SAVING:
            raise ImportStageError("This import is already being saved")
        if session.stage != ImportStage.PREVIEWED:
            raise ImportStageError("Complete the column mapping before saving")
        if not session.questions:
            raise ImportStageError("There are no questions to save")
        session.stage = ImportStage.SAVING

    count = len(session.questions)
    try:
        bank = bank_service.store_questions(db, level, session.questions)
    except BankStorageError:
        with _lock:
            session.stage = ImportStage.PREVIEWED
            session.message = "Failed to save the questions"
        raise

    with _lock:
        session.stage = ImportStage.SAVED
        session.level = level
        session.message = f'Saved {count} questions to level "{level.value}"'
        # reset the form: raw text and parsed questions are no longer needed
        session.text = ""
        session.questions = []
        _sessions.pop(session.session_id, None)
    return session, len(bank[level.value])


def expire_idle_sessions(
    max_age: timedelta,
    now: datetime | None = None,
) -> int:
    """Drop sessions created more than ``max_age`` ago. Returns the count."""
    now = now or datetime.now(timezone.utc)
    expired = []
    with _lock:
        for session_id, session in _sessions.items():
            if session.stage == ImportStage.SAVING:
                continue
            created = parse_iso_timestamp(session.created_at)
            if created is None or now - created > max_age:
                expired.append(session_id)
        for session_id in expired:
            del _sessions[session_id]
    return len(expired)
