"""CSV import endpoints."""
from typing import Annotated

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from sqlalchemy.orm import Session as DbSession

from api.config import MAX_UPLOAD_BYTES, PREVIEW_LIMIT, RELETTER_OPTIONS
from api.database import get_db
from api.models import ColumnMappingRequest, SaveImportRequest
from api.services import import_service
from api.utils import read_upload_bytes, validate_id, validate_level
from errors import (
    BankStorageError,
    FileReadError,
    ImportStageError,
    MappingIncompleteError,
    QuestionImportError,
    SessionNotFoundError,
)
from serialization import serialize_session

router = APIRouter(prefix="/api/imports", tags=["imports"])

_STATUS_CODES = {
    FileReadError: 400,
    MappingIncompleteError: 400,
    SessionNotFoundError: 404,
    ImportStageError: 409,
    BankStorageError: 503,
}


def _http_error(exc: QuestionImportError) -> HTTPException:
    status_code = _STATUS_CODES.get(type(exc), 400)
    return HTTPException(status_code=status_code, detail=exc.message)


@router.post("")
def upload_csv(file: UploadFile = File(...)) -> dict[str, object]:
    """Upload a CSV file and detect its columns."""
    data = read_upload_bytes(file, MAX_UPLOAD_BYTES)
    try:
        session = import_service.start_import(file.filename or "upload.csv", data)
    except QuestionImportError as e:
        raise _http_error(e)
    return serialize_session(session, PREVIEW_LIMIT)


@router.get("/{session_id}")
def get_import(session_id: str) -> dict[str, object]:
    """Get import session state."""
    session_id = validate_id("session_id", session_id)
    try:
        session = import_service.get_session(session_id)
    except QuestionImportError as e:
        raise _http_error(e)
    return serialize_session(session, PREVIEW_LIMIT)


@router.post("/{session_id}/mapping")
def map_columns(
    session_id: str,
    payload: ColumnMappingRequest,
) -> dict[str, object]:
    """Confirm the column mapping and return the preview."""
    session_id = validate_id("session_id", session_id)
    reletter = RELETTER_OPTIONS if payload.reletterOptions is None else payload.reletterOptions
    try:
        session = import_service.apply_mapping(
            session_id, payload.to_mapping(), reletter
        )
    except QuestionImportError as e:
        raise _http_error(e)
    return serialize_session(session, PREVIEW_LIMIT)


@router.post("/{session_id}/save")
def save_import(
    session_id: str,
    payload: SaveImportRequest,
    db: Annotated[DbSession, Depends(get_db)],
) -> dict[str, object]:
    """Append the parsed questions to the chosen level of the bank."""
    session_id = validate_id("session_id", session_id)
    level = validate_level(payload.level)
    try:
        session, level_size = import_service.save_import(db, session_id, level)
    except QuestionImportError as e:
        raise _http_error(e)
    result = serialize_session(session, PREVIEW_LIMIT)
    result["levelSize"] = level_size
    return result


@router.delete("/{session_id}")
def discard_import(session_id: str) -> dict[str, object]:
    """Drop an import session."""
    session_id = validate_id("session_id", session_id)
    try:
        import_service.discard_session(session_id)
    except QuestionImportError as e:
        raise _http_error(e)
    return {"id": session_id, "deleted": True}
