"""File handling utilities."""
from fastapi import HTTPException, UploadFile


def read_upload_bytes(upload: UploadFile, max_bytes: int) -> bytes:
    """Read the whole upload, rejecting files larger than ``max_bytes``."""
    data = upload.file.read(max_bytes + 1)
    if len(data) > max_bytes:
        raise HTTPException(status_code=413, detail="File is too large")
    return data
