"""Utility modules."""
from api.utils.file_utils import read_upload_bytes
from api.utils.json_utils import json_dump, json_load
from api.utils.time_utils import parse_iso_timestamp, utc_now
from api.utils.validation import validate_id, validate_level

__all__ = [
    "read_upload_bytes",
    "json_dump",
    "json_load",
    "parse_iso_timestamp",
    "utc_now",
    "validate_id",
    "validate_level",
]
