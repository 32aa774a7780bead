"""Application configuration and constants."""
import os
from pathlib import Path


def _parse_int_env(name: str, default: int) -> int:
    """Parse integer from environment variable."""
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _parse_bool_env(name: str, default: bool) -> bool:
    """Parse boolean flag from environment variable."""
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


# Database (key-value store holding the question bank)
DB_DIR = Path(os.environ.get("DB_DIR", Path.cwd() / "data"))
DB_DIR.mkdir(parents=True, exist_ok=True)
DATABASE_URL = os.environ.get(
    "DATABASE_URL", f"sqlite:///{DB_DIR / 'question_bank.db'}"
)
BANK_STORAGE_KEY = os.environ.get("BANK_STORAGE_KEY", "voltKickQuestions")

# Import
PREVIEW_LIMIT = _parse_int_env("PREVIEW_LIMIT", 5)
MAX_UPLOAD_BYTES = _parse_int_env("MAX_UPLOAD_BYTES", 2 * 1024 * 1024)  # 2 MB
RELETTER_OPTIONS = _parse_bool_env("RELETTER_OPTIONS", False)

# Logging
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

# Import sessions
SESSION_TTL_MINUTES = _parse_int_env("SESSION_TTL_MINUTES", 60)
SESSION_CLEANUP_INTERVAL_SECONDS = _parse_int_env(
    "SESSION_CLEANUP_INTERVAL_SECONDS", 5 * 60
)
