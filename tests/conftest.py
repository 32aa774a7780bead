import os
import tempfile
from pathlib import Path

import pytest

# keep api.config from creating the default database in the working directory
os.environ.setdefault("DB_DIR", tempfile.mkdtemp(prefix="question-bank-"))

from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from api.database import init_db  # noqa: E402
from api.services import import_service  # noqa: E402


@pytest.fixture(autouse=True)
def _clear_import_sessions():
    import_service._sessions.clear()
    yield
    import_service._sessions.clear()


@pytest.fixture
def db_engine(tmp_path: Path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'bank.db'}",
        connect_args={"check_same_thread": False},
    )
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(db_engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)()
    try:
        yield session
    finally:
        session.close()
