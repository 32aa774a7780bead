import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from api.app import app
from api.database import get_db
from api.services import bank_service
from errors import BankStorageError

CSV = "q,a,b,c,ans\nCapital of France?,Paris,Rome,Berlin,1\nBad row,,,,\n"
MAPPING = {
    "questionColumn": "q",
    "optionColumns": ["a", "b", "c"],
    "correctAnswerColumn": "ans",
}


@pytest.fixture
def client(db_engine):
    factory = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)

    def override_get_db():
        db = factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def _upload(client: TestClient, text: str = CSV) -> dict:
    response = client.post(
        "/api/imports",
        files={"file": ("questions.csv", text.encode("utf-8"), "text/csv")},
    )
    assert response.status_code == 200
    return response.json()


def test_full_import_flow(client: TestClient) -> None:
    session = _upload(client)
    assert session["stage"] == "headers_detected"
    assert session["headers"] == ["q", "a", "b", "c", "ans"]
    assert session["delimiter"] == ","

    response = client.post(f"/api/imports/{session['id']}/mapping", json=MAPPING)
    assert response.status_code == 200
    preview = response.json()
    assert preview["stage"] == "previewed"
    assert preview["questionCount"] == 1
    assert preview["empty"] is False
    assert preview["preview"] == [
        {
            "id": 1,
            "question": "Capital of France?",
            "options": [
                {"id": "a", "text": "Paris"},
                {"id": "b", "text": "Rome"},
                {"id": "c", "text": "Berlin"},
            ],
            "correctAnswer": "a",
        }
    ]

    response = client.post(f"/api/imports/{session['id']}/save", json={"level": "quiz"})
    assert response.status_code == 200
    saved = response.json()
    assert saved["stage"] == "saved"
    assert saved["levelSize"] == 1

    summary = client.get("/api/bank").json()
    assert summary["levels"] == {"easy": 0, "medium": 0, "hard": 0, "quiz": 1}

    level = client.get("/api/bank/quiz").json()
    assert level["questions"][0]["question"] == "Capital of France?"


def test_preview_is_limited(client: TestClient) -> None:
    rows = "".join(f"Q{i},x,y,z,{(i % 3) + 1}\n" for i in range(8))
    session = _upload(client, "q,a,b,c,ans\n" + rows)
    preview = client.post(f"/api/imports/{session['id']}/mapping", json=MAPPING).json()
    assert preview["questionCount"] == 8
    assert len(preview["preview"]) == 5


def test_empty_result_is_informational(client: TestClient) -> None:
    session = _upload(client, "q,a,b,c,ans\nQ,,,,\n")
    response = client.post(f"/api/imports/{session['id']}/mapping", json=MAPPING)
    assert response.status_code == 200
    assert response.json()["empty"] is True
    assert response.json()["message"] == "No valid questions were found in the file"

    response = client.post(f"/api/imports/{session['id']}/save", json={"level": "easy"})
    assert response.status_code == 409


def test_incomplete_mapping_is_rejected(client: TestClient) -> None:
    session = _upload(client)
    response = client.post(
        f"/api/imports/{session['id']}/mapping",
        json={"questionColumn": "q", "optionColumns": ["a"], "correctAnswerColumn": "ans"},
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Please select all required columns"
    assert client.get(f"/api/imports/{session['id']}").json()["stage"] == "headers_detected"


def test_invalid_level(client: TestClient) -> None:
    session = _upload(client)
    client.post(f"/api/imports/{session['id']}/mapping", json=MAPPING)
    response = client.post(f"/api/imports/{session['id']}/save", json={"level": "expert"})
    assert response.status_code == 400
    assert client.get("/api/bank/expert").status_code == 400


def test_storage_failure_keeps_session(client: TestClient, monkeypatch) -> None:
    session = _upload(client)
    client.post(f"/api/imports/{session['id']}/mapping", json=MAPPING)

    def broken_store(*args, **kwargs):
        raise BankStorageError("Failed to save the questions")

    monkeypatch.setattr(bank_service, "store_questions", broken_store)
    response = client.post(f"/api/imports/{session['id']}/save", json={"level": "easy"})
    assert response.status_code == 503

    state = client.get(f"/api/imports/{session['id']}").json()
    assert state["stage"] == "previewed"
    assert state["questionCount"] == 1


def test_unreadable_upload(client: TestClient) -> None:
    response = client.post(
        "/api/imports",
        files={"file": ("questions.csv", b"\xff\xfe\xfa", "text/csv")},
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Failed to read the file"


def test_oversized_upload(client: TestClient, monkeypatch) -> None:
    from api.routes import imports

    monkeypatch.setattr(imports, "MAX_UPLOAD_BYTES", 10)
    response = client.post(
        "/api/imports",
        files={"file": ("questions.csv", CSV.encode("utf-8"), "text/csv")},
    )
    assert response.status_code == 413


def test_unknown_and_discarded_sessions(client: TestClient) -> None:
    assert client.get("/api/imports/missing").status_code == 404

    session = _upload(client)
    assert client.delete(f"/api/imports/{session['id']}").json()["deleted"] is True
    assert client.get(f"/api/imports/{session['id']}").status_code == 404
