from __future__ import annotations

from typing import Any, Iterable

from models import ImportSession, ImportStage, Question


def question_to_payload(question: Question) -> dict[str, Any]:
    return {
        "id": question.id,
        "question": question.question,
        "options": [
            {"id": option.id, "text": option.text} for option in question.options
        ],
        "correctAnswer": question.correct_answer,
    }


def questions_to_payload(questions: Iterable[Question]) -> list[dict[str, Any]]:
    return [question_to_payload(question) for question in questions]


def serialize_session(
    session: ImportSession,
    preview_limit: int,
) -> dict[str, Any]:
    mapping = None
    if session.mapping is not None:
        mapping = {
            "questionColumn": session.mapping.question_column,
            "optionColumns": list(session.mapping.option_columns),
            "correctAnswerColumn": session.mapping.correct_answer_column,
        }
    payload: dict[str, Any] = {
        "id": session.session_id,
        "filename": session.filename,
        "stage": session.stage.value,
        "delimiter": session.delimiter,
        "headers": list(session.headers),
        "mapping": mapping,
        "questionCount": len(session.questions),
        "preview": questions_to_payload(session.questions[:preview_limit]),
        "message": session.message,
        "level": session.level.value if session.level else None,
        "createdAt": session.created_at,
    }
    payload["empty"] = (
        session.stage == ImportStage.PREVIEWED and not session.questions
    )
    return payload


def serialize_bank_summary(bank: dict[str, list]) -> dict[str, Any]:
    return {
        "levels": {level: len(questions) for level, questions in bank.items()},
        "questionCount": sum(len(questions) for questions in bank.values()),
    }
