import argparse
import sys
from pathlib import Path

from api.config import LOG_LEVEL, PREVIEW_LIMIT, RELETTER_OPTIONS
from api.database import SessionLocal, init_db
from api.services import import_service
from core.logging_setup import setup_console_logging
from errors import QuestionImportError
from models import ColumnMapping, DifficultyLevel, ImportSession

setup_console_logging(LOG_LEVEL)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Import quiz questions from a CSV file into the question bank"
    )
    parser.add_argument("file", type=Path, help="Path to .csv file")
    parser.add_argument("--question", help="Column holding the question text")
    parser.add_argument(
        "--option",
        action="append",
        default=[],
        help="Option column, repeat 2-4 times in answer order",
    )
    parser.add_argument("--correct", help="Column holding the correct answer")
    parser.add_argument(
        "--level",
        choices=[level.value for level in DifficultyLevel],
        default=DifficultyLevel.EASY.value,
        help="Difficulty level to store the questions in",
    )
    parser.add_argument(
        "--preview-only",
        action="store_true",
        help="Parse and show the preview without saving",
    )
    parser.add_argument(
        "--reletter-options",
        action="store_true",
        default=RELETTER_OPTIONS,
        help="Re-letter options contiguously after dropping empty ones",
    )
    return parser.parse_args(argv)


def print_preview(session: ImportSession) -> None:
    for question in session.questions[:PREVIEW_LIMIT]:
        print(question.question)
        for option in question.options:
            marker = "*" if option.id == question.correct_answer else " "
            print(f"  {marker} {option.id}) {option.text}")
    if len(session.questions) > PREVIEW_LIMIT:
        print(f"... showing first {PREVIEW_LIMIT} of {len(session.questions)}")


def run(args: argparse.Namespace) -> int:
    try:
        data = args.file.read_bytes()
    except OSError as e:
        print(f"Failed to read the file: {e}", file=sys.stderr)
        return 1

    try:
        session = import_service.start_import(args.file.name, data)
        if not (args.question or args.option or args.correct):
            print(f"Delimiter: {session.delimiter!r}")
            print("Columns: " + ", ".join(session.headers))
            return 0

        mapping = ColumnMapping(
            question_column=args.question or "",
            option_columns=tuple(args.option),
            correct_answer_column=args.correct or "",
        )
        session = import_service.apply_mapping(
            session.session_id, mapping, args.reletter_options
        )
        print(session.message)
        if not session.questions:
            return 0
        print_preview(session)
        if args.preview_only:
            return 0

        init_db()
        db = SessionLocal()
        try:
            session, level_size = import_service.save_import(
                db, session.session_id, DifficultyLevel(args.level)
            )
        finally:
            db.close()
        print(f"{session.message} ({level_size} in level)")
        return 0
    except QuestionImportError as e:
        print(e.message, file=sys.stderr)
        return 1


def main() -> None:
    sys.exit(run(parse_args()))


if __name__ == "__main__":
    main()
