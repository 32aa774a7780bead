from __future__ import annotations
import enum
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from errors import MappingIncompleteError

MIN_OPTION_COLUMNS = 2
MAX_OPTION_COLUMNS = 4


class DifficultyLevel(str, enum.Enum):
    """Question bank levels."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    QUIZ = "quiz"


class ImportStage(str, enum.Enum):
    """Stages of a single CSV import."""

    IDLE = "idle"
    HEADERS_DETECTED = "headers_detected"
    COLUMNS_MAPPED = "columns_mapped"
    PREVIEWED = "previewed"
    SAVING = "saving"
    SAVED = "saved"


@dataclass(frozen=True)
class Option:
    id: str  # "a", "b", ... from the option column position
    text: str


@dataclass
class Question:
    id: int
    question: str
    options: List[Option]
    correct_answer: str


@dataclass(frozen=True)
class NormalizedRow:
    index: int  # 1-based, header is row 0
    values: Dict[str, str]


@dataclass(frozen=True)
class ColumnMapping:
    question_column: str
    option_columns: Tuple[str, ...]
    correct_answer_column: str

    def validate(self, headers: List[str]) -> None:
        """Raise MappingIncompleteError unless every role points at a header."""
        if not self.question_column or not self.correct_answer_column:
            raise MappingIncompleteError("Please select all required columns")
        if len(self.option_columns) < MIN_OPTION_COLUMNS:
            raise MappingIncompleteError("Please select all required columns")
        if len(self.option_columns) > MAX_OPTION_COLUMNS:
            raise MappingIncompleteError(
                f"Select at most {MAX_OPTION_COLUMNS} option columns"
            )
        if len(set(self.option_columns)) != len(self.option_columns):
            raise MappingIncompleteError("Option columns must not repeat")
        selected = [self.question_column, *self.option_columns, self.correct_answer_column]
        unknown = [name for name in selected if name not in headers]
        if unknown:
            raise MappingIncompleteError(f"Unknown columns: {', '.join(unknown)}")


@dataclass
class ImportSession:
    session_id: str
    filename: str
    text: str
    delimiter: str = ","
    headers: List[str] = field(default_factory=list)
    mapping: ColumnMapping | None = None
    questions: List[Question] = field(default_factory=list)
    stage: ImportStage = ImportStage.IDLE
    message: str | None = None
    level: DifficultyLevel | None = None
    created_at: str = ""
