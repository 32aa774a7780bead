from __future__ import annotations

import logging
import re
from typing import Iterable, List, Mapping, Optional, Tuple

from models import ColumnMapping, NormalizedRow, Option, Question

log = logging.getLogger(__name__)

MIN_OPTIONS = 2

_DIGITS = re.compile(r"[0-9]+")
_OPTION_LETTER = re.compile(r"[a-dA-D]")


def option_letter(position: int) -> str:
    """0 -> 'a', 1 -> 'b', ..."""
    return chr(ord("a") + position)


def detect_delimiter(text: str) -> Tuple[str, List[str]]:
    """
    Pick the delimiter from the first line and split it into header names.
    Semicolon wins over tab, tab over comma.
    """
    first_line = text.split("\n", 1)[0]
    if ";" in first_line:
        delimiter = ";"
    elif "\t" in first_line:
        delimiter = "\t"
    else:
        delimiter = ","
    headers = [h.strip() for h in first_line.split(delimiter)]
    return delimiter, headers


def normalize_rows(
        lines: Iterable[str],
        delimiter: str,
        headers: List[str],
) -> List[NormalizedRow]:
    rows: List[NormalizedRow] = []
    for line in lines:
        if not line.strip():
            continue
        values = line.split(delimiter)
        # zip stops at the shorter side: missing trailing cells stay absent
        cells = {header: value.strip() for header, value in zip(headers, values)}
        rows.append(NormalizedRow(index=len(rows) + 1, values=cells))
    return rows


def _build_options(
        row: Mapping[str, str],
        option_columns: Iterable[str],
        reletter: bool,
) -> List[Tuple[int, Option]]:
    """Return (source position, option) pairs for the non-empty options."""
    kept: List[Tuple[int, Option]] = []
    for position, column in enumerate(option_columns):
        text = row.get(column, "")
        if not text.strip():
            continue
        kept.append((position, Option(id=option_letter(position), text=text)))
    if reletter:
        kept = [
            (position, Option(id=option_letter(new_position), text=option.text))
            for new_position, (position, option) in enumerate(kept)
        ]
    return kept


def resolve_correct_answer(
        value: Optional[str],
        options: List[Tuple[int, Option]],
        reletter: bool = False,
) -> str:
    """
    Resolve the correct-answer cell into an option id.

    Order is fixed: a number is a 1-based option column position, a single
    letter a-d is used as given, anything else is matched against option text
    ignoring case. Returns "" when nothing matches.
    """
    if not value:
        return ""

    if _DIGITS.fullmatch(value):
        # no option list is this long; also keeps int() away from huge strings
        if len(value.lstrip("0")) > 3:
            return ""
        index = int(value) - 1
        if reletter:
            for position, option in options:
                if position == index:
                    return option.id
            return ""
        # range is checked against the surviving options, letter comes from
        # the original column position
        if 0 <= index < len(options):
            return option_letter(index)
        return ""

    if _OPTION_LETTER.fullmatch(value):
        return value.lower()

    wanted = value.lower()
    for _, option in options:
        if option.text.lower() == wanted:
            return option.id
    return ""


def extract_question(
        row: NormalizedRow,
        mapping: ColumnMapping,
        reletter_options: bool = False,
) -> Optional[Question]:
    values = row.values
    question_text = values.get(mapping.question_column)
    if not question_text:
        log.debug("Row %d skipped: no question text", row.index)
        return None

    options = _build_options(values, mapping.option_columns, reletter_options)
    correct = resolve_correct_answer(
        values.get(mapping.correct_answer_column), options, reletter_options
    )

    if len(options) < MIN_OPTIONS:
        log.debug("Row %d skipped: %d options", row.index, len(options))
        return None
    if not correct:
        log.debug("Row %d skipped: correct answer not resolved", row.index)
        return None

    return Question(
        id=row.index,
        question=question_text,
        options=[option for _, option in options],
        correct_answer=correct,
    )


def parse_questions_from_csv(
        text: str,
        mapping: ColumnMapping,
        reletter_options: bool = False,
) -> List[Question]:
    """Parse raw CSV text into questions. Invalid rows are dropped silently."""
    delimiter, headers = detect_delimiter(text)
    data_lines = text.split("\n")[1:]
    rows = normalize_rows(data_lines, delimiter, headers)

    questions: List[Question] = []
    for row in rows:
        question = extract_question(row, mapping, reletter_options)
        if question is not None:
            questions.append(question)

    log.info(
        "Parsed %d questions from %d rows (delimiter=%r)",
        len(questions), len(rows), delimiter,
    )
    return questions
