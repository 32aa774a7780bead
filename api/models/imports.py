"""Import-related Pydantic models."""
from pydantic import BaseModel, Field

from models import ColumnMapping


class ColumnMappingRequest(BaseModel):
    """Column roles chosen from the detected headers."""

    questionColumn: str = ""
    optionColumns: list[str] = Field(default_factory=list)
    correctAnswerColumn: str = ""
    reletterOptions: bool | None = None

    def to_mapping(self) -> ColumnMapping:
        return ColumnMapping(
            question_column=self.questionColumn.strip(),
            option_columns=tuple(column.strip() for column in self.optionColumns),
            correct_answer_column=self.correctAnswerColumn.strip(),
        )


class SaveImportRequest(BaseModel):
    """Target difficulty level for the parsed questions."""

    level: str = "easy"
