"""Errors raised while importing questions from CSV files."""


class QuestionImportError(Exception):
    """Base error. ``message`` is shown to the user as-is."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class FileReadError(QuestionImportError):
    pass


class MappingIncompleteError(QuestionImportError):
    pass


class ImportStageError(QuestionImportError):
    pass


class SessionNotFoundError(QuestionImportError):
    pass


class BankStorageError(QuestionImportError):
    pass
