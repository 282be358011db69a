"""Custom exceptions for the record store."""


class RecordStoreError(Exception):
    """Base exception for record store errors."""


class InvalidDataError(RecordStoreError):
    """Input field is empty or malformed."""


class StudentNotFoundError(RecordStoreError):
    """Student with given ID does not exist."""


class FileOperationError(RecordStoreError):
    """Reading or writing the data file failed."""

    def __init__(self, operation: str, cause: BaseException) -> None:
        super().__init__(f"Failed to {operation}: {cause}")
        self.operation = operation
