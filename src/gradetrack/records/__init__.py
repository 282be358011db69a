"""Record Store - Student records, grade aggregation and search."""

from gradetrack.records.exceptions import (
    FileOperationError,
    InvalidDataError,
    RecordStoreError,
    StudentNotFoundError,
)
from gradetrack.records.models import Course, Gender, Semester, Student
from gradetrack.records.storage import JsonFileStorage, Storage, StoredState
from gradetrack.records.store import RecordStore

__all__ = [
    "Course",
    "FileOperationError",
    "Gender",
    "InvalidDataError",
    "JsonFileStorage",
    "RecordStore",
    "RecordStoreError",
    "Semester",
    "Storage",
    "StoredState",
    "Student",
    "StudentNotFoundError",
]
