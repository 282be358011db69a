"""JSON file storage for the record store."""

from __future__ import annotations

import logging
import os
import tempfile
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from pydantic import ValidationError

from gradetrack.records.exceptions import FileOperationError
from gradetrack.records.schema import StudentDocument, TrackerDocument

if TYPE_CHECKING:
    from collections.abc import Sequence

    from gradetrack.records.models import Student

logger = logging.getLogger(__name__)


@dataclass
class StoredState:
    """Students and ID counter as read from storage."""

    students: list[Student] = field(default_factory=list)
    next_id: int = 1


class Storage(Protocol):
    """Interface for record store persistence."""

    def load(self) -> StoredState:
        """Read the stored state."""
        ...

    def save(self, students: Sequence[Student], next_id: int) -> None:
        """Write the full state."""
        ...


class JsonFileStorage:
    """Stores the student collection in a single JSON document.

    Writes go to a temporary file in the same directory which then replaces
    the target, so a failed write never leaves a half-written data file.
    """

    def __init__(self, path: str | Path = "students.json") -> None:
        """Initialize storage.

        Args:
            path: Path to the JSON data file. Created on first save.
        """
        self.path = Path(path)

    def load(self) -> StoredState:
        """Read students and the ID counter from the data file.

        Returns:
            The stored state, or an empty state if the file doesn't exist.

        Raises:
            FileOperationError: If the file can't be read or isn't a valid document.
        """
        if not self.path.exists():
            logger.debug("No data file at %s, starting empty", self.path)
            return StoredState()

        try:
            raw = self.path.read_text(encoding="utf-8")
            document = TrackerDocument.model_validate_json(raw)
        except (OSError, UnicodeDecodeError, ValidationError) as e:
            raise FileOperationError("load student records", e) from e

        students = [doc.to_student() for doc in document.student_data]

        # Never hand out an ID that is already taken
        highest_id = max((s.id for s in students), default=0)
        next_id = max(document.next_id or 1, highest_id + 1)

        logger.debug("Loaded %d students from %s (next id %d)", len(students), self.path, next_id)
        return StoredState(students=students, next_id=next_id)

    def save(self, students: Sequence[Student], next_id: int) -> None:
        """Write students and the ID counter to the data file.

        Args:
            students: The full student collection.
            next_id: The next ID the store will assign.

        Raises:
            FileOperationError: If the records can't be stored as a valid
                document or the file can't be written.
        """
        try:
            document = TrackerDocument(
                student_data=[StudentDocument.from_student(s) for s in students],
                next_id=next_id,
                last_update=datetime.now(UTC),
            )
        except ValidationError as e:
            raise FileOperationError("save student records", e) from e
        payload = document.model_dump_json(by_alias=True, exclude_none=True, indent=2)

        tmp_path: str | None = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
            ) as f:
                tmp_path = f.name
                f.write(payload)
            os.replace(tmp_path, self.path)
            tmp_path = None
        except OSError as e:
            raise FileOperationError("save student records", e) from e
        finally:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.unlink(tmp_path)

        logger.debug("Saved %d students to %s", len(students), self.path)
