"""RecordStore - Main API for student record operations."""

from __future__ import annotations

import copy
import dataclasses
import logging
import math
import threading
from contextlib import contextmanager
from typing import TYPE_CHECKING

from gradetrack.grading import compute_grade
from gradetrack.logging import truncate_output
from gradetrack.records.exceptions import (
    FileOperationError,
    InvalidDataError,
    StudentNotFoundError,
)
from gradetrack.records.models import Course, Gender, Semester, Student

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from gradetrack.grading import Grade
    from gradetrack.records.storage import Storage

logger = logging.getLogger(__name__)


class RecordStore:
    """Main API for student records.

    Owns the student collection and the ID counter, grades records as they
    are built, and persists after every change. Grades are eager: a student's
    cumulative grade is only refreshed by ``create_student_with_history`` and
    ``recompute_student_grade``.
    """

    def __init__(self, storage: Storage) -> None:
        """Initialize an empty RecordStore.

        Call ``load()`` to pull in persisted records.

        Args:
            storage: Persistence backend used for load and save.
        """
        self._storage = storage
        self._students: list[Student] = []
        self._next_id = 1
        self._lock = threading.RLock()

    @property
    def next_id(self) -> int:
        """The ID the next created student will get."""
        return self._next_id

    def load(self) -> None:
        """Replace in-memory state with the persisted state.

        Raises:
            FileOperationError: If the stored data can't be read.
        """
        with self._lock:
            state = self._storage.load()
            self._students = state.students
            self._next_id = state.next_id
        logger.info("Loaded %d students (next id %d)", len(self._students), self._next_id)

    # --- Grading ---

    def grade_semester(self, semester: Semester) -> Semester:
        """Grade a semester's courses, then the semester itself.

        Args:
            semester: Semester with raw course scores.

        Returns:
            A graded copy of the semester.

        Raises:
            InvalidDataError: If there are no courses or a score isn't finite.
            GradeRangeError: If a computed grade is out of range.
        """
        if not semester.courses:
            raise InvalidDataError(f"Semester '{semester.label}' has no courses")

        courses = [_grade_course(course) for course in semester.courses]
        grade = compute_grade(c.grade.average for c in courses if c.grade is not None)
        return dataclasses.replace(semester, courses=courses, grade=grade)

    # --- Student Operations ---

    def create_student(self, name: str, gender: Gender | str) -> Student:
        """Create a new student with no semesters.

        Args:
            name: Student name. Stored trimmed and lowercased.
            gender: Student gender.

        Returns:
            Created Student with its assigned ID.

        Raises:
            InvalidDataError: If name is blank or gender unknown.
            FileOperationError: If the change can't be saved.
        """
        clean_name = _clean_name(name)
        clean_gender = _clean_gender(gender)

        with self._transaction():
            student = Student(id=self._next_id, name=clean_name, gender=clean_gender)
            self._next_id += 1
            self._students.append(student)

        logger.info("Created student %d (%s)", student.id, truncate_output(student.name))
        return student

    def create_student_with_history(
        self,
        name: str,
        gender: Gender | str,
        semesters: Iterable[Semester],
    ) -> Student:
        """Create a student together with past semesters.

        Every course, every semester and then the student are graded before
        an ID is assigned, so a failure consumes no ID.

        Args:
            name: Student name. Stored trimmed and lowercased.
            gender: Student gender.
            semesters: Semesters with raw course scores.

        Returns:
            Created Student, graded, with its assigned ID.

        Raises:
            InvalidDataError: If name is blank, gender unknown, or a semester is empty.
            GradeRangeError: If a computed grade is out of range.
            FileOperationError: If the change can't be saved.
        """
        clean_name = _clean_name(name)
        clean_gender = _clean_gender(gender)

        graded = [self.grade_semester(s) for s in semesters]
        student_grade = _aggregate(graded)

        with self._transaction():
            student = Student(
                id=self._next_id,
                name=clean_name,
                gender=clean_gender,
                semesters=graded,
                grade=student_grade,
            )
            self._next_id += 1
            self._students.append(student)

        logger.info(
            "Created student %d (%s) with %d semesters",
            student.id,
            truncate_output(student.name),
            len(graded),
        )
        return student

    def add_semester_to_student(self, student_id: int, semester: Semester) -> Student:
        """Grade a semester and append it to a student.

        The semester is graded before the student is looked up. The student's
        own cumulative grade is left as it was; call
        ``recompute_student_grade`` to refresh it.

        Args:
            student_id: The student's ID.
            semester: Semester with raw course scores.

        Returns:
            The updated Student.

        Raises:
            InvalidDataError: If the semester has no courses.
            GradeRangeError: If a computed grade is out of range.
            StudentNotFoundError: If the student doesn't exist.
            FileOperationError: If the change can't be saved.
        """
        graded = self.grade_semester(semester)

        with self._transaction():
            student = self._require(student_id)
            student.semesters.append(graded)

        logger.info("Added semester %s to student %d", graded.label, student_id)
        return student

    def recompute_student_grade(self, student_id: int) -> Student:
        """Re-aggregate a student's cumulative grade from its semesters.

        Args:
            student_id: The student's ID.

        Returns:
            The updated Student. Its grade is None if it has no semesters.

        Raises:
            StudentNotFoundError: If the student doesn't exist.
            GradeRangeError: If the computed grade is out of range.
            FileOperationError: If the change can't be saved.
        """
        with self._transaction():
            student = self._require(student_id)
            student.grade = _aggregate(student.semesters)

        logger.info("Recomputed grade for student %d", student_id)
        return student

    def delete_student(self, student_id: int) -> None:
        """Delete a student and everything nested in it.

        Args:
            student_id: The student's ID.

        Raises:
            StudentNotFoundError: If the student doesn't exist.
            FileOperationError: If the change can't be saved.
        """
        with self._transaction():
            index = self._index_of(student_id)
            if index is None:
                raise StudentNotFoundError(f"Student with id {student_id} not found")
            del self._students[index]

        logger.info("Deleted student %d", student_id)

    def get_student(self, student_id: int) -> Student | None:
        """Get student by ID, or None if it doesn't exist."""
        index = self._index_of(student_id)
        return None if index is None else self._students[index]

    def list_students(self) -> list[Student]:
        """List all students in creation order.

        Returns:
            A new list; changing it doesn't affect the store.
        """
        return list(self._students)

    # --- Search ---

    def search_by_id(self, student_id: int) -> list[Student]:
        return [s for s in self._students if s.id == student_id]

    def search_by_name(self, name: str) -> list[Student]:
        """Students whose stored (lowercased) name equals ``name`` exactly."""
        return [s for s in self._students if s.name == name]

    def search_by_gender(self, gender: Gender | str) -> list[Student]:
        return [s for s in self._students if s.gender == gender]

    def search_by_semester(self, name: str, year: int) -> list[Student]:
        """Students with at least one semester matching both name and year."""
        return [s for s in self._students if s.find_semester(name, year) is not None]

    def search_by_course(self, course_name: str) -> list[Student]:
        """Students who took a course with this name in any semester."""
        return [s for s in self._students if s.has_course(course_name)]

    def search_by_average_grade(self, threshold: float) -> list[Student]:
        """Graded students whose cumulative average is at least ``threshold``."""
        return [s for s in self._students if s.grade is not None and s.grade.average >= threshold]

    def search_by_gpa(self, threshold: float) -> list[Student]:
        """Graded students whose cumulative GPA is at least ``threshold``."""
        return [s for s in self._students if s.grade is not None and s.grade.gpa >= threshold]

    # --- Internals ---

    def _index_of(self, student_id: int) -> int | None:
        for index, student in enumerate(self._students):
            if student.id == student_id:
                return index
        return None

    def _require(self, student_id: int) -> Student:
        student = self.get_student(student_id)
        if student is None:
            raise StudentNotFoundError(f"Student with id {student_id} not found")
        return student

    @contextmanager
    def _transaction(self) -> Iterator[None]:
        """Serialize a mutation and persist it.

        If the body or the save fails, the collection and ID counter are
        restored to what they were before.
        """
        with self._lock:
            snapshot = copy.deepcopy(self._students)
            next_id = self._next_id
            try:
                yield
                try:
                    self._storage.save(self._students, self._next_id)
                except FileOperationError as e:
                    logger.error("Discarding unsaved change: %s", e)
                    raise
            except Exception:
                self._students = snapshot
                self._next_id = next_id
                raise


def _grade_course(course: Course) -> Course:
    if not all(math.isfinite(score) for score in course.scores):
        raise InvalidDataError(f"Course '{course.name}' has a score that is not a finite number")
    return dataclasses.replace(course, grade=compute_grade(course.scores))


def _aggregate(semesters: list[Semester]) -> Grade | None:
    """Grade over the semesters' averages, or None when there are none."""
    averages = [s.grade.average for s in semesters if s.grade is not None]
    if not averages:
        return None
    return compute_grade(averages)


def _clean_name(name: str) -> str:
    clean = name.strip().lower() if isinstance(name, str) else ""
    if not clean:
        raise InvalidDataError("Name cannot be empty")
    return clean


def _clean_gender(gender: Gender | str) -> Gender:
    try:
        return Gender(gender.strip().lower() if isinstance(gender, str) else gender)
    except ValueError as e:
        raise InvalidDataError(f"Invalid gender '{gender}': expected male or female") from e
