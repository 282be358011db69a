"""Data models for the record store."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from gradetrack.grading import Grade  # noqa: TC001 - dataclass field type


class Gender(StrEnum):
    """Student gender enum."""

    MALE = "male"
    FEMALE = "female"


@dataclass(frozen=True)
class Course:
    """A course taken in a semester.

    Attributes:
        name: Course name.
        hours: Credit hours.
        homework: Homework score, 0-100.
        quiz: Quiz score, 0-100.
        project: Project score, 0-100.
        finals: Final exam score, 0-100.
        grade: Grade over the four component scores, once graded.
    """

    name: str
    hours: int
    homework: float
    quiz: float
    project: float
    finals: float
    grade: Grade | None = None

    @property
    def scores(self) -> tuple[float, float, float, float]:
        """The four component scores."""
        return (self.homework, self.quiz, self.project, self.finals)


@dataclass(frozen=True)
class Semester:
    """A semester and the courses taken in it.

    Attributes:
        name: Semester name (e.g. "fall").
        year: Calendar year.
        courses: Courses in entry order.
        grade: Grade over the courses' averages, once graded.
    """

    name: str
    year: int
    courses: list[Course] = field(default_factory=list)
    grade: Grade | None = None

    @property
    def label(self) -> str:
        """Human-readable "name year" label."""
        return f"{self.name} {self.year}"

    def find_course(self, course_name: str) -> Course | None:
        """Get the first course with the given name, if any."""
        return next((c for c in self.courses if c.name == course_name), None)


@dataclass
class Student:
    """A student record.

    ``id`` is 0 until the store assigns one. ``grade`` is the aggregate of
    the semesters as of the last aggregation and is not refreshed when a
    semester is added.
    """

    id: int
    name: str
    gender: Gender
    semesters: list[Semester] = field(default_factory=list)
    grade: Grade | None = None

    def find_semester(self, name: str, year: int) -> Semester | None:
        """Get the first semester matching name and year, if any."""
        return next((s for s in self.semesters if s.name == name and s.year == year), None)

    def has_course(self, course_name: str) -> bool:
        """Whether any semester contains a course with this name."""
        return any(s.find_course(course_name) is not None for s in self.semesters)
