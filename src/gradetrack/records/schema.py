"""Pydantic models for the JSON data file."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from gradetrack.grading import Grade, LetterGrade, Standing
from gradetrack.records.models import Course, Gender, Semester, Student


class _Document(BaseModel):
    """Base for file documents: camelCase on disk, snake_case in Python.

    NaN and infinity are rejected; JSON has no way to store them.
    """

    model_config = ConfigDict(populate_by_name=True, allow_inf_nan=False)


class GradeDocument(_Document):
    """Stored grade."""

    average: float
    gpa: float
    letter_grade: LetterGrade = Field(alias="letterGrade")
    report: Standing

    @classmethod
    def from_grade(cls, grade: Grade | None) -> GradeDocument | None:
        if grade is None:
            return None
        return cls(
            average=grade.average,
            gpa=grade.gpa,
            letter_grade=grade.letter_grade,
            report=grade.report,
        )

    def to_grade(self) -> Grade:
        return Grade(
            average=self.average,
            gpa=self.gpa,
            letter_grade=self.letter_grade,
            report=self.report,
        )


class CourseDocument(_Document):
    """Stored course."""

    course_name: str = Field(alias="courseName")
    course_hours: int = Field(alias="courseHours")
    homework: float
    quiz: float
    project: float
    finals: float
    grade: GradeDocument | None = None

    @classmethod
    def from_course(cls, course: Course) -> CourseDocument:
        return cls(
            course_name=course.name,
            course_hours=course.hours,
            homework=course.homework,
            quiz=course.quiz,
            project=course.project,
            finals=course.finals,
            grade=GradeDocument.from_grade(course.grade),
        )

    def to_course(self) -> Course:
        return Course(
            name=self.course_name,
            hours=self.course_hours,
            homework=self.homework,
            quiz=self.quiz,
            project=self.project,
            finals=self.finals,
            grade=self.grade.to_grade() if self.grade else None,
        )


class SemesterDocument(_Document):
    """Stored semester."""

    semester_name: str = Field(alias="semesterName")
    semester_year: int = Field(alias="semesterYear")
    courses: list[CourseDocument] = Field(default_factory=list)
    grade: GradeDocument | None = None

    @classmethod
    def from_semester(cls, semester: Semester) -> SemesterDocument:
        return cls(
            semester_name=semester.name,
            semester_year=semester.year,
            courses=[CourseDocument.from_course(c) for c in semester.courses],
            grade=GradeDocument.from_grade(semester.grade),
        )

    def to_semester(self) -> Semester:
        return Semester(
            name=self.semester_name,
            year=self.semester_year,
            courses=[c.to_course() for c in self.courses],
            grade=self.grade.to_grade() if self.grade else None,
        )


class StudentDocument(_Document):
    """Stored student."""

    id: int = Field(ge=1)
    name: str
    gender: Gender
    semesters: list[SemesterDocument] = Field(default_factory=list)
    grade: GradeDocument | None = None

    @classmethod
    def from_student(cls, student: Student) -> StudentDocument:
        return cls(
            id=student.id,
            name=student.name,
            gender=student.gender,
            semesters=[SemesterDocument.from_semester(s) for s in student.semesters],
            grade=GradeDocument.from_grade(student.grade),
        )

    def to_student(self) -> Student:
        return Student(
            id=self.id,
            name=self.name,
            gender=self.gender,
            semesters=[s.to_semester() for s in self.semesters],
            grade=self.grade.to_grade() if self.grade else None,
        )


class TrackerDocument(_Document):
    """The whole data file."""

    student_data: list[StudentDocument] = Field(default_factory=list, alias="studentData")
    next_id: int | None = Field(default=None, ge=1, alias="nextID")
    last_update: datetime | None = Field(default=None, alias="lastUpdate")
