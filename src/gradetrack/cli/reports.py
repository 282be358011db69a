"""Text reports for students, semesters and courses."""

from __future__ import annotations

from dataclasses import dataclass, field
from statistics import fmean
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from gradetrack.grading import Grade
    from gradetrack.records import Semester, Student

WIDTH = 40
MISSING = "---"
TOP_PERFORMERS = 3


@dataclass
class Ranking:
    """One student's result in a semester or course."""

    student: Student
    grade: Grade


@dataclass
class GroupStats:
    """Grade statistics over a group of students.

    ``rankings`` is ordered best first. The numeric fields are None when no
    student in the group has a grade.
    """

    rankings: list[Ranking] = field(default_factory=list)
    highest: float | None = None
    lowest: float | None = None
    mean: float | None = None

    @classmethod
    def from_rankings(cls, rankings: list[Ranking], metric: str) -> GroupStats:
        ordered = sorted(rankings, key=lambda r: getattr(r.grade, metric), reverse=True)
        values = [getattr(r.grade, metric) for r in ordered]
        if not values:
            return cls(rankings=ordered)
        return cls(rankings=ordered, highest=max(values), lowest=min(values), mean=fmean(values))


def semester_stats(students: Iterable[Student], name: str, year: int) -> GroupStats:
    """GPA statistics for one semester across students."""
    rankings = []
    for student in students:
        semester = student.find_semester(name, year)
        if semester is not None and semester.grade is not None:
            rankings.append(Ranking(student=student, grade=semester.grade))
    return GroupStats.from_rankings(rankings, "gpa")


def course_stats(students: Iterable[Student], course_name: str) -> GroupStats:
    """Course-average statistics for one course across students.

    A student who took the course in several semesters is ranked once per
    attempt.
    """
    rankings = []
    for student in students:
        for semester in student.semesters:
            course = semester.find_course(course_name)
            if course is not None and course.grade is not None:
                rankings.append(Ranking(student=student, grade=course.grade))
    return GroupStats.from_rankings(rankings, "average")


def _fmt(value: float | None, suffix: str = "") -> str:
    if value is None:
        return MISSING
    return f"{value:.2f}{suffix}"


def _banner(title: str, char: str = "=") -> list[str]:
    return [char * WIDTH, title.center(WIDTH).rstrip(), char * WIDTH]


def _semester_lines(semester: Semester) -> list[str]:
    lines = [f"{semester.label}:"]
    for course in semester.courses:
        grade = course.grade
        lines += [
            f"  {course.name} ({course.hours} hours)",
            f"    Homework: {course.homework:g}/100",
            f"    Quiz: {course.quiz:g}/100",
            f"    Project: {course.project:g}/100",
            f"    Final Exam: {course.finals:g}/100",
            "    " + "-" * 19,
            f"    Course Average: {_fmt(grade and grade.average, '%')}",
            f"    Course GPA: {_fmt(grade and grade.gpa)}",
            f"    Letter Grade: {grade.letter_grade if grade else MISSING}",
        ]
    lines += _banner("SEMESTER SUMMARY", "-")
    lines += [
        f"Total Courses: {len(semester.courses)}",
        f"Semester GPA: {_fmt(semester.grade and semester.grade.gpa, '/4.0')}",
        f"Status: {semester.grade.report if semester.grade else MISSING}",
    ]
    return lines


def report_card(student: Student) -> str:
    """Full report card for one student."""
    grade = student.grade
    semesters = ", ".join(s.label for s in student.semesters) or MISSING
    lines = _banner("STUDENT REPORT CARD")
    lines += [
        f"Student ID: {student.id}",
        f"Name: {student.name}",
        f"Gender: {student.gender}",
        f"Average Grade: {_fmt(grade and grade.average, '%')}",
        f"Total GPA: {_fmt(grade and grade.gpa, '/4.0')}",
        f"Letter Grade: {grade.letter_grade if grade else MISSING}",
        f"Standing: {grade.report if grade else MISSING}",
        f"Semesters: {semesters}",
    ]
    if student.semesters:
        lines += _banner("COURSES & GRADES", "-")
        for semester in student.semesters:
            lines += _semester_lines(semester)
    lines.append("=" * WIDTH)
    return "\n".join(lines)


def semester_summary(students: Iterable[Student], name: str, year: int) -> str:
    """Summary of one semester across all students who took it.

    The student count includes ungraded semesters; the GPA figures don't.
    """
    enrolled = [s for s in students if s.find_semester(name, year) is not None]
    stats = semester_stats(enrolled, name, year)
    lines = _banner(f"{name} {year} SEMESTER REPORT")
    lines += [
        f"Total Students: {len(enrolled)}",
        f"Highest GPA: {_fmt(stats.highest, '/4.0')}",
        f"Lowest GPA: {_fmt(stats.lowest, '/4.0')}",
        f"Average GPA: {_fmt(stats.mean, '/4.0')}",
        "",
        "Top Performers:",
    ]
    for position, ranking in enumerate(stats.rankings[:TOP_PERFORMERS], start=1):
        lines.append(f"  {position}. {ranking.student.name} - {ranking.grade.gpa:.2f}")
    if not stats.rankings:
        lines.append(f"  {MISSING}")
    lines.append("=" * WIDTH)
    return "\n".join(lines)


def course_report(students: Iterable[Student], course_name: str) -> str:
    """Performance report for one course across all students who took it."""
    stats = course_stats(students, course_name)
    lines = _banner(f"{course_name} - COURSE REPORT")
    lines.append(f"Students attached to {course_name}:")
    for ranking in stats.rankings:
        lines += [
            f"  {ranking.student.name} (id {ranking.student.id})",
            f"    Average: {ranking.grade.average:.2f}%",
            f"    GPA: {ranking.grade.gpa:.2f}",
            f"    Letter Grade: {ranking.grade.letter_grade}",
        ]
    if not stats.rankings:
        lines.append(f"  {MISSING}")
    lines += _banner("COURSE STATISTICS", "-")
    lines += [
        f"Highest Score: {_fmt(stats.highest, '%')}",
        f"Lowest Score: {_fmt(stats.lowest, '%')}",
        f"Class Average: {_fmt(stats.mean, '%')}",
        "=" * WIDTH,
    ]
    return "\n".join(lines)


def name_list(students: Iterable[Student]) -> str:
    """One "id: name" line per student."""
    return "\n".join(f"{s.id}: {s.name}" for s in students)
