"""Interactive text menu driving a RecordStore."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

import click

from gradetrack.cli import reports
from gradetrack.cli.validators import (
    parse_confirmation,
    parse_gender,
    parse_gpa,
    parse_positive_int,
    parse_score,
    parse_text,
    parse_year,
    require,
)
from gradetrack.grading import GradingError
from gradetrack.records import Course, RecordStore, RecordStoreError, Semester, StudentNotFoundError

if TYPE_CHECKING:
    from gradetrack.records import Student

logger = logging.getLogger(__name__)

SEARCH_FIELDS = ("id", "name", "gender", "semester", "course", "grade", "gpa")


class Menu:
    """Numbered menu over a RecordStore.

    Each option runs to completion or fails with a printed error; a failed
    option never ends the loop.
    """

    def __init__(self, store: RecordStore) -> None:
        """Initialize the menu.

        Args:
            store: The record store to operate on.
        """
        self.store = store
        self._options: list[tuple[str, Callable[[], None]]] = [
            ("Add New Student", self.add_new_student),
            ("Add Student With History", self.add_student_with_history),
            ("Add a Semester", self.add_semester),
            ("List All Students", self.list_students),
            ("Search For Students", self.search),
            ("Student Report Card", self.show_report_card),
            ("Delete Student", self.delete_student),
            ("Semester Summary", self.show_semester_summary),
            ("Course Performance Report", self.show_course_report),
            ("Recompute Cumulative Grade", self.recompute_grade),
        ]

    def run(self) -> None:
        """Loop until the user picks Exit or input ends."""
        exit_choice = str(len(self._options) + 1)
        while True:
            self.display()
            try:
                choice = click.prompt("Choose an option", default="", show_default=False)
            except click.Abort:
                break
            choice = choice.strip()

            if choice == exit_choice:
                click.echo("\nGoodbye!")
                break

            if not choice.isdigit() or not 1 <= int(choice) < int(exit_choice):
                click.echo("\nInvalid option, please try again")
                continue

            label, action = self._options[int(choice) - 1]
            try:
                action()
            except (RecordStoreError, GradingError) as e:
                logger.warning("%s failed: %s", label, e)
                click.echo(f"Error: {e}", err=True)
            except click.Abort:
                break

    def display(self) -> None:
        click.echo("\n=== Students Tracker ===")
        for number, (label, _) in enumerate(self._options, start=1):
            click.echo(f"{number}. {label}")
        click.echo(f"{len(self._options) + 1}. Exit")

    # --- Prompts ---

    def _ask(self, text: str) -> str:
        return click.prompt(text, default="", show_default=False)

    def _ask_student_id(self) -> int:
        return require(parse_positive_int(self._ask("Student ID"), "student id"))[0]

    def _ask_identity(self) -> tuple[str, str]:
        name, gender = require(
            parse_text(self._ask("Student name"), "name"),
            parse_gender(self._ask("Student gender")),
        )
        return name, gender

    def _ask_semester_key(self) -> tuple[str, int]:
        name, year = require(
            parse_text(self._ask("Semester name (e.g., fall, winter)"), "semester name"),
            parse_year(self._ask("Semester year (e.g., 2024)"), "semester year"),
        )
        return name, year

    def _ask_course(self, number: int, label: str) -> Course:
        click.echo(f"\n--- Course {number} in {label} ---")
        name, hours, homework, quiz, project, finals = require(
            parse_text(self._ask("Course name (e.g., mathematics)"), "course name"),
            parse_positive_int(self._ask("Course hours (e.g., 2, 3)"), "course hours"),
            parse_score(self._ask("Homework grade (0-100)"), "homework"),
            parse_score(self._ask("Quiz grade (0-100)"), "quiz"),
            parse_score(self._ask("Project grade (0-100)"), "project"),
            parse_score(self._ask("Final exam grade (0-100)"), "finals"),
        )
        return Course(
            name=name,
            hours=hours,
            homework=homework,
            quiz=quiz,
            project=project,
            finals=finals,
        )

    def _ask_semester(self) -> Semester:
        name, year = self._ask_semester_key()
        label = f"{name} {year}"
        count = require(parse_positive_int(self._ask(f"How many courses in {label}"), "course count"))[0]
        courses = [self._ask_course(number, label) for number in range(1, count + 1)]
        return Semester(name=name, year=year, courses=courses)

    def _print_matches(self, students: list[Student]) -> None:
        if not students:
            click.echo("No matching students")
            return
        click.echo(reports.name_list(students))

    # --- Options ---

    def add_new_student(self) -> None:
        click.echo("\n=== Adding New Student ===")
        name, gender = self._ask_identity()
        student = self.store.create_student(name, gender)
        click.echo(f"\nStudent added with ID {student.id}")

    def add_student_with_history(self) -> None:
        click.echo("\n=== Adding Student With History ===")
        name, gender = self._ask_identity()
        count = require(parse_positive_int(self._ask("How many semesters"), "semester count"))[0]
        semesters = []
        for number in range(1, count + 1):
            click.echo(f"\n--- Semester {number} ---")
            semesters.append(self._ask_semester())
        student = self.store.create_student_with_history(name, gender, semesters)
        click.echo("\nStudent added successfully!\n")
        click.echo(reports.report_card(student))

    def add_semester(self) -> None:
        student_id = self._ask_student_id()
        semester = self._ask_semester()
        self.store.add_semester_to_student(student_id, semester)
        click.echo("\nSemester added successfully!\n")
        click.echo(
            reports.semester_summary(
                self.store.search_by_semester(semester.name, semester.year),
                semester.name,
                semester.year,
            )
        )

    def list_students(self) -> None:
        students = self.store.list_students()
        if not students:
            click.echo("No students found")
            return
        for student in students:
            click.echo(reports.report_card(student))

    def search(self) -> None:
        field = self._ask(f"Search by ({', '.join(SEARCH_FIELDS)})").strip().lower()
        if field == "id":
            self._print_matches(self.store.search_by_id(self._ask_student_id()))
        elif field == "name":
            name = require(parse_text(self._ask("Student name"), "name"))[0]
            self._print_matches(self.store.search_by_name(name))
        elif field == "gender":
            gender = require(parse_gender(self._ask("Student gender (male or female)")))[0]
            self._print_matches(self.store.search_by_gender(gender))
        elif field == "semester":
            name, year = self._ask_semester_key()
            self._print_matches(self.store.search_by_semester(name, year))
        elif field == "course":
            course = require(parse_text(self._ask("Course name"), "course name"))[0]
            self._print_matches(self.store.search_by_course(course))
        elif field == "grade":
            average = require(parse_score(self._ask("Minimum average grade"), "average"))[0]
            self._print_matches(self.store.search_by_average_grade(average))
        elif field == "gpa":
            gpa = require(parse_gpa(self._ask("Minimum GPA")))[0]
            self._print_matches(self.store.search_by_gpa(gpa))
        else:
            click.echo(f"Unknown search field '{field}'")

    def show_report_card(self) -> None:
        student_id = self._ask_student_id()
        student = self.store.get_student(student_id)
        if student is None:
            raise StudentNotFoundError(f"Student with id {student_id} not found")
        click.echo(reports.report_card(student))

    def delete_student(self) -> None:
        student_id = self._ask_student_id()
        if not parse_confirmation(self._ask("Are you sure you want to delete this student?")):
            click.echo("Deletion stopped")
            return
        self.store.delete_student(student_id)
        click.echo(f"Student {student_id} deleted")

    def show_semester_summary(self) -> None:
        name, year = self._ask_semester_key()
        click.echo(reports.semester_summary(self.store.search_by_semester(name, year), name, year))

    def show_course_report(self) -> None:
        course = require(parse_text(self._ask("Course name"), "course name"))[0]
        click.echo(reports.course_report(self.store.search_by_course(course), course))

    def recompute_grade(self) -> None:
        student = self.store.recompute_student_grade(self._ask_student_id())
        click.echo(reports.report_card(student))
