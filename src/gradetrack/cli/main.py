"""CLI entry point for gradetrack.

Running ``gradetrack`` with no subcommand opens the interactive menu. The
subcommands cover the read-only reports plus the operations that fit on one
command line.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from pathlib import Path

import click

from gradetrack import __version__
from gradetrack.cli import reports
from gradetrack.cli.menu import SEARCH_FIELDS, Menu
from gradetrack.cli.validators import (
    parse_gender,
    parse_gpa,
    parse_positive_int,
    parse_score,
    parse_text,
    parse_year,
    require,
)
from gradetrack.config import ConfigError, TrackerConfig, find_config, load_config
from gradetrack.grading import GradingError
from gradetrack.logging import setup_logging
from gradetrack.records import JsonFileStorage, RecordStore, RecordStoreError, StudentNotFoundError

logger = logging.getLogger(__name__)


def resolve_config(config_path: Path | None) -> TrackerConfig:
    """Load the given config file, else the nearest gradetrack.yaml, else defaults.

    Raises:
        ConfigError: If an explicitly given or discovered file is invalid.
    """
    if config_path is None:
        try:
            config_path = find_config()
        except ConfigError:
            return TrackerConfig()
    return load_config(config_path)


def _fail(message: str) -> None:
    click.echo(message, err=True)
    sys.exit(1)


@click.group(invoke_without_command=True)
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to gradetrack.yaml (auto-detected if not specified)",
)
@click.option(
    "--data-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Student data file (overrides config and GRADETRACK_DATA_FILE)",
)
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr")
@click.version_option(version=__version__, prog_name="gradetrack")
@click.pass_context
def main(
    ctx: click.Context,
    config_path: Path | None,
    data_file: Path | None,
    verbose: bool,
) -> None:
    """Student record tracker - grades, semesters and reports."""
    try:
        config = resolve_config(config_path)
    except ConfigError as e:
        _fail(f"Configuration error: {e}")
        return

    setup_logging(
        log_dir=config.get_log_dir(),
        level="DEBUG" if verbose else config.logging.level,
        console=verbose or config.logging.console,
    )

    data_path = data_file if data_file is not None else config.get_data_path()
    store = RecordStore(JsonFileStorage(data_path))
    try:
        store.load()
    except RecordStoreError as e:
        logger.critical("Could not load %s: %s", data_path, e)
        _fail(f"Fatal error: {e}")
        return

    ctx.obj = store
    if ctx.invoked_subcommand is None:
        Menu(store).run()


def _run(action: Callable[[], None]) -> None:
    """Run one store operation, turning domain errors into exit status 1."""
    try:
        action()
    except (RecordStoreError, GradingError) as e:
        logger.warning("Command failed: %s", e)
        _fail(f"Error: {e}")


@main.command()
@click.pass_obj
def menu(store: RecordStore) -> None:
    """Open the interactive menu."""
    Menu(store).run()


@main.command()
@click.argument("name")
@click.argument("gender")
@click.pass_obj
def add(store: RecordStore, name: str, gender: str) -> None:
    """Add a new student with no semesters."""

    def action() -> None:
        clean_name, clean_gender = require(parse_text(name, "name"), parse_gender(gender))
        student = store.create_student(clean_name, clean_gender)
        click.echo(f"Student added with ID {student.id}")

    _run(action)


@main.command(name="list")
@click.pass_obj
def list_students(store: RecordStore) -> None:
    """Print a report card for every student."""
    students = store.list_students()
    if not students:
        click.echo("No students found")
        return
    for student in students:
        click.echo(reports.report_card(student))


@main.command()
@click.argument("student_id", type=int)
@click.pass_obj
def show(store: RecordStore, student_id: int) -> None:
    """Print one student's report card."""

    def action() -> None:
        student = store.get_student(student_id)
        if student is None:
            raise StudentNotFoundError(f"Student with id {student_id} not found")
        click.echo(reports.report_card(student))

    _run(action)


@main.command()
@click.argument("student_id", type=int)
@click.option("--yes", is_flag=True, help="Delete without asking for confirmation")
@click.pass_obj
def delete(store: RecordStore, student_id: int, yes: bool) -> None:
    """Delete a student and all of their semesters."""
    if not yes and not click.confirm(f"Delete student {student_id}?"):
        click.echo("Deletion stopped")
        return

    def action() -> None:
        store.delete_student(student_id)
        click.echo(f"Student {student_id} deleted")

    _run(action)


@main.command()
@click.argument("student_id", type=int)
@click.pass_obj
def recompute(store: RecordStore, student_id: int) -> None:
    """Re-aggregate a student's cumulative grade from their semesters."""

    def action() -> None:
        student = store.recompute_student_grade(student_id)
        click.echo(reports.report_card(student))

    _run(action)


@main.command()
@click.argument("field", type=click.Choice(SEARCH_FIELDS, case_sensitive=False))
@click.argument("values", nargs=-1, required=True)
@click.pass_obj
def search(store: RecordStore, field: str, values: tuple[str, ...]) -> None:
    """Search students by FIELD.

    \b
    Examples:
      gradetrack search name "jane doe"
      gradetrack search semester fall 2024
      gradetrack search gpa 3.5
    """

    def action() -> None:
        field_name = field.lower()
        value = " ".join(values)
        if field_name == "id":
            matches = store.search_by_id(require(parse_positive_int(value, "id"))[0])
        elif field_name == "name":
            matches = store.search_by_name(require(parse_text(value, "name"))[0])
        elif field_name == "gender":
            matches = store.search_by_gender(require(parse_gender(value))[0])
        elif field_name == "semester":
            name, year = require(
                parse_text(" ".join(values[:-1]), "semester name"),
                parse_year(values[-1], "semester year"),
            )
            matches = store.search_by_semester(name, year)
        elif field_name == "course":
            matches = store.search_by_course(require(parse_text(value, "course name"))[0])
        elif field_name == "grade":
            matches = store.search_by_average_grade(require(parse_score(value, "average"))[0])
        else:
            matches = store.search_by_gpa(require(parse_gpa(value))[0])

        if not matches:
            click.echo("No matching students")
            return
        click.echo(reports.name_list(matches))

    _run(action)


@main.command(name="semester-summary")
@click.argument("name")
@click.argument("year")
@click.pass_obj
def semester_summary(store: RecordStore, name: str, year: str) -> None:
    """Summarize one semester across students."""

    def action() -> None:
        clean_name, clean_year = require(
            parse_text(name, "semester name"), parse_year(year, "semester year")
        )
        students = store.search_by_semester(clean_name, clean_year)
        click.echo(reports.semester_summary(students, clean_name, clean_year))

    _run(action)


@main.command(name="course-report")
@click.argument("name")
@click.pass_obj
def course_report(store: RecordStore, name: str) -> None:
    """Report performance in one course across students."""

    def action() -> None:
        course = require(parse_text(name, "course name"))[0]
        click.echo(reports.course_report(store.search_by_course(course), course))

    _run(action)


if __name__ == "__main__":
    main()
