"""Unit tests for the one-shot CLI subcommands."""

import json
from pathlib import Path
from textwrap import dedent

import pytest
from click.testing import CliRunner

from gradetrack import __version__
from gradetrack.cli import main
from gradetrack.records import Gender, RecordStore
from tests.factories import make_semester


@pytest.fixture
def runner(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> CliRunner:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("GRADETRACK_LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.delenv("GRADETRACK_DATA_FILE", raising=False)
    return CliRunner()


@pytest.fixture
def seeded(store: RecordStore) -> RecordStore:
    """jane with fall 2024 (course0 at 90), john with no semesters."""
    store.create_student_with_history("jane", Gender.FEMALE, [make_semester(scores=(90,))])
    store.create_student("john", Gender.MALE)
    return store


def invoke(runner: CliRunner, data_file: Path, *args: str, **kwargs):
    return runner.invoke(main, ["--data-file", str(data_file), *args], **kwargs)


@pytest.mark.unit
class TestAdd:
    """Tests for the add command."""

    def test_add(self, runner: CliRunner, data_file: Path) -> None:
        result = invoke(runner, data_file, "add", "Jane Doe", "female")

        assert result.exit_code == 0
        assert "Student added with ID 1" in result.output
        assert json.loads(data_file.read_text())["studentData"][0]["name"] == "jane doe"

    def test_add_invalid_gender(self, runner: CliRunner, data_file: Path) -> None:
        result = invoke(runner, data_file, "add", "jane", "robot")

        assert result.exit_code == 1
        assert "Error: gender:" in result.output


@pytest.mark.unit
class TestReadCommands:
    """Tests for list, show, search and the reports."""

    def test_list(self, runner: CliRunner, data_file: Path, seeded: RecordStore) -> None:
        result = invoke(runner, data_file, "list")

        assert result.exit_code == 0
        assert result.output.count("STUDENT REPORT CARD") == 2

    def test_list_empty(self, runner: CliRunner, data_file: Path) -> None:
        result = invoke(runner, data_file, "list")

        assert result.exit_code == 0
        assert "No students found" in result.output

    def test_show(self, runner: CliRunner, data_file: Path, seeded: RecordStore) -> None:
        result = invoke(runner, data_file, "show", "1")

        assert result.exit_code == 0
        assert "Name: jane" in result.output
        assert "Letter Grade: A-" in result.output

    def test_show_missing(self, runner: CliRunner, data_file: Path) -> None:
        result = invoke(runner, data_file, "show", "9")

        assert result.exit_code == 1
        assert "Error: Student with id 9 not found" in result.output

    @pytest.mark.parametrize(
        ("args", "expected"),
        [
            (("id", "2"), "2: john"),
            (("name", "John"), "2: john"),
            (("gender", "male"), "2: john"),
            (("semester", "fall", "2024"), "1: jane"),
            (("course", "course0"), "1: jane"),
            (("grade", "90"), "1: jane"),
            (("gpa", "3.5"), "1: jane"),
        ],
    )
    def test_search(
        self,
        runner: CliRunner,
        data_file: Path,
        seeded: RecordStore,
        args: tuple[str, ...],
        expected: str,
    ) -> None:
        result = invoke(runner, data_file, "search", *args)

        assert result.exit_code == 0
        assert result.output.strip() == expected

    def test_search_semester_needs_year(self, runner: CliRunner, data_file: Path) -> None:
        result = invoke(runner, data_file, "search", "semester", "fall")

        assert result.exit_code == 1
        assert "semester name: cannot be empty" in result.output

    def test_search_no_match(self, runner: CliRunner, data_file: Path, seeded: RecordStore) -> None:
        result = invoke(runner, data_file, "search", "gpa", "4")

        assert result.exit_code == 0
        assert "No matching students" in result.output

    def test_semester_summary(self, runner: CliRunner, data_file: Path, seeded: RecordStore) -> None:
        result = invoke(runner, data_file, "semester-summary", "Fall", "2024")

        assert result.exit_code == 0
        assert "Total Students: 1" in result.output
        assert "1. jane - 3.50" in result.output

    def test_semester_summary_bad_year(self, runner: CliRunner, data_file: Path) -> None:
        result = invoke(runner, data_file, "semester-summary", "fall", "1800")

        assert result.exit_code == 1
        assert "1900" in result.output

    def test_course_report(self, runner: CliRunner, data_file: Path, seeded: RecordStore) -> None:
        result = invoke(runner, data_file, "course-report", "course0")

        assert result.exit_code == 0
        assert "Class Average: 90.00%" in result.output


@pytest.mark.unit
class TestWriteCommands:
    """Tests for delete and recompute."""

    def test_delete_with_yes(self, runner: CliRunner, data_file: Path, seeded: RecordStore) -> None:
        result = invoke(runner, data_file, "delete", "1", "--yes")

        assert result.exit_code == 0
        assert "Student 1 deleted" in result.output
        document = json.loads(data_file.read_text())
        assert [s["id"] for s in document["studentData"]] == [2]
        assert document["nextID"] == 3

    def test_delete_prompt_declined(
        self, runner: CliRunner, data_file: Path, seeded: RecordStore
    ) -> None:
        result = invoke(runner, data_file, "delete", "1", input="n\n")

        assert result.exit_code == 0
        assert "Deletion stopped" in result.output
        assert len(json.loads(data_file.read_text())["studentData"]) == 2

    def test_delete_missing(self, runner: CliRunner, data_file: Path) -> None:
        result = invoke(runner, data_file, "delete", "4", "--yes")

        assert result.exit_code == 1
        assert "Error: Student with id 4 not found" in result.output

    def test_recompute(self, runner: CliRunner, data_file: Path, seeded: RecordStore) -> None:
        seeded.add_semester_to_student(2, make_semester("spring", 2025, scores=(70,)))

        result = invoke(runner, data_file, "recompute", "2")

        assert result.exit_code == 0
        assert json.loads(data_file.read_text())["studentData"][1]["grade"]["letterGrade"] == "C"


@pytest.mark.unit
class TestStartup:
    """Tests for global options and startup failures."""

    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_corrupt_data_file_is_fatal(self, runner: CliRunner, data_file: Path) -> None:
        data_file.write_text("{broken")

        result = invoke(runner, data_file, "list")

        assert result.exit_code == 1
        assert "Fatal error: Failed to load student records" in result.output

    def test_undecodable_data_file_is_fatal(self, runner: CliRunner, data_file: Path) -> None:
        data_file.write_bytes(b"\xff\xfe{}")

        result = invoke(runner, data_file, "list")

        assert result.exit_code == 1
        assert "Fatal error: Failed to load student records" in result.output

    def test_config_file_sets_data_file(self, runner: CliRunner, tmp_path: Path) -> None:
        config_path = tmp_path / "gradetrack.yaml"
        config_path.write_text(
            dedent("""
                data_file: records/data.json
                logging:
                  level: DEBUG
            """).strip()
        )

        result = runner.invoke(main, ["--config", str(config_path), "add", "jane", "female"])

        assert result.exit_code == 0
        assert (tmp_path / "records" / "data.json").exists()

    def test_config_discovered_from_cwd(self, runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "gradetrack.yaml").write_text("data_file: found.json\n")

        result = runner.invoke(main, ["add", "jane", "female"])

        assert result.exit_code == 0
        assert (tmp_path / "found.json").exists()

    def test_env_overrides_data_file(
        self, runner: CliRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("GRADETRACK_DATA_FILE", str(tmp_path / "env.json"))

        result = runner.invoke(main, ["add", "jane", "female"])

        assert result.exit_code == 0
        assert (tmp_path / "env.json").exists()

    def test_invalid_config_is_reported(self, runner: CliRunner, tmp_path: Path) -> None:
        config_path = tmp_path / "gradetrack.yaml"
        config_path.write_text("- just\n- a list\n")

        result = runner.invoke(main, ["--config", str(config_path), "list"])

        assert result.exit_code == 1
        assert "Configuration error" in result.output
