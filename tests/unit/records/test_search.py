"""Unit tests for RecordStore search predicates."""

import pytest

from gradetrack.records import Gender, RecordStore, Semester, Student
from tests.factories import make_course, make_semester


@pytest.fixture
def populated(store: RecordStore) -> RecordStore:
    """Store with three students.

    1 jane (female): fall 2023 [math 100, art 92] -> average 96, gpa 3.8
    2 john (male): fall 2023 [math 60], spring 2024 [physics 80] -> average 70, gpa 2.5
    3 alex (male): no semesters, no grade
    """
    store.create_student_with_history(
        "jane",
        Gender.FEMALE,
        [
            Semester(
                name="fall",
                year=2023,
                courses=[make_course("math", 100), make_course("art", 92)],
            )
        ],
    )
    store.create_student_with_history(
        "john",
        Gender.MALE,
        [
            Semester(name="fall", year=2023, courses=[make_course("math", 60)]),
            Semester(name="spring", year=2024, courses=[make_course("physics", 80)]),
        ],
    )
    store.create_student("alex", Gender.MALE)
    return store


def _ids(students: list[Student]) -> list[int]:
    return [s.id for s in students]


@pytest.mark.unit
class TestSearch:
    """Tests for the search_by_* predicates."""

    def test_by_id(self, populated: RecordStore) -> None:
        assert _ids(populated.search_by_id(2)) == [2]
        assert populated.search_by_id(99) == []

    def test_by_name_is_exact(self, populated: RecordStore) -> None:
        assert _ids(populated.search_by_name("jane")) == [1]
        assert populated.search_by_name("Jane") == []
        assert populated.search_by_name("ja") == []

    def test_by_gender(self, populated: RecordStore) -> None:
        assert _ids(populated.search_by_gender(Gender.MALE)) == [2, 3]
        assert _ids(populated.search_by_gender("female")) == [1]

    def test_by_semester_needs_name_and_year(self, populated: RecordStore) -> None:
        assert _ids(populated.search_by_semester("fall", 2023)) == [1, 2]
        assert _ids(populated.search_by_semester("spring", 2024)) == [2]
        assert populated.search_by_semester("fall", 2024) == []
        assert populated.search_by_semester("spring", 2023) == []

    def test_by_course_in_any_semester(self, populated: RecordStore) -> None:
        assert _ids(populated.search_by_course("math")) == [1, 2]
        assert _ids(populated.search_by_course("physics")) == [2]
        assert populated.search_by_course("history") == []

    def test_by_average_grade_is_inclusive(self, populated: RecordStore) -> None:
        assert _ids(populated.search_by_average_grade(96)) == [1]
        assert _ids(populated.search_by_average_grade(70)) == [1, 2]
        assert populated.search_by_average_grade(96.5) == []

    def test_by_average_grade_skips_ungraded(self, populated: RecordStore) -> None:
        assert 3 not in _ids(populated.search_by_average_grade(0))

    def test_by_gpa(self, populated: RecordStore) -> None:
        assert _ids(populated.search_by_gpa(3.8)) == [1]
        assert _ids(populated.search_by_gpa(0)) == [1, 2]

    def test_by_gpa_four_only_matches_perfect(self, store: RecordStore) -> None:
        store.create_student_with_history("ace", Gender.FEMALE, [make_semester(scores=(100,))])
        store.create_student_with_history("near", Gender.MALE, [make_semester(scores=(99,))])

        assert [s.name for s in store.search_by_gpa(4.0)] == ["ace"]

    def test_search_on_empty_store(self, store: RecordStore) -> None:
        assert store.search_by_name("jane") == []
        assert store.search_by_gpa(0) == []

    def test_stale_grade_is_what_search_sees(self, populated: RecordStore) -> None:
        """Added semesters don't change search results until recomputed."""
        populated.add_semester_to_student(2, make_semester("fall", 2024, scores=(100,)))

        assert _ids(populated.search_by_average_grade(80)) == [1]

        populated.recompute_student_grade(2)

        assert _ids(populated.search_by_average_grade(80)) == [1, 2]
