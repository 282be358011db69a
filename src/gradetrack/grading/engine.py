"""Grading engine - computes a Grade from a sequence of scores."""

from __future__ import annotations

from typing import TYPE_CHECKING

from gradetrack.grading.exceptions import EmptyScoresError, GradeRangeError
from gradetrack.grading.models import Grade, LetterGrade, Standing

if TYPE_CHECKING:
    from collections.abc import Iterable

MAX_AVERAGE = 100.0
MAX_GPA = 4.0

# Minimum average for each letter, checked top to bottom
LETTER_THRESHOLDS: tuple[tuple[float, LetterGrade], ...] = (
    (96, LetterGrade.A_PLUS),
    (92, LetterGrade.A),
    (88, LetterGrade.A_MINUS),
    (84, LetterGrade.B_PLUS),
    (80, LetterGrade.B),
    (76, LetterGrade.B_MINUS),
    (72, LetterGrade.C_PLUS),
    (68, LetterGrade.C),
    (64, LetterGrade.C_MINUS),
    (60, LetterGrade.D_PLUS),
    (55, LetterGrade.D),
    (50, LetterGrade.D_MINUS),
)

_STANDING_BY_LETTER: dict[LetterGrade, Standing] = {
    LetterGrade.A_PLUS: Standing.EXCELLENT,
    LetterGrade.A: Standing.EXCELLENT,
    LetterGrade.A_MINUS: Standing.EXCELLENT,
    LetterGrade.B_PLUS: Standing.VERY_GOOD,
    LetterGrade.B: Standing.VERY_GOOD,
    LetterGrade.B_MINUS: Standing.VERY_GOOD,
    LetterGrade.C_PLUS: Standing.NOT_BAD,
    LetterGrade.C: Standing.NOT_BAD,
    LetterGrade.C_MINUS: Standing.NOT_BAD,
    LetterGrade.D_PLUS: Standing.GOOD_STANDING,
    LetterGrade.D: Standing.GOOD_STANDING,
    LetterGrade.D_MINUS: Standing.GOOD_STANDING,
}


def gpa_for(average: float) -> float:
    """Map an average onto the GPA scale (100 -> 4.0, 20 -> 0.0)."""
    return (average - 20) / 20


def letter_for(average: float) -> LetterGrade:
    """Get the letter grade for an average.

    Args:
        average: Average score.

    Returns:
        The first letter whose threshold the average reaches, else F.
    """
    for threshold, letter in LETTER_THRESHOLDS:
        if average >= threshold:
            return letter
    return LetterGrade.F


def standing_for(letter: LetterGrade) -> Standing:
    """Get the standing label for a letter grade."""
    return _STANDING_BY_LETTER.get(letter, Standing.BELOW_EXPECTATIONS)


def compute_grade(scores: Iterable[float]) -> Grade:
    """Compute a Grade from raw scores.

    Scores are averaged without weighting. Only the upper bounds are checked;
    scores are not range-checked individually, so negative input produces a
    negative GPA.

    Args:
        scores: Non-empty sequence of scores.

    Returns:
        The computed Grade.

    Raises:
        EmptyScoresError: If no scores are given.
        GradeRangeError: If the average is above 100 or the GPA above 4.
    """
    values = [float(score) for score in scores]
    if not values:
        raise EmptyScoresError("Cannot compute a grade from no scores")

    average = sum(values) / len(values)
    gpa = gpa_for(average)

    if average > MAX_AVERAGE or gpa > MAX_GPA:
        raise GradeRangeError(
            f"Grade out of range: average {average:g} (max {MAX_AVERAGE:g}), "
            f"gpa {gpa:g} (max {MAX_GPA:g})"
        )

    letter = letter_for(average)
    return Grade(
        average=average,
        gpa=gpa,
        letter_grade=letter,
        report=standing_for(letter),
    )
