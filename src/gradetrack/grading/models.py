"""Data models for the grading engine."""

from dataclasses import dataclass
from enum import StrEnum


class LetterGrade(StrEnum):
    """Letter grade, best first."""

    A_PLUS = "A+"
    A = "A"
    A_MINUS = "A-"
    B_PLUS = "B+"
    B = "B"
    B_MINUS = "B-"
    C_PLUS = "C+"
    C = "C"
    C_MINUS = "C-"
    D_PLUS = "D+"
    D = "D"
    D_MINUS = "D-"
    F = "F"


class Standing(StrEnum):
    """Qualitative label for a letter grade group."""

    EXCELLENT = "Excellent"
    VERY_GOOD = "Very Good"
    NOT_BAD = "Not Bad"
    GOOD_STANDING = "Good Standing"
    BELOW_EXPECTATIONS = "Below Expectations"


@dataclass(frozen=True)
class Grade:
    """Grade derived from a set of scores.

    Attributes:
        average: Arithmetic mean of the scores.
        gpa: ``(average - 20) / 20``.
        letter_grade: Letter for the average.
        report: Standing for the letter grade.
    """

    average: float
    gpa: float
    letter_grade: LetterGrade
    report: Standing
