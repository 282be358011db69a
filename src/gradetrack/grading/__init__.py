"""Grading engine - turns raw scores into grades."""

from gradetrack.grading.engine import compute_grade, gpa_for, letter_for, standing_for
from gradetrack.grading.exceptions import EmptyScoresError, GradeRangeError, GradingError
from gradetrack.grading.models import Grade, LetterGrade, Standing

__all__ = [
    "EmptyScoresError",
    "Grade",
    "GradeRangeError",
    "GradingError",
    "LetterGrade",
    "Standing",
    "compute_grade",
    "gpa_for",
    "letter_for",
    "standing_for",
]
