"""Custom exceptions for the grading engine."""


class GradingError(Exception):
    """Base exception for grading errors."""


class GradeRangeError(GradingError):
    """Computed average or GPA is above its upper bound."""


class EmptyScoresError(GradingError):
    """No scores were given to grade."""
