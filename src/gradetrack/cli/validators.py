"""Parse-and-validate functions for raw CLI input.

Each parser handles one field and returns a FieldResult instead of raising,
so a form can collect every problem before building an entity. ``require``
turns a batch of results into values or a single InvalidDataError.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from gradetrack.records import Gender, InvalidDataError

T = TypeVar("T")

MIN_YEAR = 1900
MAX_SCORE = 100.0
MAX_GPA = 4.0
YES_ANSWERS = frozenset({"yes", "y", "yeah", "yup"})


@dataclass(frozen=True)
class FieldResult(Generic[T]):
    """Outcome of parsing one field.

    Attributes:
        field: Field label used in error messages.
        value: Parsed value when parsing succeeded.
        error: Reason parsing failed, or None.
    """

    field: str
    value: T | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Get the value, raising InvalidDataError if parsing failed."""
        if self.error is not None:
            raise InvalidDataError(f"{self.field}: {self.error}")
        return self.value  # type: ignore[return-value]


def _ok(field: str, value: T) -> FieldResult[T]:
    return FieldResult(field=field, value=value)


def _fail(field: str, error: str) -> FieldResult[Any]:
    return FieldResult(field=field, error=error)


def require(*results: FieldResult[Any]) -> list[Any]:
    """Unwrap several results at once.

    Returns:
        The parsed values, in argument order.

    Raises:
        InvalidDataError: Listing every field that failed.
    """
    failures = [f"{r.field}: {r.error}" for r in results if not r.ok]
    if failures:
        raise InvalidDataError("; ".join(failures))
    return [r.value for r in results]


def parse_text(raw: str, field: str = "name") -> FieldResult[str]:
    """Non-blank text, trimmed and lowercased."""
    text = raw.strip().lower()
    if not text:
        return _fail(field, "cannot be empty")
    return _ok(field, text)


def parse_gender(raw: str, field: str = "gender") -> FieldResult[Gender]:
    text = raw.strip().lower()
    try:
        return _ok(field, Gender(text))
    except ValueError:
        return _fail(field, f"'{raw.strip()}' is not one of male, female")


def parse_positive_int(raw: str, field: str) -> FieldResult[int]:
    """Whole number greater than zero (counts, hours, IDs)."""
    text = raw.strip()
    try:
        value = int(text)
    except ValueError:
        return _fail(field, f"'{text}' is not a whole number")
    if value <= 0:
        return _fail(field, "must be greater than 0")
    return _ok(field, value)


def parse_year(raw: str, field: str = "year") -> FieldResult[int]:
    result = parse_positive_int(raw, field)
    if result.ok and result.value is not None and result.value < MIN_YEAR:
        return _fail(field, f"must be {MIN_YEAR} or later")
    return result


def parse_bounded_float(raw: str, field: str, upper: float) -> FieldResult[float]:
    """Number in [0, upper]. Zero is accepted."""
    text = raw.strip()
    try:
        value = float(text)
    except ValueError:
        return _fail(field, f"'{text}' is not a number")
    if not 0 <= value <= upper:
        return _fail(field, f"must be between 0 and {upper:g}")
    return _ok(field, value)


def parse_score(raw: str, field: str = "score") -> FieldResult[float]:
    return parse_bounded_float(raw, field, MAX_SCORE)


def parse_gpa(raw: str, field: str = "gpa") -> FieldResult[float]:
    return parse_bounded_float(raw, field, MAX_GPA)


def parse_confirmation(raw: str) -> bool:
    """Whether the answer is a yes."""
    return raw.strip().lower() in YES_ANSWERS
