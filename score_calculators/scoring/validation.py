"""Input validation: raw user-entered strings to tagged results."""

import re

from .models import REGULAR_LEVEL, Aggregate, CourseRow, GradingScale, LineItem
from .results import ErrorKind, FieldResult, Incomplete, Invalid, Valid

# Credits: digits with at most one decimal place ("3", "4.5")
WEIGHT_PATTERN = re.compile(r"[0-9]+(\.[0-9])?")
WHOLE_PATTERN = re.compile(r"[0-9]+")
DECIMAL_PATTERN = re.compile(r"-?([0-9]+(\.[0-9]+)?|\.[0-9]+)")


def validate_weight(text: str | None, max_weight: float) -> FieldResult:
    """
    Validate a course credit string.

    Args:
        text: Raw credits as typed.
        max_weight: Upper bound (inclusive) for a single course.

    Returns:
        Valid(float), Incomplete for an empty field, or Invalid.
    """
    trimmed = (text or "").strip()
    if not trimmed:
        return Incomplete()

    if not WEIGHT_PATTERN.fullmatch(trimmed):
        return Invalid(ErrorKind.INVALID_FORMAT, f"'{trimmed}' is not a number with at most one decimal place")

    value = float(trimmed)
    if value <= 0 or value > max_weight:
        return Invalid(ErrorKind.OUT_OF_DOMAIN, f"Credits must be greater than 0 and at most {max_weight:g}")

    return Valid(value)


def validate_category(token: str | None, scale: GradingScale) -> FieldResult:
    """Validate a grade token against the active grading scale."""
    normalized = (token or "").strip().upper()
    if not normalized:
        return Invalid(ErrorKind.INVALID_CATEGORY, "Select a grade")

    if normalized not in scale:
        return Invalid(ErrorKind.INVALID_CATEGORY, f"'{normalized}' is not a grade on the {scale.name} scale")

    return Valid(normalized)


def validate_level(text: str | None, scale: GradingScale) -> FieldResult:
    """Validate a course level; an empty level means a regular course."""
    normalized = (text or "").strip().lower()
    if not normalized:
        return Valid(REGULAR_LEVEL)

    if normalized not in scale.levels:
        return Invalid(
            ErrorKind.INVALID_CATEGORY,
            f"'{normalized}' is not a course level on the {scale.name} scale ({', '.join(scale.levels)})",
        )

    return Valid(normalized)


def validate_row(row: CourseRow, scale: GradingScale, max_weight: float) -> tuple[LineItem | None, dict[str, Invalid]]:
    """
    Validate one course row.

    A row without credits is incomplete and is skipped entirely, whatever
    its grade. Once credits are typed, the grade and level must be valid.

    Returns:
        (LineItem, {}) for a valid row, (None, {}) for an incomplete one,
        (None, errors) when any field is rejected.
    """
    weight = validate_weight(row.credits, max_weight)
    if isinstance(weight, Incomplete):
        return None, {}

    errors = {}
    if isinstance(weight, Invalid):
        errors["credits"] = weight

    category = validate_category(row.grade, scale)
    if isinstance(category, Invalid):
        errors["grade"] = category

    level = validate_level(row.level, scale)
    if isinstance(level, Invalid):
        errors["level"] = level

    if errors:
        return None, errors

    return LineItem(category=category.value, weight=weight.value, level=level.value), {}


def validate_prior_value(text: str | None, scale_max: float) -> FieldResult:
    """Validate a previously earned average (e.g. cumulative GPA)."""
    trimmed = (text or "").strip()
    if not trimmed:
        return Incomplete()

    if not DECIMAL_PATTERN.fullmatch(trimmed):
        return Invalid(ErrorKind.INVALID_FORMAT, f"'{trimmed}' is not a number")

    value = float(trimmed)
    if value < 0 or value > scale_max:
        return Invalid(ErrorKind.OUT_OF_DOMAIN, f"Must be between 0 and {scale_max:g}")

    return Valid(value)


def validate_prior_weight(text: str | None) -> FieldResult:
    """Validate previously earned credits: whole credits only."""
    trimmed = (text or "").strip()
    if not trimmed:
        return Incomplete()

    if not WHOLE_PATTERN.fullmatch(trimmed):
        return Invalid(ErrorKind.INVALID_FORMAT, "Previous credits must be a whole number")

    return Valid(int(trimmed))


def combine_prior(value: FieldResult, weight: FieldResult) -> Aggregate | None:
    """Build the prior aggregate only when both halves are valid."""
    if isinstance(value, Valid) and isinstance(weight, Valid):
        return Aggregate.from_average(value.value, weight.value)
    return None


def validate_prior(value_text: str | None, weight_text: str | None, scale_max: float) -> FieldResult:
    """
    Validate a prior (average, weight) pair.

    Both halves must be present together. An empty or half-filled pair is
    Incomplete; any malformed half makes the pair Invalid.
    """
    value = validate_prior_value(value_text, scale_max)
    weight = validate_prior_weight(weight_text)

    for result in (value, weight):
        if isinstance(result, Invalid):
            return result

    prior = combine_prior(value, weight)
    if prior is None:
        return Incomplete()
    return Valid(prior)


def validate_raw_score(text: str | None, minimum: int, maximum: int) -> FieldResult:
    """Validate a whole-number section score within [minimum, maximum]."""
    trimmed = (text or "").strip()
    if not trimmed:
        return Incomplete()

    if not WHOLE_PATTERN.fullmatch(trimmed):
        return Invalid(ErrorKind.INVALID_FORMAT, f"'{trimmed}' is not a whole number")

    value = int(trimmed)
    if value < minimum or value > maximum:
        return Invalid(ErrorKind.OUT_OF_DOMAIN, f"Must be between {minimum} and {maximum}")

    return Valid(value)


def validate_decimal(
    text: str | None,
    minimum: float,
    maximum: float,
    *,
    exclusive_minimum: bool = False,
) -> FieldResult:
    """Validate a bounded decimal such as a target GPA or an adjustment percentage."""
    trimmed = (text or "").strip()
    if not trimmed:
        return Incomplete()

    if not DECIMAL_PATTERN.fullmatch(trimmed):
        return Invalid(ErrorKind.INVALID_FORMAT, f"'{trimmed}' is not a number")

    value = float(trimmed)
    below = value <= minimum if exclusive_minimum else value < minimum
    if below or value > maximum:
        lower = "greater than" if exclusive_minimum else "at least"
        return Invalid(ErrorKind.OUT_OF_DOMAIN, f"Must be {lower} {minimum:g} and at most {maximum:g}")

    return Valid(value)
