"""Tests for input validation module."""

import pytest

from score_calculators.scoring import Aggregate, CourseRow, ErrorKind, Incomplete, Invalid, LineItem, Valid
from score_calculators.scoring.validation import (
    validate_category,
    validate_decimal,
    validate_level,
    validate_prior,
    validate_raw_score,
    validate_row,
    validate_weight,
)


class TestValidateWeight:
    """Tests for validate_weight function."""

    @pytest.mark.parametrize("text,expected", [
        ("3", 3.0),
        ("4.5", 4.5),
        ("  2 ", 2.0),
        ("6", 6.0),
        ("0.5", 0.5),
    ])
    def test_accepts_valid_credits(self, text, expected):
        """Whole credits and one decimal place are accepted."""
        assert validate_weight(text, 6) == Valid(expected)

    def test_empty_is_incomplete(self):
        """Empty credits are incomplete, not an error."""
        assert validate_weight("", 6) == Incomplete()
        assert validate_weight("   ", 6) == Incomplete()
        assert validate_weight(None, 6) == Incomplete()

    @pytest.mark.parametrize("text", ["abc", "3.25", "-1", "1e2", "3.", ".5", "3,5"])
    def test_rejects_bad_grammar(self, text):
        """Anything but digits with one optional decimal is a format error."""
        result = validate_weight(text, 6)
        assert isinstance(result, Invalid)
        assert result.kind == ErrorKind.INVALID_FORMAT

    @pytest.mark.parametrize("text", ["0", "0.0", "6.5", "12"])
    def test_rejects_out_of_range(self, text):
        """Credits must be greater than 0 and at most the cap."""
        result = validate_weight(text, 6)
        assert isinstance(result, Invalid)
        assert result.kind == ErrorKind.OUT_OF_DOMAIN


class TestValidateCategory:
    """Tests for validate_category function."""

    def test_known_grade(self, standard_scale):
        """Known grade is valid."""
        assert validate_category("B+", standard_scale) == Valid("B+")

    def test_normalizes_case_and_whitespace(self, standard_scale):
        """Lowercase and padded grades are normalized."""
        assert validate_category(" a- ", standard_scale) == Valid("A-")

    def test_unknown_grade(self, standard_scale):
        """Grade missing from the scale is rejected."""
        result = validate_category("E", standard_scale)
        assert isinstance(result, Invalid)
        assert result.kind == ErrorKind.INVALID_CATEGORY

    def test_missing_grade(self, standard_scale):
        """Empty grade is a category error."""
        assert validate_category("", standard_scale).kind == ErrorKind.INVALID_CATEGORY

    def test_non_graded_token_is_valid(self, cornell_scale):
        """Pass grades are valid categories on scales that list them."""
        assert validate_category("P", cornell_scale) == Valid("P")

    def test_non_graded_token_unknown_elsewhere(self, standard_scale):
        """Pass grades are rejected by scales without them."""
        assert isinstance(validate_category("P", standard_scale), Invalid)


class TestValidateLevel:
    """Tests for validate_level function."""

    def test_empty_is_regular(self, weighted_scale):
        """A course without a level is a regular course."""
        assert validate_level("", weighted_scale) == Valid("regular")
        assert validate_level(None, weighted_scale) == Valid("regular")

    def test_normalizes_case(self, weighted_scale):
        """Levels are matched regardless of case and padding."""
        assert validate_level(" AP ", weighted_scale) == Valid("ap")
        assert validate_level("Honors", weighted_scale) == Valid("honors")

    def test_unknown_level(self, weighted_scale):
        """Levels the scale does not define are rejected."""
        result = validate_level("ib", weighted_scale)
        assert result.kind == ErrorKind.INVALID_CATEGORY
        assert "regular, honors, ap" in result.message

    def test_unweighted_scale_accepts_only_regular(self, standard_scale):
        """Scales without bonuses reject honors and AP."""
        assert validate_level("regular", standard_scale) == Valid("regular")
        assert validate_level("honors", standard_scale).kind == ErrorKind.INVALID_CATEGORY


class TestValidateRow:
    """Tests for validate_row function."""

    def test_valid_row(self, standard_scale):
        """Valid row produces a line item."""
        item, errors = validate_row(CourseRow("A", "4"), standard_scale, 6)
        assert item == LineItem("A", 4.0)
        assert errors == {}

    def test_row_without_credits_is_skipped(self, standard_scale):
        """Row with a grade but no credits is incomplete."""
        assert validate_row(CourseRow("A", ""), standard_scale, 6) == (None, {})

    def test_row_with_credits_needs_grade(self, standard_scale):
        """Once credits are typed the grade is required."""
        item, errors = validate_row(CourseRow("", "3"), standard_scale, 6)
        assert item is None
        assert set(errors) == {"grade"}

    def test_both_fields_flagged(self, standard_scale):
        """Every faulty field of the row is reported."""
        _, errors = validate_row(CourseRow("Z", "abc"), standard_scale, 6)
        assert errors["credits"].kind == ErrorKind.INVALID_FORMAT
        assert errors["grade"].kind == ErrorKind.INVALID_CATEGORY

    def test_level_carried_to_line_item(self, weighted_scale):
        """A valid level is kept on the line item."""
        item, _ = validate_row(CourseRow("B", "3", "AP"), weighted_scale, 6)
        assert item == LineItem("B", 3.0, level="ap")

    def test_unknown_level_flagged(self, standard_scale):
        """An unknown level is reported under its own field."""
        item, errors = validate_row(CourseRow("A", "3", "ap"), standard_scale, 6)
        assert item is None
        assert set(errors) == {"level"}
        assert errors["level"].kind == ErrorKind.INVALID_CATEGORY


class TestValidatePrior:
    """Tests for validate_prior function."""

    def test_both_empty_is_incomplete(self):
        """No prior GPA entered."""
        assert validate_prior("", "", 4.0) == Incomplete()

    def test_half_filled_is_incomplete(self):
        """A half-typed pair is skipped without an error."""
        assert validate_prior("3.5", "", 4.0) == Incomplete()
        assert validate_prior("", "60", 4.0) == Incomplete()

    def test_valid_pair(self):
        """A complete pair becomes an aggregate."""
        result = validate_prior("3.5", "60", 4.0)
        assert result == Valid(Aggregate(total_points=210.0, total_weight=60))

    def test_value_above_scale(self):
        """Prior GPA above the scale maximum is out of domain."""
        result = validate_prior("4.2", "60", 4.0)
        assert result.kind == ErrorKind.OUT_OF_DOMAIN

    def test_value_not_a_number(self):
        """Prior GPA must be numeric."""
        assert validate_prior("three", "60", 4.0).kind == ErrorKind.INVALID_FORMAT

    def test_fractional_credits_rejected(self):
        """Prior credits must be whole."""
        assert validate_prior("3.5", "60.5", 4.0).kind == ErrorKind.INVALID_FORMAT

    def test_error_reported_even_when_other_half_empty(self):
        """A malformed half is flagged even before the pair is complete."""
        assert isinstance(validate_prior("x", "", 4.0), Invalid)


class TestValidateRawScore:
    """Tests for validate_raw_score function."""

    def test_in_range(self):
        """Whole number inside the section domain."""
        assert validate_raw_score("19", 0, 27) == Valid(19)

    def test_bounds_are_inclusive(self):
        """Both ends of the domain are accepted."""
        assert validate_raw_score("60", 60, 90) == Valid(60)
        assert validate_raw_score("90", 60, 90) == Valid(90)

    def test_above_maximum(self):
        """More correct answers than questions is rejected."""
        assert validate_raw_score("28", 0, 27).kind == ErrorKind.OUT_OF_DOMAIN

    def test_below_minimum(self):
        """Scores below a section minimum are rejected."""
        assert validate_raw_score("59", 60, 90).kind == ErrorKind.OUT_OF_DOMAIN

    def test_decimal_rejected(self):
        """Raw scores are whole numbers."""
        assert validate_raw_score("12.5", 0, 27).kind == ErrorKind.INVALID_FORMAT

    def test_empty(self):
        """Empty entry is incomplete."""
        assert validate_raw_score("", 0, 27) == Incomplete()


class TestValidateDecimal:
    """Tests for validate_decimal function."""

    def test_negative_allowed_when_in_range(self):
        """Difficulty adjustments can be negative."""
        assert validate_decimal("-7.5", -10, 10) == Valid(-7.5)

    def test_exclusive_minimum(self):
        """Zero is rejected when the minimum is exclusive."""
        assert validate_decimal("0", 0, 4, exclusive_minimum=True).kind == ErrorKind.OUT_OF_DOMAIN
        assert validate_decimal("0", 0, 4) == Valid(0.0)

    def test_above_maximum(self):
        """Values over the maximum are out of domain."""
        assert validate_decimal("11", -10, 10).kind == ErrorKind.OUT_OF_DOMAIN
