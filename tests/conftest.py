"""Pytest configuration and fixtures."""

import pytest

from score_calculators.scoring import CourseRow
from score_calculators.tables.grading import CORNELL_4_3, STANDARD_4_0, WEIGHTED_HONORS_AP


@pytest.fixture
def standard_scale():
    """Return the standard 4.0 grading scale."""
    return STANDARD_4_0


@pytest.fixture
def cornell_scale():
    """Return the Cornell 4.3 scale with pass/satisfactory grades."""
    return CORNELL_4_3


@pytest.fixture
def weighted_scale():
    """Return the weighted scale with honors and AP bonuses."""
    return WEIGHTED_HONORS_AP


@pytest.fixture
def sample_rows():
    """Three valid courses worth 40.7 points over 11 credits on the 4.0 scale."""
    return (
        CourseRow("A", "4"),
        CourseRow("B+", "3"),
        CourseRow("A-", "4"),
    )
