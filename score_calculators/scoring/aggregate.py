"""Weighted-aggregate engine used by the GPA calculators."""

import logging
from dataclasses import dataclass
from typing import Iterable

from .classify import Classification, Label, classify
from .models import Aggregate, CourseRow, GradingScale, LineItem
from .results import InvalidAggregate
from .validation import validate_row

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RaiseScenario:
    """One "what do I need" answer for a given amount of extra credit."""

    additional_weight: float
    periods: int
    required_average: float
    achievable: bool
    grade_needed: Label


def aggregate_line_items(items: Iterable[LineItem], scale: GradingScale) -> Aggregate | None:
    """
    Reduce validated line items to an aggregate.

    Non-graded categories (pass/fail) are skipped. Level bonuses come from
    the scale. Returns None when no weight was accumulated.
    """
    total_points = 0.0
    total_weight = 0.0

    for item in items:
        if not scale.is_graded(item.category) or item.weight <= 0:
            continue
        total_points += item.weight * scale.points_for(item.category, item.level)
        total_weight += item.weight

    if total_weight == 0:
        return None
    return Aggregate(total_points=total_points, total_weight=total_weight)


def compute_aggregate(
    rows: Iterable[CourseRow],
    scale: GradingScale,
    max_weight: float,
) -> Aggregate | InvalidAggregate | None:
    """
    Validate raw course rows and aggregate them.

    Rows with empty credits are skipped. Any rejected field on a started
    row blocks the whole computation: the result is then an
    InvalidAggregate listing every faulty field, never a partial average.

    Args:
        rows: Course rows as typed.
        scale: Active grading scale.
        max_weight: Credit cap for a single course.

    Returns:
        Aggregate, InvalidAggregate, or None when nothing carries weight.
    """
    items = []
    errors = {}

    for index, row in enumerate(rows):
        item, row_errors = validate_row(row, scale, max_weight)
        if row_errors:
            errors[index] = row_errors
        elif item is not None:
            items.append(item)

    if errors:
        logger.debug("Aggregation blocked by %d invalid row(s)", len(errors))
        return InvalidAggregate(errors)

    return aggregate_line_items(items, scale)


def merge_aggregates(prior: Aggregate | None, current: Aggregate | None) -> Aggregate | None:
    """Combine a prior aggregate with a new batch by summing both fields."""
    if prior is None or current is None:
        return None

    merged = Aggregate(
        total_points=prior.total_points + current.total_points,
        total_weight=prior.total_weight + current.total_weight,
    )
    if merged.total_weight <= 0:
        return None
    return merged


def combine_aggregates(aggregates: Iterable[Aggregate | None]) -> Aggregate | None:
    """Cumulative aggregate over many periods, ignoring empty ones."""
    total_points = 0.0
    total_weight = 0.0

    for aggregate in aggregates:
        if aggregate is None or aggregate.total_weight <= 0:
            continue
        total_points += aggregate.total_points
        total_weight += aggregate.total_weight

    if total_weight == 0:
        return None
    return Aggregate(total_points=total_points, total_weight=total_weight)


def solve_required_average(prior: Aggregate, target: float, additional_weight: float) -> float:
    """
    Average needed over additional_weight units to reach target overall.

    The result is not clamped: a value above the scale maximum means the
    target cannot be reached with that much additional weight, and a
    negative value means it is already secured.
    """
    if additional_weight <= 0:
        raise ValueError("additional_weight must be greater than 0")

    needed_points = target * (prior.total_weight + additional_weight) - prior.total_points
    return needed_points / additional_weight


def plan_scenarios(
    prior: Aggregate,
    target: float,
    planned_weight: float,
    scale_max: float,
    grade_bands: Classification,
    periods: int = 4,
    unreachable_label: Label = "Not achievable",
) -> list[RaiseScenario]:
    """
    Required averages when spreading the target over 1..periods terms.

    Args:
        prior: Credits and points earned so far.
        target: Desired overall average.
        planned_weight: Credits taken per term.
        scale_max: Highest average the scale allows.
        grade_bands: Labels describing the grades a required average means.
        periods: Number of term counts to evaluate.
        unreachable_label: Label used when the required average exceeds scale_max.

    Returns:
        One RaiseScenario per term count, shortest plan first.
    """
    scenarios = []
    for count in range(1, periods + 1):
        additional = planned_weight * count
        required = solve_required_average(prior, target, additional)
        achievable = required <= scale_max
        scenarios.append(RaiseScenario(
            additional_weight=additional,
            periods=count,
            required_average=required,
            achievable=achievable,
            grade_needed=classify(required, grade_bands) if achievable else unreachable_label,
        ))
    return scenarios
