"""
Reactive recomputation for calculator widgets.

Each recompute_* function is a pure function of a complete input snapshot:
every field is re-validated on every call and nothing from an earlier run is
reused. Sessions own one widget's inputs and recompute after each edit.
"""

import logging
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Mapping

from .. import config
from .aggregate import RaiseScenario, combine_aggregates, compute_aggregate, merge_aggregates, plan_scenarios
from .classify import Classification, Label, classify
from .models import Aggregate, CourseRow, GradingScale, SemesterRow
from .piecewise import ExamDefinition, ExamScore, score_exam
from .results import ErrorKind, Invalid, InvalidAggregate, Valid
from .validation import (
    combine_prior,
    validate_decimal,
    validate_prior_value,
    validate_prior_weight,
    validate_raw_score,
)

logger = logging.getLogger(__name__)

EMPTY = MappingProxyType({})


@dataclass(frozen=True)
class GpaInputs:
    scale: GradingScale
    rows: tuple[CourseRow, ...] = ()
    prior_gpa: str = ""
    prior_credits: str = ""
    max_weight: float = config.MAX_COURSE_CREDITS
    classifications: tuple[Classification, ...] = ()


@dataclass(frozen=True)
class GpaState:
    """
    Derived GPA values for one input snapshot.

    term covers the entered courses only; cumulative also folds in the prior
    GPA and credits when both are filled in. bands classify the cumulative
    value when there is one, otherwise the term value.
    """

    term: Aggregate | None = None
    cumulative: Aggregate | None = None
    bands: Mapping[str, Label] = field(default_factory=dict)
    row_errors: Mapping[int, Mapping[str, Invalid]] = field(default_factory=dict)
    field_errors: Mapping[str, Invalid] = field(default_factory=dict)

    @property
    def gpa(self) -> float | None:
        return self.term.value if self.term else None

    @property
    def cumulative_gpa(self) -> float | None:
        return self.cumulative.value if self.cumulative else None

    @property
    def is_valid(self) -> bool:
        return not self.row_errors and not self.field_errors


def recompute_gpa(inputs: GpaInputs) -> GpaState:
    """Validate every course row and the prior pair, then aggregate."""
    result = compute_aggregate(inputs.rows, inputs.scale, inputs.max_weight)

    row_errors = {}
    term = None
    if isinstance(result, InvalidAggregate):
        row_errors = result.errors
    else:
        term = result

    prior_value = validate_prior_value(inputs.prior_gpa, inputs.scale.maximum)
    prior_weight = validate_prior_weight(inputs.prior_credits)
    field_errors = {
        name: outcome
        for name, outcome in (("prior_gpa", prior_value), ("prior_credits", prior_weight))
        if isinstance(outcome, Invalid)
    }

    cumulative = None
    if not field_errors:
        prior = combine_prior(prior_value, prior_weight)
        if prior is not None:
            cumulative = merge_aggregates(prior, term)

    headline = cumulative or term
    bands = {}
    if headline is not None:
        bands = {table.name: classify(headline.value, table) for table in inputs.classifications}

    return GpaState(
        term=term,
        cumulative=cumulative,
        bands=MappingProxyType(bands),
        row_errors=MappingProxyType(row_errors),
        field_errors=MappingProxyType(field_errors),
    )


@dataclass(frozen=True)
class RaiseInputs:
    scale: GradingScale
    grade_bands: Classification
    current_gpa: str = ""
    current_credits: str = ""
    target_gpa: str = ""
    planned_credits: str = ""
    periods: int = config.RAISE_PLAN_PERIODS
    max_planned_credits: float = config.MAX_PLANNED_CREDITS
    unreachable_label: Label = config.UNREACHABLE_LABEL


@dataclass(frozen=True)
class RaiseState:
    prior: Aggregate | None = None
    target: float | None = None
    scenarios: tuple[RaiseScenario, ...] = ()
    field_errors: Mapping[str, Invalid] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not self.field_errors


def recompute_raise(inputs: RaiseInputs) -> RaiseState:
    """Required term averages for reaching a target GPA; all four fields are required."""
    scale_max = inputs.scale.maximum
    outcomes = {
        "current_gpa": validate_prior_value(inputs.current_gpa, scale_max),
        "current_credits": validate_prior_weight(inputs.current_credits),
        "target_gpa": validate_decimal(inputs.target_gpa, 0, scale_max, exclusive_minimum=True),
        "planned_credits": validate_decimal(
            inputs.planned_credits, 0, inputs.max_planned_credits, exclusive_minimum=True
        ),
    }

    field_errors = {name: outcome for name, outcome in outcomes.items() if isinstance(outcome, Invalid)}
    if field_errors or not all(isinstance(outcome, Valid) for outcome in outcomes.values()):
        return RaiseState(field_errors=MappingProxyType(field_errors))

    prior = combine_prior(outcomes["current_gpa"], outcomes["current_credits"])
    target = outcomes["target_gpa"].value
    scenarios = plan_scenarios(
        prior,
        target,
        outcomes["planned_credits"].value,
        scale_max,
        inputs.grade_bands,
        periods=inputs.periods,
        unreachable_label=inputs.unreachable_label,
    )
    return RaiseState(prior=prior, target=target, scenarios=tuple(scenarios))


@dataclass(frozen=True)
class SemesterInputs:
    scale: GradingScale
    semesters: tuple[SemesterRow, ...] = ()
    classifications: tuple[Classification, ...] = ()


@dataclass(frozen=True)
class SemesterState:
    cumulative: Aggregate | None = None
    bands: Mapping[str, Label] = field(default_factory=dict)
    row_errors: Mapping[int, Mapping[str, Invalid]] = field(default_factory=dict)

    @property
    def cumulative_gpa(self) -> float | None:
        return self.cumulative.value if self.cumulative else None

    @property
    def is_valid(self) -> bool:
        return not self.row_errors


def recompute_semesters(inputs: SemesterInputs) -> SemesterState:
    """
    Cumulative GPA from per-semester (GPA, credits) entries.

    Each semester is validated like a prior pair: half-filled rows are
    skipped and any malformed field blocks the cumulative value.
    """
    scale_max = inputs.scale.maximum
    row_errors = {}
    aggregates = []

    for index, row in enumerate(inputs.semesters):
        value = validate_prior_value(row.gpa, scale_max)
        weight = validate_prior_weight(row.credits)
        errors = {
            name: outcome
            for name, outcome in (("gpa", value), ("credits", weight))
            if isinstance(outcome, Invalid)
        }
        if errors:
            row_errors[index] = MappingProxyType(errors)
            continue
        aggregates.append(combine_prior(value, weight))

    if row_errors:
        logger.debug("Cumulative GPA blocked by %d invalid semester(s)", len(row_errors))
        return SemesterState(row_errors=MappingProxyType(row_errors))

    cumulative = combine_aggregates(aggregates)
    bands = {}
    if cumulative is not None:
        bands = {table.name: classify(cumulative.value, table) for table in inputs.classifications}
    return SemesterState(cumulative=cumulative, bands=MappingProxyType(bands))


@dataclass(frozen=True)
class ExamInputs:
    definition: ExamDefinition
    raw: Mapping[str, str] = field(default_factory=dict)
    difficulty: str | None = None
    adjustment: str = ""
    adjustment_range: tuple[float, float] = (config.DIFFICULTY_ADJUST_MIN, config.DIFFICULTY_ADJUST_MAX)


@dataclass(frozen=True)
class ExamState:
    score: ExamScore | None = None
    field_errors: Mapping[str, Invalid] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not self.field_errors


def recompute_exam(inputs: ExamInputs) -> ExamState:
    """
    Validate every section entry and score the exam once all are present.

    Field errors are keyed by section key, plus "difficulty" and
    "adjustment" for the exam-wide settings.
    """
    definition = inputs.definition
    field_errors = {}
    values = {}

    for section in definition.sections:
        outcome = validate_raw_score(inputs.raw.get(section.key, ""), section.minimum, section.domain_max)
        if isinstance(outcome, Invalid):
            field_errors[section.key] = outcome
        elif isinstance(outcome, Valid):
            values[section.key] = outcome.value

    if inputs.difficulty is not None and inputs.difficulty not in definition.difficulty_choices:
        field_errors["difficulty"] = Invalid(
            ErrorKind.INVALID_CATEGORY, f"'{inputs.difficulty}' is not a difficulty level for {definition.name}"
        )

    adjustment_pct = 0.0
    if inputs.adjustment.strip():
        if not definition.supports_adjustment:
            field_errors["adjustment"] = Invalid(
                ErrorKind.OUT_OF_DOMAIN, f"{definition.name} does not support a difficulty adjustment"
            )
        else:
            low, high = inputs.adjustment_range
            outcome = validate_decimal(inputs.adjustment, low, high)
            if isinstance(outcome, Invalid):
                field_errors["adjustment"] = outcome
            else:
                adjustment_pct = outcome.value

    if field_errors or len(values) < len(definition.sections):
        return ExamState(field_errors=MappingProxyType(field_errors))

    score = score_exam(definition, values, inputs.difficulty, adjustment_pct)
    return ExamState(score=score)


class GpaSession:
    """
    One GPA widget: owns its course rows and prior pair.

    Every mutation swaps in a new input snapshot and recomputes state
    synchronously. A failed validation leaves state empty rather than
    showing the last good value.
    """

    def __init__(
        self,
        scale: GradingScale,
        rows: tuple[CourseRow, ...] = (),
        classifications: tuple[Classification, ...] = (),
        max_weight: float = config.MAX_COURSE_CREDITS,
    ):
        self._inputs = GpaInputs(
            scale=scale,
            rows=tuple(rows),
            max_weight=max_weight,
            classifications=tuple(classifications),
        )
        self.state = recompute_gpa(self._inputs)

    @property
    def inputs(self) -> GpaInputs:
        return self._inputs

    def _update(self, **changes) -> GpaState:
        self._inputs = replace(self._inputs, **changes)
        self.state = recompute_gpa(self._inputs)
        logger.debug("GPA recomputed: term=%s cumulative=%s", self.state.gpa, self.state.cumulative_gpa)
        return self.state

    def add_course(self, grade: str = "", credits: str = "", level: str = "") -> GpaState:
        return self._update(rows=self._inputs.rows + (CourseRow(grade, credits, level),))

    def set_course(
        self,
        index: int,
        grade: str | None = None,
        credits: str | None = None,
        level: str | None = None,
    ) -> GpaState:
        rows = list(self._inputs.rows)
        current = rows[index]
        rows[index] = CourseRow(
            grade=current.grade if grade is None else grade,
            credits=current.credits if credits is None else credits,
            level=current.level if level is None else level,
        )
        return self._update(rows=tuple(rows))

    def remove_course(self, index: int) -> GpaState:
        rows = list(self._inputs.rows)
        del rows[index]
        return self._update(rows=tuple(rows))

    def set_prior(self, gpa: str = "", credits: str = "") -> GpaState:
        return self._update(prior_gpa=gpa, prior_credits=credits)

    def set_scale(self, scale: GradingScale) -> GpaState:
        return self._update(scale=scale)

    def reset(self) -> GpaState:
        return self._update(rows=(), prior_gpa="", prior_credits="")


class ExamSession:
    """One test-score widget: owns the raw section entries and settings."""

    def __init__(self, definition: ExamDefinition):
        self._inputs = ExamInputs(definition=definition)
        self.state = recompute_exam(self._inputs)

    @property
    def inputs(self) -> ExamInputs:
        return self._inputs

    def _update(self, **changes) -> ExamState:
        self._inputs = replace(self._inputs, **changes)
        self.state = recompute_exam(self._inputs)
        logger.debug("%s recomputed: valid=%s", self._inputs.definition.key, self.state.is_valid)
        return self.state

    def set_section(self, key: str, text: str) -> ExamState:
        self._inputs.definition.section(key)
        raw = dict(self._inputs.raw)
        raw[key] = text
        return self._update(raw=MappingProxyType(raw))

    def set_difficulty(self, difficulty: str | None) -> ExamState:
        return self._update(difficulty=difficulty)

    def set_adjustment(self, text: str) -> ExamState:
        return self._update(adjustment=text)

    def set_exam(self, definition: ExamDefinition) -> ExamState:
        """Switch exams; entries from the previous exam are dropped."""
        return self._update(definition=definition, raw=EMPTY, difficulty=None, adjustment="")

    def reset(self) -> ExamState:
        return self._update(raw=EMPTY, difficulty=None, adjustment="")
