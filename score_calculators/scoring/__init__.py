"""Scoring engines: validation, weighted aggregates, scaled scores."""

from .aggregate import (
    RaiseScenario,
    combine_aggregates,
    compute_aggregate,
    merge_aggregates,
    plan_scenarios,
    solve_required_average,
)
from .classify import Classification, classify
from .controller import (
    ExamInputs,
    ExamSession,
    ExamState,
    GpaInputs,
    GpaSession,
    GpaState,
    RaiseInputs,
    RaiseState,
    SemesterInputs,
    SemesterState,
    recompute_exam,
    recompute_gpa,
    recompute_raise,
    recompute_semesters,
)
from .models import Aggregate, CourseRow, GradingScale, LineItem, RawSubScore, SemesterRow
from .piecewise import (
    CompositeRule,
    CompositeStrategy,
    ExamDefinition,
    ExamScore,
    MapMode,
    PiecewiseMap,
    SectionSpec,
    composite,
    scale_sub_score,
    score_exam,
)
from .results import ConfigurationError, ErrorKind, Incomplete, Invalid, InvalidAggregate, Valid

__all__ = [
    "Aggregate",
    "Classification",
    "CompositeRule",
    "CompositeStrategy",
    "ConfigurationError",
    "CourseRow",
    "ErrorKind",
    "ExamDefinition",
    "ExamInputs",
    "ExamScore",
    "ExamSession",
    "ExamState",
    "GpaInputs",
    "GpaSession",
    "GpaState",
    "GradingScale",
    "Incomplete",
    "Invalid",
    "InvalidAggregate",
    "LineItem",
    "MapMode",
    "PiecewiseMap",
    "RaiseInputs",
    "RaiseScenario",
    "RaiseState",
    "RawSubScore",
    "SectionSpec",
    "SemesterInputs",
    "SemesterRow",
    "SemesterState",
    "Valid",
    "classify",
    "combine_aggregates",
    "composite",
    "compute_aggregate",
    "merge_aggregates",
    "plan_scenarios",
    "recompute_exam",
    "recompute_gpa",
    "recompute_raise",
    "recompute_semesters",
    "scale_sub_score",
    "score_exam",
    "solve_required_average",
]
