"""Data model shared by the aggregate and scaled-score engines."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from .results import ConfigurationError

REGULAR_LEVEL = "regular"


@dataclass(frozen=True)
class CourseRow:
    """A course row exactly as typed by the user."""

    grade: str = ""
    credits: str = ""
    level: str = ""


@dataclass(frozen=True)
class LineItem:
    """A validated course row: grade token, credit weight and course level."""

    category: str
    weight: float
    level: str = REGULAR_LEVEL


@dataclass(frozen=True)
class SemesterRow:
    """One completed semester as typed: its GPA and the credits it carried."""

    gpa: str = ""
    credits: str = ""


@dataclass(frozen=True)
class GradingScale:
    """
    Immutable mapping from grade token to point value.

    Tokens in non_graded (pass/fail style grades) are accepted as valid
    categories but carry neither points nor credit weight.

    level_bonus adds points per course level (honors, AP) on top of the
    base grade, capped at bonus_cap. A failing grade never earns a bonus.
    Scales without bonuses accept only the regular level.
    """

    name: str
    points: Mapping[str, float]
    non_graded: frozenset = frozenset()
    description: str = ""
    level_bonus: Mapping[str, float] = field(default_factory=dict)
    bonus_cap: float | None = None

    def __post_init__(self):
        if not self.points:
            raise ConfigurationError(f"Grading scale '{self.name}' has no grades")
        overlap = set(self.points) & set(self.non_graded)
        if overlap:
            raise ConfigurationError(
                f"Grading scale '{self.name}' lists {sorted(overlap)} as both graded and non-graded"
            )
        if REGULAR_LEVEL in self.level_bonus or any(bonus <= 0 for bonus in self.level_bonus.values()):
            raise ConfigurationError(f"Grading scale '{self.name}' level bonuses must be positive extras")
        object.__setattr__(self, "points", MappingProxyType(dict(self.points)))
        object.__setattr__(self, "non_graded", frozenset(self.non_graded))
        object.__setattr__(self, "level_bonus", MappingProxyType(dict(self.level_bonus)))

    def __contains__(self, token: object) -> bool:
        return token in self.points or token in self.non_graded

    @property
    def maximum(self) -> float:
        """Highest point value a course can earn, bonuses included."""
        top = max(self.points.values()) + max(self.level_bonus.values(), default=0.0)
        if self.bonus_cap is not None:
            top = min(top, self.bonus_cap)
        return top

    @property
    def tokens(self) -> tuple[str, ...]:
        """All accepted grade tokens, graded ones first in table order."""
        return tuple(self.points) + tuple(sorted(self.non_graded))

    @property
    def levels(self) -> tuple[str, ...]:
        return (REGULAR_LEVEL,) + tuple(self.level_bonus)

    def is_graded(self, token: str) -> bool:
        return token in self.points

    def points_for(self, token: str, level: str = REGULAR_LEVEL) -> float:
        """Grade points for a graded token taken at the given course level."""
        base = self.points[token]
        bonus = self.level_bonus.get(level, 0.0)
        if base == 0 or not bonus:
            return base
        if self.bonus_cap is None:
            return base + bonus
        return min(base + bonus, self.bonus_cap)


@dataclass(frozen=True)
class Aggregate:
    """Accumulated weighted points and weight; value is their ratio."""

    total_points: float = 0.0
    total_weight: float = 0.0

    @property
    def value(self) -> float | None:
        if self.total_weight == 0:
            return None
        return self.total_points / self.total_weight

    @classmethod
    def from_average(cls, average: float, weight: float) -> "Aggregate":
        """Rebuild an aggregate from a reported average and its weight."""
        return cls(total_points=average * weight, total_weight=weight)


@dataclass(frozen=True)
class RawSubScore:
    """Number of correct answers out of a section's domain maximum."""

    correct: int
    domain_max: int
