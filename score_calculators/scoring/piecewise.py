"""Piecewise scaled-score engine: raw fractions to scaled section scores."""

import logging
import math
from bisect import bisect_right
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Sequence

from .classify import Classification, Label, classify
from .models import RawSubScore
from .results import ConfigurationError

logger = logging.getLogger(__name__)


class MapMode(str, Enum):
    """How a piecewise map is evaluated between breakpoints."""

    LINEAR = "linear"  # interpolate inside the enclosing segment
    STEP = "step"      # lookup table: hold the last breakpoint's output


class CompositeStrategy(str, Enum):
    SUM = "sum"
    WEIGHTED_SUM = "weighted_sum"
    MEAN = "mean"
    NORMALIZED_MEAN = "normalized_mean"


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return math.floor(value + 0.5)


@dataclass(frozen=True)
class PiecewiseMap:
    """
    Monotonic mapping from a raw fraction in [0, 1] to a scaled value.

    Breakpoints are (threshold_fraction, output) pairs. The first threshold
    must be 0 and the last 1; thresholds strictly increase and outputs never
    decrease. The first and last outputs are the map's floor and ceiling.
    """

    name: str
    breakpoints: tuple[tuple[float, float], ...]
    mode: MapMode = MapMode.LINEAR

    def __post_init__(self):
        points = tuple((float(t), float(out)) for t, out in self.breakpoints)
        if len(points) < 2:
            raise ConfigurationError(f"Map '{self.name}' needs at least two breakpoints")
        if points[0][0] != 0.0 or points[-1][0] != 1.0:
            raise ConfigurationError(f"Map '{self.name}' must cover fractions 0 through 1")
        for (t0, out0), (t1, out1) in zip(points, points[1:]):
            if t1 <= t0:
                raise ConfigurationError(f"Map '{self.name}' thresholds must strictly increase")
            if out1 < out0:
                raise ConfigurationError(f"Map '{self.name}' outputs must not decrease")
        object.__setattr__(self, "breakpoints", points)
        object.__setattr__(self, "mode", MapMode(self.mode))

    @classmethod
    def from_raw_table(cls, name: str, table: dict[int, int], domain_max: int) -> "PiecewiseMap":
        """
        Build a step map from a {raw_correct: scaled} conversion table.

        The table must contain entries for 0 and domain_max. Thresholds are
        computed as raw / domain_max, the same way scale_sub_score computes
        a raw fraction, so table keys are hit exactly.
        """
        if domain_max <= 0:
            raise ConfigurationError(f"Map '{name}' has a zero-sized domain")
        if 0 not in table or domain_max not in table:
            raise ConfigurationError(f"Map '{name}' must define raw scores 0 and {domain_max}")
        if any(raw < 0 or raw > domain_max for raw in table):
            raise ConfigurationError(f"Map '{name}' has raw scores outside 0..{domain_max}")

        points = tuple((raw / domain_max, scaled) for raw, scaled in sorted(table.items()))
        return cls(name, points, MapMode.STEP)

    @property
    def floor(self) -> int:
        return int(self.breakpoints[0][1])

    @property
    def ceiling(self) -> int:
        return int(self.breakpoints[-1][1])

    @property
    def thresholds(self) -> tuple[float, ...]:
        return tuple(t for t, _ in self.breakpoints)

    def evaluate(self, fraction: float) -> float:
        """Unrounded output for a fraction already clamped to [0, 1]."""
        index = bisect_right(self.thresholds, fraction) - 1
        index = max(0, min(index, len(self.breakpoints) - 1))
        t0, out0 = self.breakpoints[index]

        if self.mode is MapMode.STEP or index == len(self.breakpoints) - 1:
            return out0

        t1, out1 = self.breakpoints[index + 1]
        return out0 + (fraction - t0) / (t1 - t0) * (out1 - out0)


@dataclass(frozen=True)
class CompositeRule:
    """
    How scaled sub-scores combine into one composite.

    output_range is the rescale target for NORMALIZED_MEAN and a clamp for
    every other strategy. weights are required for WEIGHTED_SUM only.
    """

    strategy: CompositeStrategy = CompositeStrategy.SUM
    weights: tuple[float, ...] | None = None
    output_range: tuple[float, float] | None = None

    def __post_init__(self):
        object.__setattr__(self, "strategy", CompositeStrategy(self.strategy))
        if self.strategy is CompositeStrategy.WEIGHTED_SUM and not self.weights:
            raise ConfigurationError("Weighted composite needs weights")
        if self.strategy is CompositeStrategy.NORMALIZED_MEAN and self.output_range is None:
            raise ConfigurationError("Normalized composite needs an output range")
        if self.output_range is not None and self.output_range[1] < self.output_range[0]:
            raise ConfigurationError("Composite output range is reversed")


def raw_fraction(raw: RawSubScore) -> float:
    """Fraction of the domain answered correctly, clamped to [0, 1]."""
    if raw.domain_max <= 0:
        raise ConfigurationError("Section domain maximum must be greater than 0")
    return min(1.0, max(0.0, raw.correct / raw.domain_max))


def adjust_fraction(fraction: float, difficulty_pct: float) -> float:
    """Apply a difficulty adjustment to a raw fraction, capped at 1."""
    return max(0.0, min(1.0, fraction * (1 + difficulty_pct / 100)))


def scale_sub_score(raw: RawSubScore, scale_map: PiecewiseMap, difficulty_pct: float = 0.0) -> int:
    """
    Convert a raw sub-score to a whole scaled score.

    The difficulty adjustment is applied once to the raw fraction, before
    the map lookup. A fraction of 0 always yields the map floor and full
    marks always yield the map ceiling.

    Args:
        raw: Correct answers and section size.
        scale_map: Conversion curve for the section.
        difficulty_pct: Percentage adjustment applied to the raw fraction.

    Returns:
        Scaled score clamped to [scale_map.floor, scale_map.ceiling].
    """
    fraction = raw_fraction(raw)
    if fraction == 0.0:
        return scale_map.floor
    if fraction == 1.0:
        return scale_map.ceiling

    if difficulty_pct:
        fraction = adjust_fraction(fraction, difficulty_pct)

    scaled = round_half_up(scale_map.evaluate(fraction))
    return max(scale_map.floor, min(scale_map.ceiling, scaled))


def composite(
    values: Sequence[float],
    rule: CompositeRule = CompositeRule(),
    ranges: Sequence[tuple[float, float]] | None = None,
) -> int:
    """
    Combine scaled sub-scores into a composite.

    Args:
        values: Scaled sub-scores, in section order.
        rule: Combination strategy; unweighted sum by default.
        ranges: (low, high) of each value, needed by NORMALIZED_MEAN.

    Returns:
        Whole composite, clamped to rule.output_range when one is set.
    """
    if not values:
        raise ValueError("composite needs at least one sub-score")

    strategy = rule.strategy
    if strategy is CompositeStrategy.SUM:
        total = sum(values)
    elif strategy is CompositeStrategy.WEIGHTED_SUM:
        if len(rule.weights) != len(values):
            raise ConfigurationError(f"Expected {len(rule.weights)} sub-scores, got {len(values)}")
        total = sum(value * weight for value, weight in zip(values, rule.weights))
    elif strategy is CompositeStrategy.MEAN:
        total = sum(values) / len(values)
    else:
        if ranges is None or len(ranges) != len(values):
            raise ConfigurationError("Normalized composite needs one range per sub-score")
        normalized = []
        for value, (low, high) in zip(values, ranges):
            if high <= low:
                raise ConfigurationError(f"Empty sub-score range {low:g}..{high:g}")
            normalized.append((value - low) / (high - low))
        out_low, out_high = rule.output_range
        total = out_low + (sum(normalized) / len(normalized)) * (out_high - out_low)

    result = round_half_up(total)
    if rule.output_range is not None:
        out_low, out_high = rule.output_range
        result = max(int(out_low), min(int(out_high), result))
    return result


AUTO_DIFFICULTY = "auto"


@dataclass(frozen=True)
class SectionSpec:
    """
    One scored section of an exam.

    A section either has a single scale_map, a set of adaptive_maps keyed by
    difficulty level, or no map at all (the entered score is already scaled).
    """

    key: str
    name: str
    domain_max: int
    minimum: int = 0
    scale_map: PiecewiseMap | None = None
    adaptive_maps: Mapping[str, PiecewiseMap] = field(default_factory=dict)
    percentiles: Classification | None = None

    def __post_init__(self):
        if self.domain_max <= 0:
            raise ConfigurationError(f"Section '{self.key}' domain maximum must be greater than 0")
        if self.minimum < 0 or self.minimum >= self.domain_max:
            raise ConfigurationError(f"Section '{self.key}' minimum must lie below its maximum")
        if self.scale_map is not None and self.adaptive_maps:
            raise ConfigurationError(f"Section '{self.key}' has both a fixed and adaptive maps")
        object.__setattr__(self, "adaptive_maps", MappingProxyType(dict(self.adaptive_maps)))

    @property
    def maps(self) -> tuple[PiecewiseMap, ...]:
        """Every conversion curve configured for this section."""
        if self.scale_map is not None:
            return (self.scale_map,)
        return tuple(self.adaptive_maps.values())

    def map_for(self, difficulty: str | None = None) -> PiecewiseMap | None:
        if not self.adaptive_maps:
            return self.scale_map
        try:
            return self.adaptive_maps[difficulty]
        except KeyError:
            raise ConfigurationError(f"Section '{self.key}' has no '{difficulty}' map") from None

    def score_range(self, difficulty: str | None = None) -> tuple[int, int]:
        """Lowest and highest scaled score the section can produce."""
        scale_map = self.map_for(difficulty)
        if scale_map is None:
            return self.minimum, self.domain_max
        return scale_map.floor, scale_map.ceiling


@dataclass(frozen=True)
class ExamDefinition:
    """
    Everything needed to turn an exam's raw section scores into a report.

    auto_thresholds is (easy_at_most, hard_at_least): the mean section
    fraction at or below which the easy maps apply in auto mode, and at or
    above which the hard maps apply.
    """

    key: str
    name: str
    sections: tuple[SectionSpec, ...]
    composite_rule: CompositeRule = CompositeRule()
    composite_label: str = "Total"
    classifications: tuple[Classification, ...] = ()
    difficulties: tuple[str, ...] = ()
    default_difficulty: str | None = None
    auto_thresholds: tuple[float, float] | None = None
    supports_adjustment: bool = False
    description: str = ""

    def __post_init__(self):
        if not self.sections:
            raise ConfigurationError(f"Exam '{self.key}' has no sections")
        keys = [section.key for section in self.sections]
        if len(set(keys)) != len(keys):
            raise ConfigurationError(f"Exam '{self.key}' repeats a section key")

        rule = self.composite_rule
        if rule.strategy is CompositeStrategy.WEIGHTED_SUM and len(rule.weights) != len(self.sections):
            raise ConfigurationError(f"Exam '{self.key}' needs one composite weight per section")

        for section in self.sections:
            if section.adaptive_maps and set(section.adaptive_maps) != set(self.difficulties):
                raise ConfigurationError(
                    f"Exam '{self.key}' section '{section.key}' must define maps for {self.difficulties}"
                )

        allowed = set(self.difficulties)
        if self.auto_thresholds is not None:
            allowed.add(AUTO_DIFFICULTY)
        if self.difficulties and self.default_difficulty not in allowed:
            raise ConfigurationError(f"Exam '{self.key}' default difficulty is not one of {sorted(allowed)}")

    @property
    def section_keys(self) -> tuple[str, ...]:
        return tuple(section.key for section in self.sections)

    @property
    def difficulty_choices(self) -> tuple[str, ...]:
        """Difficulty values a caller may pass, including auto when supported."""
        if self.auto_thresholds is not None:
            return (AUTO_DIFFICULTY,) + self.difficulties
        return self.difficulties

    def section(self, key: str) -> SectionSpec:
        for section in self.sections:
            if section.key == key:
                return section
        raise KeyError(key)


@dataclass(frozen=True)
class ExamScore:
    """Scaled section scores, composite and band labels for one attempt."""

    exam: str
    sections: Mapping[str, int]
    composite: int
    bands: Mapping[str, Label]
    section_percentiles: Mapping[str, Label]
    difficulty: str | None = None
    adjustment_pct: float = 0.0


def select_difficulty(definition: ExamDefinition, raw_scores: Mapping[str, int]) -> str:
    """Pick easy, normal or hard maps from the mean fraction of every section."""
    if definition.auto_thresholds is None:
        raise ValueError(f"{definition.name} does not support automatic difficulty")

    fractions = [
        min(1.0, max(0.0, raw_scores[section.key] / section.domain_max))
        for section in definition.sections
    ]
    mean = sum(fractions) / len(fractions)
    easy_at_most, hard_at_least = definition.auto_thresholds

    if mean >= hard_at_least:
        return "hard"
    if mean <= easy_at_most:
        return "easy"
    return "normal"


def resolve_difficulty(
    definition: ExamDefinition,
    raw_scores: Mapping[str, int],
    difficulty: str | None = None,
) -> str | None:
    """Turn a requested difficulty (or the exam default) into a concrete level."""
    if not definition.difficulties:
        if difficulty not in (None, AUTO_DIFFICULTY):
            raise ValueError(f"{definition.name} has no difficulty levels")
        return None

    chosen = difficulty or definition.default_difficulty
    if chosen == AUTO_DIFFICULTY:
        return select_difficulty(definition, raw_scores)
    if chosen not in definition.difficulties:
        raise ValueError(f"Unknown difficulty '{chosen}' for {definition.name}")
    return chosen


def score_section(
    section: SectionSpec,
    correct: int,
    difficulty: str | None = None,
    adjustment_pct: float = 0.0,
) -> int:
    """Scaled score for one section; unmapped sections return the entry as is."""
    if correct < section.minimum or correct > section.domain_max:
        raise ValueError(
            f"{section.name} score {correct} is outside {section.minimum}..{section.domain_max}"
        )

    scale_map = section.map_for(difficulty)
    if scale_map is None:
        return correct
    return scale_sub_score(RawSubScore(correct, section.domain_max), scale_map, adjustment_pct)


def score_exam(
    definition: ExamDefinition,
    raw_scores: Mapping[str, int],
    difficulty: str | None = None,
    adjustment_pct: float = 0.0,
) -> ExamScore:
    """
    Score a full exam attempt.

    Args:
        definition: Exam sections, composite rule and band tables.
        raw_scores: Validated raw score per section key.
        difficulty: Map set to use for adaptive exams ("auto" to infer it).
        adjustment_pct: Difficulty adjustment for exams that support one.

    Returns:
        ExamScore with every section scaled, the composite and its labels.
    """
    missing = [key for key in definition.section_keys if key not in raw_scores]
    if missing:
        raise ValueError(f"Missing raw scores for: {', '.join(missing)}")
    if adjustment_pct and not definition.supports_adjustment:
        raise ValueError(f"{definition.name} does not support a difficulty adjustment")

    level = resolve_difficulty(definition, raw_scores, difficulty)

    scaled = {}
    for section in definition.sections:
        scaled[section.key] = score_section(section, raw_scores[section.key], level, adjustment_pct)

    ranges = [section.score_range(level) for section in definition.sections]
    total = composite(list(scaled.values()), definition.composite_rule, ranges)

    bands = {table.name: classify(total, table) for table in definition.classifications}
    percentiles = {
        section.key: classify(scaled[section.key], section.percentiles)
        for section in definition.sections
        if section.percentiles is not None
    }

    logger.debug("Scored %s: sections=%s composite=%d difficulty=%s", definition.key, scaled, total, level)

    return ExamScore(
        exam=definition.key,
        sections=MappingProxyType(scaled),
        composite=total,
        bands=MappingProxyType(bands),
        section_percentiles=MappingProxyType(percentiles),
        difficulty=level,
        adjustment_pct=adjustment_pct,
    )
