"""Grading scales and GPA band tables."""

from types import MappingProxyType

from ..scoring.classify import Classification
from ..scoring.models import GradingScale

STANDARD_4_0 = GradingScale(
    name="Standard 4.0",
    points={
        "A+": 4.0, "A": 4.0, "A-": 3.7,
        "B+": 3.3, "B": 3.0, "B-": 2.7,
        "C+": 2.3, "C": 2.0, "C-": 1.7,
        "D+": 1.3, "D": 1.0, "D-": 0.7,
        "F": 0.0,
    },
    description="Unweighted letter grades, A+ capped at 4.0",
)

# A+ earns 4.3; P and S are recorded but excluded from the GPA
CORNELL_4_3 = GradingScale(
    name="Cornell 4.3",
    points={
        "A+": 4.3, "A": 4.0, "A-": 3.7,
        "B+": 3.3, "B": 3.0, "B-": 2.7,
        "C+": 2.3, "C": 2.0, "C-": 1.7,
        "D+": 1.3, "D": 1.0, "D-": 1.0,
        "F": 0.0,
    },
    non_graded=frozenset({"P", "S"}),
    description="A+ earns 4.3; pass and satisfactory grades carry no weight",
)

# Unweighted base points; honors courses add 0.5 and AP courses add 1.0, capped at 5.0
WEIGHTED_HONORS_AP = GradingScale(
    name="Weighted (Honors/AP)",
    points=STANDARD_4_0.points,
    non_graded=frozenset({"P", "NP"}),
    description="Honors +0.5 and AP +1.0 per course, capped at 5.0; pass/no-pass grades carry no weight",
    level_bonus={"honors": 0.5, "ap": 1.0},
    bonus_cap=5.0,
)

SCALES = MappingProxyType({
    "standard": STANDARD_4_0,
    "cornell": CORNELL_4_3,
    "weighted": WEIGHTED_HONORS_AP,
})

ACADEMIC_STANDING = Classification.from_mapping("Academic standing", {
    0.0: "Dismissal Risk",
    2.7: "Academic Probation",
    3.0: "Good Standing",
    3.5: "Excellent Standing",
})

LATIN_HONORS = Classification.from_mapping("Latin honors", {
    0.0: "None",
    3.5: "Cum Laude",
    3.7: "Magna Cum Laude",
    3.9: "Summa Cum Laude",
})

# What a required term average means in letter grades
GRADE_NEEDED = Classification.from_mapping("Grade needed", {
    0.0: "D / F (below 1.0)",
    1.0: "D / C- (1.0-1.49)",
    1.5: "C- / C (1.5-1.84)",
    1.85: "C / C+ (1.85-2.14)",
    2.15: "C+ / B- (2.15-2.49)",
    2.5: "B- / B (2.5-2.84)",
    2.85: "B / B+ (2.85-3.14)",
    3.15: "B+ / A- (3.15-3.49)",
    3.5: "A- / A (3.5-3.84)",
    3.85: "A+ / A (3.85-4.0)",
})

GPA_CLASSIFICATIONS = (ACADEMIC_STANDING, LATIN_HONORS)


def get_scale(key: str) -> GradingScale:
    """Look up a grading scale by key, raising KeyError with the valid keys."""
    try:
        return SCALES[key]
    except KeyError:
        raise KeyError(f"Unknown grading scale '{key}'. Choose from: {', '.join(SCALES)}") from None
