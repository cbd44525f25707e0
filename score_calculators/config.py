"""Configuration constants for Score Calculators."""

# Course credits
MAX_COURSE_CREDITS = 6.0   # per course, inclusive
MAX_PLANNED_CREDITS = 60.0  # per term, raise-GPA planner
RAISE_PLAN_PERIODS = 4      # scenarios at 1x..4x the planned load

# Default grading scale key (see tables.grading.SCALES)
DEFAULT_SCALE = "standard"

# Difficulty adjustment (percent applied to the raw fraction)
DIFFICULTY_ADJUST_MIN = -10.0
DIFFICULTY_ADJUST_MAX = 10.0

# Adaptive difficulty: mean section fraction thresholds
AUTO_DIFFICULTY_EASY = 0.35  # at or below -> easy maps
AUTO_DIFFICULTY_HARD = 0.75  # at or above -> hard maps

# Display
DISPLAY_DIGITS = 2
UNREACHABLE_LABEL = "Not achievable"

# CSV export columns
GPA_CSV_FIELDS = [
    "label",
    "scale",
    "gpa",
    "total_points",
    "total_credits",
    "cumulative_gpa",
    "cumulative_credits",
    "standing",
    "honors",
]

EXAM_CSV_FIELDS = [
    "label",
    "exam",
    "difficulty",
    "sections",
    "composite",
    "bands",
    "section_percentiles",
]
