"""Convert engine states into plain report dicts for rendering and export."""

from ..scoring.controller import ExamState, GpaState, RaiseState, SemesterState
from ..scoring.models import REGULAR_LEVEL, CourseRow, GradingScale, SemesterRow
from ..scoring.piecewise import ExamDefinition


def gpa_report(state: GpaState, scale: GradingScale, rows: tuple[CourseRow, ...], label: str = "") -> dict:
    """
    Build a GPA report dict.

    Values are left unrounded; formatters round for display.
    """
    term = state.term
    cumulative = state.cumulative
    return {
        "label": label,
        "scale": scale.name,
        "gpa": state.gpa,
        "total_points": term.total_points if term else None,
        "total_credits": term.total_weight if term else None,
        "cumulative_gpa": state.cumulative_gpa,
        "cumulative_credits": cumulative.total_weight if cumulative else None,
        "bands": dict(state.bands),
        "courses": [
            {
                "grade": row.grade.strip().upper(),
                "credits": row.credits.strip(),
                "level": row.level.strip().lower() or REGULAR_LEVEL,
            }
            for row in rows
        ],
        "errors": gpa_errors(state),
    }


def gpa_errors(state: GpaState) -> list[str]:
    """Human-readable messages for every flagged row field and prior field."""
    messages = []
    for index in sorted(state.row_errors):
        for field_name, invalid in state.row_errors[index].items():
            messages.append(f"Course {index + 1} {field_name}: {invalid.message}")
    for field_name, invalid in state.field_errors.items():
        messages.append(f"{field_name.replace('_', ' ').capitalize()}: {invalid.message}")
    return messages


def raise_report(state: RaiseState, scale: GradingScale) -> dict:
    prior = state.prior
    return {
        "scale": scale.name,
        "current_gpa": prior.value if prior else None,
        "current_credits": prior.total_weight if prior else None,
        "target_gpa": state.target,
        "scenarios": [
            {
                "periods": scenario.periods,
                "additional_credits": scenario.additional_weight,
                "required_gpa": scenario.required_average,
                "achievable": scenario.achievable,
                "grade_needed": scenario.grade_needed,
            }
            for scenario in state.scenarios
        ],
        "errors": [
            f"{name.replace('_', ' ').capitalize()}: {invalid.message}"
            for name, invalid in state.field_errors.items()
        ],
    }


def semester_report(state: SemesterState, scale: GradingScale, semesters: tuple[SemesterRow, ...]) -> dict:
    cumulative = state.cumulative
    return {
        "scale": scale.name,
        "cumulative_gpa": state.cumulative_gpa,
        "total_credits": cumulative.total_weight if cumulative else None,
        "bands": dict(state.bands),
        "semesters": [
            {"gpa": row.gpa.strip(), "credits": row.credits.strip()}
            for row in semesters
        ],
        "errors": [
            f"Semester {index + 1} {field_name}: {invalid.message}"
            for index in sorted(state.row_errors)
            for field_name, invalid in state.row_errors[index].items()
        ],
    }


def exam_report(state: ExamState, definition: ExamDefinition, raw: dict, label: str = "") -> dict:
    """Build an exam report dict; section entries are kept as typed."""
    score = state.score
    sections = []
    for section in definition.sections:
        sections.append({
            "key": section.key,
            "name": section.name,
            "raw": raw.get(section.key, ""),
            "range": f"{section.minimum}-{section.domain_max}",
            "scaled": score.sections[section.key] if score else None,
            "percentile": score.section_percentiles.get(section.key) if score else None,
        })

    return {
        "label": label,
        "exam": definition.key,
        "name": definition.name,
        "difficulty": score.difficulty if score else None,
        "adjustment_pct": score.adjustment_pct if score else None,
        "sections": sections,
        "composite_label": definition.composite_label,
        "composite": score.composite if score else None,
        "bands": dict(score.bands) if score else {},
        "errors": [
            f"{definition.section(key).name if key in definition.section_keys else key.capitalize()}: "
            f"{invalid.message}"
            for key, invalid in state.field_errors.items()
        ],
    }
