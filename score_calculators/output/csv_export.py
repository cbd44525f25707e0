"""CSV export for calculator reports."""

import csv
from datetime import datetime
from pathlib import Path

from .. import config


def export_gpa_to_csv(reports: list[dict], output_path: str) -> None:
    """
    Export GPA reports to CSV.

    Args:
        reports: List of GPA report dicts
        output_path: Path to output CSV file
    """
    _write_rows([_gpa_report_to_row(report) for report in reports], config.GPA_CSV_FIELDS, output_path)


def export_exams_to_csv(reports: list[dict], output_path: str) -> None:
    """
    Export exam reports to CSV.

    Args:
        reports: List of exam report dicts
        output_path: Path to output CSV file
    """
    _write_rows([_exam_report_to_row(report) for report in reports], config.EXAM_CSV_FIELDS, output_path)


def _write_rows(rows: list[dict], fieldnames: list[str], output_path: str) -> None:
    if not rows:
        return

    path = Path(output_path)
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames + ["scored_at"])
        writer.writeheader()
        writer.writerows(rows)


def _gpa_report_to_row(report: dict) -> dict:
    """Convert a GPA report to a CSV row."""
    bands = report.get("bands", {})
    return {
        "label": report.get("label", ""),
        "scale": report.get("scale", ""),
        "gpa": _rounded(report.get("gpa")),
        "total_points": _rounded(report.get("total_points")),
        "total_credits": _rounded(report.get("total_credits"), 1),
        "cumulative_gpa": _rounded(report.get("cumulative_gpa")),
        "cumulative_credits": _rounded(report.get("cumulative_credits"), 1),
        "standing": bands.get("Academic standing", ""),
        "honors": bands.get("Latin honors", ""),
        "scored_at": datetime.now().isoformat(),
    }


def _exam_report_to_row(report: dict) -> dict:
    """Convert an exam report to a CSV row; nested values are flattened as key=value lists."""
    sections = report.get("sections", [])
    percentiles = [
        f"{section['key']}={section['percentile']}" for section in sections if section.get("percentile") is not None
    ]
    return {
        "label": report.get("label", ""),
        "exam": report.get("exam", ""),
        "difficulty": report.get("difficulty") or "",
        "sections": "; ".join(f"{section['key']}={section['scaled']}" for section in sections),
        "composite": "" if report.get("composite") is None else report["composite"],
        "bands": "; ".join(f"{name}={label}" for name, label in report.get("bands", {}).items()),
        "section_percentiles": "; ".join(percentiles),
        "scored_at": datetime.now().isoformat(),
    }


def _rounded(value: float | None, digits: int = config.DISPLAY_DIGITS) -> str:
    if value is None:
        return ""
    return f"{value:.{digits}f}"
