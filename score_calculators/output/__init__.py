"""Output formatting modules."""

from .csv_export import export_exams_to_csv, export_gpa_to_csv
from .formatters import (
    format_errors,
    format_exam_list,
    format_exam_table,
    format_gpa_table,
    format_json,
    format_raise_table,
    format_scale_list,
    format_semester_table,
)
from .reports import exam_report, gpa_report, raise_report, semester_report

__all__ = [
    "exam_report",
    "export_exams_to_csv",
    "export_gpa_to_csv",
    "format_errors",
    "format_exam_list",
    "format_exam_table",
    "format_gpa_table",
    "format_json",
    "format_raise_table",
    "format_scale_list",
    "format_semester_table",
    "gpa_report",
    "raise_report",
    "semester_report",
]
