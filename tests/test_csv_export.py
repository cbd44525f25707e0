"""Tests for CSV export module."""

import csv

import pytest

from score_calculators.output.csv_export import export_exams_to_csv, export_gpa_to_csv
from score_calculators.output.reports import exam_report, gpa_report
from score_calculators.scoring import ExamInputs, GpaInputs, recompute_exam, recompute_gpa
from score_calculators.tables.exams import GRE, LSAT
from score_calculators.tables.grading import GPA_CLASSIFICATIONS


@pytest.fixture
def gpa_result(standard_scale, sample_rows):
    """GPA report for the sample courses with a prior record."""
    inputs = GpaInputs(
        scale=standard_scale,
        rows=sample_rows,
        prior_gpa="3.5",
        prior_credits="60",
        classifications=GPA_CLASSIFICATIONS,
    )
    return gpa_report(recompute_gpa(inputs), standard_scale, sample_rows, label="fall")


@pytest.fixture
def gre_result():
    """GRE report for verbal 19, quant 22."""
    raw = {"verbal": "19", "quant": "22"}
    return exam_report(recompute_exam(ExamInputs(definition=GRE, raw=raw)), GRE, raw, label="alice")


def _read(path):
    with path.open("r", encoding="utf-8") as f:
        return list(csv.DictReader(f))


class TestExportGpaToCsv:
    """Tests for export_gpa_to_csv function."""

    def test_creates_csv_file(self, tmp_path, gpa_result):
        """CSV file is created at specified path."""
        output_file = tmp_path / "gpa.csv"
        export_gpa_to_csv([gpa_result], str(output_file))
        assert output_file.exists()

    def test_csv_has_header_row(self, tmp_path, gpa_result):
        """CSV has correct header row."""
        output_file = tmp_path / "gpa.csv"
        export_gpa_to_csv([gpa_result], str(output_file))

        with output_file.open("r", encoding="utf-8") as f:
            headers = next(csv.reader(f))
        assert headers[:3] == ["label", "scale", "gpa"]
        assert "standing" in headers
        assert headers[-1] == "scored_at"

    def test_values_rounded_for_display(self, tmp_path, gpa_result):
        """GPA values are written with two decimals."""
        output_file = tmp_path / "gpa.csv"
        export_gpa_to_csv([gpa_result], str(output_file))

        row = _read(output_file)[0]
        assert row["label"] == "fall"
        assert row["scale"] == "Standard 4.0"
        assert row["gpa"] == "3.70"
        assert row["total_credits"] == "11.0"
        assert row["cumulative_gpa"] == "3.53"
        assert row["cumulative_credits"] == "71.0"

    def test_bands_in_columns(self, tmp_path, gpa_result):
        """Standing and honors have their own columns."""
        output_file = tmp_path / "gpa.csv"
        export_gpa_to_csv([gpa_result], str(output_file))

        row = _read(output_file)[0]
        assert row["standing"] == "Excellent Standing"
        assert row["honors"] == "Cum Laude"

    def test_missing_cumulative_is_blank(self, tmp_path, standard_scale, sample_rows):
        """A report without a prior record leaves the cumulative columns empty."""
        report = gpa_report(recompute_gpa(GpaInputs(scale=standard_scale, rows=sample_rows)), standard_scale, sample_rows)
        output_file = tmp_path / "gpa.csv"
        export_gpa_to_csv([report], str(output_file))

        row = _read(output_file)[0]
        assert row["cumulative_gpa"] == ""
        assert row["standing"] == ""

    def test_empty_results_no_file(self, tmp_path):
        """Empty results list doesn't create file."""
        output_file = tmp_path / "gpa.csv"
        export_gpa_to_csv([], str(output_file))
        assert not output_file.exists()


class TestExportExamsToCsv:
    """Tests for export_exams_to_csv function."""

    def test_exam_row(self, tmp_path, gre_result):
        """Sections, composite and bands are flattened into one row."""
        output_file = tmp_path / "gre.csv"
        export_exams_to_csv([gre_result], str(output_file))

        row = _read(output_file)[0]
        assert row["label"] == "alice"
        assert row["exam"] == "gre"
        assert row["difficulty"] == ""
        assert row["sections"] == "verbal=160; quant=162"
        assert row["composite"] == "322"

    def test_section_percentiles(self, tmp_path, gre_result):
        """Per-section percentiles are listed by section key."""
        output_file = tmp_path / "gre.csv"
        export_exams_to_csv([gre_result], str(output_file))

        row = _read(output_file)[0]
        assert row["section_percentiles"].startswith("verbal=")
        assert "quant=" in row["section_percentiles"]

    def test_multiple_results(self, tmp_path, gre_result):
        """Multiple results create multiple rows."""
        raw = {"raw": "87"}
        lsat = exam_report(recompute_exam(ExamInputs(definition=LSAT, raw=raw)), LSAT, raw, label="bob")
        output_file = tmp_path / "mixed.csv"

        export_exams_to_csv([gre_result, lsat], str(output_file))

        rows = _read(output_file)
        assert len(rows) == 2
        assert rows[1]["label"] == "bob"
        assert rows[1]["composite"] == "168"
        assert "Law school tier=" in rows[1]["bands"]

    def test_empty_results_no_file(self, tmp_path):
        """Empty results list doesn't create file."""
        output_file = tmp_path / "exams.csv"
        export_exams_to_csv([], str(output_file))
        assert not output_file.exists()
