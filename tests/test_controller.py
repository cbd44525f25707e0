"""Tests for the reactive recomputation controller."""

import pytest

from score_calculators.scoring import (
    CourseRow,
    ErrorKind,
    ExamInputs,
    ExamSession,
    GpaInputs,
    GpaSession,
    RaiseInputs,
    SemesterInputs,
    SemesterRow,
    recompute_exam,
    recompute_gpa,
    recompute_raise,
    recompute_semesters,
)
from score_calculators.tables.exams import GMAT, GRE, SAT_DIGITAL, UCAT
from score_calculators.tables.grading import GPA_CLASSIFICATIONS, GRADE_NEEDED, WEIGHTED_HONORS_AP


class TestRecomputeGpa:
    """Tests for recompute_gpa function."""

    def test_term_gpa(self, standard_scale, sample_rows):
        """Valid rows produce a term GPA and no errors."""
        state = recompute_gpa(GpaInputs(scale=standard_scale, rows=sample_rows))
        assert state.gpa == pytest.approx(3.7)
        assert state.cumulative is None
        assert state.is_valid

    def test_cumulative_gpa(self, standard_scale):
        """Prior GPA and credits are folded into a cumulative value."""
        rows = (CourseRow("A", "3"), CourseRow("B", "3"))
        state = recompute_gpa(GpaInputs(scale=standard_scale, rows=rows, prior_gpa="3.0", prior_credits="30"))
        assert state.gpa == pytest.approx(3.5)
        assert state.cumulative_gpa == pytest.approx(111 / 36)
        assert state.cumulative.total_weight == 36

    def test_half_filled_prior_is_ignored(self, standard_scale, sample_rows):
        """A prior GPA without credits neither merges nor flags an error."""
        state = recompute_gpa(GpaInputs(scale=standard_scale, rows=sample_rows, prior_gpa="3.5"))
        assert state.cumulative is None
        assert state.is_valid

    def test_invalid_prior_flags_field(self, standard_scale, sample_rows):
        """A malformed prior field is flagged and blocks the cumulative value."""
        state = recompute_gpa(
            GpaInputs(scale=standard_scale, rows=sample_rows, prior_gpa="3.5", prior_credits="ten")
        )
        assert state.cumulative is None
        assert set(state.field_errors) == {"prior_credits"}
        assert state.gpa == pytest.approx(3.7)

    def test_prior_above_scale(self, standard_scale):
        """Prior GPA is bounded by the active scale."""
        state = recompute_gpa(GpaInputs(scale=standard_scale, prior_gpa="4.5", prior_credits="30"))
        assert state.field_errors["prior_gpa"].kind == ErrorKind.OUT_OF_DOMAIN

    def test_invalid_row_clears_outputs(self, standard_scale, sample_rows):
        """Any faulty row leaves no GPA, only error flags."""
        rows = sample_rows + (CourseRow("B", "abc"),)
        state = recompute_gpa(GpaInputs(scale=standard_scale, rows=rows, prior_gpa="3.0", prior_credits="30"))
        assert state.gpa is None
        assert state.cumulative is None
        assert state.row_errors[3]["credits"].kind == ErrorKind.INVALID_FORMAT

    def test_bands(self, standard_scale):
        """Standing and honors are classified from the GPA."""
        rows = (CourseRow("A", "3"), CourseRow("A-", "3"))
        state = recompute_gpa(GpaInputs(scale=standard_scale, rows=rows, classifications=GPA_CLASSIFICATIONS))
        assert dict(state.bands) == {"Academic standing": "Excellent Standing", "Latin honors": "Magna Cum Laude"}

    def test_no_bands_without_gpa(self, standard_scale):
        """Nothing is classified when there is no GPA."""
        state = recompute_gpa(GpaInputs(scale=standard_scale, classifications=GPA_CLASSIFICATIONS))
        assert dict(state.bands) == {}


class TestGpaSession:
    """Tests for GpaSession class."""

    def test_recomputes_on_every_edit(self, standard_scale):
        """Each mutation refreshes the state."""
        session = GpaSession(standard_scale)
        assert session.state.gpa is None

        session.add_course("A", "3")
        assert session.state.gpa == pytest.approx(4.0)

        session.add_course("C", "3")
        assert session.state.gpa == pytest.approx(3.0)

        session.set_course(1, grade="B")
        assert session.state.gpa == pytest.approx(3.5)

        session.remove_course(0)
        assert session.state.gpa == pytest.approx(3.0)

    def test_no_last_good_value(self, standard_scale):
        """An invalid edit clears the GPA instead of keeping the old one."""
        session = GpaSession(standard_scale, rows=(CourseRow("A", "3"),))
        assert session.state.gpa == pytest.approx(4.0)

        session.set_course(0, credits="3.25")
        assert session.state.gpa is None
        assert 0 in session.state.row_errors

        session.set_course(0, credits="3")
        assert session.state.gpa == pytest.approx(4.0)

    def test_set_scale_revalidates(self, standard_scale):
        """Switching scales re-reads every grade and level with the new points."""
        session = GpaSession(standard_scale, rows=(CourseRow("A", "3", "ap"), CourseRow("B", "3")))
        assert session.state.gpa is None
        session.set_scale(WEIGHTED_HONORS_AP)
        assert session.state.gpa == pytest.approx(4.0)

    def test_level_edit(self, weighted_scale):
        """Changing a course level reweights that course only."""
        session = GpaSession(weighted_scale, rows=(CourseRow("A", "3"), CourseRow("B", "3")))
        assert session.state.gpa == pytest.approx(3.5)
        session.set_course(1, level="honors")
        assert session.state.gpa == pytest.approx(3.75)
        session.set_course(1, level="college")
        assert set(session.state.row_errors[1]) == {"level"}

    def test_set_scale_can_invalidate(self, cornell_scale, standard_scale):
        """A grade missing from the new scale becomes an error."""
        session = GpaSession(cornell_scale, rows=(CourseRow("S", "3"), CourseRow("A", "3")))
        assert session.state.gpa == pytest.approx(4.0)
        session.set_scale(standard_scale)
        assert session.state.gpa is None

    def test_set_prior_and_reset(self, standard_scale):
        """Prior fields merge in, and reset clears everything."""
        session = GpaSession(standard_scale, rows=(CourseRow("A", "3"),))
        session.set_prior("3.0", "3")
        assert session.state.cumulative_gpa == pytest.approx(3.5)

        session.reset()
        assert session.inputs.rows == ()
        assert session.state.gpa is None


class TestRecomputeRaise:
    """Tests for recompute_raise function."""

    def test_scenarios(self, standard_scale):
        """All four fields produce four scenarios."""
        state = recompute_raise(RaiseInputs(
            scale=standard_scale,
            grade_bands=GRADE_NEEDED,
            current_gpa="3.0",
            current_credits="60",
            target_gpa="3.3",
            planned_credits="15",
        ))
        assert state.is_valid
        assert len(state.scenarios) == 4
        assert state.scenarios[1].required_average == pytest.approx(3.9)

    def test_incomplete_has_no_scenarios(self, standard_scale):
        """Missing fields leave no scenarios and no errors."""
        state = recompute_raise(RaiseInputs(scale=standard_scale, grade_bands=GRADE_NEEDED, current_gpa="3.0"))
        assert state.scenarios == ()
        assert state.is_valid

    def test_invalid_fields_flagged(self, standard_scale):
        """Each faulty field is reported."""
        state = recompute_raise(RaiseInputs(
            scale=standard_scale,
            grade_bands=GRADE_NEEDED,
            current_gpa="5",
            current_credits="60",
            target_gpa="0",
            planned_credits="x",
        ))
        assert set(state.field_errors) == {"current_gpa", "target_gpa", "planned_credits"}
        assert state.scenarios == ()


class TestRecomputeSemesters:
    """Tests for recompute_semesters function."""

    def test_credit_weighted_cumulative(self, standard_scale):
        """3.5 over 60 credits and 3.0 over 15 credits give 3.4."""
        semesters = (SemesterRow("3.5", "60"), SemesterRow("3.0", "15"))
        state = recompute_semesters(SemesterInputs(scale=standard_scale, semesters=semesters))
        assert state.cumulative_gpa == pytest.approx(3.4)
        assert state.cumulative.total_weight == 75
        assert state.is_valid

    def test_half_filled_rows_skipped(self, standard_scale):
        """A semester missing either half is left out without an error."""
        semesters = (SemesterRow("4.0", "15"), SemesterRow("2.0", ""), SemesterRow("", "30"))
        state = recompute_semesters(SemesterInputs(scale=standard_scale, semesters=semesters))
        assert state.cumulative_gpa == pytest.approx(4.0)
        assert state.is_valid

    def test_invalid_row_blocks_cumulative(self, standard_scale):
        """A GPA above the scale is flagged on its row."""
        semesters = (SemesterRow("3.5", "60"), SemesterRow("5", "15"))
        state = recompute_semesters(SemesterInputs(scale=standard_scale, semesters=semesters))
        assert state.cumulative is None
        assert state.row_errors[1]["gpa"].kind == ErrorKind.OUT_OF_DOMAIN

    def test_fractional_credits_rejected(self, standard_scale):
        """Semester credits are whole numbers."""
        state = recompute_semesters(SemesterInputs(scale=standard_scale, semesters=(SemesterRow("3.0", "15.5"),)))
        assert state.row_errors[0]["credits"].kind == ErrorKind.INVALID_FORMAT

    def test_bands(self, standard_scale):
        """The cumulative GPA is classified."""
        state = recompute_semesters(SemesterInputs(
            scale=standard_scale,
            semesters=(SemesterRow("4.0", "30"), SemesterRow("3.9", "30")),
            classifications=GPA_CLASSIFICATIONS,
        ))
        assert state.bands["Latin honors"] == "Summa Cum Laude"

    def test_no_semesters(self, standard_scale):
        """Nothing entered leaves no cumulative value."""
        state = recompute_semesters(SemesterInputs(scale=standard_scale))
        assert state.cumulative is None
        assert dict(state.bands) == {}


class TestRecomputeExam:
    """Tests for recompute_exam function."""

    def test_complete_inputs(self):
        """All sections valid gives a score."""
        state = recompute_exam(ExamInputs(definition=GRE, raw={"verbal": "19", "quant": "22"}))
        assert state.score.composite == 322
        assert state.is_valid

    def test_incomplete_inputs(self):
        """A missing section leaves no score and no error."""
        state = recompute_exam(ExamInputs(definition=GRE, raw={"verbal": "19"}))
        assert state.score is None
        assert state.is_valid

    def test_out_of_domain_section(self):
        """Raw above the section maximum is flagged."""
        state = recompute_exam(ExamInputs(definition=GRE, raw={"verbal": "28", "quant": "22"}))
        assert state.score is None
        assert state.field_errors["verbal"].kind == ErrorKind.OUT_OF_DOMAIN

    def test_gmat_minimum(self):
        """GMAT sections below 60 are rejected."""
        state = recompute_exam(ExamInputs(definition=GMAT, raw={"quant": "59", "verbal": "80", "data_insights": "80"}))
        assert "quant" in state.field_errors

    def test_unknown_difficulty(self):
        """Difficulty must be one the exam offers."""
        state = recompute_exam(ExamInputs(
            definition=SAT_DIGITAL, raw={"reading_writing": "30", "math": "30"}, difficulty="extreme"
        ))
        assert state.field_errors["difficulty"].kind == ErrorKind.INVALID_CATEGORY

    def test_adjustment_out_of_range(self):
        """UCAT adjustment is limited to -10..10 percent."""
        raw = {"verbal": "30", "decision": "20", "quantitative": "25", "abstract": "40"}
        state = recompute_exam(ExamInputs(definition=UCAT, raw=raw, adjustment="15"))
        assert state.field_errors["adjustment"].kind == ErrorKind.OUT_OF_DOMAIN

    def test_adjustment_not_supported(self):
        """Exams without an adjustment reject one."""
        state = recompute_exam(ExamInputs(definition=GRE, raw={"verbal": "19", "quant": "22"}, adjustment="5"))
        assert "adjustment" in state.field_errors
        assert state.score is None

    def test_adjustment_applied(self):
        """A valid adjustment changes the scaled scores."""
        raw = {"verbal": "30", "decision": "20", "quantitative": "25", "abstract": "40"}
        base = recompute_exam(ExamInputs(definition=UCAT, raw=raw)).score
        harder = recompute_exam(ExamInputs(definition=UCAT, raw=raw, adjustment="10")).score
        assert harder.composite > base.composite
        assert harder.adjustment_pct == 10


class TestExamSession:
    """Tests for ExamSession class."""

    def test_score_appears_when_complete(self):
        """The score appears once every section is entered."""
        session = ExamSession(GRE)
        session.set_section("verbal", "19")
        assert session.state.score is None
        session.set_section("quant", "22")
        assert session.state.score.composite == 322

    def test_invalid_edit_clears_score(self):
        """No last-good-value memory."""
        session = ExamSession(GRE)
        session.set_section("verbal", "19")
        session.set_section("quant", "22")
        session.set_section("quant", "twenty")
        assert session.state.score is None
        assert session.state.field_errors["quant"].kind == ErrorKind.INVALID_FORMAT

    def test_unknown_section(self):
        """Setting a section the exam lacks is a caller error."""
        with pytest.raises(KeyError):
            ExamSession(GRE).set_section("math", "10")

    def test_set_difficulty(self):
        """Changing the curve rescores the same raw entries."""
        session = ExamSession(SAT_DIGITAL)
        session.set_section("reading_writing", "54")
        session.set_section("math", "44")
        assert session.state.score.composite == 1600
        session.set_difficulty("easy")
        assert session.state.score.composite == 1500

    def test_set_exam_drops_entries(self):
        """Switching exams starts from empty entries."""
        session = ExamSession(GRE)
        session.set_section("verbal", "19")
        session.set_exam(GMAT)
        assert dict(session.inputs.raw) == {}
        assert session.state.score is None

    def test_set_adjustment_and_reset(self):
        """Adjustment edits recompute; reset clears all entries."""
        session = ExamSession(UCAT)
        for key, raw in {"verbal": "30", "decision": "20", "quantitative": "25", "abstract": "40"}.items():
            session.set_section(key, raw)
        base = session.state.score.composite
        session.set_adjustment("-10")
        assert session.state.score.composite < base
        session.reset()
        assert session.state.score is None
