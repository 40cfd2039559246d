"""Tests for plain-text report rendering and parsing."""

from __future__ import annotations

from datetime import date

import pytest

from virtual_patient.domain.entities import SessionReport
from virtual_patient.domain.enums import DiagnosisStatus
from virtual_patient.domain.exceptions import MalformedReportError
from virtual_patient.domain.value_objects import DiagnosisFeedback, PatientProfile
from virtual_patient.services.report_text import (
    parse_report_text,
    render_report_text,
    report_filename,
)

pytestmark = pytest.mark.unit


def _report(
    *,
    profile: PatientProfile | None = None,
    status: DiagnosisStatus = DiagnosisStatus.PARTIALLY_ACCURATE,
    questions: tuple[str, ...] = ("How long have the nightmares lasted?", "Do you feel safe?"),
) -> SessionReport:
    return SessionReport(
        patient_info=profile
        or PatientProfile(
            name="Linda", age=47, gender="female", condition="Post-Traumatic Stress Disorder"
        ),
        session_duration="1 hour and 12 minutes",
        summary_of_discussion="Discussed recurring nightmares.",
        emotions_detected=("fear", "guilt"),
        ai_analysis="Consistent with PTSD.",
        doctor_diagnosis="Generalized anxiety",
        diagnosis_feedback=DiagnosisFeedback(status=status, explanation="Misses trauma focus."),
        suggested_questions=questions,
    )


class TestRenderReportText:
    """Tests for render_report_text."""

    def test_header(self) -> None:
        text = render_report_text(_report())

        assert text.startswith("SESSION REPORT\n==============\n")
        assert "Patient: Linda, 47 years old, female" in text
        assert "Condition: Post-Traumatic Stress Disorder" in text
        assert "Session Duration: 1 hour and 12 minutes" in text

    def test_sections(self) -> None:
        text = render_report_text(_report())

        summary = "SUMMARY OF DISCUSSION\n---------------------\nDiscussed recurring nightmares."
        assert summary in text
        assert "EMOTIONS DETECTED\n-----------------\nfear, guilt" in text
        assert "DOCTOR'S DIAGNOSIS" in text
        assert "Status: partially accurate\nMisses trauma focus." in text

    def test_numbered_questions(self) -> None:
        text = render_report_text(_report())

        assert "SUGGESTED QUESTIONS FOR FUTURE SESSIONS" in text
        assert "1. How long have the nightmares lasted?\n2. Do you feel safe?" in text

    def test_no_questions_section_when_empty(self) -> None:
        text = render_report_text(_report(questions=()))
        assert "SUGGESTED QUESTIONS" not in text

    def test_missing_profile_fields_use_placeholder(self) -> None:
        text = render_report_text(_report(profile=PatientProfile()))
        assert "Patient: Not specified, Not specified years old, Not specified" in text


class TestParseReportText:
    """Tests for parse_report_text."""

    @pytest.mark.parametrize("status", list(DiagnosisStatus))
    def test_recovers_rendered_fields(self, status: DiagnosisStatus) -> None:
        parsed = parse_report_text(render_report_text(_report(status=status)))

        assert parsed.patient_name == "Linda"
        assert parsed.patient_age == 47
        assert parsed.gender == "female"
        assert parsed.condition == "Post-Traumatic Stress Disorder"
        assert parsed.session_duration == "1 hour and 12 minutes"
        assert parsed.status is status

    def test_placeholders_parse_as_none(self) -> None:
        parsed = parse_report_text(render_report_text(_report(profile=PatientProfile())))

        assert parsed.patient_name is None
        assert parsed.patient_age is None
        assert parsed.condition is None

    def test_unknown_status_raises(self) -> None:
        text = render_report_text(_report()).replace(
            "Status: partially accurate", "Status: somewhat accurate"
        )
        with pytest.raises(MalformedReportError, match="Invalid diagnosis status"):
            parse_report_text(text)

    def test_missing_lines_raise(self) -> None:
        with pytest.raises(MalformedReportError, match="missing required lines"):
            parse_report_text("SESSION REPORT\n==============\n")


class TestReportFilename:
    """Tests for report_filename."""

    def test_format(self) -> None:
        assert (
            report_filename(_report(), date(2024, 6, 3))
            == "session_report_Linda_2024-06-03.txt"
        )

    def test_unsafe_characters_replaced(self) -> None:
        report = _report(profile=PatientProfile(name="Mary Ann/../x"))
        expected = "session_report_Mary_Ann_.._x_2024-06-03.txt"
        assert report_filename(report, date(2024, 6, 3)) == expected

    def test_missing_name(self) -> None:
        report = _report(profile=PatientProfile())
        assert report_filename(report, date(2024, 6, 3)) == "session_report_patient_2024-06-03.txt"
