"""Plain-text rendering of session reports for copy and download."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from virtual_patient.domain.enums import DiagnosisStatus
from virtual_patient.domain.exceptions import MalformedReportError

if TYPE_CHECKING:
    from datetime import date

    from virtual_patient.domain.entities import SessionReport

NOT_SPECIFIED = "Not specified"

_PATIENT_RE = re.compile(
    rf"^Patient: (?P<name>.*), (?P<age>\d+|{NOT_SPECIFIED}) years old, (?P<gender>.*)$", re.M
)
_CONDITION_RE = re.compile(r"^Condition: (?P<value>.*)$", re.M)
_DURATION_RE = re.compile(r"^Session Duration: (?P<value>.*)$", re.M)
_STATUS_RE = re.compile(r"^Status: (?P<value>.*)$", re.M)
_FILENAME_UNSAFE_RE = re.compile(r"[^\w.-]+")


def _section(title: str, body: str) -> str:
    return f"{title}\n{'-' * len(title)}\n{body}\n"


def render_report_text(report: SessionReport) -> str:
    """Render a report in the plain-text layout used for copy and download."""
    profile = report.patient_info
    age = profile.age if profile.age is not None else NOT_SPECIFIED

    header = (
        "SESSION REPORT\n"
        "==============\n"
        "\n"
        f"Patient: {profile.name or NOT_SPECIFIED}, {age} years old, "
        f"{profile.gender or NOT_SPECIFIED}\n"
        f"Condition: {profile.condition or NOT_SPECIFIED}\n"
        f"Session Duration: {report.session_duration}\n"
    )
    sections = [
        _section("SUMMARY OF DISCUSSION", report.summary_of_discussion),
        _section("EMOTIONS DETECTED", ", ".join(report.emotions_detected)),
        _section("AI ANALYSIS OF PATIENT CONDITION", report.ai_analysis),
        _section("DOCTOR'S DIAGNOSIS", report.doctor_diagnosis),
        _section(
            "AI FEEDBACK ON DIAGNOSIS",
            f"Status: {report.diagnosis_feedback.status.value}\n"
            f"{report.diagnosis_feedback.explanation}",
        ),
    ]
    if report.suggested_questions:
        numbered = "\n".join(f"{i}. {q}" for i, q in enumerate(report.suggested_questions, 1))
        sections.append(_section("SUGGESTED QUESTIONS FOR FUTURE SESSIONS", numbered))

    return "\n".join([header, *sections])


@dataclass(frozen=True, slots=True)
class ParsedReportText:
    """Fields recovered from a rendered report."""

    patient_name: str | None
    patient_age: int | None
    gender: str | None
    condition: str | None
    session_duration: str
    status: DiagnosisStatus


def parse_report_text(text: str) -> ParsedReportText:
    """Recover the header fields and diagnosis status from rendered text.

    Raises:
        MalformedReportError: If a required line is missing or the status is
            not one of the three permitted values.
    """
    patient = _PATIENT_RE.search(text)
    duration = _DURATION_RE.search(text)
    status = _STATUS_RE.search(text)
    if patient is None or duration is None or status is None:
        raise MalformedReportError("parse_report_text", "Report text is missing required lines")

    try:
        diagnosis_status = DiagnosisStatus.parse(status.group("value").strip())
    except ValueError as e:
        raise MalformedReportError("parse_report_text", str(e), e) from e

    condition = _CONDITION_RE.search(text)
    age = patient.group("age")
    return ParsedReportText(
        patient_name=_specified(patient.group("name")),
        patient_age=int(age) if age.isdigit() else None,
        gender=_specified(patient.group("gender")),
        condition=_specified(condition.group("value")) if condition else None,
        session_duration=duration.group("value").strip(),
        status=diagnosis_status,
    )


def _specified(value: str) -> str | None:
    value = value.strip()
    return None if not value or value == NOT_SPECIFIED else value


def report_filename(report: SessionReport, today: date) -> str:
    """Download name: ``session_report_<name>_<YYYY-MM-DD>.txt``."""
    name = (report.patient_info.name or "").strip()
    name = _FILENAME_UNSAFE_RE.sub("_", name) or "patient"
    return f"session_report_{name}_{today.isoformat()}.txt"
