"""Agents that call the completion service.

- PatientAgent: role-plays the psychological patient turn by turn
- ReportAgent: synthesizes the session report and diagnosis feedback
"""

from virtual_patient.agents.patient import PatientAgent, PatientTurn
from virtual_patient.agents.report import ReportAgent, format_session_duration

__all__ = [
    "PatientAgent",
    "PatientTurn",
    "ReportAgent",
    "format_session_duration",
]
