"""Prompt templates for the patient and report agents."""

from virtual_patient.agents.prompts.patient import (
    compose_first_turn_instruction,
    compose_patient_system_prompt,
)
from virtual_patient.agents.prompts.report import compose_report_system_prompt

__all__ = [
    "compose_first_turn_instruction",
    "compose_patient_system_prompt",
    "compose_report_system_prompt",
]
