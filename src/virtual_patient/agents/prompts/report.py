"""Prompt templates for session report synthesis."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from virtual_patient.domain.enums import DiagnosisStatus

if TYPE_CHECKING:
    from virtual_patient.domain.value_objects import PatientProfile

NO_DIAGNOSIS_STATED = "No clear diagnosis was stated by the doctor."

_STATUS_LITERALS = " | ".join(f'"{status.value}"' for status in DiagnosisStatus)

REPORT_SYSTEM_PROMPT = """\
You are an expert psychological assessment AI that analyzes conversations between \
doctors and patients. Your task is to generate a comprehensive session report based on \
the conversation transcript. In the transcript, the "user" is the doctor and the \
"assistant" is the patient.

The report should include:
1. A summary of the key points discussed in the conversation
2. Emotions detected in the patient's responses (short labels)
3. Your analysis of the patient's condition based on their responses
4. Identification of the doctor's diagnosis or assessment (if any)
5. Your professional feedback on whether the doctor's diagnosis seems accurate, \
partially accurate, or not consistent with the patient's symptoms
6. Optional suggested questions for future sessions

Important guidelines:
- Be objective and clinical in your analysis
- Focus on the content of the conversation, not the format
- Identify emotional patterns and significant disclosures
- Evaluate the doctor's approach and diagnosis accuracy
- Provide constructive feedback that would help the doctor improve
- Be specific about why a diagnosis is accurate or not
- If no clear diagnosis was made by the doctor, note this fact in the "doctorDiagnosis" field."""

_OUTPUT_CONTRACT = f"""\
Respond with a single JSON object and nothing else (no prose, no markdown), with \
exactly this structure:
{{
  "summaryOfDiscussion": "string",
  "emotionsDetected": ["string", "string"],
  "aiAnalysis": "string",
  "doctorDiagnosis": "string",
  "diagnosisFeedback": {{
    "status": {_STATUS_LITERALS},
    "explanation": "string"
  }},
  "suggestedQuestions": ["string", "string"]
}}

"diagnosisFeedback.status" MUST be exactly one of: {_STATUS_LITERALS}. No other value \
is accepted."""


def compose_report_system_prompt(profile: PatientProfile) -> str:
    """Build the system instruction for report synthesis.

    Args:
        profile: Profile of the simulated patient, embedded as JSON so the
            model can compare the doctor's diagnosis with the ground truth.

    Returns:
        Complete system prompt.
    """
    profile_json = json.dumps(_profile_for_report(profile), indent=2, ensure_ascii=False)
    return (
        f"{REPORT_SYSTEM_PROMPT}\n\n"
        f"The patient has the following profile:\n{profile_json}\n\n"
        f"{_OUTPUT_CONTRACT}"
    )


def _profile_for_report(profile: PatientProfile) -> dict[str, object]:
    """Fully shaped profile mapping with explicit placeholders for unset fields."""
    data: dict[str, object] = {
        "name": profile.name or "Not specified",
        "age": profile.age if profile.age is not None else "Not specified",
        "gender": profile.gender or "Not specified",
        "occupation": profile.occupation or "Not specified",
        "maritalStatus": profile.marital_status or "Not specified",
        "chiefComplaint": profile.chief_complaint or "Not specified",
        "condition": profile.condition or "Not specified",
        "symptoms": list(profile.symptoms) or "Not specified",
        "duration": profile.duration or "Not specified",
        "lifeStressors": list(profile.life_stressors) or "None mentioned",
        "previousTreatment": list(profile.previous_treatment) or "None",
        "familyHistory": list(profile.family_history) or "None mentioned",
        "personalityTraits": list(profile.personality_traits) or "Not specified",
        "copingMechanisms": list(profile.coping_mechanisms) or "Not specified",
    }
    return data
