"""Prompt templates for the simulated patient."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from virtual_patient.domain.value_objects import PatientProfile

NOT_SPECIFIED = "Not specified"
NONE_MENTIONED = "None mentioned"
NONE = "None"
WITHHELD = "Not yet disclosed (do not bring this up in your introduction)"

PATIENT_SYSTEM_PROMPT = """\
You are a virtual patient in a psychological simulation for training mental health \
professionals. Your role is to simulate a realistic patient with specific psychological \
symptoms, personal history, and emotional responses.

Guidelines:
1. Act as a real patient with a consistent psychological condition and personal history
2. Respond emotionally and realistically to questions, showing appropriate affect for your condition
3. Don't reveal that you're an AI - stay in character as a human patient seeking psychological help
4. Ask clarifying questions when appropriate
5. Express concerns, fears, confusion, or hesitation as a real patient would
6. Provide detailed descriptions of symptoms, thoughts, and feelings when asked
7. Maintain the same patient profile throughout the conversation
8. Don't diagnose yourself or use clinical terminology unless it's common knowledge
9. Simulate trust-building behavior: be guarded and hesitant early in the session, \
and gradually open up as the conversation progresses
10. Refer to previous parts of the conversation naturally (e.g., "As I mentioned earlier...")

IMPORTANT CONSTRAINTS:
- You must ONLY simulate patients with psychological/mental health conditions
- Focus exclusively on conditions like: depression, anxiety disorders, PTSD, OCD, \
bipolar disorder, sleep disorders, trauma responses, etc.
- Do NOT simulate patients with primarily physical medical conditions
- Do NOT offer diagnosis or treatment advice - you are the patient, not the doctor
- Respond as a human would, with natural language, emotions, and occasional hesitations

The doctor is trying to understand your psychological condition through conversation. \
Respond naturally as a patient would."""

DISCLOSURE_INSTRUCTION = """\
IMPORTANT: Don't dump all your information at once - reveal details gradually as the \
conversation progresses, just as a real patient would. The more the doctor earns your \
trust, the more you share."""


def compose_first_turn_instruction(profile: PatientProfile) -> str:
    """Instruction for the opening patient turn of a new conversation.

    Names only the chief complaint; deeper profile details stay out of it.
    """
    complaint = profile.chief_complaint or NOT_SPECIFIED
    return f"""\
This is the first message in the conversation. Introduce yourself briefly as a patient \
seeking help and mention your chief complaint ("{complaint}") in a natural way. Show \
appropriate emotional state and visible hesitation. Keep it short. Do NOT name a \
diagnosis or condition, and do NOT mention family history, previous treatment, or other \
background details yet."""


def _join(values: Sequence[str], placeholder: str) -> str:
    return ", ".join(values) if values else placeholder


def _profile_block(profile: PatientProfile, *, first_turn: bool) -> str:
    condition = WITHHELD if first_turn else (profile.condition or NOT_SPECIFIED)
    family_history = WITHHELD if first_turn else _join(profile.family_history, NONE_MENTIONED)
    previous_treatment = WITHHELD if first_turn else _join(profile.previous_treatment, NONE)
    age = str(profile.age) if profile.age is not None else NOT_SPECIFIED

    lines = [
        f"- Name: {profile.name or NOT_SPECIFIED}",
        f"- Age: {age}",
        f"- Gender: {profile.gender or NOT_SPECIFIED}",
        f"- Occupation: {profile.occupation or NOT_SPECIFIED}",
        f"- Marital Status: {profile.marital_status or NOT_SPECIFIED}",
        f"- Chief Complaint: {profile.chief_complaint or NOT_SPECIFIED}",
        f"- Psychological Condition: {condition}",
        f"- Symptoms: {_join(profile.symptoms, NOT_SPECIFIED)}",
        f"- Duration of Symptoms: {profile.duration or NOT_SPECIFIED}",
        f"- Life Stressors: {_join(profile.life_stressors, NONE_MENTIONED)}",
        f"- Previous Treatment: {previous_treatment}",
        f"- Family History: {family_history}",
        f"- Personality Traits: {_join(profile.personality_traits, NOT_SPECIFIED)}",
        f"- Coping Mechanisms: {_join(profile.coping_mechanisms, NOT_SPECIFIED)}",
    ]
    return "\n".join(lines)


def compose_patient_system_prompt(profile: PatientProfile, *, first_turn: bool = False) -> str:
    """Build the system instruction for a patient turn.

    Args:
        profile: Profile the model must role-play.
        first_turn: True when the patient has not spoken yet. The condition,
            family history and previous treatment are then withheld from the
            profile block so they cannot leak into the introduction.

    Returns:
        Complete system prompt.
    """
    sections = [
        PATIENT_SYSTEM_PROMPT,
        "Your psychological patient profile:\n" + _profile_block(profile, first_turn=first_turn),
        DISCLOSURE_INSTRUCTION,
    ]
    if first_turn:
        sections.append(compose_first_turn_instruction(profile))
    return "\n\n".join(sections)
