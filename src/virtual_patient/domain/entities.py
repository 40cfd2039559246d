"""Core entities for Virtual Patient.

Entities carry identity (conversation and message ids) or are the assembled
output of a workflow (``SessionReport``).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any
from uuid import uuid4

from virtual_patient.domain.enums import Role
from virtual_patient.domain.value_objects import (
    ConversationTurn,
    DiagnosisFeedback,
    PatientProfile,
)


def _now() -> datetime:
    return datetime.now(UTC)


def _new_id() -> str:
    return uuid4().hex


@dataclass(slots=True)
class MessageRecord:
    """A persisted conversation message."""

    conversation_id: str
    role: Role
    content: str
    id: str = field(default_factory=_new_id)
    created_at: datetime = field(default_factory=_now)

    def to_turn(self) -> ConversationTurn:
        """View this record as a transcript turn."""
        return ConversationTurn(role=self.role, content=self.content, timestamp=self.created_at)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "conversationId": self.conversation_id,
            "role": self.role.value,
            "content": self.content,
            "createdAt": self.created_at.isoformat(),
        }


@dataclass(slots=True)
class ConversationRecord:
    """A persisted conversation.

    The profile starts empty when no caller-supplied profile exists and is
    filled exactly once, after the first patient turn generates it.
    """

    title: str
    profile: PatientProfile = field(default_factory=PatientProfile)
    id: str = field(default_factory=_new_id)
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "patientInfo": self.profile.to_dict(),
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
        }


@dataclass(frozen=True, slots=True)
class LoadedConversation:
    """A conversation together with its ordered transcript."""

    record: ConversationRecord
    transcript: tuple[ConversationTurn, ...]

    @property
    def profile(self) -> PatientProfile:
        return self.record.profile

    @property
    def started_at(self) -> datetime:
        return self.record.created_at


@dataclass(frozen=True, slots=True)
class SessionReport:
    """Clinical report for one consultation session.

    Derived on request and never persisted.
    """

    patient_info: PatientProfile
    session_duration: str
    summary_of_discussion: str
    emotions_detected: tuple[str, ...]
    ai_analysis: str
    doctor_diagnosis: str
    diagnosis_feedback: DiagnosisFeedback
    suggested_questions: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the camelCase wire shape."""
        return {
            "patientInfo": self.patient_info.to_dict(),
            "sessionDuration": self.session_duration,
            "summaryOfDiscussion": self.summary_of_discussion,
            "emotionsDetected": list(self.emotions_detected),
            "aiAnalysis": self.ai_analysis,
            "doctorDiagnosis": self.doctor_diagnosis,
            "diagnosisFeedback": self.diagnosis_feedback.to_dict(),
            "suggestedQuestions": list(self.suggested_questions),
        }
