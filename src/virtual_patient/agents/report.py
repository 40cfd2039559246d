"""Session report agent.

Analyzes a finished (or ongoing) consultation and returns a structured
clinical report with feedback on the doctor's diagnosis.
"""

from __future__ import annotations

import math
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from virtual_patient.agents.extractors import OPERATION, extract_report
from virtual_patient.agents.prompts.report import compose_report_system_prompt
from virtual_patient.config import get_model_name
from virtual_patient.domain.entities import SessionReport
from virtual_patient.domain.enums import DiagnosisStatus, Role
from virtual_patient.domain.exceptions import LLMError, UpstreamGenerationError
from virtual_patient.domain.value_objects import DiagnosisFeedback
from virtual_patient.infrastructure.llm.protocols import ChatMessage, ChatRequest
from virtual_patient.infrastructure.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Sequence

    from virtual_patient.config import ModelSettings
    from virtual_patient.domain.value_objects import ConversationTurn, PatientProfile
    from virtual_patient.infrastructure.llm.protocols import ChatClient

logger = get_logger(__name__)


def format_session_duration(total_minutes: int) -> str:
    """Format whole minutes as ``H hour(s) and M minute(s)``.

    Hours are omitted when zero, and minutes are omitted when the hours are
    nonzero and the minutes are zero.

    Example:
        >>> format_session_duration(125)
        '2 hours and 5 minutes'
    """
    total_minutes = max(total_minutes, 0)
    hours, minutes = divmod(total_minutes, 60)

    parts: list[str] = []
    if hours > 0:
        parts.append(f"{hours} hour{'s' if hours > 1 else ''}")
    if minutes > 0 or hours == 0:
        parts.append(f"{minutes} minute{'s' if minutes != 1 else ''}")
    return " and ".join(parts)


def elapsed_minutes(started_at: datetime, now: datetime) -> int:
    """Wall-clock minutes between two instants, rounded half up, never negative."""
    seconds = (now - started_at).total_seconds()
    return max(math.floor(seconds / 60 + 0.5), 0)


class ReportAgent:
    """Agent that synthesizes session reports.

    Never persists; the assembled report is returned to the caller.
    """

    def __init__(
        self,
        llm_client: ChatClient,
        model_settings: ModelSettings | None = None,
        timeout_seconds: int = 300,
    ) -> None:
        """Initialize report agent.

        Args:
            llm_client: Completion service client.
            model_settings: Model configuration. If None, uses defaults.
            timeout_seconds: Per-request timeout.
        """
        self._llm_client = llm_client
        self._model_settings = model_settings
        self._timeout_seconds = timeout_seconds

    async def synthesize(
        self,
        transcript: Sequence[ConversationTurn],
        profile: PatientProfile,
        started_at: datetime,
        now: datetime | None = None,
    ) -> SessionReport:
        """Generate a report for a conversation.

        Args:
            transcript: Ordered conversation turns.
            profile: The simulated patient's profile.
            started_at: When the conversation was created.
            now: Report request time. Defaults to the current UTC time.

        Returns:
            The assembled session report.

        Raises:
            UpstreamGenerationError: If the completion call fails or is empty.
            MalformedReportError: If the output is not a valid report.
        """
        now = now or datetime.now(UTC)
        session_duration = format_session_duration(elapsed_minutes(started_at, now))

        history = [
            ChatMessage(role=turn.role.value, content=turn.content)
            for turn in transcript
            if turn.role != Role.SYSTEM and turn.content.strip()
        ]
        settings = self._model_settings
        request = ChatRequest(
            messages=[
                ChatMessage(role=Role.SYSTEM.value, content=compose_report_system_prompt(profile)),
                *history,
            ],
            model=get_model_name(settings, "report"),
            temperature=settings.report_temperature if settings else 0.7,
            max_tokens=settings.report_max_tokens if settings else None,
            json_mode=True,
            timeout_seconds=self._timeout_seconds,
        )

        logger.info(
            "Starting report synthesis",
            turn_count=len(history),
            session_duration=session_duration,
        )

        try:
            response = await self._llm_client.chat(request)
        except LLMError as e:
            logger.error("Report generation failed", error=str(e), error_type=type(e).__name__)
            raise UpstreamGenerationError(OPERATION, f"Completion call failed: {e}", e) from e

        if not response.content.strip():
            logger.error("Report generation returned empty content", model=response.model)
            raise UpstreamGenerationError(OPERATION, "Completion returned empty content")

        output = extract_report(response.content)

        report = SessionReport(
            patient_info=profile,
            session_duration=session_duration,
            summary_of_discussion=output.summary_of_discussion,
            emotions_detected=tuple(output.emotions_detected),
            ai_analysis=output.ai_analysis,
            doctor_diagnosis=output.doctor_diagnosis,
            diagnosis_feedback=DiagnosisFeedback(
                status=DiagnosisStatus(output.diagnosis_feedback.status),
                explanation=output.diagnosis_feedback.explanation,
            ),
            suggested_questions=tuple(output.suggested_questions),
        )

        logger.info(
            "Report synthesis complete",
            diagnosis_status=report.diagnosis_feedback.status.value,
            emotion_count=len(report.emotions_detected),
        )
        return report
