"""Consultation orchestration service.

Wires the conversation store to the patient and report agents. This is the
only layer that persists anything and the only place a failed patient turn is
replaced by the configured fallback reply.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from virtual_patient.domain.enums import Role
from virtual_patient.domain.exceptions import UpstreamGenerationError, ValidationError
from virtual_patient.infrastructure.logging import get_logger, logging_context

if TYPE_CHECKING:
    from datetime import datetime

    from virtual_patient.agents.patient import PatientAgent
    from virtual_patient.agents.report import ReportAgent
    from virtual_patient.config import SessionSettings
    from virtual_patient.domain.entities import ConversationRecord, MessageRecord, SessionReport
    from virtual_patient.domain.value_objects import PatientProfile
    from virtual_patient.services.conversation_store import ConversationStore, ConversationSummary

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class ChatExchange:
    """One doctor message and the patient's reply."""

    conversation: ConversationRecord
    user_message: MessageRecord
    assistant_message: MessageRecord
    fallback_used: bool = False

    def to_dict(self) -> dict[str, object]:
        return {
            "conversation": self.conversation.to_dict(),
            "messages": [self.user_message.to_dict(), self.assistant_message.to_dict()],
        }


class ConsultationService:
    """Runs consultations against a conversation store."""

    def __init__(
        self,
        store: ConversationStore,
        patient_agent: PatientAgent,
        report_agent: ReportAgent,
        settings: SessionSettings,
    ) -> None:
        """Initialize consultation service.

        Args:
            store: Persistence gateway.
            patient_agent: Produces patient turns.
            report_agent: Produces session reports.
            settings: Session defaults (title, fallback reply).
        """
        self._store = store
        self._patient_agent = patient_agent
        self._report_agent = report_agent
        self._default_title = settings.default_title
        self._fallback_reply = settings.fallback_reply

    async def start_conversation(
        self,
        title: str | None = None,
        profile: PatientProfile | None = None,
    ) -> ConversationRecord:
        """Create a conversation, optionally with a caller-supplied profile."""
        return await self._store.create_conversation(
            title=(title or "").strip() or self._default_title,
            profile=profile,
        )

    async def send_message(
        self,
        conversation_id: str | None,
        message: str,
        profile: PatientProfile | None = None,
    ) -> ChatExchange:
        """Record a doctor message and generate the patient's reply.

        Args:
            conversation_id: Existing conversation, or None to start one.
            message: The doctor's message.
            profile: Profile for a new conversation; ignored for existing ones.

        Returns:
            The stored user and assistant messages with the updated conversation.

        Raises:
            ValidationError: If the message is empty.
            ConversationNotFoundError: If the conversation id is unknown.
        """
        if not message or not message.strip():
            raise ValidationError("Message is required")

        if conversation_id is None:
            record = await self.start_conversation(profile=profile)
            conversation_id = record.id

        with logging_context(conversation_id=conversation_id):
            # Raises ConversationNotFoundError before anything is written.
            await self._store.load_conversation(conversation_id)
            user_message = await self._store.append_message(conversation_id, Role.USER, message)
            loaded = await self._store.load_conversation(conversation_id)

            fallback_used = False
            try:
                turn = await self._patient_agent.next_turn(loaded.transcript, loaded.profile)
            except UpstreamGenerationError as e:
                logger.warning(
                    "Patient turn failed, storing fallback reply",
                    operation=e.operation,
                    error=str(e),
                )
                reply = self._fallback_reply
                fallback_used = True
            else:
                reply = turn.content
                if turn.profile_generated:
                    await self._store.save_profile(conversation_id, turn.profile)

            assistant_message = await self._store.append_message(
                conversation_id, Role.ASSISTANT, reply
            )
            updated = await self._store.load_conversation(conversation_id)

            logger.info(
                "Chat exchange complete",
                turn_count=len(updated.transcript),
                fallback_used=fallback_used,
            )

        return ChatExchange(
            conversation=updated.record,
            user_message=user_message,
            assistant_message=assistant_message,
            fallback_used=fallback_used,
        )

    async def list_conversations(self) -> list[ConversationSummary]:
        """List conversations, most recently updated first."""
        return await self._store.list_conversations()

    async def get_messages(self, conversation_id: str) -> list[MessageRecord]:
        """Messages of a conversation in creation order."""
        return await self._store.list_messages(conversation_id)

    async def generate_report(
        self,
        conversation_id: str,
        now: datetime | None = None,
    ) -> SessionReport:
        """Synthesize the session report for a conversation.

        Raises:
            ConversationNotFoundError: If the conversation id is unknown.
            UpstreamGenerationError: If the completion call fails.
            MalformedReportError: If the model's report is invalid.
        """
        with logging_context(conversation_id=conversation_id):
            loaded = await self._store.load_conversation(conversation_id)
            return await self._report_agent.synthesize(
                loaded.transcript,
                loaded.profile,
                started_at=loaded.started_at,
                now=now,
            )
