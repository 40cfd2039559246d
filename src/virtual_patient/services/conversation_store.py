"""Conversation persistence.

``ConversationStore`` is the gateway the consultation service talks to. The
in-memory implementation backs the HTTP server and the tests; a database
backend only needs to satisfy the same protocol.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from virtual_patient.domain.entities import ConversationRecord, LoadedConversation, MessageRecord
from virtual_patient.domain.exceptions import ConversationNotFoundError, ValidationError
from virtual_patient.domain.value_objects import PatientProfile
from virtual_patient.infrastructure.logging import get_logger

if TYPE_CHECKING:
    from virtual_patient.domain.enums import Role

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class ConversationSummary:
    """Listing entry for a conversation."""

    record: ConversationRecord
    last_message: str | None = None

    def to_dict(self) -> dict[str, object]:
        data = self.record.to_dict()
        data["lastMessage"] = self.last_message
        return data


@runtime_checkable
class ConversationStore(Protocol):
    """Storage for conversations, their messages and profiles."""

    async def create_conversation(
        self,
        title: str,
        profile: PatientProfile | None = None,
    ) -> ConversationRecord:
        """Create an empty conversation."""
        ...

    async def load_conversation(self, conversation_id: str) -> LoadedConversation:
        """Load a conversation and its transcript in creation order.

        Raises:
            ConversationNotFoundError: If the id is unknown.
        """
        ...

    async def list_conversations(self) -> list[ConversationSummary]:
        """List conversations, most recently updated first."""
        ...

    async def list_messages(self, conversation_id: str) -> list[MessageRecord]:
        """List a conversation's messages in creation order."""
        ...

    async def append_message(
        self,
        conversation_id: str,
        role: Role,
        content: str,
    ) -> MessageRecord:
        """Append a message and bump the conversation's update time."""
        ...

    async def save_profile(self, conversation_id: str, profile: PatientProfile) -> None:
        """Attach a profile to a conversation."""
        ...


class InMemoryConversationStore:
    """Process-local ``ConversationStore``.

    Mutations are serialized with an ``asyncio.Lock`` so concurrent requests
    against one conversation never interleave half-written state.
    """

    def __init__(self) -> None:
        self._conversations: dict[str, ConversationRecord] = {}
        self._messages: dict[str, list[MessageRecord]] = {}
        self._lock = asyncio.Lock()

    async def create_conversation(
        self,
        title: str,
        profile: PatientProfile | None = None,
    ) -> ConversationRecord:
        if not title.strip():
            raise ValidationError("Conversation title cannot be empty")

        record = ConversationRecord(title=title, profile=profile or PatientProfile())
        async with self._lock:
            self._conversations[record.id] = record
            self._messages[record.id] = []

        logger.info("Conversation created", conversation_id=record.id, title=title)
        return record

    async def load_conversation(self, conversation_id: str) -> LoadedConversation:
        async with self._lock:
            record = self._get(conversation_id)
            transcript = tuple(m.to_turn() for m in self._messages[conversation_id])
            # Copy so callers cannot mutate stored state.
            return LoadedConversation(record=replace(record), transcript=transcript)

    async def list_conversations(self) -> list[ConversationSummary]:
        async with self._lock:
            summaries = [
                ConversationSummary(
                    record=replace(record),
                    last_message=(
                        self._messages[record.id][-1].content if self._messages[record.id] else None
                    ),
                )
                for record in self._conversations.values()
            ]
        summaries.sort(key=lambda s: s.record.updated_at, reverse=True)
        return summaries

    async def list_messages(self, conversation_id: str) -> list[MessageRecord]:
        async with self._lock:
            self._get(conversation_id)
            return [replace(m) for m in self._messages[conversation_id]]

    async def append_message(
        self,
        conversation_id: str,
        role: Role,
        content: str,
    ) -> MessageRecord:
        async with self._lock:
            record = self._get(conversation_id)
            message = MessageRecord(conversation_id=conversation_id, role=role, content=content)
            self._messages[conversation_id].append(message)
            record.updated_at = max(message.created_at, datetime.now(UTC))

        logger.debug(
            "Message appended",
            conversation_id=conversation_id,
            role=role.value,
            content_length=len(content),
        )
        return replace(message)

    async def save_profile(self, conversation_id: str, profile: PatientProfile) -> None:
        async with self._lock:
            record = self._get(conversation_id)
            record.profile = profile
            record.updated_at = datetime.now(UTC)

        logger.info(
            "Profile saved",
            conversation_id=conversation_id,
            condition=profile.condition,
        )

    def _get(self, conversation_id: str) -> ConversationRecord:
        try:
            return self._conversations[conversation_id]
        except KeyError:
            raise ConversationNotFoundError(conversation_id) from None
