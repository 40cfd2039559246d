"""Simulated patient agent.

Produces the next patient utterance for a consultation, generating the
patient's profile on the first turn when the conversation has none.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from virtual_patient.agents.prompts.patient import compose_patient_system_prompt
from virtual_patient.config import get_model_name
from virtual_patient.domain.enums import Role
from virtual_patient.domain.exceptions import LLMError, UpstreamGenerationError
from virtual_patient.infrastructure.llm.protocols import ChatMessage, ChatRequest
from virtual_patient.infrastructure.logging import get_logger
from virtual_patient.services.profile_generator import ProfileGenerator

if TYPE_CHECKING:
    from collections.abc import Sequence

    from virtual_patient.config import ModelSettings
    from virtual_patient.domain.value_objects import ConversationTurn, PatientProfile
    from virtual_patient.infrastructure.llm.protocols import ChatClient

logger = get_logger(__name__)

OPERATION = "next_patient_turn"


@dataclass(frozen=True, slots=True)
class PatientTurn:
    """Result of one patient turn."""

    content: str
    """The patient's reply."""

    profile: PatientProfile
    """Profile used for the reply; persist it when ``profile_generated``."""

    profile_generated: bool
    """True when the profile was created for this turn."""


class PatientAgent:
    """Agent that role-plays a psychological patient.

    The agent never persists anything. When it generates a profile it returns
    it on the ``PatientTurn`` so the caller can store it and pass it back on
    every later turn.

    Example:
        >>> from tests.fixtures.mock_llm import MockLLMClient
        >>> agent = PatientAgent(llm_client=MockLLMClient(chat_responses=["Hi..."]))
        >>> turn = await agent.next_turn([])
        >>> turn.profile_generated
        True
    """

    def __init__(
        self,
        llm_client: ChatClient,
        model_settings: ModelSettings | None = None,
        profile_generator: ProfileGenerator | None = None,
        timeout_seconds: int = 300,
    ) -> None:
        """Initialize patient agent.

        Args:
            llm_client: Completion service client.
            model_settings: Model configuration. If None, uses defaults.
            profile_generator: Source of new profiles. If None, uses an
                unseeded generator.
            timeout_seconds: Per-request timeout; should not undercut the
                backend's own timeout.
        """
        self._llm_client = llm_client
        self._model_settings = model_settings
        self._profile_generator = profile_generator or ProfileGenerator()
        self._timeout_seconds = timeout_seconds

    async def next_turn(
        self,
        transcript: Sequence[ConversationTurn],
        profile: PatientProfile | None = None,
    ) -> PatientTurn:
        """Generate the next patient utterance.

        Args:
            transcript: Ordered conversation so far. System entries are dropped;
                only this agent's own prompt is sent with the system role.
            profile: Stored profile, if the conversation has one.

        Returns:
            The reply together with the profile that produced it.

        Raises:
            UpstreamGenerationError: If the completion call fails or the reply
                is empty.
        """
        if profile is None or profile.is_empty():
            profile = self._profile_generator.generate()
            profile_generated = True
            logger.info(
                "Generated patient profile",
                condition=profile.condition,
                age=profile.age,
                gender=profile.gender,
            )
        else:
            profile_generated = False

        history = [
            ChatMessage(role=turn.role.value, content=turn.content)
            for turn in transcript
            if turn.role != Role.SYSTEM and turn.content.strip()
        ]
        first_turn = not any(msg.role == Role.ASSISTANT for msg in history)

        system_prompt = compose_patient_system_prompt(profile, first_turn=first_turn)
        settings = self._model_settings
        request = ChatRequest(
            messages=[ChatMessage(role=Role.SYSTEM.value, content=system_prompt), *history],
            model=get_model_name(settings, "patient"),
            temperature=settings.patient_temperature if settings else 0.8,
            max_tokens=settings.patient_max_tokens if settings else 500,
            timeout_seconds=self._timeout_seconds,
        )

        logger.debug(
            "Requesting patient turn",
            history_length=len(history),
            first_turn=first_turn,
            dropped_system_entries=sum(1 for t in transcript if t.role == Role.SYSTEM),
        )

        try:
            response = await self._llm_client.chat(request)
        except LLMError as e:
            logger.error(
                "Patient turn generation failed",
                error=str(e),
                error_type=type(e).__name__,
            )
            raise UpstreamGenerationError(OPERATION, f"Completion call failed: {e}", e) from e

        content = response.content.strip()
        if not content:
            logger.error("Patient turn generation returned empty content", model=response.model)
            raise UpstreamGenerationError(OPERATION, "Completion returned empty content")

        return PatientTurn(content=content, profile=profile, profile_generated=profile_generated)
