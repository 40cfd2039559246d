"""Abstract protocols for completion service interactions.

This module defines the core abstractions for chat completion clients using
Python Protocols (structural subtyping), so agents can be handed any backend,
including test doubles, at construction time.
"""

from __future__ import annotations

from abc import abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence


@dataclass(frozen=True, slots=True)
class ChatMessage:
    """A message in a chat conversation.

    Attributes:
        role: Message role - "system", "user", or "assistant".
        content: The message text content.
    """

    role: str
    content: str

    def __post_init__(self) -> None:
        """Validate message after initialization."""
        if self.role not in ("system", "user", "assistant"):
            msg = f"Invalid role '{self.role}', must be 'system', 'user', or 'assistant'"
            raise ValueError(msg)
        if not self.content:
            msg = "Message content cannot be empty"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class ChatRequest:
    """Request for chat completion.

    Attributes:
        messages: Sequence of chat messages forming the conversation.
        model: Model identifier (e.g., "gemma3:27b").
        temperature: Sampling temperature (0.0 = deterministic, higher = more random).
        max_tokens: Optional cap on generated tokens.
        json_mode: Ask the backend to constrain output to a JSON object.
        timeout_seconds: Request timeout in seconds.
    """

    messages: Sequence[ChatMessage]
    model: str
    temperature: float = 0.0
    max_tokens: int | None = None
    json_mode: bool = False
    timeout_seconds: int = 300

    def __post_init__(self) -> None:
        """Validate request after initialization."""
        if not self.messages:
            msg = "Messages cannot be empty"
            raise ValueError(msg)
        if not self.model:
            msg = "Model cannot be empty"
            raise ValueError(msg)
        if not 0.0 <= self.temperature <= 2.0:
            msg = f"Temperature {self.temperature} must be between 0.0 and 2.0"
            raise ValueError(msg)
        if self.max_tokens is not None and self.max_tokens < 1:
            msg = f"max_tokens {self.max_tokens} must be >= 1"
            raise ValueError(msg)
        if self.timeout_seconds < 1:
            msg = f"timeout_seconds {self.timeout_seconds} must be >= 1"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class ChatResponse:
    """Response from chat completion.

    Attributes:
        content: Generated text content (may be empty; callers decide).
        model: Model that generated the response.
        done: Whether generation is complete.
        prompt_tokens: Number of tokens in the prompt.
        completion_tokens: Number of tokens in the completion.
    """

    content: str
    model: str
    done: bool = True
    prompt_tokens: int | None = None
    completion_tokens: int | None = None


@runtime_checkable
class ChatClient(Protocol):
    """Protocol for chat completion clients.

    Any class implementing this protocol can be used as a chat client.
    Uses structural subtyping - no explicit inheritance required.
    """

    @abstractmethod
    async def chat(self, request: ChatRequest) -> ChatResponse:
        """Execute chat completion.

        Args:
            request: Chat request with messages and parameters.

        Returns:
            Chat response with generated content.

        Raises:
            LLMError: If request fails.
            LLMTimeoutError: If request times out.
        """
        ...

    @abstractmethod
    async def close(self) -> None:
        """Release client resources."""
        ...
