"""Chat client factory.

Creates a concrete chat client based on configuration. This keeps backend
selection out of business logic.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from virtual_patient.config import LLMBackend, Settings
from virtual_patient.infrastructure.llm.ollama import OllamaClient
from virtual_patient.infrastructure.llm.openai_compat import OpenAIClient

if TYPE_CHECKING:
    from virtual_patient.infrastructure.llm.protocols import ChatClient


def create_llm_client(settings: Settings) -> ChatClient:
    """Create a chat client based on settings.backend.backend."""
    backend = settings.backend.backend
    if backend == LLMBackend.OLLAMA:
        return OllamaClient(settings.ollama)
    if backend == LLMBackend.OPENAI:
        return OpenAIClient(settings.openai)

    msg = f"Unsupported LLM backend: {backend}"
    raise ValueError(msg)
