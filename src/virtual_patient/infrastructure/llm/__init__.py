"""Completion service infrastructure.

Abstractions for chat completions using the Strategy pattern, so the agents
work unchanged against Ollama, any OpenAI-compatible endpoint, or a test
double.
"""

from virtual_patient.infrastructure.llm.factory import create_llm_client
from virtual_patient.infrastructure.llm.ollama import OllamaClient
from virtual_patient.infrastructure.llm.openai_compat import OpenAIClient
from virtual_patient.infrastructure.llm.protocols import (
    ChatClient,
    ChatMessage,
    ChatRequest,
    ChatResponse,
)
from virtual_patient.infrastructure.llm.responses import extract_json_from_response

__all__ = [
    "ChatClient",
    "ChatMessage",
    "ChatRequest",
    "ChatResponse",
    "OllamaClient",
    "OpenAIClient",
    "create_llm_client",
    "extract_json_from_response",
]
