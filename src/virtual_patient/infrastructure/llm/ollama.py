"""Ollama chat client implementation.

Talks to the native Ollama ``/api/chat`` endpoint over httpx.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import httpx

from virtual_patient.domain.exceptions import (
    LLMError,
    LLMResponseParseError,
    LLMTimeoutError,
)
from virtual_patient.infrastructure.llm.protocols import ChatRequest, ChatResponse
from virtual_patient.infrastructure.logging import get_logger

if TYPE_CHECKING:
    from virtual_patient.config import OllamaSettings

logger = get_logger(__name__)


class OllamaClient:
    """Ollama API client for chat completions.

    Implements the ChatClient protocol.

    Example:
        >>> from virtual_patient.config import OllamaSettings
        >>> async with OllamaClient(OllamaSettings()) as client:
        ...     await client.ping()
    """

    def __init__(self, ollama_settings: OllamaSettings) -> None:
        """Initialize Ollama client.

        Args:
            ollama_settings: Ollama server configuration.
        """
        self._base_url = ollama_settings.base_url
        self._chat_url = ollama_settings.chat_url
        self._default_timeout = ollama_settings.timeout_seconds

        self._client = httpx.AsyncClient(timeout=httpx.Timeout(self._default_timeout))

    async def __aenter__(self) -> OllamaClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def ping(self) -> bool:
        """Check if Ollama server is reachable.

        Raises:
            LLMError: If ping fails.
        """
        try:
            response = await self._client.get(f"{self._base_url}/api/tags")
            response.raise_for_status()
            return True
        except (httpx.RequestError, httpx.HTTPStatusError) as e:
            logger.error("Ollama ping failed", error=str(e))
            raise LLMError(f"Failed to ping Ollama: {e}") from e

    async def chat(self, request: ChatRequest) -> ChatResponse:
        """Execute chat completion via Ollama API.

        Raises:
            LLMTimeoutError: If request times out.
            LLMError: If request fails.
            LLMResponseParseError: If the payload lacks ``message.content``.
        """
        options: dict[str, Any] = {"temperature": request.temperature}
        if request.max_tokens is not None:
            options["num_predict"] = request.max_tokens

        payload: dict[str, Any] = {
            "model": request.model,
            "messages": [{"role": msg.role, "content": msg.content} for msg in request.messages],
            "stream": False,
            "options": options,
        }
        if request.json_mode:
            payload["format"] = "json"

        logger.debug(
            "Sending chat request",
            backend="ollama",
            model=request.model,
            message_count=len(request.messages),
            json_mode=request.json_mode,
        )

        try:
            response = await self._client.post(
                self._chat_url,
                json=payload,
                timeout=request.timeout_seconds,
            )
            response.raise_for_status()
        except httpx.TimeoutException as e:
            logger.error("Chat request timed out", timeout=request.timeout_seconds)
            raise LLMTimeoutError(request.timeout_seconds) from e
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.error(
                "Chat request failed",
                status_code=status,
                response_length=len(e.response.text),
            )
            raise LLMError(f"HTTP {status}: response body redacted", status_code=status) from e
        except httpx.RequestError as e:
            logger.error("Chat request error", error=str(e))
            raise LLMError(f"Request failed: {e}") from e

        try:
            data = response.json()
            content = data["message"]["content"]
        except (KeyError, TypeError, ValueError) as e:
            logger.error("Failed to parse chat response", raw_length=len(response.text))
            raise LLMResponseParseError(response.text, str(e)) from e

        logger.debug(
            "Chat response received",
            model=data.get("model"),
            content_length=len(content or ""),
        )

        return ChatResponse(
            content=content or "",
            model=data.get("model", request.model),
            done=data.get("done", True),
            prompt_tokens=data.get("prompt_eval_count"),
            completion_tokens=data.get("eval_count"),
        )
