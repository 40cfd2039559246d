"""OpenAI-compatible chat completions client.

Works against api.openai.com and any server exposing ``/v1/chat/completions``
(Ollama's ``/v1`` shim, vLLM, LM Studio, ...).
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
    from virtual_patient.config import OpenAISettings

logger = get_logger(__name__)


class OpenAIClient:
    """Chat client for OpenAI-compatible endpoints.

    Implements the ChatClient protocol.
    """

    def __init__(self, openai_settings: OpenAISettings) -> None:
        self._chat_url = openai_settings.chat_url
        self._default_timeout = openai_settings.timeout_seconds

        headers = {}
        if openai_settings.api_key:
            headers["Authorization"] = f"Bearer {openai_settings.api_key}"
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(self._default_timeout),
            headers=headers,
        )

    async def __aenter__(self) -> OpenAIClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def chat(self, request: ChatRequest) -> ChatResponse:
        """Execute chat completion.

        Raises:
            LLMTimeoutError: If request times out.
            LLMError: If request fails.
            LLMResponseParseError: If the payload has no first choice message.
        """
        payload: dict[str, Any] = {
            "model": request.model,
            "messages": [{"role": msg.role, "content": msg.content} for msg in request.messages],
            "temperature": request.temperature,
        }
        if request.max_tokens is not None:
            payload["max_tokens"] = request.max_tokens
        if request.json_mode:
            payload["response_format"] = {"type": "json_object"}

        logger.debug(
            "Sending chat request",
            backend="openai",
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
            choice = data["choices"][0]
            content = choice["message"]["content"]
        except (KeyError, IndexError, TypeError, ValueError) as e:
            logger.error("Failed to parse chat response", raw_length=len(response.text))
            raise LLMResponseParseError(response.text, str(e)) from e

        usage = data.get("usage") or {}
        return ChatResponse(
            content=content or "",
            model=data.get("model", request.model),
            done=choice.get("finish_reason") != "length",
            prompt_tokens=usage.get("prompt_tokens"),
            completion_tokens=usage.get("completion_tokens"),
        )
