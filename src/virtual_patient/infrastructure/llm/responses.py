"""Utilities for parsing LLM responses.

Even in JSON mode some backends wrap the object in markdown fences or emit
smart quotes and trailing commas. These helpers recover the object.
"""

from __future__ import annotations

import json
import re
from typing import Any

from virtual_patient.domain.exceptions import LLMResponseParseError
from virtual_patient.infrastructure.logging import get_logger

logger = get_logger(__name__)


def extract_json_from_response(raw: str) -> dict[str, Any]:
    """Extract a JSON object from an LLM response.

    The object is parsed as-is first. Fixups for smart quotes, zero-width
    spaces and trailing commas are applied only when that fails, since they
    also rewrite text inside string values.

    Args:
        raw: Raw LLM response text.

    Returns:
        Parsed JSON object.

    Raises:
        LLMResponseParseError: If no valid JSON object is found.
    """
    text = _extract_json_object(_strip_markdown_fences(raw))

    try:
        result = json.loads(text)
    except json.JSONDecodeError:
        text = _extract_json_object(_normalize_json_text(text))
        try:
            result = json.loads(text)
        except json.JSONDecodeError as e:
            logger.warning("JSON parse failed", error=str(e), text_preview=text[:200])
            raise LLMResponseParseError(raw, str(e)) from e

    if not isinstance(result, dict):
        raise LLMResponseParseError(raw, "Top-level JSON value is not an object")
    return result


def _strip_markdown_fences(text: str) -> str:
    """Remove markdown code block fences."""
    text = text.strip()
    if text.startswith("```json"):
        text = text[7:]
    elif text.startswith("```"):
        text = text[3:]
    if text.endswith("```"):
        text = text[:-3]
    return text.strip()


def _normalize_json_text(text: str) -> str:
    """Normalize JSON text by fixing common issues."""
    text = text.replace("\u201c", '"').replace("\u201d", '"')
    text = text.replace("\u200b", "")

    # Remove trailing commas before } or ]
    return re.sub(r",\s*([}\]])", r"\1", text)


def _extract_json_object(text: str) -> str:
    """Extract JSON object boundaries from text."""
    start = text.find("{")
    end = text.rfind("}")

    if start == -1 or end == -1 or start >= end:
        raise LLMResponseParseError(text, "No JSON object found")

    return text[start : end + 1]
