"""Test fixtures module.

Test doubles live here and must not be imported from production code (src/).
"""

from __future__ import annotations

from tests.fixtures.mock_llm import MockLLMClient

__all__ = ["MockLLMClient"]
