"""Fixtures for real Ollama end-to-end tests."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
import pytest_asyncio

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from virtual_patient.config import Settings
    from virtual_patient.infrastructure.llm import OllamaClient


def _require_ollama_opt_in() -> None:
    if os.environ.get("VIRTUAL_PATIENT_OLLAMA_TESTS") != "1":
        pytest.skip("Set VIRTUAL_PATIENT_OLLAMA_TESTS=1 to run live Ollama tests")


@pytest.fixture(scope="session")
def app_settings() -> Settings:
    """Return application settings loaded from env / .env (real mode only)."""
    _require_ollama_opt_in()
    from virtual_patient.config import get_settings  # noqa: PLC0415

    return get_settings()


@pytest_asyncio.fixture
async def ollama_client(app_settings: Settings) -> AsyncIterator[OllamaClient]:
    """Return a live OllamaClient connected to a reachable Ollama server."""
    _require_ollama_opt_in()

    from virtual_patient.domain.exceptions import LLMError  # noqa: PLC0415
    from virtual_patient.infrastructure.llm import OllamaClient  # noqa: PLC0415

    client = OllamaClient(app_settings.ollama)

    try:
        await client.ping()
    except LLMError as e:
        await client.close()
        pytest.fail(
            "Ollama is not reachable. Start it with `ollama serve` and pull "
            f"`{app_settings.model.patient_model}`. Error: {e}"
        )

    yield client

    await client.close()
