"""Shared pytest fixtures and configuration."""

from __future__ import annotations

import os
import random

import pytest

# Live backend tests are opt-in and must be able to read developer `.env` / env vars.
# Default test runs stay isolated from local configuration to keep unit tests deterministic.
_RUN_REAL_OLLAMA_TESTS = os.environ.get("VIRTUAL_PATIENT_OLLAMA_TESTS") == "1"

# Set TESTING mode BEFORE any app imports to prevent .env file loading (default).
if _RUN_REAL_OLLAMA_TESTS:
    os.environ.pop("TESTING", None)
else:
    os.environ["TESTING"] = "1"

# Clear environment variables BEFORE any imports that might use Pydantic Settings
_ENV_VARS_TO_CLEAR = [
    "LLM_BACKEND",
    "OLLAMA_HOST",
    "OLLAMA_PORT",
    "OLLAMA_TIMEOUT_SECONDS",
    "OPENAI_API_KEY",
    "OPENAI_BASE_URL",
    "OPENAI_TIMEOUT_SECONDS",
    "MODEL_PATIENT_MODEL",
    "MODEL_REPORT_MODEL",
    "MODEL_PATIENT_TEMPERATURE",
    "MODEL_REPORT_TEMPERATURE",
    "MODEL_PATIENT_MAX_TOKENS",
    "MODEL_REPORT_MAX_TOKENS",
    "SESSION_DEFAULT_TITLE",
    "SESSION_FALLBACK_REPLY",
    "API_HOST",
    "API_PORT",
    "API_RELOAD",
    "LOG_FORMAT",
    "LOG_LEVEL",
]

if not _RUN_REAL_OLLAMA_TESTS:
    for _var in _ENV_VARS_TO_CLEAR:
        os.environ.pop(_var, None)


@pytest.fixture(autouse=True)
def isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear environment variables that might be set by .env file.

    Also clears any cached settings to force re-read of defaults.
    """
    if _RUN_REAL_OLLAMA_TESTS:
        return

    for var in _ENV_VARS_TO_CLEAR:
        monkeypatch.delenv(var, raising=False)

    from virtual_patient.config import get_settings  # noqa: PLC0415

    get_settings.cache_clear()


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for reproducible profiles."""
    return random.Random(1234)


@pytest.fixture
def sample_report_json() -> str:
    """Return a well-formed report completion.

    NOTE: This is TEST DATA, not a mock. It exercises the real parsing and
    validation path.
    """
    return """{
  "summaryOfDiscussion": "The patient described months of low mood and poor sleep.",
  "emotionsDetected": ["sadness", "fatigue", "hopelessness"],
  "aiAnalysis": "Presentation is consistent with a depressive episode.",
  "doctorDiagnosis": "Major Depressive Disorder",
  "diagnosisFeedback": {
    "status": "accurate",
    "explanation": "Anhedonia, low mood and sleep disturbance support the diagnosis."
  },
  "suggestedQuestions": ["Have you had thoughts of self-harm?", "How is your appetite?"]
}"""


@pytest.fixture
def sample_ollama_response() -> dict[str, object]:
    """Return sample Ollama chat API response structure."""
    return {
        "model": "gemma3:27b",
        "message": {
            "role": "assistant",
            "content": "I... I haven't been sleeping well lately.",
        },
        "done": True,
        "prompt_eval_count": 120,
        "eval_count": 14,
    }
