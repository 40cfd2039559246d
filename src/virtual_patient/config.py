"""Centralized configuration using Pydantic Settings.

All settings can be overridden via environment variables.

Sampling defaults:
- Patient turns: temperature 0.8, capped at 500 output tokens, for natural variation.
- Session reports: temperature 0.7 with JSON output, for consistency.
"""

from __future__ import annotations

import os
from enum import Enum
from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Skip reading .env file during testing to use code defaults
ENV_FILE = None if os.environ.get("TESTING") else ".env"
ENV_FILE_ENCODING = "utf-8"


class LLMBackend(str, Enum):
    """Supported completion backends.

    The default backend is Ollama (local HTTP server). Any OpenAI-compatible
    chat completions endpoint is supported through the ``openai`` backend.
    """

    OLLAMA = "ollama"
    OPENAI = "openai"


class BackendSettings(BaseSettings):
    """Completion backend selection."""

    model_config = SettingsConfigDict(
        env_prefix="LLM_",
        env_file=ENV_FILE,
        env_file_encoding=ENV_FILE_ENCODING,
        extra="ignore",
    )

    backend: LLMBackend = Field(
        default=LLMBackend.OLLAMA,
        description="Completion backend implementation",
    )


class OllamaSettings(BaseSettings):
    """Ollama server configuration."""

    model_config = SettingsConfigDict(
        env_prefix="OLLAMA_",
        env_file=ENV_FILE,
        env_file_encoding=ENV_FILE_ENCODING,
        extra="ignore",
    )

    host: str = Field(default="127.0.0.1", description="Ollama server host")
    port: int = Field(default=11434, ge=1, le=65535, description="Ollama server port")
    timeout_seconds: int = Field(default=300, ge=10, le=600, description="Request timeout")

    @property
    def base_url(self) -> str:
        """Get Ollama API base URL."""
        return f"http://{self.host}:{self.port}"

    @property
    def chat_url(self) -> str:
        """Get chat API endpoint."""
        return f"{self.base_url}/api/chat"


class OpenAISettings(BaseSettings):
    """OpenAI-compatible endpoint configuration."""

    model_config = SettingsConfigDict(
        env_prefix="OPENAI_",
        env_file=ENV_FILE,
        env_file_encoding=ENV_FILE_ENCODING,
        extra="ignore",
    )

    base_url: str = Field(
        default="https://api.openai.com/v1",
        description="Base URL including the /v1 suffix",
    )
    api_key: str | None = Field(default=None, repr=False, description="Bearer token")
    timeout_seconds: int = Field(default=300, ge=10, le=600, description="Request timeout")

    @property
    def chat_url(self) -> str:
        """Get chat completions endpoint."""
        return f"{self.base_url.rstrip('/')}/chat/completions"


class ModelSettings(BaseSettings):
    """Model and sampling configuration for the two completion calls."""

    model_config = SettingsConfigDict(
        env_prefix="MODEL_",
        env_file=ENV_FILE,
        env_file_encoding=ENV_FILE_ENCODING,
        extra="ignore",
    )

    patient_model: str = Field(default="gemma3:27b", description="Patient simulation model")
    report_model: str = Field(default="gemma3:27b", description="Session report model")
    patient_temperature: float = Field(
        default=0.8,
        ge=0.0,
        le=2.0,
        description="Higher randomness for natural patient replies",
    )
    report_temperature: float = Field(
        default=0.7,
        ge=0.0,
        le=2.0,
        description="Lower randomness for consistent reports",
    )
    patient_max_tokens: int = Field(
        default=500,
        ge=1,
        description="Output cap for a single patient turn",
    )
    report_max_tokens: int | None = Field(
        default=None,
        ge=1,
        description="Optional output cap for reports (None = backend default)",
    )


class SessionSettings(BaseSettings):
    """Conversation-level defaults."""

    model_config = SettingsConfigDict(
        env_prefix="SESSION_",
        env_file=ENV_FILE,
        env_file_encoding=ENV_FILE_ENCODING,
        extra="ignore",
    )

    default_title: str = Field(default="Psychological Consultation")
    fallback_reply: str = Field(
        default="Sorry, I could not generate a response.",
        description="Stored as the patient turn when generation fails",
    )


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        env_file=ENV_FILE,
        env_file_encoding=ENV_FILE_ENCODING,
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Minimum log level",
    )
    format: Literal["json", "console"] = Field(
        default="json",
        description="Log output format",
    )
    include_timestamp: bool = Field(default=True)
    include_caller: bool = Field(default=True)


class APISettings(BaseSettings):
    """API server configuration."""

    model_config = SettingsConfigDict(
        env_prefix="API_",
        env_file=ENV_FILE,
        env_file_encoding=ENV_FILE_ENCODING,
        extra="ignore",
    )

    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000, ge=1, le=65535)
    reload: bool = Field(default=False, description="Enable hot reload (dev only)")
    workers: int = Field(default=1, ge=1, le=16)
    cors_origins: list[str] = Field(
        default=["*"],
        description="Allowed CORS origins (restrict in production)",
    )


class Settings(BaseSettings):
    """Root settings combining all configuration groups."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE,
        env_file_encoding=ENV_FILE_ENCODING,
        env_nested_delimiter="__",
        extra="ignore",
    )

    backend: BackendSettings = Field(default_factory=BackendSettings)
    ollama: OllamaSettings = Field(default_factory=OllamaSettings)
    openai: OpenAISettings = Field(default_factory=OpenAISettings)
    model: ModelSettings = Field(default_factory=ModelSettings)
    session: SessionSettings = Field(default_factory=SessionSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    api: APISettings = Field(default_factory=APISettings)

    @model_validator(mode="after")
    def validate_consistency(self) -> Settings:
        """Validate cross-field consistency."""
        if self.backend.backend == LLMBackend.OPENAI and not self.openai.api_key:
            # Local OpenAI-compatible servers often accept any key; only hosted OpenAI needs one.
            if "api.openai.com" in self.openai.base_url:
                raise ValueError("OPENAI_API_KEY is required for api.openai.com")
        return self


@lru_cache
def get_settings() -> Settings:
    """Get cached settings singleton."""
    return Settings()


def get_model_settings() -> ModelSettings:
    """Get model settings (for FastAPI Depends)."""
    return get_settings().model


def get_model_name(
    model_settings: ModelSettings | None,
    purpose: Literal["patient", "report"],
) -> str:
    """Resolve the model for a completion purpose, falling back to defaults."""
    settings = model_settings or ModelSettings()
    if purpose == "patient":
        return settings.patient_model
    return settings.report_model
