from __future__ import annotations

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = Field(
        default="Data Research Assistant API",
        validation_alias=AliasChoices("APP_NAME", "app_name"),
        description="Title shown in the OpenAPI schema and docs pages.",
    )
    log_level: str = Field(
        default="INFO",
        validation_alias=AliasChoices("LOG_LEVEL", "log_level"),
        description="Root log level (DEBUG, INFO, WARNING, ERROR).",
    )

    # LLM integration (OpenAI)
    # The key is resolved per request; a missing key is a deployment error surfaced as a 500.
    openai_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("OPENAI_API_KEY", "openai_api_key"),
        description="OpenAI API key (required for /api/generate-analysis).",
    )
    openai_model: str = Field(
        default="gpt-4o-mini",
        validation_alias=AliasChoices("OPENAI_MODEL", "openai_model"),
        description="OpenAI model identifier used for analysis generation.",
    )
    openai_base_url: str = Field(
        default="https://api.openai.com/v1",
        validation_alias=AliasChoices("OPENAI_BASE_URL", "openai_base_url"),
        description="Base URL for OpenAI API (override for proxies/emulators).",
    )
    openai_timeout_seconds: float = Field(
        default=60.0,
        ge=1.0,
        validation_alias=AliasChoices("OPENAI_TIMEOUT_SECONDS", "openai_timeout_seconds"),
        description="Timeout for OpenAI API requests (seconds).",
    )
    openai_temperature: float = Field(
        default=0.7,
        ge=0.0,
        le=2.0,
        validation_alias=AliasChoices("OPENAI_TEMPERATURE", "openai_temperature"),
        description="Sampling temperature for analysis generation.",
    )
    openai_max_tokens: int = Field(
        default=2000,
        ge=1,
        validation_alias=AliasChoices("OPENAI_MAX_TOKENS", "openai_max_tokens"),
        description="Maximum number of completion tokens per analysis.",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
