"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    openai_api_key: str
    openai_model: str = "gpt-5.2"
    openai_fast_model: str = "gpt-5-mini"
    openai_reasoning_effort: str | None = "low"
    openai_store: bool = False
    openai_timeout_seconds: float = 30.0
    admin_token: str
    state_backend: str = "file"
    state_dir: str = ".burnfit"
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    state_owner_id: str = "local"
    timezone: str | None = None
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_state_backend(raw: str | None) -> str:
    """Normalize the configured state backend name."""
    if raw is None:
        return "file"
    cleaned = raw.strip().lower()
    if cleaned in {"", "file", "json"}:
        return "file"
    if cleaned == "supabase":
        return "supabase"
    raise ValueError(f"Unknown state backend: {raw}")
