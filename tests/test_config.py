"""Tests for configuration helpers."""

import pytest

from burnfit.config import Settings, parse_state_backend


@pytest.mark.parametrize("raw", [None, "", "file", " JSON "])
def test_parse_state_backend_defaults_to_file(raw: str | None) -> None:
    assert parse_state_backend(raw) == "file"


def test_parse_state_backend_supabase() -> None:
    assert parse_state_backend("Supabase") == "supabase"


def test_parse_state_backend_rejects_unknown() -> None:
    with pytest.raises(ValueError):
        parse_state_backend("sqlite")


def test_settings_read_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OPENAI_API_KEY", "env-key")
    monkeypatch.setenv("ADMIN_TOKEN", "env-admin")
    monkeypatch.setenv("STATE_BACKEND", "supabase")
    monkeypatch.setenv("TIMEZONE", "Asia/Kolkata")

    settings = Settings()

    assert settings.openai_api_key == "env-key"
    assert settings.admin_token == "env-admin"
    assert settings.state_backend == "supabase"
    assert settings.timezone == "Asia/Kolkata"
    assert settings.openai_store is False
