"""Tests for config.py: environment and .env handling."""

import os

import pytest

from reflectbuddy.config import DEFAULT_BASE_URL, Settings, load_dotenv

CONFIG_VARS = (
    "LLM_API_KEY", "MISTRAL_API_KEY", "GROQ_API_KEY", "LLM_BASE_URL",
    "LLM_MODEL_SMART", "LLM_MODEL_FAST", "LLM_TIMEOUT", "LLM_MAX_RETRIES",
    "LLM_FALLBACK_BASE_URL", "LLM_FALLBACK_API_KEY", "LLM_FALLBACK_MODEL",
    "BADGE_NOTIFICATION_DELAY",
)


@pytest.fixture
def clean_env(monkeypatch):
    """Unset every config variable; monkeypatch restores them afterwards."""
    for name in CONFIG_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch


class TestSettings:
    def test_defaults_without_env(self, clean_env):
        settings = Settings.from_env(load_env_file=False)
        assert settings.api_key == ""
        assert settings.base_url == DEFAULT_BASE_URL
        assert settings.badge_notification_delay == 1.0
        assert not settings.has_fallback_provider

    def test_reads_env(self, clean_env):
        clean_env.setenv("MISTRAL_API_KEY", "mk")
        clean_env.setenv("LLM_BASE_URL", "https://llm.example/v1/")
        clean_env.setenv("LLM_TIMEOUT", "5")
        clean_env.setenv("BADGE_NOTIFICATION_DELAY", "0")

        settings = Settings.from_env(load_env_file=False)
        assert settings.api_key == "mk"
        assert settings.base_url == "https://llm.example/v1"
        assert settings.timeout == 5.0
        assert settings.badge_notification_delay == 0.0

    def test_llm_api_key_takes_precedence(self, clean_env):
        clean_env.setenv("LLM_API_KEY", "primary")
        clean_env.setenv("GROQ_API_KEY", "groq")
        assert Settings.from_env(load_env_file=False).api_key == "primary"

    def test_negative_retries_clamped_to_zero(self, clean_env):
        clean_env.setenv("LLM_MAX_RETRIES", "-1")
        assert Settings.from_env(load_env_file=False).max_retries == 0

    def test_bad_number_uses_default(self, clean_env):
        clean_env.setenv("LLM_TIMEOUT", "soon")
        assert Settings.from_env(load_env_file=False).timeout == 30.0


class TestDotenv:
    def test_loads_unset_keys_only(self, clean_env, tmp_path):
        clean_env.setenv("LLM_MODEL_SMART", "already-set")
        (tmp_path / ".env").write_text(
            "# comment\nLLM_API_KEY=from-file\nLLM_MODEL_SMART=from-file\n\n"
        )

        assert load_dotenv(tmp_path) == tmp_path / ".env"
        assert os.environ["LLM_API_KEY"] == "from-file"
        assert os.environ["LLM_MODEL_SMART"] == "already-set"
