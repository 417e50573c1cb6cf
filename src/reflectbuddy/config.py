"""
Runtime configuration for Reflectie-Buddy.

All settings come from environment variables. A `.env` file (the first one
found walking up from the working directory) is loaded into os.environ
first, without overriding variables that are already set.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.mistral.ai/v1"
DEFAULT_SMART_MODEL = "mistral-medium-latest"
DEFAULT_FAST_MODEL = "mistral-small-latest"


def load_dotenv(start: Optional[Path] = None) -> Optional[Path]:
    """Load a .env file into os.environ (only vars not already set)."""
    start = start or Path.cwd()
    for parent in [start] + list(start.resolve().parents):
        env_path = parent / ".env"
        if env_path.exists():
            for line in env_path.read_text().splitlines():
                line = line.strip()
                if not line or line.startswith("#"):
                    continue
                if "=" in line:
                    key, value = line.split("=", 1)
                    key, value = key.strip(), value.strip()
                    if key and key not in os.environ:
                        os.environ[key] = value
            return env_path  # only load the first .env found
    return None


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning(f"[Config] Ignoring non-numeric {name}={raw!r}, using {default}")
        return default


@dataclass
class Settings:
    """
    Settings for the generation service and presentation timing.

    Configure via environment variables:
        LLM_API_KEY / MISTRAL_API_KEY / GROQ_API_KEY: API key (empty = fallback replies only)
        LLM_BASE_URL: OpenAI-compatible API base URL
        LLM_MODEL_SMART / LLM_MODEL_FAST: models behind the "smart" and "fast" hints
        LLM_TIMEOUT / LLM_MAX_RETRIES: transport behaviour
        LLM_FALLBACK_BASE_URL / LLM_FALLBACK_API_KEY / LLM_FALLBACK_MODEL: rate-limit fallback
        BADGE_NOTIFICATION_DELAY: seconds between staggered badge notifications
    """

    api_key: str = ""
    base_url: str = DEFAULT_BASE_URL
    smart_model: str = DEFAULT_SMART_MODEL
    fast_model: str = DEFAULT_FAST_MODEL
    timeout: float = 30.0
    max_retries: int = 2
    fallback_base_url: str = ""
    fallback_api_key: str = ""
    fallback_model: str = ""
    badge_notification_delay: float = 1.0

    @classmethod
    def from_env(cls, load_env_file: bool = True) -> "Settings":
        if load_env_file:
            load_dotenv()

        api_key = ""
        for env_var in ("LLM_API_KEY", "MISTRAL_API_KEY", "GROQ_API_KEY"):
            api_key = os.environ.get(env_var, "").strip()
            if api_key:
                break

        return cls(
            api_key=api_key,
            base_url=os.environ.get("LLM_BASE_URL", DEFAULT_BASE_URL).strip().rstrip("/"),
            smart_model=os.environ.get("LLM_MODEL_SMART", DEFAULT_SMART_MODEL).strip(),
            fast_model=os.environ.get("LLM_MODEL_FAST", DEFAULT_FAST_MODEL).strip(),
            timeout=_env_float("LLM_TIMEOUT", 30.0),
            max_retries=max(0, int(_env_float("LLM_MAX_RETRIES", 2))),
            fallback_base_url=os.environ.get("LLM_FALLBACK_BASE_URL", "").strip().rstrip("/"),
            fallback_api_key=os.environ.get("LLM_FALLBACK_API_KEY", "").strip(),
            fallback_model=os.environ.get("LLM_FALLBACK_MODEL", "").strip(),
            badge_notification_delay=_env_float("BADGE_NOTIFICATION_DELAY", 1.0),
        )

    @property
    def has_fallback_provider(self) -> bool:
        return bool(self.fallback_base_url and self.fallback_api_key and self.fallback_model)
