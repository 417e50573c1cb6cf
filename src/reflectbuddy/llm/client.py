"""
HTTP client for the external text-generation service.

Talks to any OpenAI-compatible /v1/chat/completions endpoint (Mistral,
Groq, Together, ...). When the primary provider returns 429 and a fallback
provider is configured, the request is retried there once.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import requests

from ..config import Settings

logger = logging.getLogger(__name__)

MODEL_HINT_SMART = "smart"
MODEL_HINT_FAST = "fast"


class GenerationAPIError(Exception):
    """Raised when the generation service fails or returns something unusable."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        super().__init__(f"Generation API error {status_code}: {message}")


@dataclass
class GenerationClient:
    """
    Thin wrapper around /chat/completions.

    Request: a prompt plus a model hint ("smart" or "fast").
    Response: the generated text, or GenerationAPIError for transport
    errors, non-200 statuses and malformed bodies alike.
    """

    settings: Settings = field(default_factory=Settings)
    session: requests.Session = field(default_factory=requests.Session, repr=False)

    @property
    def is_available(self) -> bool:
        """Check if the client has an API key configured."""
        return bool(self.settings.api_key)

    def resolve_model(self, model_hint: str) -> str:
        if model_hint == MODEL_HINT_FAST:
            return self.settings.fast_model
        return self.settings.smart_model

    def _headers(self, api_key: Optional[str] = None) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {api_key or self.settings.api_key}",
            "Content-Type": "application/json",
        }

    def _do_request(
        self,
        url: str,
        body: Dict[str, Any],
        api_key: Optional[str] = None,
    ) -> str:
        """Make a single chat completion request. Returns content or raises."""
        resp = self.session.post(
            url,
            headers=self._headers(api_key),
            json=body,
            timeout=self.settings.timeout,
        )

        if resp.status_code == 200:
            try:
                data = resp.json()
                content = data["choices"][0]["message"]["content"]
            except (ValueError, KeyError, IndexError, TypeError) as e:
                raise GenerationAPIError(502, f"Malformed response body: {e}")
            if not isinstance(content, str):
                raise GenerationAPIError(502, "Response content is not text")
            return content

        if resp.status_code == 429:
            retry_after = resp.headers.get("Retry-After", "?")
            raise GenerationAPIError(429, f"Rate limited (Retry-After: {retry_after}s)")

        raise GenerationAPIError(resp.status_code, resp.text[:200])

    def generate(
        self,
        prompt: str,
        model_hint: str = MODEL_HINT_SMART,
        temperature: float = 0.7,
        max_tokens: int = 300,
    ) -> str:
        """
        Submit a prompt and return the generated text.

        4xx errors fail immediately. 5xx, timeouts and connection errors are
        retried with exponential back-off up to settings.max_retries.
        Raises GenerationAPIError when every attempt fails.
        """
        if not self.is_available:
            raise GenerationAPIError(401, "No API key configured")

        body: Dict[str, Any] = {
            "model": self.resolve_model(model_hint),
            "messages": [{"role": "user", "content": prompt}],
            "temperature": temperature,
            "max_tokens": max_tokens,
        }
        url = f"{self.settings.base_url}/chat/completions"

        last_error: Optional[GenerationAPIError] = None
        for attempt in range(self.settings.max_retries + 1):
            try:
                return self._do_request(url, body)
            except GenerationAPIError as e:
                if e.status_code == 429:
                    return self._try_fallback_provider(body, e)
                if 400 <= e.status_code < 500:
                    raise
                last_error = e
            except requests.exceptions.Timeout:
                logger.warning(
                    f"[GenerationClient] Request timed out "
                    f"(attempt {attempt + 1}/{self.settings.max_retries + 1})"
                )
                last_error = GenerationAPIError(408, "Request timed out")
            except requests.exceptions.RequestException as e:
                logger.warning(f"[GenerationClient] Connection error: {e}")
                last_error = GenerationAPIError(0, f"Connection error: {e}")

            if attempt < self.settings.max_retries:
                time.sleep(2 ** attempt)

        raise last_error  # type: ignore

    def _try_fallback_provider(
        self, body: Dict[str, Any], primary_error: GenerationAPIError
    ) -> str:
        if not self.settings.has_fallback_provider:
            logger.warning("[GenerationClient] Rate limited (429), no fallback provider")
            raise primary_error

        fb_url = f"{self.settings.fallback_base_url}/chat/completions"
        fb_body = {**body, "model": self.settings.fallback_model}
        logger.info(f"[GenerationClient] Primary rate-limited, trying fallback ({fb_url})")
        try:
            return self._do_request(fb_url, fb_body, api_key=self.settings.fallback_api_key)
        except (GenerationAPIError, requests.exceptions.RequestException) as fb_e:
            logger.warning(f"[GenerationClient] Fallback also failed: {fb_e}")
            raise primary_error


def build_generation_client(settings: Optional[Settings] = None) -> Optional[GenerationClient]:
    """Create a client, or None when no API key is configured."""
    settings = settings or Settings.from_env()
    client = GenerationClient(settings=settings)
    if not client.is_available:
        logger.warning("[GenerationClient] No API key configured, using fallback replies only")
        return None
    return client
