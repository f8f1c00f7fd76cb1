"""
llm.py
------
Text-completion clients used by the LLM route planner and the narration tool.

  HttpCompletionClient   — POST {"messages": [...]} → {"completion": "..."}
  GeminiCompletionClient — google-genai generate_content()

Every failure (transport, HTTP status, payload shape, empty text) is raised
as LLMError so callers can catch one exception type.
"""

from __future__ import annotations
from typing import Optional, Protocol

import requests
from google import genai

from tourguide import config


class LLMError(RuntimeError):
    """Completion request failed or returned an unusable payload."""


class CompletionClient(Protocol):
    def complete(self, prompt: str, system: str = "") -> str:
        ...


class HttpCompletionClient:
    """Chat-style completion endpoint returning a single completion string."""

    def __init__(
        self,
        api_key: str = "",
        url: str = config.LLM_COMPLETION_URL,
        timeout: int = config.LLM_REQUEST_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key
        self.url     = url
        self.timeout = timeout
        self.session = session or requests.Session()

    def complete(self, prompt: str, system: str = "") -> str:
        messages = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})

        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        try:
            res = self.session.post(
                self.url, json={"messages": messages}, headers=headers, timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise LLMError(f"completion request failed: {exc}") from exc

        if not res.ok:
            raise LLMError(f"completion endpoint returned HTTP {res.status_code}")

        try:
            data = res.json()
        except ValueError as exc:
            raise LLMError("completion response is not JSON") from exc

        completion = data.get("completion") if isinstance(data, dict) else None
        if not isinstance(completion, str) or not completion.strip():
            raise LLMError("completion response has no 'completion' string")
        return completion.strip()


class GeminiCompletionClient:
    """Google Gemini via the google-genai SDK."""

    def __init__(self, api_key: str, model_name: str = config.LLM_MODEL_NAME):
        self.client     = genai.Client(api_key=api_key)
        self.model_name = model_name

    def complete(self, prompt: str, system: str = "") -> str:
        contents = f"{system}\n\n{prompt}" if system else prompt
        try:
            response = self.client.models.generate_content(
                model=self.model_name,
                contents=contents,
            )
        except Exception as exc:
            raise LLMError(f"Gemini request failed: {exc}") from exc

        if not response or not response.text:
            raise LLMError("Empty Gemini response")
        return response.text.strip()


def build_completion_client(
    api_key: Optional[str] = None,
    provider: Optional[str] = None,
) -> Optional[CompletionClient]:
    """Client for the configured provider, or None when no credential is set."""
    api_key = config.LLM_API_KEY if api_key is None else api_key
    provider = (provider or config.LLM_PROVIDER).lower()
    if not api_key.strip():
        return None
    if provider == "google":
        return GeminiCompletionClient(api_key=api_key)
    if provider == "http":
        return HttpCompletionClient(api_key=api_key)
    raise ValueError(f"Unknown LLM_PROVIDER {provider!r} (expected 'http' or 'google')")
