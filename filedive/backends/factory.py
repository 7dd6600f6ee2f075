"""Pick the hosted-model backend named in settings."""

from __future__ import annotations

from filedive.backends.base import SearchBackend
from filedive.backends.claude import ClaudeBackend
from filedive.backends.gemini import GeminiBackend
from filedive.config import Settings
from filedive.errors import UnknownBackendError

BACKEND_NAMES = ("gemini", "claude")


def build_backend(config: Settings) -> SearchBackend:
    name = config.backend.lower()
    if name == "gemini":
        return GeminiBackend(
            api_key=config.google_api_key,
            model=config.gemini_model,
            timeout=config.request_timeout,
        )
    if name == "claude":
        return ClaudeBackend(
            api_key=config.anthropic_api_key,
            model=config.claude_model,
            timeout=config.request_timeout,
        )
    raise UnknownBackendError(
        f"Unknown backend {config.backend!r}; expected one of {', '.join(BACKEND_NAMES)}"
    )
