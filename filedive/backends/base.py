"""Base protocol and shared helpers for hosted-model search backends."""

from __future__ import annotations

import json
from typing import Protocol, runtime_checkable


@runtime_checkable
class SearchBackend(Protocol):
    """Interface every hosted-model provider implements.

    Implementations are free to raise; containment happens in
    ``SearchAdapter``.
    """

    name: str

    async def content_search(
        self, query: str, file_content: str, file_name: str | None = None
    ) -> str | None:
        """Return the passages of ``file_content`` relevant to ``query``."""
        ...

    async def semantic_filter(self, query: str, file_titles: list[str]) -> list[str] | None:
        """Return the subset of ``file_titles`` matching the query's intent."""
        ...


def parse_json_payload(raw_text: str) -> dict:
    """Parse a model's JSON answer, tolerating a surrounding code fence."""
    text = raw_text.strip()
    if text.startswith("```"):
        text = text.split("\n", 1)[1] if "\n" in text else ""
        text = text.rsplit("```", 1)[0]
    parsed = json.loads(text)
    if not isinstance(parsed, dict):
        raise ValueError(f"Expected a JSON object, got {type(parsed).__name__}")
    return parsed


def coerce_titles(value: object) -> list[str] | None:
    """Keep only string entries from a model-provided title list."""
    if value is None:
        return None
    if not isinstance(value, list):
        raise ValueError(f"Expected a list of titles, got {type(value).__name__}")
    return [v for v in value if isinstance(v, str)]
