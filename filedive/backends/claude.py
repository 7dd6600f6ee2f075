"""Claude search backend — Anthropic API via httpx."""

from __future__ import annotations

import logging

import httpx

from filedive.backends import prompts
from filedive.backends.base import coerce_titles, parse_json_payload
from filedive.config import settings

logger = logging.getLogger(__name__)

ANTHROPIC_API_URL = "https://api.anthropic.com/v1/messages"

SYSTEM_PROMPT = "You answer search requests over user files. Respond with valid JSON only."


class ClaudeBackend:
    """Search backend using Anthropic's Claude API."""

    name: str = "Claude"

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key or settings.anthropic_api_key
        self.model = model or settings.claude_model
        self.timeout = timeout or settings.request_timeout
        self._transport = transport

    async def content_search(
        self, query: str, file_content: str, file_name: str | None = None
    ) -> str | None:
        raw_text = await self._complete(
            prompts.content_search_prompt(query, file_content, file_name)
        )
        try:
            parsed = parse_json_payload(raw_text)
        except ValueError as exc:
            logger.warning("Failed to parse structured response, using raw text: %s", exc)
            return raw_text.strip()
        return parsed.get("search_results")

    async def semantic_filter(self, query: str, file_titles: list[str]) -> list[str] | None:
        raw_text = await self._complete(prompts.semantic_filter_prompt(query, file_titles))
        parsed = parse_json_payload(raw_text)
        return coerce_titles(parsed.get("relevant_file_titles"))

    async def _complete(self, user_content: str) -> str:
        """Send one user message and return the first text block."""
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            response = await client.post(
                ANTHROPIC_API_URL,
                headers={
                    "x-api-key": self.api_key,
                    "anthropic-version": "2023-06-01",
                    "content-type": "application/json",
                },
                json={
                    "model": self.model,
                    "max_tokens": 4096,
                    "system": SYSTEM_PROMPT,
                    "messages": [{"role": "user", "content": user_content}],
                },
            )
            response.raise_for_status()

        data = response.json()
        raw_text = ""
        for block in data.get("content", []):
            if block.get("type") == "text":
                raw_text = block["text"]
                break
        logger.debug("Claude returned %d chars", len(raw_text))
        return raw_text
