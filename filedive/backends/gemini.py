"""Gemini search backend — Google Generative Language API via httpx."""

from __future__ import annotations

import logging

import httpx

from filedive.backends import prompts
from filedive.backends.base import coerce_titles, parse_json_payload
from filedive.config import settings

logger = logging.getLogger(__name__)

GENERATE_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"


class GeminiBackend:
    """Search backend using Google's Gemini models with JSON output."""

    name: str = "Gemini"

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key or settings.google_api_key
        self.model = model or settings.gemini_model
        self.timeout = timeout or settings.request_timeout
        self._transport = transport

    async def content_search(
        self, query: str, file_content: str, file_name: str | None = None
    ) -> str | None:
        prompt = prompts.content_search_prompt(query, file_content, file_name)
        parsed = await self._generate(prompt, prompts.CONTENT_SEARCH_SCHEMA)
        return parsed.get("search_results")

    async def semantic_filter(self, query: str, file_titles: list[str]) -> list[str] | None:
        prompt = prompts.semantic_filter_prompt(query, file_titles)
        parsed = await self._generate(prompt, prompts.SEMANTIC_FILTER_SCHEMA)
        return coerce_titles(parsed.get("relevant_file_titles"))

    async def _generate(self, prompt: str, schema: dict) -> dict:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            response = await client.post(
                GENERATE_URL.format(model=self.model),
                headers={
                    "Content-Type": "application/json",
                    "x-goog-api-key": self.api_key,
                },
                json={
                    "contents": [{"role": "user", "parts": [{"text": prompt}]}],
                    "generationConfig": {
                        "responseMimeType": "application/json",
                        "responseSchema": schema,
                    },
                },
            )
            response.raise_for_status()

        raw_text = self._extract_text(response.json())
        logger.debug("Gemini returned %d chars", len(raw_text))
        return parse_json_payload(raw_text)

    def _extract_text(self, data: dict) -> str:
        """Concatenate the text parts of the first candidate."""
        candidates = data.get("candidates") or []
        if not candidates:
            feedback = data.get("promptFeedback", {})
            raise RuntimeError(f"Gemini returned no candidates: {feedback}")
        parts = candidates[0].get("content", {}).get("parts", [])
        return "".join(p.get("text", "") for p in parts if isinstance(p, dict))
