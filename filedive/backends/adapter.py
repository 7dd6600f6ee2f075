"""Search adapter — the boundary that keeps backend failures contained.

Callers of ``SearchAdapter`` never see an exception from the hosted model.
Failures come back as tagged outputs: an error-marker string for content
search, an empty title list for the semantic filter.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from filedive.backends.base import SearchBackend
from filedive.backends.prompts import NO_RESULTS

logger = logging.getLogger(__name__)

ERROR_MARKER = "Error during file content search"


@dataclass(frozen=True)
class ContentSearchOutput:
    search_results: str
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None

    @property
    def is_match(self) -> bool:
        """A non-empty answer that is neither an error nor the no-results sentinel."""
        return (
            bool(self.search_results)
            and ERROR_MARKER not in self.search_results
            and self.search_results != NO_RESULTS
        )


@dataclass(frozen=True)
class SemanticFilterOutput:
    relevant_file_titles: list[str] = field(default_factory=list)
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None


class SearchAdapter:
    """Wraps a ``SearchBackend`` with output shaping and failure containment."""

    def __init__(self, backend: SearchBackend) -> None:
        self.backend = backend

    @property
    def name(self) -> str:
        return self.backend.name

    async def content_search(
        self, query: str, file_content: str, file_name: str | None = None
    ) -> ContentSearchOutput:
        try:
            results = await self.backend.content_search(query, file_content, file_name)
        except Exception as exc:
            logger.error("Content search failed for %s via %s: %s", file_name, self.name, exc)
            return ContentSearchOutput(
                search_results=(
                    f"{ERROR_MARKER}. Please check the server logs for more details. {exc}"
                ),
                error=str(exc),
            )
        if not results:
            return ContentSearchOutput(search_results=NO_RESULTS)
        return ContentSearchOutput(search_results=str(results))

    async def semantic_filter(self, query: str, file_titles: list[str]) -> SemanticFilterOutput:
        try:
            titles = await self.backend.semantic_filter(query, file_titles)
        except Exception as exc:
            logger.error("Semantic filter failed via %s: %s", self.name, exc)
            return SemanticFilterOutput(relevant_file_titles=[], error=str(exc))
        return SemanticFilterOutput(relevant_file_titles=list(titles or []))
