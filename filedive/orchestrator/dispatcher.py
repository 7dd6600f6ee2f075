"""Query dispatcher — fans a search out across every registered file."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

from filedive.backends.adapter import SearchAdapter
from filedive.errors import EmptyQueryError
from filedive.models.search import SearchRequest, SearchResult
from filedive.models.uploaded_file import UploadedFile

logger = logging.getLogger(__name__)


class QueryDispatcher:
    """Runs the semantic-filter -> content-search pipeline for each file in parallel."""

    def __init__(self, adapter: SearchAdapter) -> None:
        self.adapter = adapter

    async def search(
        self, request: SearchRequest, files: Sequence[UploadedFile]
    ) -> SearchResult:
        """Evaluate every file concurrently and return the matching names.

        Raises EmptyQueryError before any backend call for a blank query.
        Every per-file evaluation settles before the first exception, if
        any, is re-raised to the caller.
        """
        if not request.query.strip():
            raise EmptyQueryError("Please enter a search query.")

        snapshot = tuple(files)
        logger.info(
            "Searching %d files (semantic=%s)", len(snapshot), request.use_semantic_search
        )
        outcomes = await asyncio.gather(
            *[self._evaluate(request, f) for f in snapshot], return_exceptions=True
        )

        errors: list[BaseException] = []
        matched: set[str] = set()
        for file, outcome in zip(snapshot, outcomes):
            if isinstance(outcome, BaseException):
                logger.error("Evaluating %s failed: %s", file.name, outcome)
                errors.append(outcome)
            elif outcome is not None:
                matched.add(outcome)

        # Every chain has settled; surface the first failure to the caller.
        if errors:
            raise errors[0]

        logger.info("Search matched %d of %d files", len(matched), len(snapshot))
        return SearchResult(file_names=frozenset(matched))

    async def _evaluate(self, request: SearchRequest, file: UploadedFile) -> str | None:
        """Return the file name if it matches, otherwise None."""
        if request.use_semantic_search:
            semantic = await self.adapter.semantic_filter(request.query, [file.name])
            if not semantic.relevant_file_titles:
                logger.debug("Semantic filter excluded %s", file.name)
                return None

        output = await self.adapter.content_search(request.query, file.content, file.name)
        if output.is_match:
            return file.name
        return None
