"""Search session — upload/search lifecycle state and the filtered file view."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

from filedive.errors import EmptyQueryError, SearchInProgressError
from filedive.models.notification import Notification, NotificationKind
from filedive.models.search import SearchRequest
from filedive.models.uploaded_file import IncomingFile, UploadedFile
from filedive.orchestrator.dispatcher import QueryDispatcher
from filedive.orchestrator.intake import DEFAULT_MAX_UPLOAD_BYTES, FileIntake, IntakeReport
from filedive.orchestrator.notifier import Notifier
from filedive.store.registry import FileRegistry

logger = logging.getLogger(__name__)


class SearchStatus(Enum):
    OK = "ok"
    EMPTY_QUERY = "empty_query"
    BUSY = "busy"
    FAILED = "failed"


@dataclass
class SearchOutcome:
    status: SearchStatus
    files_found: list[str] = field(default_factory=list)
    notifications: list[Notification] = field(default_factory=list)


class FileDiveSession:
    """Owns the registry and drives intake and search for one running app."""

    def __init__(
        self,
        registry: FileRegistry,
        intake: FileIntake,
        dispatcher: QueryDispatcher,
        notifier: Notifier,
    ) -> None:
        self.registry = registry
        self.intake = intake
        self.dispatcher = dispatcher
        self.notifier = notifier

        self.query: str = ""
        self.files_found: list[str] = []
        self.has_searched = False
        self.is_searching = False

    @classmethod
    def create(
        cls, dispatcher: QueryDispatcher, max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES
    ) -> FileDiveSession:
        """Wire a fresh, empty session around ``dispatcher``."""
        registry = FileRegistry()
        notifier = Notifier()
        intake = FileIntake(registry, notifier, max_upload_bytes)
        return cls(registry, intake, dispatcher, notifier)

    async def upload(self, files: Iterable[IncomingFile]) -> IntakeReport:
        return await self.intake.ingest(files)

    async def search(self, query: str, use_semantic_search: bool = False) -> SearchOutcome:
        if not query.strip():
            note = await self._notify(
                NotificationKind.EMPTY_QUERY, "Empty Search Query", "Please enter a search query."
            )
            return SearchOutcome(SearchStatus.EMPTY_QUERY, notifications=[note])

        try:
            self._begin_search(query)
        except SearchInProgressError as exc:
            note = await self._notify(
                NotificationKind.SEARCH_IN_PROGRESS, "Search In Progress", str(exc)
            )
            return SearchOutcome(SearchStatus.BUSY, notifications=[note])

        request = SearchRequest(query=query, use_semantic_search=use_semantic_search)

        try:
            result = await self.dispatcher.search(request, self.registry.snapshot())
        except EmptyQueryError as exc:
            note = await self._notify(NotificationKind.EMPTY_QUERY, "Empty Search Query", str(exc))
            return SearchOutcome(SearchStatus.EMPTY_QUERY, notifications=[note])
        except Exception as exc:
            logger.exception("Search failed for query %r", query)
            message = str(exc) or "An unexpected error occurred."
            note = await self._notify(
                NotificationKind.SEARCH_FAILED, "Search Failed", f"Search failed. {message}"
            )
            return SearchOutcome(SearchStatus.FAILED, notifications=[note])
        finally:
            self.is_searching = False

        # Keep registry order so the rendered list is stable.
        self.files_found = [name for name in self.registry.names() if name in result]
        return SearchOutcome(SearchStatus.OK, files_found=list(self.files_found))

    def _begin_search(self, query: str) -> None:
        if self.is_searching:
            raise SearchInProgressError("Please wait for the current search to finish.")
        self.is_searching = True
        self.query = query
        self.files_found = []
        self.has_searched = True

    def visible_files(self) -> list[UploadedFile]:
        """Registry contents filtered by the last search, or everything before one."""
        if not self.query:
            return list(self.registry.snapshot())
        found = set(self.files_found)
        return [f for f in self.registry.snapshot() if f.name in found]

    @property
    def show_no_files_message(self) -> bool:
        return self.has_searched and not self.visible_files() and len(self.registry) > 0

    async def _notify(self, kind: NotificationKind, title: str, description: str) -> Notification:
        return await self.notifier.emit(
            Notification(kind=kind, title=title, description=description)
        )
