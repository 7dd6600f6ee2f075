import asyncio

import pytest

from conftest import FakeBackend
from filedive.backends.adapter import SearchAdapter
from filedive.errors import SearchInProgressError
from filedive.models.notification import NotificationKind
from filedive.models.search import SearchResult
from filedive.models.uploaded_file import RawFile
from filedive.orchestrator.dispatcher import QueryDispatcher
from filedive.orchestrator.session import FileDiveSession, SearchStatus


class FlakyDispatcher(QueryDispatcher):
    """Fails the first search, then behaves normally."""

    def __init__(self, adapter):
        super().__init__(adapter)
        self.calls = 0

    async def search(self, request, files):
        self.calls += 1
        if self.calls == 1:
            raise RuntimeError("lost a per-file result")
        return await super().search(request, files)


@pytest.mark.asyncio
async def test_visible_files_before_any_search(session):
    assert [f.name for f in session.visible_files()] == ["a.txt", "b.txt"]
    assert not session.show_no_files_message


@pytest.mark.asyncio
async def test_search_filters_visible_files(session, backend):
    outcome = await session.search('"budget"')

    assert outcome.status is SearchStatus.OK
    assert outcome.files_found == ["a.txt"]
    assert [f.name for f in session.visible_files()] == ["a.txt"]
    assert session.has_searched
    assert not session.is_searching


@pytest.mark.asyncio
async def test_empty_query_notifies_and_makes_no_calls(session, backend):
    outcome = await session.search("   ")

    assert outcome.status is SearchStatus.EMPTY_QUERY
    assert outcome.notifications[0].kind is NotificationKind.EMPTY_QUERY
    assert outcome.notifications[0].title == "Empty Search Query"
    assert backend.content_calls == []
    assert not session.has_searched


@pytest.mark.asyncio
async def test_no_matches_shows_no_files_message(session):
    await session.search("quarterly forecast")

    assert session.visible_files() == []
    assert session.show_no_files_message


@pytest.mark.asyncio
async def test_failure_is_reported_and_retry_matches_clean_run(session, backend):
    clean = await session.search('"budget"')

    flaky = FileDiveSession(
        session.registry, session.intake, FlakyDispatcher(SearchAdapter(backend)), session.notifier
    )
    failed = await flaky.search('"budget"')

    assert failed.status is SearchStatus.FAILED
    assert failed.notifications[0].kind is NotificationKind.SEARCH_FAILED
    assert failed.notifications[0].description == "Search failed. lost a per-file result"
    assert not flaky.is_searching
    assert flaky.visible_files() == []

    retried = await flaky.search('"budget"')

    assert retried.status is SearchStatus.OK
    assert retried.files_found == clean.files_found


@pytest.mark.asyncio
async def test_overlapping_search_is_refused(session):
    gate = asyncio.Event()

    class BlockingDispatcher(QueryDispatcher):
        async def search(self, request, files):
            await gate.wait()
            return SearchResult(frozenset({"a.txt"}))

    session.dispatcher = BlockingDispatcher(session.dispatcher.adapter)
    first = asyncio.create_task(session.search("budget"))
    await asyncio.sleep(0)

    second = await session.search("budget")
    gate.set()
    first_outcome = await first

    assert second.status is SearchStatus.BUSY
    assert second.notifications[0].kind is NotificationKind.SEARCH_IN_PROGRESS
    assert first_outcome.files_found == ["a.txt"]


@pytest.mark.asyncio
async def test_registry_changes_between_searches_are_picked_up(session):
    backend = FakeBackend(matches={"a.txt": "budget", "c.txt": "budget again"})

    session.dispatcher = QueryDispatcher(SearchAdapter(backend))

    first = await session.search("budget")
    await session.upload([RawFile("c.txt", b"another budget line")])
    second = await session.search("budget")

    assert first.files_found == ["a.txt"]
    assert second.files_found == ["a.txt", "c.txt"]


def test_begin_search_refuses_overlap(session):
    session._begin_search("budget")

    with pytest.raises(SearchInProgressError):
        session._begin_search("budget")

    assert session.is_searching
