import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from filedive.backends.adapter import SearchAdapter
from filedive.backends.prompts import NO_RESULTS
from filedive.models.uploaded_file import UploadedFile
from filedive.orchestrator.dispatcher import QueryDispatcher
from filedive.orchestrator.session import FileDiveSession


class FakeBackend:
    """Stub hosted model: answers from lookup tables and counts calls."""

    name = "Fake"

    def __init__(self, matches=None, relevant=None, fail_content=(), fail_semantic=False):
        # file name -> search_results text; anything else gets NO_RESULTS
        self.matches = matches or {}
        # file name -> titles returned by the semantic filter
        self.relevant = relevant or {}
        self.fail_content = set(fail_content)
        self.fail_semantic = fail_semantic
        self.content_calls = []
        self.semantic_calls = []

    async def content_search(self, query, file_content, file_name=None):
        self.content_calls.append((query, file_content, file_name))
        if file_name in self.fail_content:
            raise RuntimeError("model unavailable")
        return self.matches.get(file_name, NO_RESULTS)

    async def semantic_filter(self, query, file_titles):
        self.semantic_calls.append((query, list(file_titles)))
        if self.fail_semantic:
            raise RuntimeError("model unavailable")
        titles = []
        for title in file_titles:
            titles.extend(self.relevant.get(title, []))
        return titles


BUDGET_FILES = [
    UploadedFile(name="a.txt", content="The budget is approved", type="text/plain"),
    UploadedFile(name="b.txt", content="Lunch menu", type="text/plain"),
]


@pytest.fixture
def backend():
    return FakeBackend(matches={"a.txt": "The budget is approved"})


@pytest.fixture
def dispatcher(backend):
    return QueryDispatcher(SearchAdapter(backend))


@pytest.fixture
def session(dispatcher):
    session = FileDiveSession.create(dispatcher)
    for file in BUDGET_FILES:
        session.registry.add(file)
    return session


@pytest_asyncio.fixture
async def test_client(session):
    from filedive.main import create_app

    app = create_app(session=session)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
