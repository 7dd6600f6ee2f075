"""FileDive — FastAPI application entry point."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI, File, Request, UploadFile, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from filedive.backends.adapter import SearchAdapter
from filedive.backends.factory import build_backend
from filedive.config import Settings, settings
from filedive.models.notification import Notification
from filedive.models.uploaded_file import UploadedFile
from filedive.orchestrator import filetypes
from filedive.orchestrator.dispatcher import QueryDispatcher
from filedive.orchestrator.session import FileDiveSession

logger = logging.getLogger(__name__)


def build_session(config: Settings) -> FileDiveSession:
    adapter = SearchAdapter(build_backend(config))
    logger.info("Using %s backend", adapter.name)
    return FileDiveSession.create(QueryDispatcher(adapter), config.max_upload_bytes)


# --- Request / Response models ---


class FileInfo(BaseModel):
    id: str
    name: str
    upload_date: datetime
    type: str | None = None
    content_length: int

    @classmethod
    def from_file(cls, file: UploadedFile) -> FileInfo:
        return cls(
            id=file.id,
            name=file.name,
            upload_date=file.upload_date,
            type=file.type,
            content_length=len(file.content),
        )


class UploadResponse(BaseModel):
    accepted: list[FileInfo]
    rejected: list[dict]
    notifications: list[dict]


class FileListResponse(BaseModel):
    files: list[FileInfo]
    uploading: list[str]


class SearchRequestBody(BaseModel):
    query: str
    use_semantic_search: bool = False


class SearchResponse(BaseModel):
    status: str
    files_found: list[str]
    files: list[FileInfo]
    notifications: list[dict]


class ResultsResponse(BaseModel):
    visible_files: list[FileInfo]
    has_searched: bool
    is_searching: bool
    show_no_files_message: bool


def _dump(notifications: list[Notification]) -> list[dict]:
    return [n.to_dict() for n in notifications]


def create_app(session: FileDiveSession | None = None, config: Settings = settings) -> FastAPI:
    """Build the app; a session can be injected, otherwise one is built from config."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if getattr(app.state, "session", None) is None:
            app.state.session = build_session(config)
        yield

    app = FastAPI(
        title="FileDive",
        description="Upload files and search their content with a hosted LLM",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.session = session

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    def _session(request: Request) -> FileDiveSession:
        return request.app.state.session

    # --- Routes ---

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    @app.get("/api/file-types")
    async def file_types():
        return {
            "accept": filetypes.ACCEPTED_TYPES,
            "max_upload_bytes": config.max_upload_bytes,
        }

    @app.post("/api/files", response_model=UploadResponse)
    async def upload_files(request: Request, files: list[UploadFile] = File(...)):
        """Run a dropped batch through intake."""
        report = await _session(request).upload(files)
        return UploadResponse(
            accepted=[FileInfo.from_file(f) for f in report.accepted],
            rejected=_dump(report.rejected),
            notifications=_dump(report.notifications),
        )

    @app.get("/api/files", response_model=FileListResponse)
    async def list_files(request: Request):
        session = _session(request)
        return FileListResponse(
            files=[FileInfo.from_file(f) for f in session.registry],
            uploading=sorted(session.intake.uploading),
        )

    @app.post("/api/search", response_model=SearchResponse)
    async def search(request: Request, body: SearchRequestBody):
        """Search every uploaded file.

        Handled conditions (empty query, overlapping search, failure) come
        back as a status plus notifications rather than an HTTP error.
        """
        session = _session(request)
        outcome = await session.search(body.query, body.use_semantic_search)
        return SearchResponse(
            status=outcome.status.value,
            files_found=outcome.files_found,
            files=[FileInfo.from_file(f) for f in session.visible_files()],
            notifications=_dump(outcome.notifications),
        )

    @app.get("/api/results", response_model=ResultsResponse)
    async def results(request: Request):
        session = _session(request)
        return ResultsResponse(
            visible_files=[FileInfo.from_file(f) for f in session.visible_files()],
            has_searched=session.has_searched,
            is_searching=session.is_searching,
            show_no_files_message=session.show_no_files_message,
        )

    # --- WebSocket ---

    @app.websocket("/ws/notifications")
    async def notifications_ws(websocket: WebSocket):
        """Stream every notification to the client as it is emitted."""
        await websocket.accept()
        notifier = websocket.app.state.session.notifier

        async def _forward(notification: Notification) -> None:
            await websocket.send_json(notification.to_dict())

        notifier.add_listener(_forward)
        try:
            while True:
                await websocket.receive_text()
        except WebSocketDisconnect:
            pass
        finally:
            notifier.remove_listener(_forward)

    return app


app = create_app()
