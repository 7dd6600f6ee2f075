"""Uploaded file data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Protocol, runtime_checkable
from uuid import uuid4


def _new_id() -> str:
    return uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class UploadedFile:
    """A file accepted into the registry. Never mutated after creation."""

    name: str
    content: str
    type: str | None = None
    upload_date: datetime = field(default_factory=_utcnow)
    id: str = field(default_factory=_new_id)


@runtime_checkable
class IncomingFile(Protocol):
    """Anything intake can consume. FastAPI's ``UploadFile`` fits."""

    filename: str | None
    size: int | None
    content_type: str | None

    async def read(self) -> bytes:
        ...


@dataclass
class RawFile:
    """An in-memory ``IncomingFile``."""

    filename: str | None
    data: bytes = b""
    content_type: str | None = None
    size: int | None = None

    def __post_init__(self) -> None:
        if self.size is None:
            self.size = len(self.data)

    async def read(self) -> bytes:
        return self.data
