"""User-facing notification model."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from enum import Enum


class NotificationKind(Enum):
    DUPLICATE_FILE = "duplicate_file"
    OVERSIZED_FILE = "oversized_file"
    UNSUPPORTED_TYPE = "unsupported_type"
    MISSING_FILE = "missing_file"
    READ_FAILED = "read_failed"
    UPLOAD_SUCCESS = "upload_success"
    EMPTY_QUERY = "empty_query"
    SEARCH_IN_PROGRESS = "search_in_progress"
    SEARCH_FAILED = "search_failed"


class Variant(Enum):
    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


@dataclass(frozen=True)
class Notification:
    """A toast-style message: short title plus description."""

    kind: NotificationKind
    title: str
    description: str
    variant: Variant = Variant.DESTRUCTIVE
    file_name: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict:
        data = asdict(self)
        data["kind"] = self.kind.value
        data["variant"] = self.variant.value
        data["created_at"] = self.created_at.isoformat()
        return data
