"""File intake — validates dropped files and reads them into the registry."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from filedive.errors import DuplicateFileError, FileTooLargeError
from filedive.models.notification import Notification, NotificationKind, Variant
from filedive.models.uploaded_file import IncomingFile, UploadedFile
from filedive.orchestrator import filetypes
from filedive.orchestrator.notifier import Notifier
from filedive.store.registry import FileRegistry

logger = logging.getLogger(__name__)

DEFAULT_MAX_UPLOAD_BYTES = 1_000_000_000

LARGE_FILE_DESCRIPTION = (
    "Large files are unsupported (e.g., chunked uploads for files >1GB). "
    "Support for large files is coming soon."
)


@dataclass
class IntakeReport:
    """Outcome of one intake batch."""

    accepted: list[UploadedFile] = field(default_factory=list)
    rejected: list[Notification] = field(default_factory=list)
    notifications: list[Notification] = field(default_factory=list)


class FileIntake:
    """Turns a batch of incoming files into registry records.

    Validation runs in batch order; the reads of all files that pass are
    fanned out concurrently and joined before anything is registered.
    """

    def __init__(
        self,
        registry: FileRegistry,
        notifier: Notifier,
        max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES,
    ) -> None:
        self.registry = registry
        self.notifier = notifier
        self.max_upload_bytes = max_upload_bytes
        self.uploading: set[str] = set()

    async def ingest(self, files: Iterable[IncomingFile]) -> IntakeReport:
        report = IntakeReport()
        to_read: list[IncomingFile] = []
        claimed: set[str] = set()
        has_large_file = False

        for file in files:
            name = file.filename
            if not name:
                await self._reject(report, NotificationKind.MISSING_FILE,
                                   "No File Selected", "No file selected.")
                continue

            if name in self.registry or name in claimed or name in self.uploading:
                await self._reject(
                    report, NotificationKind.DUPLICATE_FILE,
                    "File Already Uploaded",
                    f'File "{name}" has already been uploaded.', name,
                )
                continue

            if file.size is not None and file.size > self.max_upload_bytes:
                logger.warning("Rejected %s: %s bytes over limit", name, file.size)
                has_large_file = True
                continue

            if filetypes.is_media_type(file.content_type):
                await self._reject(
                    report, NotificationKind.UNSUPPORTED_TYPE,
                    "File Type Unsupported", "The app will accept this type soon!", name,
                )
                continue

            if not filetypes.is_allowed(name):
                await self._reject(
                    report, NotificationKind.UNSUPPORTED_TYPE,
                    "Unsupported File Type", "The app will accept this type soon!", name,
                )
                continue

            claimed.add(name)
            to_read.append(file)

        if to_read and await self._read_all(to_read, report):
            has_large_file = True

        if has_large_file:
            await self._reject(
                report, NotificationKind.OVERSIZED_FILE,
                "Large File Unsupported", LARGE_FILE_DESCRIPTION,
            )

        return report

    async def _read_all(self, files: list[IncomingFile], report: IntakeReport) -> bool:
        """Read a batch concurrently; True if any file of unknown size was too large."""
        names = [f.filename for f in files]
        self.uploading.update(names)
        try:
            outcomes = await asyncio.gather(
                *[self._read(f) for f in files], return_exceptions=True
            )
        finally:
            self.uploading.difference_update(names)

        has_large_file = False
        for file, outcome in zip(files, outcomes):
            name = file.filename
            if isinstance(outcome, FileTooLargeError):
                logger.warning("Rejected %s: %s", name, outcome)
                has_large_file = True
                continue
            if isinstance(outcome, BaseException):
                logger.error("Failed to read %s: %s", name, outcome)
                await self._reject(
                    report, NotificationKind.READ_FAILED,
                    "File Read Failed", f"Could not read {name}: {outcome}", name,
                )
                continue

            uploaded = UploadedFile(name=name, content=outcome, type=file.content_type)
            try:
                self.registry.add(uploaded)
            except DuplicateFileError as exc:
                await self._reject(
                    report, NotificationKind.DUPLICATE_FILE,
                    "File Already Uploaded", str(exc), name,
                )
                continue

            logger.info("Uploaded %s (%d chars)", name, len(outcome))
            report.accepted.append(uploaded)
            report.notifications.append(
                await self.notifier.emit(
                    Notification(
                        kind=NotificationKind.UPLOAD_SUCCESS,
                        title="File Uploaded",
                        description=f"File {name} uploaded successfully.",
                        variant=Variant.DEFAULT,
                        file_name=name,
                    )
                )
            )

        return has_large_file

    async def _read(self, file: IncomingFile) -> str:
        """Read and decode a file the way a browser's readAsText does."""
        data = await file.read()
        if file.size is None and len(data) > self.max_upload_bytes:
            raise FileTooLargeError(f"{len(data)} bytes over limit")
        text = data.decode("utf-8", errors="replace")
        return filetypes.normalize_content(file.filename, text)

    async def _reject(
        self,
        report: IntakeReport,
        kind: NotificationKind,
        title: str,
        description: str,
        file_name: str | None = None,
    ) -> None:
        if file_name:
            logger.warning("Rejected %s: %s", file_name, title)
        notification = await self.notifier.emit(
            Notification(kind=kind, title=title, description=description, file_name=file_name)
        )
        report.rejected.append(notification)
        report.notifications.append(notification)
