"""Exceptions raised inside FileDive."""

from __future__ import annotations


class FileDiveError(Exception):
    """Base class for FileDive errors."""


class EmptyQueryError(FileDiveError, ValueError):
    """The search query is empty or whitespace-only."""


class DuplicateFileError(FileDiveError, ValueError):
    """A file with the same name is already registered."""

    def __init__(self, name: str) -> None:
        super().__init__(f'File "{name}" has already been uploaded.')
        self.name = name


class SearchInProgressError(FileDiveError, RuntimeError):
    """A search was started while another one is still running."""


class UnknownBackendError(FileDiveError, ValueError):
    """The configured hosted-model backend does not exist."""


class FileTooLargeError(FileDiveError, ValueError):
    """A file turned out to exceed the upload size limit once read."""
