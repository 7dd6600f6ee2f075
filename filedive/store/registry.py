"""In-memory file registry for the running session."""

from __future__ import annotations

from collections.abc import Iterator

from filedive.errors import DuplicateFileError
from filedive.models.uploaded_file import UploadedFile


class FileRegistry:
    """Ordered, append-only collection of uploaded files keyed by name.

    Lives for the lifetime of the process; there is no delete.
    """

    def __init__(self) -> None:
        self._files: list[UploadedFile] = []
        self._by_name: dict[str, UploadedFile] = {}

    # -- Writes --

    def add(self, file: UploadedFile) -> UploadedFile:
        if file.name in self._by_name:
            raise DuplicateFileError(file.name)
        self._files.append(file)
        self._by_name[file.name] = file
        return file

    # -- Reads --

    def get(self, name: str) -> UploadedFile | None:
        return self._by_name.get(name)

    def snapshot(self) -> tuple[UploadedFile, ...]:
        """Consistent copy of the current contents, in upload order."""
        return tuple(self._files)

    def names(self) -> list[str]:
        return [f.name for f in self._files]

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __iter__(self) -> Iterator[UploadedFile]:
        return iter(self.snapshot())

    def __len__(self) -> int:
        return len(self._files)
