"""Search request/result models."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class SearchRequest:
    """A single search as submitted by the user."""

    query: str
    use_semantic_search: bool = False


@dataclass(frozen=True)
class SearchResult:
    """File names judged relevant for one query."""

    file_names: frozenset[str] = field(default_factory=frozenset)

    def __contains__(self, name: object) -> bool:
        return name in self.file_names

    def __len__(self) -> int:
        return len(self.file_names)
