"""line_snipe data models. Every struct that flows in or out of a search."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from .errors import InitializationError, SearchError
from .matcher import normalize_pattern

# Defaults for a bare request; the CLI overrides them per run
DEFAULT_CHUNK_SIZE = 1000
DEFAULT_WORKERS = 1

# Matching lines of one file (or one directory subtree, concatenated)
MatchSet = list[str]


class FindAction(Enum):
    """What the caller wants rendered from a finished search."""

    PRINT_LINE = "print"
    PRINT_FILE_NAME = "file"
    BOOLEAN = "boolean"

    @classmethod
    def parse(cls, value: str) -> FindAction:
        for action in cls:
            if action.value == value:
                return action
        raise InitializationError(f"action {value} is invalid")


@dataclass(frozen=True)
class SearchRequest:
    """
    One search invocation. Built once, read-only afterwards.

    A case-insensitive request stores its pattern already lowercased, so the
    matcher never re-derives it per line. ``workers`` of 0 or 1 selects the
    sequential path.
    """

    path: Path
    pattern: str
    case_insensitive: bool = False
    action: FindAction = FindAction.PRINT_LINE
    chunk_size: int = DEFAULT_CHUNK_SIZE
    workers: int = DEFAULT_WORKERS

    def __post_init__(self) -> None:
        object.__setattr__(self, "path", Path(self.path))
        if not isinstance(self.action, FindAction):
            object.__setattr__(self, "action", FindAction.parse(self.action))
        object.__setattr__(self, "pattern", normalize_pattern(self.pattern, self.case_insensitive))
        if self.chunk_size < 1:
            raise InitializationError(f"chunk size must be at least 1, got {self.chunk_size}")
        if self.workers < 0:
            raise InitializationError(f"worker count must not be negative, got {self.workers}")

    @property
    def sequential(self) -> bool:
        return self.workers <= 1


@dataclass
class FileHit:
    """All matching lines of a single file."""

    path: str
    matches: MatchSet


@dataclass
class EntryError:
    """A directory entry that could not be searched. Traversal went on without it."""

    path: str
    error: SearchError

    @property
    def message(self) -> str:
        return str(self.error)


@dataclass
class SearchResult:
    """Complete search result."""

    pattern: str
    hits: list[FileHit] = field(default_factory=list)
    errors: list[EntryError] = field(default_factory=list)
    files_searched: int = 0
    search_time_ms: float = 0.0

    @property
    def matches(self) -> MatchSet:
        """Every matching line, concatenated in hit order."""
        return [line for hit in self.hits for line in hit.matches]

    @property
    def matched(self) -> bool:
        return any(hit.matches for hit in self.hits)

    @property
    def complete(self) -> bool:
        """True when no directory entry had to be skipped."""
        return not self.errors

    def to_dict(self) -> dict[str, Any]:
        """JSON-serializable dict."""
        from .formatters import to_json
        return to_json(self)
