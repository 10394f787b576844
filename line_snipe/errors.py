"""
errors.py - Everything a search can fail with.

SearchError
  PathNotFound         target does not exist (checked before any reading)
  ReadError            wraps an OSError / decode failure from a file or dir
  InitializationError  invalid request (bad action, chunk size, workers)
  SearchCancelled      stopped through Search.cancel()
"""

from __future__ import annotations


class SearchError(Exception):
    """Base class for all line_snipe errors."""


class PathNotFound(SearchError):
    def __init__(self, path: str):
        super().__init__(f"Path not found: {path}")
        self.path = path


class ReadError(SearchError):
    """An underlying I/O failure while opening, reading or listing *path*."""

    def __init__(self, path: str, cause: Exception):
        super().__init__(f"Read error: {path}: {cause}")
        self.path = path
        self.cause = cause


class InitializationError(SearchError):
    def __init__(self, message: str):
        super().__init__(f"Initialization error: {message}")


class SearchCancelled(SearchError):
    def __init__(self, path: str):
        super().__init__(f"Search cancelled: {path}")
        self.path = path
