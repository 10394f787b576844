"""
dir_sweep.py - Depth-first walk that runs the single-file pipeline per file.

One bad entry never sinks the whole sweep: a file that cannot be read, an
entry whose type cannot be determined, or a subdirectory that cannot be
listed is recorded as an EntryError and the walk moves on. Only the root
listing failing is fatal.

Entry types are read without following symlinks, so symlinks and special
files are skipped.
"""

from __future__ import annotations

import logging
import os
import threading
from pathlib import Path

from .errors import ReadError, SearchCancelled
from .models import EntryError, FileHit, SearchRequest
from .pipeline import search_file

logger = logging.getLogger(__name__)


class DirectoryWalker:
    """
    Collects hits and per-entry errors for one directory tree.

        walker = DirectoryWalker(request)
        walker.walk(request.path)
        walker.hits, walker.errors, walker.files_searched
    """

    def __init__(self, request: SearchRequest, cancel: threading.Event | None = None):
        self.request = request
        self.cancel = cancel or threading.Event()
        self.hits: list[FileHit] = []
        self.errors: list[EntryError] = []
        self.files_searched = 0

    def walk(self, root: str | Path) -> None:
        """
        Search every regular file under *root*.

        Raises:
            ReadError: *root* itself could not be listed
            SearchCancelled: the cancel event was set mid-walk
        """
        for entry in _list_entries(root):
            self._visit(entry)

    def _descend(self, directory: str) -> None:
        try:
            entries = _list_entries(directory)
        except ReadError as exc:
            self._record(directory, exc)
            return
        for entry in entries:
            self._visit(entry)

    def _visit(self, entry: os.DirEntry) -> None:
        if self.cancel.is_set():
            raise SearchCancelled(entry.path)

        try:
            is_file = entry.is_file(follow_symlinks=False)
            is_dir = not is_file and entry.is_dir(follow_symlinks=False)
        except OSError as exc:
            self._record(entry.path, ReadError(entry.path, exc))
            return

        if is_file:
            self._search(entry.path)
        elif is_dir:
            self._descend(entry.path)

    def _search(self, path: str) -> None:
        self.files_searched += 1
        try:
            found = search_file(self.request, path, self.cancel)
        except ReadError as exc:
            self._record(path, exc)
            return
        if found:
            self.hits.append(FileHit(path=path, matches=found))

    def _record(self, path: str, error: ReadError) -> None:
        logger.warning(f"Skipping {path}: {error}")
        self.errors.append(EntryError(path=path, error=error))


def _list_entries(directory: str | Path) -> list[os.DirEntry]:
    """Immediate entries of *directory*, sorted by name."""
    try:
        with os.scandir(directory) as it:
            return sorted(it, key=lambda entry: entry.name)
    except OSError as exc:
        raise ReadError(str(directory), exc) from exc
