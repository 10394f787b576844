"""
search.py - The entry point. Checks the path, then runs file or directory mode.

File mode aborts on a ReadError. Directory mode records per-entry
ReadErrors and keeps going. Callers get a SearchResult either way and
render it themselves (see formatters).
"""

from __future__ import annotations

import logging
import threading
import time

from .dir_sweep import DirectoryWalker
from .errors import PathNotFound
from .models import FileHit, SearchRequest, SearchResult
from .pipeline import search_file

logger = logging.getLogger(__name__)


class Search:
    """
    Line-oriented substring search over a file or a directory tree.

        request = SearchRequest(Path("logs/"), "timeout", case_insensitive=True, workers=4)
        result = Search(request).search()
        result.matches, result.errors
    """

    def __init__(self, request: SearchRequest):
        self.request = request
        self._cancel = threading.Event()

    def cancel(self) -> None:
        """Stop a running search() from another thread; it raises SearchCancelled."""
        self._cancel.set()

    @property
    def cancelled(self) -> bool:
        return self._cancel.is_set()

    def search(self) -> SearchResult:
        """
        Run the search.

        Raises:
            PathNotFound: the target does not exist (nothing is read)
            ReadError: the target file, or the root directory listing, failed
            SearchCancelled: cancel() was called before completion
        """
        path = self.request.path
        if not path.exists():
            raise PathNotFound(str(path))

        start = time.perf_counter()
        result = SearchResult(pattern=self.request.pattern)

        if path.is_file():
            found = search_file(self.request, path, self._cancel)
            result.files_searched = 1
            if found:
                result.hits.append(FileHit(path=str(path), matches=found))
        else:
            walker = DirectoryWalker(self.request, self._cancel)
            walker.walk(path)
            result.hits = walker.hits
            result.errors = walker.errors
            result.files_searched = walker.files_searched

        result.search_time_ms = (time.perf_counter() - start) * 1000
        logger.info(
            f"{path}: {len(result.matches)} matches in {len(result.hits)} of "
            f"{result.files_searched} files, {len(result.errors)} skipped, "
            f"{result.search_time_ms:.0f}ms"
        )
        return result
