"""
line_snipe - Line-oriented substring search, optionally parallel.

One file or a whole directory tree. Per file, a reader thread chunks lines
into batches on a bounded queue and a fixed pool of matcher threads drains
it, so a slow matcher throttles the reader instead of buffering the file.

Usage:
    from line_snipe import Search, SearchRequest

    request = SearchRequest(Path("logs/"), "timeout", case_insensitive=True, workers=4)
    result = Search(request).search()
    result.matches      # every matching line
    result.errors       # directory entries that could not be read

CLI:
    linehound 'timeout' logs/ -i -j 4
    linehound 'timeout' logs/ -a file
"""

from .errors import (
    InitializationError,
    PathNotFound,
    ReadError,
    SearchCancelled,
    SearchError,
)
from .matcher import filter_lines, matches, normalize_pattern
from .models import (
    DEFAULT_CHUNK_SIZE,
    DEFAULT_WORKERS,
    EntryError,
    FileHit,
    FindAction,
    MatchSet,
    SearchRequest,
    SearchResult,
)
from .pipeline import search_file
from .search import Search

__all__ = [
    "Search",
    "SearchRequest",
    "SearchResult",
    "FindAction",
    "FileHit",
    "EntryError",
    "MatchSet",
    "DEFAULT_CHUNK_SIZE",
    "DEFAULT_WORKERS",
    "SearchError",
    "PathNotFound",
    "ReadError",
    "InitializationError",
    "SearchCancelled",
    "matches",
    "filter_lines",
    "normalize_pattern",
    "search_file",
]
