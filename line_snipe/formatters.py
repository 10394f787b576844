"""
formatters.py - Plain-text + JSON output for search results.
"""

from typing import Any

from .models import FindAction, SearchResult


def render_lines(result: SearchResult, action: FindAction) -> list[str]:
    """Output lines for the chosen action. BOOLEAN renders nothing; the exit status answers."""
    if action is FindAction.PRINT_LINE:
        return result.matches
    if action is FindAction.PRINT_FILE_NAME:
        return [hit.path for hit in result.hits]
    return []


def describe_errors(result: SearchResult) -> list[str]:
    """One line per skipped directory entry."""
    return [f"skipped {err.path}: {err.message}" for err in result.errors]


def to_json(result: SearchResult) -> dict[str, Any]:
    """JSON-serializable dict."""
    return {
        "pattern": result.pattern,
        "matched": result.matched,
        "files_searched": result.files_searched,
        "files_matched": len(result.hits),
        "total_matches": sum(len(hit.matches) for hit in result.hits),
        "search_time_ms": result.search_time_ms,
        "hits": [
            {
                "path": hit.path,
                "matches": hit.matches,
            }
            for hit in result.hits
        ],
        "errors": [
            {
                "path": err.path,
                "kind": type(err.error).__name__,
                "message": err.message,
            }
            for err in result.errors
        ],
    }
