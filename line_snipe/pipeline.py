"""
pipeline.py - Single-file search. Sequential inline, or the full parallel run.

Parallel run per file:

    LineSource -> ChunkDistributor -> BatchQueue (bounded) -> WorkerPool
        -> results channel (unbounded) -> ResultAggregator -> caller

One reader thread plus ``workers`` matcher threads, all torn down before
search_file() returns, whether it succeeds or raises.
"""

from __future__ import annotations

import logging
import queue
import threading
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from .aggregator import ResultAggregator
from .chunk_feed import BatchQueue, produce
from .errors import SearchCancelled
from .line_source import LineSource
from .matcher import matches
from .models import MatchSet, SearchRequest
from .worker_pool import WorkerPool

logger = logging.getLogger(__name__)


def search_file(
    request: SearchRequest,
    path: str | Path | None = None,
    cancel: threading.Event | None = None,
) -> MatchSet:
    """
    Search one file for the request's pattern.

    Args:
        request: Pattern, case mode, chunk size and worker count
        path: File to search (defaults to request.path; the directory walker
            passes each entry here)
        cancel: Set it to stop the search early

    Returns:
        Matching lines. In file order for a sequential request, in no
        particular order otherwise.

    Raises:
        ReadError: the file could not be opened or read
        SearchCancelled: ``cancel`` was set before the search finished
    """
    path = Path(path) if path is not None else request.path
    cancel = cancel or threading.Event()

    if request.sequential:
        found = _search_sequential(request, path, cancel)
    else:
        found = _search_parallel(request, path, cancel)

    if cancel.is_set():
        raise SearchCancelled(str(path))
    logger.debug(f"{path}: {len(found)} matches")
    return found


def _search_sequential(request: SearchRequest, path: Path, cancel: threading.Event) -> MatchSet:
    """No batching, no threads. Lower overhead for small inputs."""
    found: MatchSet = []
    with LineSource(path) as source:
        for line in source:
            if cancel.is_set():
                break
            if matches(line, request.pattern, request.case_insensitive):
                found.append(line)
    return found


def _search_parallel(request: SearchRequest, path: Path, cancel: threading.Event) -> MatchSet:
    workers = request.workers
    # Per-file stop signal for a crashed worker, separate from the caller's cancel
    abort = threading.Event()
    batches = BatchQueue(capacity=workers, consumers=workers, cancel=cancel, abort=abort)
    results: queue.SimpleQueue = queue.SimpleQueue()
    pool = WorkerPool(
        workers,
        request.pattern,
        request.case_insensitive,
        batches,
        results,
    )

    with ThreadPoolExecutor(max_workers=workers + 1, thread_name_prefix="line-snipe") as executor:
        worker_futures = pool.start(executor)
        producer = executor.submit(produce, path, request.chunk_size, batches)
        try:
            return ResultAggregator(results).collect(producer, worker_futures)
        except KeyboardInterrupt:
            # Executor shutdown joins the threads; they must stop first
            abort.set()
            raise
