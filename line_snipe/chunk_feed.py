"""
chunk_feed.py - Reader side of the parallel pipeline.

The single reader thread packs lines into batches of ``chunk_size`` and pushes
them onto a BatchQueue bounded at the worker count. A full queue parks the
reader until a worker frees a slot (backpressure), so memory stays bounded
when I/O outruns matching.
"""

from __future__ import annotations

import logging
import queue
import threading
from pathlib import Path
from typing import Iterable

from .line_source import LineSource

logger = logging.getLogger(__name__)

# How often a blocked put/get wakes up to look at the stop events (seconds)
POLL_INTERVAL = 0.05

# End-of-stream marker, one per consumer
_CLOSED = object()


class BatchQueue:
    """
    Bounded hand-off between one producer and ``consumers`` competing workers.

    ``close()`` queues one end-of-stream marker per consumer behind every real
    batch, so a ``get()`` returning None means the queue is closed and no batch
    will ever arrive again.

    Two events stop a blocked put/get: ``cancel`` belongs to the caller
    (Search.cancel), ``abort`` to this one file's run (a worker crashed).
    """

    def __init__(
        self,
        capacity: int,
        consumers: int,
        cancel: threading.Event | None = None,
        abort: threading.Event | None = None,
    ):
        self.consumers = consumers
        self.cancel = cancel or threading.Event()
        self.abort = abort or threading.Event()
        self._queue: queue.Queue = queue.Queue(maxsize=max(1, capacity))
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def stopped(self) -> bool:
        return self.cancel.is_set() or self.abort.is_set()

    def put(self, batch: list[str]) -> bool:
        """Block while full. Returns False (nothing queued) once stopped."""
        if self._closed:
            raise RuntimeError("put() on a closed BatchQueue")
        return self._offer(batch)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        for _ in range(self.consumers):
            if not self._offer(_CLOSED):
                return

    def get(self) -> list[str] | None:
        """Block while empty and open. None when closed or stopped."""
        while not self.stopped:
            try:
                item = self._queue.get(timeout=POLL_INTERVAL)
            except queue.Empty:
                continue
            if item is _CLOSED:
                return None
            return item
        return None

    def _offer(self, item: object) -> bool:
        while not self.stopped:
            try:
                self._queue.put(item, timeout=POLL_INTERVAL)
                return True
            except queue.Full:
                continue
        return False


class ChunkDistributor:
    """Packs lines into batches and pushes them onto a BatchQueue."""

    def __init__(self, batches: BatchQueue, chunk_size: int):
        self.batches = batches
        self.chunk_size = chunk_size

    def feed(self, lines: Iterable[str]) -> int:
        """
        Push every line in batches of ``chunk_size``, trailing partial batch last.

        Returns the number of batches dispatched. Stops early when the queue
        refuses a push because the run was cancelled or aborted. Does not close the
        queue; the caller owns that.
        """
        dispatched = 0
        batch: list[str] = []
        for line in lines:
            batch.append(line)
            if len(batch) >= self.chunk_size:
                if not self.batches.put(batch):
                    return dispatched
                dispatched += 1
                batch = []
        if batch and self.batches.put(batch):
            dispatched += 1
        return dispatched


def produce(path: str | Path, chunk_size: int, batches: BatchQueue) -> int:
    """
    Reader thread body: read *path*, distribute its lines, close the queue.

    The queue is closed even when opening or reading fails, so the workers
    finish whatever was dispatched and exit. The ReadError then propagates
    through this thread's future.
    """
    try:
        with LineSource(path) as source:
            dispatched = ChunkDistributor(batches, chunk_size).feed(source)
            logger.debug(f"{path}: {source.lines_read} lines in {dispatched} batches")
            return dispatched
    finally:
        batches.close()
