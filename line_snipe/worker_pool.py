"""
worker_pool.py - Fixed set of matcher workers.

Every worker runs the same loop: pop a batch, keep the matching lines, send
a non-empty result batch down the unbounded results channel. A worker exits
when its pop finds the queue closed and empty. The batch count is never
known up front, so that is the only stop condition.
"""

from __future__ import annotations

import queue
from concurrent.futures import Executor, Future

from .chunk_feed import BatchQueue
from .matcher import filter_lines


class WorkerPool:
    """``size`` identical workers sharing one BatchQueue and one results channel."""

    def __init__(
        self,
        size: int,
        pattern: str,
        case_insensitive: bool,
        batches: BatchQueue,
        results: queue.SimpleQueue,
    ):
        self.size = size
        self.pattern = pattern
        self.case_insensitive = case_insensitive
        self.batches = batches
        self.results = results
        self.abort = batches.abort

    def work(self) -> int:
        """One worker's loop. Returns the number of batches it processed."""
        processed = 0
        try:
            while True:
                batch = self.batches.get()
                if batch is None:
                    return processed
                found = filter_lines(batch, self.pattern, self.case_insensitive)
                if found:
                    self.results.put(found)
                processed += 1
        except Exception:
            # Abort this file only; the caller's cancel event stays untouched
            self.abort.set()
            raise

    def start(self, executor: Executor) -> list[Future]:
        return [executor.submit(self.work) for _ in range(self.size)]
