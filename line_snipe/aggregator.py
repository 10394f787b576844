"""
aggregator.py - Collects one file's matches once the pipeline has wound down.

Order: the reader first (its error is held, not raised yet), then every
worker, then the results channel. Batches dispatched before a read failure
are therefore still matched, and the failure surfaces afterwards.
"""

from __future__ import annotations

import queue
from concurrent.futures import Future

from .models import MatchSet


class ResultAggregator:
    def __init__(self, results: queue.SimpleQueue):
        self.results = results

    def collect(self, producer: Future, workers: list[Future]) -> MatchSet:
        """
        Wait for the reader and all workers, then flatten the results.

        A worker failure propagates immediately after the join. A reader
        failure is re-raised after the results have been drained.
        """
        reader_error: BaseException | None = None
        try:
            producer.result()
        except Exception as exc:
            reader_error = exc

        for worker in workers:
            worker.result()

        matches = self.drain()
        if reader_error is not None:
            raise reader_error
        return matches

    def drain(self) -> MatchSet:
        """Concatenate every result batch currently in the channel."""
        matches: MatchSet = []
        while True:
            try:
                matches.extend(self.results.get_nowait())
            except queue.Empty:
                return matches
