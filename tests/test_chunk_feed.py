import threading
import time
from pathlib import Path

import pytest

from line_snipe.chunk_feed import BatchQueue, ChunkDistributor, produce
from line_snipe.errors import ReadError


def _drain(batches: BatchQueue) -> list[list[str]]:
    out = []
    while (batch := batches.get()) is not None:
        out.append(batch)
    return out


def test_distributor_batches_with_trailing_partial() -> None:
    batches = BatchQueue(capacity=10, consumers=1)
    dispatched = ChunkDistributor(batches, chunk_size=3).feed(["a", "b", "c", "d", "e", "f", "g"])
    batches.close()

    assert dispatched == 3
    assert _drain(batches) == [["a", "b", "c"], ["d", "e", "f"], ["g"]]


def test_distributor_sends_nothing_for_no_lines() -> None:
    batches = BatchQueue(capacity=2, consumers=1)

    assert ChunkDistributor(batches, chunk_size=5).feed([]) == 0
    batches.close()
    assert batches.get() is None


def test_close_wakes_every_consumer() -> None:
    batches = BatchQueue(capacity=3, consumers=3)
    seen: list[object] = []

    def consume() -> None:
        seen.append(batches.get())

    threads = [threading.Thread(target=consume) for _ in range(3)]
    for t in threads:
        t.start()
    batches.close()
    for t in threads:
        t.join(timeout=5)

    assert seen == [None, None, None]
    assert batches.closed


def test_close_is_idempotent_and_put_after_close_fails() -> None:
    batches = BatchQueue(capacity=2, consumers=1)
    batches.close()
    batches.close()

    assert batches.get() is None
    with pytest.raises(RuntimeError):
        batches.put(["late"])


def test_full_queue_blocks_the_producer_until_a_slot_frees() -> None:
    batches = BatchQueue(capacity=1, consumers=1)
    assert batches.put(["first"])
    pushed = threading.Event()

    def push_second() -> None:
        batches.put(["second"])
        pushed.set()

    producer = threading.Thread(target=push_second)
    producer.start()

    assert not pushed.wait(timeout=0.3)
    assert batches.get() == ["first"]
    assert pushed.wait(timeout=5)
    assert batches.get() == ["second"]
    producer.join(timeout=5)


def test_cancel_unblocks_a_waiting_producer() -> None:
    cancel = threading.Event()
    batches = BatchQueue(capacity=1, consumers=1, cancel=cancel)
    batches.put(["fills the queue"])
    outcome: list[bool] = []

    producer = threading.Thread(target=lambda: outcome.append(batches.put(["blocked"])))
    producer.start()
    time.sleep(0.1)
    cancel.set()
    producer.join(timeout=5)

    assert outcome == [False]


def test_cancel_unblocks_a_waiting_consumer() -> None:
    cancel = threading.Event()
    batches = BatchQueue(capacity=1, consumers=1, cancel=cancel)
    outcome: list[object] = []

    consumer = threading.Thread(target=lambda: outcome.append(batches.get()))
    consumer.start()
    time.sleep(0.1)
    cancel.set()
    consumer.join(timeout=5)

    assert outcome == [None]


def test_distributor_stops_when_cancelled() -> None:
    cancel = threading.Event()
    cancel.set()
    batches = BatchQueue(capacity=4, consumers=1, cancel=cancel)

    assert ChunkDistributor(batches, chunk_size=1).feed(["a", "b", "c"]) == 0


def test_produce_closes_the_queue_after_reading(write_lines) -> None:
    path = write_lines(["one", "two", "three"])
    batches = BatchQueue(capacity=10, consumers=2)

    assert produce(path, 2, batches) == 2
    assert _drain(batches) == [["one", "two"], ["three"]]
    assert batches.get() is None


def test_produce_closes_the_queue_when_the_file_cannot_open(tmp_path: Path) -> None:
    batches = BatchQueue(capacity=2, consumers=2)

    with pytest.raises(ReadError):
        produce(tmp_path / "missing.txt", 10, batches)

    assert batches.closed
    assert batches.get() is None
    assert batches.get() is None


def test_abort_unblocks_a_waiting_producer_without_touching_cancel() -> None:
    batches = BatchQueue(capacity=1, consumers=1)
    batches.put(["fills the queue"])
    outcome: list[bool] = []

    producer = threading.Thread(target=lambda: outcome.append(batches.put(["blocked"])))
    producer.start()
    time.sleep(0.1)
    batches.abort.set()
    producer.join(timeout=5)

    assert outcome == [False]
    assert batches.stopped
    assert not batches.cancel.is_set()
