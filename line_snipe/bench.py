"""
bench.py - Wall-clock benchmarks over random corpora.

Each scenario writes a temp file of random alphanumeric lines (10-200 chars),
a given fraction of which embed the match term, then times the search with
the sequential path and with the worker pool.

Usage:
    python -m line_snipe.bench
    python -m line_snipe.bench --rounds 20 --workers 1 4 8 --skip-large
"""

from __future__ import annotations

import argparse
import random
import statistics
import string
import sys
import tempfile
import time
from dataclasses import dataclass
from pathlib import Path

from .models import FindAction, SearchRequest
from .search import Search

MATCH_TERM = "aaaaa"
ALPHANUMERIC = string.ascii_letters + string.digits


@dataclass
class Scenario:
    name: str
    num_lines: int
    match_fraction: float
    case_insensitive: bool = False


SCENARIOS = [
    Scenario("small_file_low_freq", 100, 0.001),
    Scenario("small_file_low_freq_case_insensitive", 100, 0.0, case_insensitive=True),
    Scenario("small_file_high_freq", 100, 0.5),
    Scenario("large_file_low_freq", 1_000_000, 0.001),
]


@dataclass
class Timing:
    scenario: str
    workers: int
    samples_ms: list[float]

    @property
    def median_ms(self) -> float:
        return statistics.median(self.samples_ms)

    @property
    def mean_ms(self) -> float:
        return statistics.fmean(self.samples_ms)


def create_random_line(length: int, match_term: str, rng: random.Random) -> str:
    """Random alphanumeric line of *length* chars with *match_term* at a random offset."""
    filler = max(0, length - len(match_term))
    prefix_size = int(filler * rng.random())
    prefix = "".join(rng.choices(ALPHANUMERIC, k=prefix_size))
    suffix = "".join(rng.choices(ALPHANUMERIC, k=filler - prefix_size))
    return f"{prefix}{match_term}{suffix}"


def write_corpus(
    path: Path,
    num_lines: int,
    match_fraction: float,
    match_term: str = MATCH_TERM,
    seed: int | None = None,
) -> None:
    rng = random.Random(seed)
    with path.open("w", encoding="utf-8") as fh:
        for _ in range(num_lines):
            term = match_term if rng.random() < match_fraction else ""
            fh.write(create_random_line(rng.randint(10, 199), term, rng) + "\n")


def time_search(request: SearchRequest, rounds: int) -> list[float]:
    samples = []
    for _ in range(rounds):
        start = time.perf_counter()
        Search(request).search()
        samples.append((time.perf_counter() - start) * 1000)
    return samples


def run_benchmarks(
    scenarios: list[Scenario],
    worker_counts: list[int],
    rounds: int = 10,
    chunk_size: int = 1000,
    seed: int | None = None,
) -> list[Timing]:
    timings = []
    with tempfile.TemporaryDirectory(prefix="line-snipe-bench-") as tmp:
        for scenario in scenarios:
            corpus = Path(tmp) / f"{scenario.name}.txt"
            write_corpus(corpus, scenario.num_lines, scenario.match_fraction, seed=seed)
            for workers in worker_counts:
                request = SearchRequest(
                    path=corpus,
                    pattern=MATCH_TERM,
                    case_insensitive=scenario.case_insensitive,
                    action=FindAction.BOOLEAN,
                    chunk_size=chunk_size,
                    workers=workers,
                )
                timings.append(Timing(scenario.name, workers, time_search(request, rounds)))
    return timings


def format_report(timings: list[Timing]) -> str:
    lines = [f"{'scenario':<40} {'workers':>7} {'median ms':>10} {'mean ms':>10}"]
    for t in timings:
        lines.append(f"{t.scenario:<40} {t.workers:>7} {t.median_ms:>10.2f} {t.mean_ms:>10.2f}")
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Benchmark line_snipe search modes")
    parser.add_argument("--rounds", type=int, default=10, help="Timed runs per configuration")
    parser.add_argument("--workers", type=int, nargs="+", default=[1, 4], help="Worker counts to compare")
    parser.add_argument("--chunk-size", type=int, default=1000)
    parser.add_argument("--seed", type=int, default=None, help="Fixed RNG seed for repeatable corpora")
    parser.add_argument("--skip-large", action="store_true", help="Skip the 1M-line scenario")
    args = parser.parse_args(argv)

    scenarios = [s for s in SCENARIOS if not (args.skip_large and s.num_lines > 100_000)]
    timings = run_benchmarks(scenarios, args.workers, args.rounds, args.chunk_size, args.seed)
    print(format_report(timings))
    return 0


if __name__ == "__main__":
    sys.exit(main())
