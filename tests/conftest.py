from pathlib import Path
from typing import Callable

import pytest

SAMPLE_LINES = [
    "This is the first line",
    "This is the second line with the hello world phrase in it",
    "He's got the whole worLd in his hands",
    "This is the last line",
]


@pytest.fixture
def write_lines(tmp_path: Path) -> Callable[..., Path]:
    """Write lines to a file under tmp_path, one per line, and return its path."""

    def _write(lines: list[str], name: str = "sample.txt") -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def sample_file(write_lines) -> Path:
    return write_lines(SAMPLE_LINES)


@pytest.fixture
def big_file(write_lines) -> Path:
    """5000 lines, every 7th one containing 'needle'."""
    lines = [f"line {i} needle" if i % 7 == 0 else f"line {i} hay" for i in range(5000)]
    return write_lines(lines, name="big.txt")


@pytest.fixture
def sample_lines() -> list[str]:
    return list(SAMPLE_LINES)
