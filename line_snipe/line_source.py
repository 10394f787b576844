"""
line_source.py - Sequential reader that hands out a file's lines in order.

Owns the open handle. Lines are split on ``\\n`` only and come back without
their ``\\n`` / ``\\r\\n`` terminator. Every I/O or decode failure surfaces as
ReadError.
"""

from __future__ import annotations

from pathlib import Path
from typing import IO, Iterator

from .errors import ReadError


class LineSource:
    """
    Lazy, forward-only, non-restartable line stream over one file.

    Usage:
        with LineSource(path) as source:
            for line in source:
                ...
    """

    def __init__(self, path: str | Path, encoding: str = "utf-8"):
        self.path = Path(path)
        self.encoding = encoding
        self.lines_read = 0
        self._handle: IO[str] | None = None
        self._started = False

    def open(self) -> LineSource:
        try:
            self._handle = self.path.open("r", encoding=self.encoding, newline="\n")
        except OSError as exc:
            raise ReadError(str(self.path), exc) from exc
        return self

    def close(self) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None

    def __enter__(self) -> LineSource:
        return self.open()

    def __exit__(self, *exc_info) -> None:
        self.close()

    def __iter__(self) -> Iterator[str]:
        if self._handle is None:
            raise RuntimeError(f"{self.path} is not open")
        if self._started:
            raise RuntimeError(f"lines of {self.path} can only be read once")
        self._started = True
        return self._lines()

    def _lines(self) -> Iterator[str]:
        while True:
            try:
                raw = self._handle.readline()
            except (OSError, UnicodeDecodeError) as exc:
                raise ReadError(str(self.path), exc) from exc
            if not raw:
                return
            self.lines_read += 1
            yield _strip_terminator(raw)


def _strip_terminator(raw: str) -> str:
    if raw.endswith("\n"):
        raw = raw[:-1]
        if raw.endswith("\r"):
            raw = raw[:-1]
    return raw
