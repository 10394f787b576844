"""
matcher.py - Does this line contain the pattern?

Exact substring only. Pure functions, no state, safe to call from any
number of workers at once.
"""

from typing import Iterable


def normalize_pattern(pattern: str, case_insensitive: bool) -> str:
    """Lowercase once up front for case-insensitive searches."""
    return pattern.lower() if case_insensitive else pattern


def matches(line: str, pattern: str, case_insensitive: bool = False) -> bool:
    """
    Substring test for one line.

    With ``case_insensitive`` the pattern must already be lowercased
    (see normalize_pattern); only the line is lowered here. An empty
    pattern matches every line.
    """
    if case_insensitive:
        return pattern in line.lower()
    return pattern in line


def filter_lines(lines: Iterable[str], pattern: str, case_insensitive: bool = False) -> list[str]:
    """Matching lines, in input order."""
    return [line for line in lines if matches(line, pattern, case_insensitive)]
