"""Fuzzy matching of typed text against candidate labels."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from rapidfuzz import fuzz


@dataclass(frozen=True, slots=True)
class FuzzyMatch:
    """One admitted choice: its position in the input and its relevance."""

    index: int
    score: float


def is_subsequence(pattern: str, text: str) -> bool:
    """Return True when every character of ``pattern`` appears in ``text`` in order."""
    it = iter(text)
    return all(ch in it for ch in pattern)


def find_matches(pattern: str, choices: Sequence[str]) -> list[FuzzyMatch]:
    """Match ``pattern`` against ``choices``, case-insensitively.

    A choice is admitted only if the pattern is a subsequence of it; admitted
    choices are scored with ``fuzz.WRatio`` (0-100). Matches are returned in
    the order of ``choices``; callers sort by score.
    """
    needle = pattern.lower()
    if not needle:
        return []
    matches: list[FuzzyMatch] = []
    for index, choice in enumerate(choices):
        haystack = choice.lower()
        if not is_subsequence(needle, haystack):
            continue
        matches.append(FuzzyMatch(index=index, score=fuzz.WRatio(needle, haystack)))
    return matches


__all__ = [
    "FuzzyMatch",
    "find_matches",
    "is_subsequence",
]
