"""Filtering and ranking of collected candidates for the current input text."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from channel_switcher.fuzzy import find_matches
from channel_switcher.models import DEFAULT_CANDIDATE_LIMIT, ChannelCandidate, EmptyInputMode

logger = logging.getLogger(__name__)


def _mention_first(candidates: Sequence[ChannelCandidate]) -> list[ChannelCandidate]:
    """Stable sort: mentioned, then unread, then the rest; collector order within each."""
    return sorted(candidates, key=lambda c: (not c.mentioned, not c.unread))


def rank_unread(
    candidates: Sequence[ChannelCandidate],
    mode: EmptyInputMode = EmptyInputMode.UNREAD,
) -> list[ChannelCandidate]:
    """Order candidates for an empty query."""
    if mode is EmptyInputMode.UNREAD:
        candidates = [c for c in candidates if c.unread]
    return _mention_first(candidates)


def rank_fuzzy(candidates: Sequence[ChannelCandidate], text: str) -> list[ChannelCandidate]:
    """Keep fuzzy matches of ``text`` against candidate labels, best score first."""
    matches = find_matches(text, [c.label for c in candidates])
    matches.sort(key=lambda m: m.score, reverse=True)
    return [candidates[m.index] for m in matches]


def rank_candidates(
    candidates: Sequence[ChannelCandidate],
    text: str,
    *,
    limit: int = DEFAULT_CANDIDATE_LIMIT,
    empty_input: EmptyInputMode = EmptyInputMode.UNREAD,
) -> list[ChannelCandidate]:
    """Return at most ``limit`` candidates for the current input text.

    Empty text shows unread channels with mentions first. Any other text is
    fuzzy matched against every candidate. The result is always rebuilt from
    ``candidates``; nothing from a previous pass is reused.
    """
    if text == "":
        ranked = rank_unread(candidates, empty_input)
    else:
        ranked = rank_fuzzy(candidates, text)
    logger.debug("Ranked %d of %d candidates for %r", len(ranked), len(candidates), text)
    return ranked[: max(limit, 0)]


__all__ = [
    "rank_candidates",
    "rank_fuzzy",
    "rank_unread",
]
