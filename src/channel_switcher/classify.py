"""Read/unread/mention and mute classification from oracle queries.

The oracle never exposes a mute flag directly. It only answers "is this
unread under these inclusion options", so mute is inferred by asking twice:

    with muted categories   without muted categories   muted?
    ─────────────────────   ────────────────────────   ──────
    UNREAD / MENTIONED      READ                       yes
    UNREAD / MENTIONED      UNREAD / MENTIONED         no
    READ                    READ                       no
    READ                    UNREAD / MENTIONED         no

A muted channel with no unseen activity answers READ to both queries and is
classified as not muted. It is then read, so it is hidden from the unread-only
view and ranked normally in the fuzzy view either way.
"""

from __future__ import annotations

from channel_switcher.models import UnreadIndication, UnreadOpts
from channel_switcher.state import AccountState

_DEFAULT_OPTS = UnreadOpts()
_INCLUDE_MUTED_OPTS = UnreadOpts(include_muted_categories=True)


def muted_from_indications(
    with_muted: UnreadIndication,
    without_muted: UnreadIndication,
) -> bool:
    """Apply the mute truth table to a pair of oracle answers."""
    has_activity = with_muted in (UnreadIndication.UNREAD, UnreadIndication.MENTIONED)
    return has_activity and without_muted is UnreadIndication.READ


def is_unread(state: AccountState, channel_id: str) -> tuple[bool, bool]:
    """Return ``(unread, mentioned)`` for a channel under default options."""
    indication = state.channel_is_unread(channel_id, _DEFAULT_OPTS)
    if indication is UnreadIndication.MENTIONED:
        return True, True
    if indication is UnreadIndication.UNREAD:
        return True, False
    return False, False


def is_muted(state: AccountState, channel_id: str) -> bool:
    return muted_from_indications(
        state.channel_is_unread(channel_id, _INCLUDE_MUTED_OPTS),
        state.channel_is_unread(channel_id, _DEFAULT_OPTS),
    )


def is_guild_muted(state: AccountState, guild_id: str) -> bool:
    return muted_from_indications(
        state.guild_is_unread(guild_id, _INCLUDE_MUTED_OPTS),
        state.guild_is_unread(guild_id, _DEFAULT_OPTS),
    )


__all__ = [
    "is_guild_muted",
    "is_muted",
    "is_unread",
    "muted_from_indications",
]
