"""Candidate collection from the live account snapshot."""

from __future__ import annotations

import logging

from channel_switcher.classify import is_guild_muted, is_muted, is_unread
from channel_switcher.models import (
    DM_CONTEXT_LABEL,
    DM_FALLBACK_NAME,
    TEXT_CHANNEL_KINDS,
    Channel,
    ChannelCandidate,
)
from channel_switcher.state import AccountState, StateUnavailableError

logger = logging.getLogger(__name__)


def dm_display_name(channel: Channel) -> str:
    """Resolve a DM's name: explicit name, then first recipient tag, then a fallback."""
    if channel.name:
        return channel.name
    if channel.recipients:
        return channel.recipients[0].tag
    return DM_FALLBACK_NAME


def _guild_candidates(state: AccountState) -> list[ChannelCandidate]:
    try:
        guilds = state.guilds()
    except StateUnavailableError as e:
        logger.debug("Guild list unavailable, skipping guild channels: %s", e)
        return []

    candidates: list[ChannelCandidate] = []
    for guild in guilds:
        # Guild mute wins over any channel-level state
        if is_guild_muted(state, guild.id):
            continue
        try:
            channels = state.channels(guild.id)
        except StateUnavailableError as e:
            logger.debug("Channels unavailable for guild %s: %s", guild.id, e)
            continue
        for channel in channels:
            if channel.kind not in TEXT_CHANNEL_KINDS:
                continue
            if is_muted(state, channel.id):
                continue
            unread, mentioned = is_unread(state, channel.id)
            candidates.append(
                ChannelCandidate(
                    name="#" + channel.name,
                    context_label=guild.name,
                    channel_id=channel.id,
                    unread=unread,
                    mentioned=mentioned,
                )
            )
    return candidates


def _dm_candidates(state: AccountState) -> list[ChannelCandidate]:
    try:
        private_channels = state.private_channels()
    except StateUnavailableError as e:
        logger.debug("Private channels unavailable, skipping DMs: %s", e)
        return []

    candidates: list[ChannelCandidate] = []
    for channel in private_channels:
        if is_muted(state, channel.id):
            continue
        unread, mentioned = is_unread(state, channel.id)
        candidates.append(
            ChannelCandidate(
                name=dm_display_name(channel),
                context_label=DM_CONTEXT_LABEL,
                channel_id=channel.id,
                unread=unread,
                mentioned=mentioned,
            )
        )
    return candidates


def collect_candidates(state: AccountState | None) -> list[ChannelCandidate]:
    """Enumerate every eligible channel, guild channels first, then DMs.

    Runs from scratch on each call. Branches whose data cannot be read are
    skipped and the rest is returned; a missing snapshot yields ``[]``.
    """
    if state is None:
        return []
    return _guild_candidates(state) + _dm_candidates(state)


__all__ = [
    "collect_candidates",
    "dm_display_name",
]
