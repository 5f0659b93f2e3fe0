"""Account-state interfaces consumed by the engine, plus an in-memory oracle."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from channel_switcher.models import (
    Channel,
    Guild,
    UnreadIndication,
    UnreadOpts,
)

logger = logging.getLogger(__name__)

_INDICATION_RANK = {
    UnreadIndication.READ: 0,
    UnreadIndication.UNREAD: 1,
    UnreadIndication.MENTIONED: 2,
}


class StateUnavailableError(Exception):
    """Raised when a part of the account snapshot cannot be read."""


@runtime_checkable
class AccountState(Protocol):
    """Read-only view of the account: guilds, channels and unread state.

    The collection methods may raise :class:`StateUnavailableError`. The
    snapshot behind this interface can change between calls.
    """

    def guilds(self) -> list[Guild]:
        """Return every guild the account belongs to."""
        ...

    def channels(self, guild_id: str) -> list[Channel]:
        """Return the channels and threads of one guild."""
        ...

    def private_channels(self) -> list[Channel]:
        """Return direct-message channels."""
        ...

    def channel_is_unread(self, channel_id: str, opts: UnreadOpts) -> UnreadIndication:
        """Answer whether a channel has unseen content under ``opts``."""
        ...

    def guild_is_unread(self, guild_id: str, opts: UnreadOpts) -> UnreadIndication:
        """Answer whether any channel of a guild has unseen content under ``opts``."""
        ...


@runtime_checkable
class PickerActions(Protocol):
    """Side effects a picker performs on the surrounding application."""

    def select_channel(self, channel_id: str) -> None:
        """Navigate to a channel."""
        ...

    def close_picker(self) -> None:
        """Hide the picker that emitted the action."""
        ...


@dataclass(slots=True)
class ReadState:
    """Activity and mute flags tracked per channel by :class:`AccountSnapshot`."""

    indication: UnreadIndication = UnreadIndication.READ
    muted: bool = False


@dataclass(slots=True)
class AccountSnapshot:
    """In-memory :class:`AccountState` built from loaded data.

    Default queries report muted channels, channels under a muted category and
    channels of a muted guild as read. ``include_muted_categories=True``
    reports the raw activity instead. A guild's aggregate never counts its
    muted channels or categories, so only the guild's own mute changes it.
    """

    guild_list: list[Guild] = field(default_factory=list)
    guild_channels: dict[str, list[Channel]] = field(default_factory=dict)
    dm_channels: list[Channel] = field(default_factory=list)
    read_states: dict[str, ReadState] = field(default_factory=dict)
    muted_guilds: set[str] = field(default_factory=set)
    # channel id -> Channel for guild channels and DMs, kept by the add_* methods
    channel_index: dict[str, Channel] = field(default_factory=dict)

    def add_guild(self, guild: Guild, channels: Iterable[Channel] = (), muted: bool = False) -> None:
        channels = list(channels)
        self.guild_list.append(guild)
        self.guild_channels.setdefault(guild.id, []).extend(channels)
        for channel in channels:
            self.channel_index[channel.id] = channel
        if muted:
            self.muted_guilds.add(guild.id)

    def add_private_channel(self, channel: Channel) -> None:
        self.dm_channels.append(channel)
        self.channel_index[channel.id] = channel

    def set_read_state(
        self,
        channel_id: str,
        indication: UnreadIndication = UnreadIndication.READ,
        muted: bool = False,
    ) -> None:
        self.read_states[channel_id] = ReadState(indication=indication, muted=muted)

    def mark_read(self, channel_id: str) -> None:
        """Clear unseen activity for a channel, keeping its mute flag."""
        read_state = self.read_states.get(channel_id)
        if read_state is not None:
            read_state.indication = UnreadIndication.READ
            logger.debug("Marked channel %s read", channel_id)

    # -- AccountState -------------------------------------------------------

    def guilds(self) -> list[Guild]:
        return list(self.guild_list)

    def channels(self, guild_id: str) -> list[Channel]:
        if guild_id not in self.guild_channels:
            raise StateUnavailableError(f"no channels cached for guild {guild_id}")
        return list(self.guild_channels[guild_id])

    def private_channels(self) -> list[Channel]:
        return list(self.dm_channels)

    def channel_is_unread(self, channel_id: str, opts: UnreadOpts) -> UnreadIndication:
        read_state = self.read_states.get(channel_id)
        if read_state is None:
            return UnreadIndication.READ
        if not opts.include_muted_categories and self._is_suppressed(channel_id):
            return UnreadIndication.READ
        return read_state.indication

    def guild_is_unread(self, guild_id: str, opts: UnreadOpts) -> UnreadIndication:
        """Strongest activity over the guild's channels that are not muted themselves."""
        if not opts.include_muted_categories and guild_id in self.muted_guilds:
            return UnreadIndication.READ
        best = UnreadIndication.READ
        for channel in self.guild_channels.get(guild_id, []):
            if self._is_channel_or_parent_muted(channel):
                continue
            read_state = self.read_states.get(channel.id)
            if read_state is None:
                continue
            if _INDICATION_RANK[read_state.indication] > _INDICATION_RANK[best]:
                best = read_state.indication
        return best

    # -- internals ----------------------------------------------------------

    def _is_muted_flag(self, channel_id: str | None) -> bool:
        if channel_id is None:
            return False
        read_state = self.read_states.get(channel_id)
        return read_state is not None and read_state.muted

    def _is_channel_or_parent_muted(self, channel: Channel) -> bool:
        return self._is_muted_flag(channel.id) or self._is_muted_flag(channel.parent_id)

    def _is_suppressed(self, channel_id: str) -> bool:
        """Return True when a mute on the channel, its parent or its guild applies."""
        if self._is_muted_flag(channel_id):
            return True
        channel = self.channel_index.get(channel_id)
        if channel is None:
            return False
        if self._is_muted_flag(channel.parent_id):
            return True
        return channel.guild_id is not None and channel.guild_id in self.muted_guilds


__all__ = [
    "AccountSnapshot",
    "AccountState",
    "PickerActions",
    "ReadState",
    "StateUnavailableError",
]
