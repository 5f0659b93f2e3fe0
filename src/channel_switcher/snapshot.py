"""Loading an account snapshot from a JSON file.

The file mirrors what a client caches after a gateway sync::

    {
      "guilds": [
        {"id": "1", "name": "Test", "muted": false,
         "channels": [{"id": "10", "name": "general", "type": 0,
                       "parent_id": null, "muted": false,
                       "unread": true, "mentioned": false}]}
      ],
      "private_channels": [
        {"id": "20", "name": "", "muted": false, "unread": false,
         "recipients": [{"id": "2", "username": "alice", "discriminator": "0"}]}
      ]
    }

Entries with a missing id or an unknown channel type are skipped with a
warning. Only an unreadable or non-object file is an error.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from channel_switcher.config import _safe_get
from channel_switcher.models import Channel, ChannelKind, Guild, UnreadIndication, User
from channel_switcher.state import AccountSnapshot

logger = logging.getLogger(__name__)


class SnapshotError(Exception):
    """Raised when a snapshot file cannot be read or is not a JSON object."""


def _parse_id(raw: dict[str, Any]) -> str | None:
    value = raw.get("id")
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        return None
    text = str(value).strip()
    return text or None


def _parse_optional_id(raw: dict[str, Any], key: str) -> str | None:
    value = raw.get(key)
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        return None
    return str(value) or None


def _parse_indication(raw: dict[str, Any]) -> UnreadIndication:
    if _safe_get(raw, "mentioned", False, bool):
        return UnreadIndication.MENTIONED
    if _safe_get(raw, "unread", False, bool):
        return UnreadIndication.UNREAD
    return UnreadIndication.READ


def _parse_recipients(raw: Any) -> tuple[User, ...]:
    if not isinstance(raw, list):
        return ()
    users: list[User] = []
    for entry in raw:
        if not isinstance(entry, dict):
            continue
        user_id = _parse_id(entry)
        username = _safe_get(entry, "username", "", str)
        if user_id is None or not username:
            continue
        discriminator = entry.get("discriminator", "0")
        users.append(
            User(
                id=user_id,
                username=username,
                discriminator=str(discriminator) if isinstance(discriminator, (str, int)) else "0",
            )
        )
    return tuple(users)


def _parse_channel(
    raw: Any,
    snapshot: AccountSnapshot,
    *,
    guild_id: str | None,
    default_kind: ChannelKind,
) -> Channel | None:
    """Parse one channel entry and record its read state on ``snapshot``."""
    if not isinstance(raw, dict):
        return None
    channel_id = _parse_id(raw)
    if channel_id is None:
        logger.warning("Skipping channel without an id: %r", raw)
        return None
    type_raw = raw.get("type", default_kind.value)
    try:
        kind = ChannelKind(type_raw)
    except ValueError:
        logger.warning("Skipping channel %s with unknown type %r", channel_id, type_raw)
        return None

    snapshot.set_read_state(
        channel_id,
        _parse_indication(raw),
        muted=_safe_get(raw, "muted", False, bool),
    )
    return Channel(
        id=channel_id,
        name=_safe_get(raw, "name", "", str),
        kind=kind,
        guild_id=guild_id,
        parent_id=_parse_optional_id(raw, "parent_id"),
        recipients=_parse_recipients(raw.get("recipients")),
    )


def snapshot_from_dict(data: dict[str, Any]) -> AccountSnapshot:
    """Build an :class:`AccountSnapshot` from decoded JSON, skipping bad entries."""
    snapshot = AccountSnapshot()

    for raw_guild in _safe_get(data, "guilds", [], list):
        if not isinstance(raw_guild, dict):
            continue
        guild_id = _parse_id(raw_guild)
        if guild_id is None:
            logger.warning("Skipping guild without an id: %r", raw_guild)
            continue
        channels: list[Channel] = []
        for raw_channel in _safe_get(raw_guild, "channels", [], list):
            channel = _parse_channel(
                raw_channel,
                snapshot,
                guild_id=guild_id,
                default_kind=ChannelKind.GUILD_TEXT,
            )
            if channel is not None:
                channels.append(channel)
        snapshot.add_guild(
            Guild(id=guild_id, name=_safe_get(raw_guild, "name", "", str)),
            channels,
            muted=_safe_get(raw_guild, "muted", False, bool),
        )

    for raw_channel in _safe_get(data, "private_channels", [], list):
        channel = _parse_channel(raw_channel, snapshot, guild_id=None, default_kind=ChannelKind.DM)
        if channel is not None:
            snapshot.add_private_channel(channel)

    return snapshot


def load_snapshot(path: Path) -> AccountSnapshot:
    """Read and parse a snapshot file.

    Raises:
        SnapshotError: if the file cannot be read, is not JSON, or is not an object.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise SnapshotError(f"could not read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise SnapshotError(f"{path} is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise SnapshotError(f"{path} does not contain a JSON object")
    snapshot = snapshot_from_dict(data)
    logger.debug(
        "Loaded snapshot %s: %d guilds, %d private channels",
        path,
        len(snapshot.guild_list),
        len(snapshot.dm_channels),
    )
    return snapshot


__all__ = [
    "SnapshotError",
    "load_snapshot",
    "snapshot_from_dict",
]
