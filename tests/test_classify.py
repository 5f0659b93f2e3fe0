"""Tests for unread and mute classification."""

from __future__ import annotations

import pytest

from channel_switcher.classify import (
    is_guild_muted,
    is_muted,
    is_unread,
    muted_from_indications,
)
from channel_switcher.collect import collect_candidates
from channel_switcher.models import Channel, ChannelKind, Guild, UnreadIndication
from channel_switcher.state import AccountSnapshot
from tests.doubles import ScriptedOracle

READ = UnreadIndication.READ
UNREAD = UnreadIndication.UNREAD
MENTIONED = UnreadIndication.MENTIONED


class TestMuteTruthTable:
    @pytest.mark.parametrize(
        ("with_muted", "without_muted", "expected"),
        [
            (UNREAD, READ, True),
            (MENTIONED, READ, True),
            (UNREAD, UNREAD, False),
            (MENTIONED, MENTIONED, False),
            (MENTIONED, UNREAD, False),
            (READ, READ, False),
            (READ, UNREAD, False),
            (READ, MENTIONED, False),
        ],
    )
    def test_truth_table(self, with_muted, without_muted, expected):
        assert muted_from_indications(with_muted, without_muted) is expected


class TestIsUnread:
    @pytest.mark.parametrize(
        ("indication", "expected"),
        [
            (MENTIONED, (True, True)),
            (UNREAD, (True, False)),
            (READ, (False, False)),
        ],
    )
    def test_maps_default_query(self, indication, expected):
        oracle = ScriptedOracle(channel_answers={"c1": (MENTIONED, indication)})
        assert is_unread(oracle, "c1") == expected

    def test_ignores_muted_categories_query(self):
        # Activity only visible when muted categories are included stays unread=False.
        oracle = ScriptedOracle(channel_answers={"c1": (MENTIONED, READ)})
        assert is_unread(oracle, "c1") == (False, False)


class TestIsMuted:
    def test_channel_with_hidden_activity_is_muted(self):
        oracle = ScriptedOracle(channel_answers={"c1": (UNREAD, READ)})
        assert is_muted(oracle, "c1") is True

    def test_channel_with_visible_activity_is_not_muted(self):
        oracle = ScriptedOracle(channel_answers={"c1": (UNREAD, UNREAD)})
        assert is_muted(oracle, "c1") is False

    def test_muted_channel_without_activity_is_not_muted(self):
        """Nothing to exclude: both queries say READ, so no mute is inferred."""
        oracle = ScriptedOracle(channel_answers={"c1": (READ, READ)})
        assert is_muted(oracle, "c1") is False

    def test_snapshot_muted_channel_without_activity_is_not_muted(self):
        snapshot = AccountSnapshot()
        snapshot.add_guild(Guild(id="g1", name="G"), [Channel(id="c1", name="quiet", guild_id="g1")])
        snapshot.set_read_state("c1", READ, muted=True)
        assert is_muted(snapshot, "c1") is False
        assert is_unread(snapshot, "c1") == (False, False)

    def test_snapshot_muted_category_hides_child(self):
        snapshot = AccountSnapshot()
        snapshot.add_guild(
            Guild(id="g1", name="G"),
            [
                Channel(id="cat", name="Archive", guild_id="g1"),
                Channel(id="c1", name="old", guild_id="g1", parent_id="cat"),
            ],
        )
        snapshot.set_read_state("cat", READ, muted=True)
        snapshot.set_read_state("c1", UNREAD)
        assert is_muted(snapshot, "c1") is True

    def test_guild_mute_uses_guild_queries(self):
        oracle = ScriptedOracle(guild_answers={"g1": (MENTIONED, READ), "g2": (UNREAD, UNREAD)})
        assert is_guild_muted(oracle, "g1") is True
        assert is_guild_muted(oracle, "g2") is False
        assert is_guild_muted(oracle, "unknown") is False


class _NoScanDict(dict):
    """Channel table that fails any attempt to walk every guild."""

    def values(self):
        raise AssertionError("channel lookup walked every guild")

    def items(self):
        raise AssertionError("channel lookup walked every guild")


class TestSnapshotChannelIndex:
    def _snapshot(self) -> AccountSnapshot:
        snapshot = AccountSnapshot()
        snapshot.add_guild(
            Guild(id="g1", name="G"),
            [
                Channel(id="cat", name="Archive", kind=ChannelKind.GUILD_CATEGORY, guild_id="g1"),
                Channel(id="c1", name="old", guild_id="g1", parent_id="cat"),
                Channel(id="c2", name="new", guild_id="g1"),
            ],
        )
        snapshot.add_private_channel(Channel(id="dm1", name="alice", kind=ChannelKind.DM))
        snapshot.set_read_state("cat", READ, muted=True)
        snapshot.set_read_state("c1", UNREAD)
        snapshot.set_read_state("c2", MENTIONED)
        snapshot.set_read_state("dm1", UNREAD)
        return snapshot

    def test_index_covers_guild_channels_and_dms(self):
        snapshot = self._snapshot()
        assert sorted(snapshot.channel_index) == ["c1", "c2", "cat", "dm1"]
        assert snapshot.channel_index["c1"].parent_id == "cat"

    def test_mute_lookup_does_not_walk_guilds(self):
        snapshot = self._snapshot()
        snapshot.guild_channels = _NoScanDict(snapshot.guild_channels)

        assert is_muted(snapshot, "c1") is True
        assert is_unread(snapshot, "c2") == (True, True)
        assert is_unread(snapshot, "dm1") == (True, False)

    def test_collection_does_not_walk_guilds(self):
        snapshot = self._snapshot()
        snapshot.guild_channels = _NoScanDict(snapshot.guild_channels)

        assert [c.channel_id for c in collect_candidates(snapshot)] == ["c2", "dm1"]
