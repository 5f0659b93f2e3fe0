"""Shared test fixtures for channel switcher tests."""

from __future__ import annotations

import pytest

from channel_switcher.models import (
    Channel,
    ChannelCandidate,
    ChannelKind,
    Guild,
    UnreadIndication,
    User,
)
from channel_switcher.state import AccountSnapshot
from tests.doubles import RecordingActions

# ── Factories ────────────────────────────────────────────────────────────────


@pytest.fixture
def recording_actions() -> RecordingActions:
    return RecordingActions()


@pytest.fixture
def make_candidate():
    """Factory fixture for ChannelCandidate with sensible defaults."""

    def _make(
        name: str = "#general",
        context_label: str = "Test",
        channel_id: str | None = None,
        unread: bool = False,
        mentioned: bool = False,
    ) -> ChannelCandidate:
        return ChannelCandidate(
            name=name,
            context_label=context_label,
            channel_id=channel_id or name.lstrip("#"),
            unread=unread,
            mentioned=mentioned,
        )

    return _make


@pytest.fixture
def example_snapshot() -> AccountSnapshot:
    """One guild "Test" with a mentioned #general, plus a read DM with alice#0."""
    snapshot = AccountSnapshot()
    snapshot.add_guild(
        Guild(id="g1", name="Test"),
        [Channel(id="c1", name="general", kind=ChannelKind.GUILD_TEXT, guild_id="g1")],
    )
    snapshot.set_read_state("c1", UnreadIndication.MENTIONED)
    snapshot.add_private_channel(
        Channel(
            id="dm1",
            kind=ChannelKind.DM,
            recipients=(User(id="u1", username="alice", discriminator="0"),),
        )
    )
    snapshot.set_read_state("dm1", UnreadIndication.READ)
    return snapshot


@pytest.fixture
def busy_snapshot() -> AccountSnapshot:
    """A guild with several unread text channels and two unread DMs."""
    snapshot = AccountSnapshot()
    channels = [
        Channel(id="c-alpha", name="alpha", guild_id="g1"),
        Channel(id="c-beta", name="beta", guild_id="g1"),
        Channel(id="c-gamma", name="gamma", guild_id="g1"),
    ]
    snapshot.add_guild(Guild(id="g1", name="Busy"), channels)
    snapshot.set_read_state("c-alpha", UnreadIndication.UNREAD)
    snapshot.set_read_state("c-beta", UnreadIndication.MENTIONED)
    snapshot.set_read_state("c-gamma", UnreadIndication.READ)
    snapshot.add_private_channel(
        Channel(id="dm-bob", kind=ChannelKind.DM, recipients=(User(id="u2", username="bob"),))
    )
    snapshot.set_read_state("dm-bob", UnreadIndication.UNREAD)
    snapshot.add_private_channel(Channel(id="dm-group", name="book club", kind=ChannelKind.GROUP_DM))
    snapshot.set_read_state("dm-group", UnreadIndication.MENTIONED)
    return snapshot
