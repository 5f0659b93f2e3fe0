"""Channel Switcher TUI - jump between guild channels and DMs by typing.

Key bindings:
    ctrl+k  - Toggle the inline channel picker
    ctrl+g  - Open the quick switcher
    ctrl+q  - Quit

Inside a picker:
    <text>  - Fuzzy match channel, thread and DM names
    (empty) - Show unread channels, mentions first
    up/down - Move through results
    tab     - Move focus between input and results (quick switcher)
    enter   - Jump to the highlighted channel
    escape  - Close
"""

from __future__ import annotations

import logging

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header, Static

from channel_switcher.action_messages import build_switch_notice
from channel_switcher.cli import main
from channel_switcher.collect import dm_display_name
from channel_switcher.engine import picker_profile, quick_switcher_profile
from channel_switcher.models import UserConfig
from channel_switcher.modals import QuickSwitcherModal
from channel_switcher.state import AccountSnapshot, AccountState, StateUnavailableError
from channel_switcher.widgets import ChannelPicker

logger = logging.getLogger(__name__)

APP_CSS = """
#active-channel {
    height: 1fr;
    content-align: center middle;
    text-style: bold;
}
"""


class ChannelSwitcherApp(App):
    """Demo host for the inline picker and the quick switcher."""

    TITLE = "Channel Switcher"
    CSS = APP_CSS
    ENABLE_COMMAND_PALETTE = False

    # Priority so the picker's own input field cannot swallow them.
    BINDINGS = [
        Binding("ctrl+k", "toggle_picker", "Picker", priority=True),
        Binding("ctrl+g", "quick_switcher", "Quick switcher", priority=True),
        Binding("ctrl+q", "quit", "Quit", priority=True),
    ]

    def __init__(
        self,
        snapshot: AccountSnapshot | None,
        config: UserConfig | None = None,
        open_quick_switcher: bool = False,
    ) -> None:
        super().__init__()
        self._account_snapshot = snapshot
        self._user_config = config or UserConfig()
        self._quick_switcher_on_mount = open_quick_switcher
        self.active_channel_id: str | None = None
        # Held directly: while the quick switcher is up, query_one searches the modal.
        self._active_channel_label = Static(
            "No channel selected. Press ctrl+k or ctrl+g.", id="active-channel"
        )
        self._channel_picker = ChannelPicker(
            self._current_state, picker_profile(self._user_config), id="picker"
        )

    def compose(self) -> ComposeResult:
        yield Header()
        yield self._active_channel_label
        yield self._channel_picker
        yield Footer()

    def on_mount(self) -> None:
        if self._quick_switcher_on_mount:
            self.action_quick_switcher()

    def _current_state(self) -> AccountState | None:
        return self._account_snapshot

    # -- actions ------------------------------------------------------------

    def _quick_switcher_open(self) -> bool:
        return isinstance(self.screen, QuickSwitcherModal)

    def action_toggle_picker(self) -> None:
        if self._quick_switcher_open():
            return
        picker = self._channel_picker
        if picker.is_open:
            picker.hide()
        else:
            picker.open()

    def action_quick_switcher(self) -> None:
        if self._quick_switcher_open():
            return
        modal = QuickSwitcherModal(self._current_state, quick_switcher_profile(self._user_config))
        self.push_screen(modal, self._on_quick_switcher_dismissed)

    def _on_quick_switcher_dismissed(self, channel_id: str | None) -> None:
        if channel_id is not None:
            self.select_channel(channel_id)

    def on_channel_picker_channel_selected(self, message: ChannelPicker.ChannelSelected) -> None:
        self.select_channel(message.channel_id)

    def on_channel_picker_closed(self, message: ChannelPicker.Closed) -> None:
        self._channel_picker.hide()

    # -- channel selection --------------------------------------------------

    def select_channel(self, channel_id: str) -> None:
        """Make ``channel_id`` the active channel and mark it read."""
        self.active_channel_id = channel_id
        label = self.describe_channel(channel_id)
        if self._account_snapshot is not None:
            self._account_snapshot.mark_read(channel_id)
        self._active_channel_label.update(label)
        self.notify(build_switch_notice(label), title="Channel")
        logger.debug("Active channel is now %s", channel_id)

    def describe_channel(self, channel_id: str) -> str:
        """Human-readable label for a channel id, falling back to the id."""
        if self._account_snapshot is None:
            return channel_id
        for guild in self._account_snapshot.guilds():
            try:
                channels = self._account_snapshot.channels(guild.id)
            except StateUnavailableError:
                continue
            for channel in channels:
                if channel.id == channel_id:
                    return f"#{channel.name} ({guild.name})"
        for channel in self._account_snapshot.private_channels():
            if channel.id == channel_id:
                return dm_display_name(channel)
        return channel_id


__all__ = ["ChannelSwitcherApp", "main"]
