"""Inline channel picker widget and shared result-list rendering."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from rich.text import Text
from textual import on
from textual.app import ComposeResult
from textual.containers import Vertical
from textual.events import Key
from textual.message import Message
from textual.widgets import Input, OptionList
from textual.widgets.option_list import Option

from channel_switcher.action_messages import build_empty_results_hint
from channel_switcher.engine import PickerEngine, PickerProfile, StateProvider
from channel_switcher.models import ChannelCandidate

logger = logging.getLogger(__name__)


def render_candidate_option(candidate: ChannelCandidate) -> Option:
    """Build the list option for one candidate; mentions are shown in bold."""
    style = "bold" if candidate.mentioned else ""
    return Option(Text(candidate.display_text(), style=style))


def populate_results(
    option_list: OptionList,
    candidates: Sequence[ChannelCandidate],
    query: str,
    selected_index: int | None,
) -> None:
    """Replace the options of ``option_list`` with ``candidates``."""
    option_list.clear_options()
    if not candidates:
        option_list.add_option(
            Option(Text(build_empty_results_hint(query), style="dim"), disabled=True)
        )
        return
    option_list.add_options([render_candidate_option(c) for c in candidates])
    option_list.highlighted = selected_index


class ChannelPicker(Vertical):
    """Autocomplete popup docked in the main view.

    Focus stays in the input field; up/down/confirm are routed to the result
    list by the engine's transition table.
    """

    class ChannelSelected(Message):
        """The user picked a channel."""

        def __init__(self, channel_id: str) -> None:
            super().__init__()
            self.channel_id = channel_id

    class Closed(Message):
        """The picker asked to be hidden."""

    DEFAULT_CSS = """
    ChannelPicker {
        dock: bottom;
        height: auto;
        max-height: 14;
        background: $panel;
        border: tall $accent;
        padding: 0 1;
        display: none;
    }

    ChannelPicker.visible {
        display: block;
    }

    ChannelPicker #picker-input {
        border: none;
        height: 1;
        padding: 0;
    }

    ChannelPicker #picker-results {
        height: auto;
        max-height: 10;
        border: none;
    }
    """

    def __init__(
        self,
        state_provider: StateProvider,
        profile: PickerProfile,
        *,
        id: str | None = None,
    ) -> None:
        super().__init__(id=id)
        self._state_provider = state_provider
        self._profile = profile
        self.engine = PickerEngine(state_provider, self, profile)

    def compose(self) -> ComposeResult:
        yield Input(placeholder="> jump to channel", id="picker-input")
        results = OptionList(id="picker-results")
        # Focus stays in the input; tab is a picker key, not a focus move.
        results.can_focus = False
        yield results

    # -- PickerActions ------------------------------------------------------

    def select_channel(self, channel_id: str) -> None:
        self.post_message(self.ChannelSelected(channel_id))

    def close_picker(self) -> None:
        self.post_message(self.Closed())

    # -- lifecycle ----------------------------------------------------------

    def open(self) -> None:
        """Show the picker with fresh state and focus its input."""
        self.engine = PickerEngine(self._state_provider, self, self._profile)
        self.add_class("visible")
        input_widget = self.query_one("#picker-input", Input)
        input_widget.value = ""
        self.engine.refresh()
        self._render_results()
        input_widget.focus()

    def hide(self) -> None:
        self.remove_class("visible")
        # A hidden input must not keep receiving keystrokes.
        self.app.set_focus(None)

    @property
    def is_open(self) -> bool:
        return self.has_class("visible")

    # -- event handlers -----------------------------------------------------

    @on(Input.Changed, "#picker-input")
    def _on_input_changed(self, event: Input.Changed) -> None:
        event.stop()
        self.engine.on_text_changed(event.value)
        self._render_results()

    @on(Input.Submitted, "#picker-input")
    def _on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.engine.on_done("enter")

    @on(OptionList.OptionSelected, "#picker-results")
    def _on_option_selected(self, event: OptionList.OptionSelected) -> None:
        event.stop()
        self.engine.on_confirm(event.option_index)

    @on(OptionList.OptionHighlighted, "#picker-results")
    def _on_option_highlighted(self, event: OptionList.OptionHighlighted) -> None:
        event.stop()
        self.engine.set_selection(event.option_index)

    def on_key(self, event: Key) -> None:
        """Route navigation keys through the engine before the input sees them."""
        if not self.engine.handle_key(event.key):
            return
        event.prevent_default()
        event.stop()
        self._sync_selection()

    # -- rendering ----------------------------------------------------------

    def _render_results(self) -> None:
        populate_results(
            self.query_one("#picker-results", OptionList),
            self.engine.current_candidates(),
            self.engine.text,
            self.engine.selected_index,
        )

    def _sync_selection(self) -> None:
        if self.engine.candidate_count == 0:
            return
        self.query_one("#picker-results", OptionList).highlighted = self.engine.selected_index


__all__ = [
    "ChannelPicker",
    "populate_results",
    "render_candidate_option",
]
