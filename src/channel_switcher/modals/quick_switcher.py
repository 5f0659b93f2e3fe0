"""Quick switcher modal: jump to any channel by typed text."""

from __future__ import annotations

import logging

from textual import on
from textual.app import ComposeResult
from textual.containers import Vertical
from textual.events import Key
from textual.screen import ModalScreen
from textual.widgets import Input, Label, OptionList, Static

from channel_switcher.engine import PickerEngine, PickerProfile, StateProvider
from channel_switcher.navigation import Focus
from channel_switcher.widgets.picker import populate_results

logger = logging.getLogger(__name__)


class QuickSwitcherModal(ModalScreen[str | None]):
    """Modal channel switcher with focus transfer between input and results.

    Dismisses with the chosen channel id, or ``None`` when cancelled.
    """

    DEFAULT_CSS = """
    QuickSwitcherModal {
        align: center middle;
    }

    QuickSwitcherModal > Vertical {
        width: 70;
        height: auto;
        max-height: 20;
        background: $panel;
        border: thick $accent;
        padding: 1 2;
    }

    QuickSwitcherModal #switcher-input {
        margin-bottom: 1;
    }

    QuickSwitcherModal #switcher-results {
        height: auto;
        max-height: 10;
    }

    QuickSwitcherModal #switcher-footer {
        text-style: dim;
        margin-top: 1;
    }
    """

    def __init__(self, state_provider: StateProvider, profile: PickerProfile) -> None:
        super().__init__()
        self.engine = PickerEngine(state_provider, self, profile)
        self._chosen: str | None = None
        self._dismissing = False

    def compose(self) -> ComposeResult:
        keys = self.engine.profile.keys
        with Vertical():
            yield Label("[bold]Jump to:[/]")
            yield Input(placeholder="Channel, thread or DM...", id="switcher-input")
            yield OptionList(id="switcher-results")
            yield Static(
                f"{keys.down}/{keys.tab}: results  {keys.confirm}: open  {keys.cancel}: close",
                id="switcher-footer",
                markup=False,
            )

    def on_mount(self) -> None:
        self.engine.refresh()
        self._render_results()
        self.query_one("#switcher-input", Input).focus()

    # -- PickerActions ------------------------------------------------------

    def select_channel(self, channel_id: str) -> None:
        self._chosen = channel_id

    def close_picker(self) -> None:
        self._dismissing = True
        self.dismiss(self._chosen)

    # -- event handlers -----------------------------------------------------

    @on(Input.Changed, "#switcher-input")
    def _on_input_changed(self, event: Input.Changed) -> None:
        self.engine.on_text_changed(event.value)
        self._render_results()

    @on(Input.Submitted, "#switcher-input")
    def _on_input_submitted(self, event: Input.Submitted) -> None:
        self.engine.on_done("enter")

    @on(OptionList.OptionSelected, "#switcher-results")
    def _on_option_selected(self, event: OptionList.OptionSelected) -> None:
        self.engine.on_confirm(event.option_index)

    @on(OptionList.OptionHighlighted, "#switcher-results")
    def _on_option_highlighted(self, event: OptionList.OptionHighlighted) -> None:
        self.engine.set_selection(event.option_index)

    def on_key(self, event: Key) -> None:
        """Route navigation keys through the engine's focus table."""
        results = self.query_one("#switcher-results", OptionList)
        self.engine.set_focus(Focus.LIST if self.focused is results else Focus.INPUT)
        if not self.engine.handle_key(event.key):
            return
        event.prevent_default()
        event.stop()
        self._sync_view()

    # -- rendering ----------------------------------------------------------

    def _render_results(self) -> None:
        populate_results(
            self.query_one("#switcher-results", OptionList),
            self.engine.current_candidates(),
            self.engine.text,
            self.engine.selected_index,
        )

    def _sync_view(self) -> None:
        """Apply the engine's focus and selection to the widgets."""
        if self._dismissing:
            return
        results = self.query_one("#switcher-results", OptionList)
        if self.engine.candidate_count:
            results.highlighted = self.engine.selected_index
        if self.engine.focus is Focus.LIST:
            results.focus()
        else:
            self.query_one("#switcher-input", Input).focus()


__all__ = ["QuickSwitcherModal"]
