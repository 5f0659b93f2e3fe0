"""Parameterized picker engine shared by the inline picker and the quick switcher."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from channel_switcher.collect import collect_candidates
from channel_switcher.models import (
    DEFAULT_CANDIDATE_LIMIT,
    ChannelCandidate,
    EmptyInputMode,
    KeyBindings,
    UserConfig,
)
from channel_switcher.navigation import (
    PICKER_DONE_TRANSITIONS,
    PICKER_TRANSITIONS,
    QUICK_SWITCHER_DONE_TRANSITIONS,
    QUICK_SWITCHER_TRANSITIONS,
    Effect,
    Focus,
    NavigationState,
    NavKey,
    TransitionTable,
    resolve_key,
)
from channel_switcher.ranking import rank_candidates
from channel_switcher.state import AccountState, PickerActions

logger = logging.getLogger(__name__)

StateProvider = Callable[[], AccountState | None]

# Physical keys the done (submit) event can carry.
DONE_KEYS = KeyBindings(up="", down="", confirm="enter", cancel="escape", tab="")


@dataclass(frozen=True, slots=True)
class PickerProfile:
    """Everything that differs between the two pickers."""

    name: str
    transitions: TransitionTable
    done_transitions: TransitionTable
    keys: KeyBindings = field(default_factory=KeyBindings)
    limit: int = DEFAULT_CANDIDATE_LIMIT
    empty_input: EmptyInputMode = EmptyInputMode.UNREAD


def _empty_input_mode(config: UserConfig) -> EmptyInputMode:
    try:
        return EmptyInputMode(config.empty_input_mode)
    except ValueError:
        return EmptyInputMode.UNREAD


def picker_profile(config: UserConfig | None = None) -> PickerProfile:
    """Profile for the inline autocomplete picker."""
    config = config or UserConfig()
    return PickerProfile(
        name="picker",
        transitions=PICKER_TRANSITIONS,
        done_transitions=PICKER_DONE_TRANSITIONS,
        keys=config.picker_keys,
        limit=config.candidate_limit,
        empty_input=_empty_input_mode(config),
    )


def quick_switcher_profile(config: UserConfig | None = None) -> PickerProfile:
    """Profile for the modal quick switcher."""
    config = config or UserConfig()
    return PickerProfile(
        name="quick_switcher",
        transitions=QUICK_SWITCHER_TRANSITIONS,
        done_transitions=QUICK_SWITCHER_DONE_TRANSITIONS,
        keys=config.quick_switcher_keys,
        limit=config.candidate_limit,
        empty_input=_empty_input_mode(config),
    )


class PickerEngine:
    """Collects, ranks and navigates channel candidates for one open picker.

    The engine re-reads the account state on every text change and never
    patches a previous result list. It talks to the application only through
    ``actions.select_channel`` and ``actions.close_picker``.
    """

    def __init__(
        self,
        state_provider: StateProvider,
        actions: PickerActions,
        profile: PickerProfile,
    ) -> None:
        self._state_provider = state_provider
        self._actions = actions
        self.profile = profile
        self._text = ""
        self._candidates: list[ChannelCandidate] = []
        self._nav = NavigationState()

    # -- read-only views ----------------------------------------------------

    @property
    def text(self) -> str:
        return self._text

    @property
    def focus(self) -> Focus:
        return self._nav.focus

    @property
    def selected_index(self) -> int | None:
        return self._nav.selected_index

    @property
    def candidate_count(self) -> int:
        return len(self._candidates)

    def current_candidates(self) -> list[ChannelCandidate]:
        return list(self._candidates)

    @staticmethod
    def display_text(candidate: ChannelCandidate) -> str:
        return candidate.display_text()

    # -- events from the presentation layer ---------------------------------

    def on_text_changed(self, text: str) -> list[ChannelCandidate]:
        """Recompute the candidate list for ``text`` and reset the selection."""
        self._text = text
        candidates = collect_candidates(self._state_provider())
        self._candidates = rank_candidates(
            candidates,
            text,
            limit=self.profile.limit,
            empty_input=self.profile.empty_input,
        )
        self._nav.reset(len(self._candidates))
        return self.current_candidates()

    def refresh(self) -> list[ChannelCandidate]:
        """Recompute for the current text (used when a picker opens)."""
        return self.on_text_changed(self._text)

    def on_confirm(self, index: int) -> bool:
        """Select the candidate at ``index``. Out-of-range indexes do nothing."""
        if not 0 <= index < len(self._candidates):
            return False
        self._choose(self._candidates[index])
        return True

    def on_cancel(self) -> None:
        self._actions.close_picker()

    def on_done(self, key: str) -> bool:
        """Handle the input field's submit event (enter or escape)."""
        nav_key = resolve_key(key, DONE_KEYS)
        if nav_key is None:
            return False
        saved_focus = self._nav.focus
        self._nav.focus = Focus.INPUT
        effect = self._nav.transition(self.profile.done_transitions, nav_key)
        if effect is None:
            self._nav.focus = saved_focus
            return False
        self._apply(effect)
        return True

    def handle_key(self, key: str) -> bool:
        """Route a key press through the transition table.

        Returns True when the key was consumed and must not reach the widget.
        """
        nav_key = resolve_key(key, self.profile.keys)
        if nav_key is None:
            return False
        return self.handle_nav_key(nav_key)

    def handle_nav_key(self, nav_key: NavKey) -> bool:
        effect = self._nav.transition(self.profile.transitions, nav_key)
        if effect is None:
            return False
        self._apply(effect)
        return True

    def set_focus(self, focus: Focus) -> None:
        """Record a focus change made outside the key table (e.g. a mouse click)."""
        if focus is Focus.LIST and not self._candidates:
            return
        self._nav.focus = focus

    def set_selection(self, index: int) -> bool:
        """Record a highlight change made by the list widget."""
        return self._nav.select(index)

    # -- internals ----------------------------------------------------------

    def _apply(self, effect: Effect) -> None:
        logger.debug("%s: %s (focus=%s)", self.profile.name, effect.value, self._nav.focus.value)
        if effect is Effect.FOCUS_INPUT:
            self._nav.focus = Focus.INPUT
        elif effect is Effect.FOCUS_LIST:
            self._nav.focus = Focus.LIST
        elif effect is Effect.TOGGLE_FOCUS:
            self._nav.focus = Focus.INPUT if self._nav.focus is Focus.LIST else Focus.LIST
        elif effect is Effect.MOVE_UP:
            self._nav.move(-1)
        elif effect is Effect.MOVE_DOWN:
            self._nav.move(1)
        elif effect is Effect.SELECT_CURRENT:
            if self._nav.selected_index is not None:
                self.on_confirm(self._nav.selected_index)
        elif effect is Effect.SELECT_FIRST:
            self.on_confirm(0)
        elif effect is Effect.SELECT_EXACT:
            self._select_exact()
        elif effect is Effect.CLOSE:
            self.on_cancel()

    def _select_exact(self) -> None:
        for candidate in self._candidates:
            if candidate.label == self._text:
                self._choose(candidate)
                return

    def _choose(self, candidate: ChannelCandidate) -> None:
        logger.debug("%s: selecting channel %s", self.profile.name, candidate.channel_id)
        self._actions.select_channel(candidate.channel_id)
        self._actions.close_picker()


__all__ = [
    "DONE_KEYS",
    "PickerEngine",
    "PickerProfile",
    "StateProvider",
    "picker_profile",
    "quick_switcher_profile",
]
