"""Keyboard navigation as explicit focus/transition tables.

Each picker owns a table mapping ``(focus, key)`` to an ordered tuple of
``(guard, effect)`` rules. The first rule whose guard holds fires. A key with
no entry, or whose guards all fail, is left for the focused widget.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

from channel_switcher.models import KeyBindings


class Focus(Enum):
    """Which of the two input surfaces holds focus."""

    INPUT = "input"
    LIST = "list"


class NavKey(Enum):
    """Logical keys a picker reacts to; physical keys come from KeyBindings."""

    UP = "up"
    DOWN = "down"
    TAB = "tab"
    CONFIRM = "confirm"
    CANCEL = "cancel"


class Guard(Enum):
    ALWAYS = "always"
    HAS_CANDIDATES = "has_candidates"
    AT_TOP = "at_top"


class Effect(Enum):
    FOCUS_INPUT = "focus_input"
    FOCUS_LIST = "focus_list"
    TOGGLE_FOCUS = "toggle_focus"
    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    SELECT_CURRENT = "select_current"
    SELECT_FIRST = "select_first"
    SELECT_EXACT = "select_exact"
    CLOSE = "close"


Rule = tuple[Guard, Effect]
TransitionTable = Mapping[tuple[Focus, NavKey], tuple[Rule, ...]]

# Inline picker: focus never leaves the input field.
PICKER_TRANSITIONS: TransitionTable = {
    (Focus.INPUT, NavKey.UP): ((Guard.HAS_CANDIDATES, Effect.MOVE_UP),),
    (Focus.INPUT, NavKey.DOWN): ((Guard.HAS_CANDIDATES, Effect.MOVE_DOWN),),
    (Focus.INPUT, NavKey.CONFIRM): ((Guard.HAS_CANDIDATES, Effect.SELECT_CURRENT),),
    (Focus.INPUT, NavKey.CANCEL): ((Guard.ALWAYS, Effect.CLOSE),),
}

# Submit ("done") on the inline picker's input: blind enter takes the first candidate.
PICKER_DONE_TRANSITIONS: TransitionTable = {
    (Focus.INPUT, NavKey.CONFIRM): ((Guard.HAS_CANDIDATES, Effect.SELECT_FIRST),),
    (Focus.INPUT, NavKey.CANCEL): ((Guard.ALWAYS, Effect.CLOSE),),
}

QUICK_SWITCHER_TRANSITIONS: TransitionTable = {
    (Focus.INPUT, NavKey.DOWN): ((Guard.HAS_CANDIDATES, Effect.FOCUS_LIST),),
    (Focus.INPUT, NavKey.TAB): ((Guard.HAS_CANDIDATES, Effect.FOCUS_LIST),),
    (Focus.INPUT, NavKey.CONFIRM): (
        (Guard.HAS_CANDIDATES, Effect.SELECT_FIRST),
        (Guard.ALWAYS, Effect.SELECT_EXACT),
    ),
    (Focus.INPUT, NavKey.CANCEL): ((Guard.ALWAYS, Effect.CLOSE),),
    (Focus.LIST, NavKey.UP): (
        (Guard.AT_TOP, Effect.FOCUS_INPUT),
        (Guard.ALWAYS, Effect.MOVE_UP),
    ),
    (Focus.LIST, NavKey.DOWN): ((Guard.ALWAYS, Effect.MOVE_DOWN),),
    (Focus.LIST, NavKey.TAB): ((Guard.ALWAYS, Effect.TOGGLE_FOCUS),),
    (Focus.LIST, NavKey.CONFIRM): ((Guard.ALWAYS, Effect.SELECT_CURRENT),),
    (Focus.LIST, NavKey.CANCEL): ((Guard.ALWAYS, Effect.CLOSE),),
}

# The quick switcher's submit path is the same as confirm from the input.
QUICK_SWITCHER_DONE_TRANSITIONS: TransitionTable = {
    (Focus.INPUT, NavKey.CONFIRM): QUICK_SWITCHER_TRANSITIONS[(Focus.INPUT, NavKey.CONFIRM)],
    (Focus.INPUT, NavKey.CANCEL): ((Guard.ALWAYS, Effect.CLOSE),),
}


def resolve_key(key: str, bindings: KeyBindings) -> NavKey | None:
    """Map a physical key name to a logical navigation key."""
    for nav_key in NavKey:
        if getattr(bindings, nav_key.value) == key:
            return nav_key
    return None


@dataclass(slots=True)
class NavigationState:
    """Focus and selection of one open picker."""

    focus: Focus = Focus.INPUT
    selected_index: int | None = None
    candidate_count: int = 0

    def reset(self, candidate_count: int) -> None:
        """Point the selection at the head of a freshly ranked list."""
        self.candidate_count = candidate_count
        self.selected_index = 0 if candidate_count > 0 else None
        if candidate_count == 0:
            self.focus = Focus.INPUT

    def guard_holds(self, guard: Guard) -> bool:
        if guard is Guard.ALWAYS:
            return True
        if guard is Guard.HAS_CANDIDATES:
            return self.candidate_count > 0
        # AT_TOP
        return self.selected_index is None or self.selected_index == 0

    def transition(self, table: TransitionTable, nav_key: NavKey) -> Effect | None:
        """Return the effect of ``nav_key`` from the current focus, if any."""
        for guard, effect in table.get((self.focus, nav_key), ()):
            if self.guard_holds(guard):
                return effect
        return None

    def move(self, step: int) -> None:
        """Move the selection by ``step``, clamped to the list."""
        if self.candidate_count == 0:
            self.selected_index = None
            return
        current = self.selected_index if self.selected_index is not None else 0
        self.selected_index = max(0, min(current + step, self.candidate_count - 1))

    def select(self, index: int) -> bool:
        """Point the selection at ``index``; out-of-range indexes are ignored."""
        if 0 <= index < self.candidate_count:
            self.selected_index = index
            return True
        return False


__all__ = [
    "PICKER_DONE_TRANSITIONS",
    "PICKER_TRANSITIONS",
    "QUICK_SWITCHER_DONE_TRANSITIONS",
    "QUICK_SWITCHER_TRANSITIONS",
    "Effect",
    "Focus",
    "Guard",
    "NavKey",
    "NavigationState",
    "TransitionTable",
    "resolve_key",
]
