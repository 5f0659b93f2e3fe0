"""Tests for the shared picker engine."""

from __future__ import annotations

import pytest

from channel_switcher.engine import (
    PickerEngine,
    PickerProfile,
    picker_profile,
    quick_switcher_profile,
)
from channel_switcher.models import (
    Channel,
    EmptyInputMode,
    Guild,
    KeyBindings,
    UnreadIndication,
    UserConfig,
)
from channel_switcher.navigation import Effect, Focus, Guard, NavKey
from channel_switcher.state import AccountSnapshot


@pytest.fixture
def abc_snapshot() -> AccountSnapshot:
    """Three unread channels A, B and C in collector order."""
    snapshot = AccountSnapshot()
    snapshot.add_guild(
        Guild(id="g1", name="Test"),
        [Channel(id=cid, name=cid, guild_id="g1") for cid in ("A", "B", "C")],
    )
    for cid in ("A", "B", "C"):
        snapshot.set_read_state(cid, UnreadIndication.UNREAD)
    return snapshot


@pytest.fixture
def make_engine(recording_actions):
    """Factory for an engine over a fixed snapshot, already populated for ``text``."""

    def _make(snapshot, profile=None, text: str = "") -> PickerEngine:
        engine = PickerEngine(lambda: snapshot, recording_actions, profile or picker_profile())
        engine.on_text_changed(text)
        return engine

    return _make


class TestTextChanges:
    def test_selection_points_at_head(self, make_engine, abc_snapshot):
        engine = make_engine(abc_snapshot)
        assert [c.channel_id for c in engine.current_candidates()] == ["A", "B", "C"]
        assert engine.selected_index == 0

    def test_no_candidates_clears_selection(self, make_engine, abc_snapshot):
        engine = make_engine(abc_snapshot, text="zzz")
        assert engine.candidate_count == 0
        assert engine.selected_index is None

    def test_missing_state_gives_empty_list(self, recording_actions):
        engine = PickerEngine(lambda: None, recording_actions, picker_profile())
        assert engine.on_text_changed("") == []
        assert engine.on_text_changed("gen") == []

    def test_each_change_rereads_state(self, make_engine, example_snapshot):
        engine = make_engine(example_snapshot)
        assert [engine.display_text(c) for c in engine.current_candidates()] == [
            "• #general (Test)"
        ]

        example_snapshot.mark_read("c1")

        assert engine.on_text_changed("") == []
        assert [c.channel_id for c in engine.on_text_changed("gen")] == ["c1"]

    def test_refresh_reuses_current_text(self, make_engine, busy_snapshot):
        engine = make_engine(busy_snapshot, text="gamma")
        assert [c.channel_id for c in engine.refresh()] == ["c-gamma"]
        assert engine.text == "gamma"


class TestConfirm:
    def test_selects_then_closes(self, make_engine, abc_snapshot, recording_actions):
        engine = make_engine(abc_snapshot)

        assert engine.on_confirm(1) is True

        assert recording_actions.calls == [("select", "B"), ("close",)]

    @pytest.mark.parametrize("index", [-1, 3, 99])
    def test_out_of_range_is_ignored(self, make_engine, abc_snapshot, recording_actions, index):
        engine = make_engine(abc_snapshot)
        assert engine.on_confirm(index) is False
        assert recording_actions.calls == []

    def test_cancel_only_closes(self, make_engine, abc_snapshot, recording_actions):
        make_engine(abc_snapshot).on_cancel()
        assert recording_actions.calls == [("close",)]


class TestInlinePickerKeys:
    def test_arrows_move_selection_within_bounds(self, make_engine, abc_snapshot):
        engine = make_engine(abc_snapshot)

        assert engine.handle_key("up") is True
        assert engine.selected_index == 0
        for _ in range(5):
            engine.handle_key("down")
        assert engine.selected_index == 2
        assert engine.focus is Focus.INPUT

    def test_enter_selects_highlighted(self, make_engine, abc_snapshot, recording_actions):
        engine = make_engine(abc_snapshot)
        engine.handle_key("down")

        assert engine.handle_key("enter") is True

        assert recording_actions.selected == ["B"]

    def test_tab_and_text_keys_pass_through(self, make_engine, abc_snapshot, recording_actions):
        engine = make_engine(abc_snapshot)
        assert engine.handle_key("tab") is False
        assert engine.handle_key("a") is False
        assert recording_actions.calls == []

    def test_arrows_pass_through_without_candidates(self, make_engine, abc_snapshot):
        engine = make_engine(abc_snapshot, text="zzz")
        assert engine.handle_key("up") is False
        assert engine.handle_key("down") is False
        assert engine.handle_key("enter") is False

    def test_escape_closes(self, make_engine, abc_snapshot, recording_actions):
        engine = make_engine(abc_snapshot, text="zzz")
        assert engine.handle_key("escape") is True
        assert recording_actions.calls == [("close",)]

    def test_done_takes_first_candidate(self, make_engine, abc_snapshot, recording_actions):
        engine = make_engine(abc_snapshot)
        engine.handle_key("down")

        assert engine.on_done("enter") is True

        assert recording_actions.calls == [("select", "A"), ("close",)]

    def test_done_without_candidates_does_nothing(
        self, make_engine, abc_snapshot, recording_actions
    ):
        engine = make_engine(abc_snapshot, text="zzz")
        assert engine.on_done("enter") is False
        assert engine.on_done("tab") is False
        assert recording_actions.calls == []

    def test_done_escape_closes(self, make_engine, abc_snapshot, recording_actions):
        assert make_engine(abc_snapshot).on_done("escape") is True
        assert recording_actions.calls == [("close",)]


class TestQuickSwitcherKeys:
    def test_focus_transfer_between_input_and_list(self, make_engine, busy_snapshot):
        engine = make_engine(busy_snapshot, quick_switcher_profile())
        assert engine.focus is Focus.INPUT

        engine.handle_key("down")
        assert (engine.focus, engine.selected_index) == (Focus.LIST, 0)

        engine.handle_key("down")
        assert engine.selected_index == 1

        engine.handle_key("up")
        assert (engine.focus, engine.selected_index) == (Focus.LIST, 0)

        engine.handle_key("up")
        assert engine.focus is Focus.INPUT

    def test_tab_toggles(self, make_engine, busy_snapshot):
        engine = make_engine(busy_snapshot, quick_switcher_profile())

        engine.handle_key("tab")
        assert engine.focus is Focus.LIST
        engine.handle_key("tab")
        assert engine.focus is Focus.INPUT

    def test_down_on_empty_list_keeps_input_focus(self, make_engine, busy_snapshot):
        engine = make_engine(busy_snapshot, quick_switcher_profile(), text="zzz")
        assert engine.handle_key("down") is False
        assert engine.focus is Focus.INPUT

    def test_up_from_input_passes_through(self, make_engine, busy_snapshot):
        engine = make_engine(busy_snapshot, quick_switcher_profile())
        assert engine.handle_key("up") is False

    def test_enter_from_input_takes_first(self, make_engine, busy_snapshot, recording_actions):
        engine = make_engine(busy_snapshot, quick_switcher_profile())
        engine.handle_key("enter")
        assert recording_actions.calls == [("select", "c-beta"), ("close",)]

    def test_enter_from_list_takes_highlighted(self, make_engine, busy_snapshot, recording_actions):
        engine = make_engine(busy_snapshot, quick_switcher_profile())
        engine.handle_key("down")
        engine.handle_key("down")
        engine.handle_key("enter")
        assert recording_actions.selected == ["dm-group"]

    def test_enter_with_no_candidates_selects_nothing(
        self, make_engine, busy_snapshot, recording_actions
    ):
        engine = make_engine(busy_snapshot, quick_switcher_profile(), text="zzz")
        assert engine.handle_key("enter") is True
        assert recording_actions.calls == []

    def test_typing_returns_focus_when_list_empties(self, make_engine, busy_snapshot):
        engine = make_engine(busy_snapshot, quick_switcher_profile())
        engine.handle_key("down")

        engine.on_text_changed("zzz")

        assert engine.focus is Focus.INPUT
        assert engine.selected_index is None

    def test_done_forces_input_rules(self, make_engine, busy_snapshot, recording_actions):
        engine = make_engine(busy_snapshot, quick_switcher_profile())
        engine.handle_key("down")
        engine.handle_key("down")

        engine.on_done("enter")

        assert recording_actions.selected == ["c-beta"]


class TestExactMatch:
    @pytest.fixture
    def exact_profile(self) -> PickerProfile:
        return PickerProfile(
            name="exact",
            transitions={(Focus.INPUT, NavKey.CONFIRM): ((Guard.ALWAYS, Effect.SELECT_EXACT),)},
            done_transitions={},
        )

    def test_selects_label_equal_to_text(
        self, make_engine, example_snapshot, recording_actions, exact_profile
    ):
        engine = make_engine(example_snapshot, exact_profile, text="alice#0 (Direct Messages)")
        engine.handle_key("enter")
        assert recording_actions.calls == [("select", "dm1"), ("close",)]

    def test_partial_text_selects_nothing(
        self, make_engine, example_snapshot, recording_actions, exact_profile
    ):
        engine = make_engine(example_snapshot, exact_profile, text="ali")
        engine.handle_key("enter")
        assert recording_actions.calls == []


class TestFocusAndSelectionSync:
    def test_set_focus_list_needs_candidates(self, make_engine, busy_snapshot):
        engine = make_engine(busy_snapshot, quick_switcher_profile(), text="zzz")
        engine.set_focus(Focus.LIST)
        assert engine.focus is Focus.INPUT

    def test_set_selection_is_bounds_checked(self, make_engine, abc_snapshot):
        engine = make_engine(abc_snapshot)
        assert engine.set_selection(2) is True
        assert engine.set_selection(7) is False
        assert engine.selected_index == 2


class TestProfiles:
    def test_defaults(self):
        inline = picker_profile()
        modal = quick_switcher_profile()
        assert (inline.name, modal.name) == ("picker", "quick_switcher")
        assert inline.limit == modal.limit == 10
        assert inline.empty_input is EmptyInputMode.UNREAD

    def test_config_drives_keys_limit_and_mode(self, make_engine, abc_snapshot, recording_actions):
        config = UserConfig(
            picker_keys=KeyBindings(up="ctrl+p", down="ctrl+n"),
            candidate_limit=2,
            empty_input_mode="all",
        )
        profile = picker_profile(config)
        assert profile.empty_input is EmptyInputMode.ALL

        engine = make_engine(abc_snapshot, profile)
        assert engine.candidate_count == 2
        assert engine.handle_key("down") is False
        engine.handle_key("ctrl+n")
        engine.handle_key("enter")
        assert recording_actions.selected == ["B"]

    def test_unknown_empty_input_mode_falls_back(self):
        config = UserConfig()
        config.empty_input_mode = "sometimes"
        assert quick_switcher_profile(config).empty_input is EmptyInputMode.UNREAD
