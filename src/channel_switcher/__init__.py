"""Channel resolution engine for terminal messaging clients.

Classifies, collects, ranks and navigates channel candidates for an inline
picker and a quick switcher.
"""

from channel_switcher.classify import is_guild_muted, is_muted, is_unread, muted_from_indications
from channel_switcher.collect import collect_candidates, dm_display_name
from channel_switcher.engine import (
    PickerEngine,
    PickerProfile,
    picker_profile,
    quick_switcher_profile,
)
from channel_switcher.models import (
    Channel,
    ChannelCandidate,
    ChannelKind,
    EmptyInputMode,
    Guild,
    KeyBindings,
    UnreadIndication,
    UnreadOpts,
    User,
    UserConfig,
)
from channel_switcher.navigation import Focus, NavKey
from channel_switcher.ranking import rank_candidates
from channel_switcher.state import (
    AccountSnapshot,
    AccountState,
    PickerActions,
    StateUnavailableError,
)

__all__ = [
    "AccountSnapshot",
    "AccountState",
    "Channel",
    "ChannelCandidate",
    "ChannelKind",
    "EmptyInputMode",
    "Focus",
    "Guild",
    "KeyBindings",
    "NavKey",
    "PickerActions",
    "PickerEngine",
    "PickerProfile",
    "StateUnavailableError",
    "UnreadIndication",
    "UnreadOpts",
    "User",
    "UserConfig",
    "collect_candidates",
    "dm_display_name",
    "is_guild_muted",
    "is_muted",
    "is_unread",
    "muted_from_indications",
    "picker_profile",
    "quick_switcher_profile",
    "rank_candidates",
]
