"""Data models and constants for the channel switcher."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum

# Application identity, single source of truth for platformdirs config paths
CONFIG_APP_NAME = "channel-switcher"

# Result list limits
DEFAULT_CANDIDATE_LIMIT = 10
MAX_CANDIDATE_LIMIT = 50

# Labels used for direct-message candidates
DM_CONTEXT_LABEL = "Direct Messages"
DM_FALLBACK_NAME = "Direct Message"

UNREAD_MARKER = "• "

EMPTY_INPUT_MODES = ("unread", "all")


class ChannelKind(IntEnum):
    """Channel type codes as reported by the Discord API."""

    GUILD_TEXT = 0
    DM = 1
    GUILD_VOICE = 2
    GROUP_DM = 3
    GUILD_CATEGORY = 4
    GUILD_ANNOUNCEMENT = 5
    ANNOUNCEMENT_THREAD = 10
    PUBLIC_THREAD = 11
    PRIVATE_THREAD = 12
    GUILD_STAGE_VOICE = 13
    GUILD_DIRECTORY = 14
    GUILD_FORUM = 15
    GUILD_MEDIA = 16


# Linear, nameable text streams; everything else is never offered as a candidate.
TEXT_CHANNEL_KINDS = frozenset(
    {
        ChannelKind.GUILD_TEXT,
        ChannelKind.GUILD_ANNOUNCEMENT,
        ChannelKind.PUBLIC_THREAD,
        ChannelKind.PRIVATE_THREAD,
        ChannelKind.ANNOUNCEMENT_THREAD,
    }
)


class UnreadIndication(Enum):
    """Read state reported by the account-state oracle."""

    READ = "read"
    UNREAD = "unread"
    MENTIONED = "mentioned"


class EmptyInputMode(Enum):
    """What a picker shows before anything has been typed."""

    UNREAD = "unread"  # only unread channels, mentions first
    ALL = "all"  # every candidate, mentions first, then unread


@dataclass(frozen=True, slots=True)
class UnreadOpts:
    """Options for an unread query against the oracle."""

    include_muted_categories: bool = False


@dataclass(frozen=True, slots=True)
class Guild:
    """A guild (server) the account belongs to."""

    id: str
    name: str


@dataclass(frozen=True, slots=True)
class User:
    """A direct-message recipient."""

    id: str
    username: str
    discriminator: str = "0"

    @property
    def tag(self) -> str:
        return f"{self.username}#{self.discriminator}"


@dataclass(frozen=True, slots=True)
class Channel:
    """A guild channel, thread, or private (DM) channel."""

    id: str
    name: str = ""
    kind: ChannelKind = ChannelKind.GUILD_TEXT
    guild_id: str | None = None
    parent_id: str | None = None  # category for channels, parent channel for threads
    recipients: tuple[User, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class ChannelCandidate:
    """A channel eligible for display in a picker result list.

    Candidates are snapshots taken at collection time and are rebuilt on
    every keystroke.
    """

    name: str
    context_label: str
    channel_id: str
    unread: bool = False
    mentioned: bool = False

    def __post_init__(self) -> None:
        """Keep ``mentioned`` implying ``unread``."""
        if self.mentioned and not self.unread:
            object.__setattr__(self, "unread", True)

    @property
    def label(self) -> str:
        """Text the fuzzy matcher and exact-match fallback compare against."""
        if self.context_label:
            return f"{self.name} ({self.context_label})"
        return self.name

    def __str__(self) -> str:
        return self.label

    def display_text(self) -> str:
        """Return the list text, prefixed with an unread marker when unread."""
        if self.unread:
            return UNREAD_MARKER + self.label
        return self.label


@dataclass(slots=True)
class KeyBindings:
    """Key names (Textual notation) routed to a picker's navigation table."""

    up: str = "up"
    down: str = "down"
    confirm: str = "enter"
    cancel: str = "escape"
    tab: str = "tab"


@dataclass(slots=True)
class UserConfig:
    """Complete user configuration for both pickers."""

    picker_keys: KeyBindings = field(default_factory=KeyBindings)
    quick_switcher_keys: KeyBindings = field(default_factory=KeyBindings)
    candidate_limit: int = DEFAULT_CANDIDATE_LIMIT
    empty_input_mode: str = "unread"  # "unread" | "all"
    version: int = 1

    def __post_init__(self) -> None:
        """Clamp candidate_limit into its valid range."""
        self.candidate_limit = max(1, min(self.candidate_limit, MAX_CANDIDATE_LIMIT))


__all__ = [
    "CONFIG_APP_NAME",
    "DEFAULT_CANDIDATE_LIMIT",
    "DM_CONTEXT_LABEL",
    "DM_FALLBACK_NAME",
    "EMPTY_INPUT_MODES",
    "MAX_CANDIDATE_LIMIT",
    "TEXT_CHANNEL_KINDS",
    "UNREAD_MARKER",
    "Channel",
    "ChannelCandidate",
    "ChannelKind",
    "EmptyInputMode",
    "Guild",
    "KeyBindings",
    "UnreadIndication",
    "UnreadOpts",
    "User",
    "UserConfig",
]
