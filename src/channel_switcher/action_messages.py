"""User-facing copy for CLI errors and in-app notifications."""

from __future__ import annotations


def _ensure_sentence(text: str) -> str:
    """Return text with terminal sentence punctuation."""
    cleaned = text.strip()
    if not cleaned:
        return ""
    if cleaned.endswith((".", "!", "?")):
        return cleaned
    return f"{cleaned}."


def build_next_step_hint(next_step: str) -> str:
    """Build a canonical next-step guidance line."""
    return f"Next step: {_ensure_sentence(next_step)}"


def build_actionable_error(
    action: str,
    *,
    next_step: str,
    why: str | None = None,
) -> str:
    """Build a 2-3 line actionable error message."""
    lines = [f"Could not {action.strip()}."]
    if why:
        lines.append(f"Why: {_ensure_sentence(why)}")
    lines.append(build_next_step_hint(next_step))
    return "\n".join(lines)


def build_switch_notice(label: str) -> str:
    """Notification shown after jumping to a channel."""
    return _ensure_sentence(f"Switched to {label}")


def build_empty_results_hint(query: str) -> str:
    """Placeholder line for a picker with nothing to show."""
    if query:
        return f'No channels match "{query}"'
    return "No unread channels"


__all__ = [
    "build_actionable_error",
    "build_empty_results_hint",
    "build_next_step_hint",
    "build_switch_notice",
]
