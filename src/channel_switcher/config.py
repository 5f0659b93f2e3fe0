"""Configuration persistence: load and save picker settings."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir

from channel_switcher.models import (
    CONFIG_APP_NAME,
    DEFAULT_CANDIDATE_LIMIT,
    EMPTY_INPUT_MODES,
    MAX_CANDIDATE_LIMIT,
    KeyBindings,
    UserConfig,
)

logger = logging.getLogger(__name__)

# Any decoded JSON object maps to a valid UserConfig:
#
#   candidate_limit    int, clamped to 1..MAX_CANDIDATE_LIMIT, else default
#   empty_input_mode   one of EMPTY_INPUT_MODES, else "unread" (warned)
#   keys.picker.*      non-empty str per key, else that key's default
#   keys.quick_switcher.*   same as keys.picker.*
#   version            int, else 1
#
CONFIG_FILENAME = "config.json"
_KEY_NAMES = ("up", "down", "confirm", "cancel", "tab")


def get_config_path() -> Path:
    """Location of the settings file inside the per-user config directory.

    On Linux this is ``~/.config/channel-switcher/config.json``; macOS and
    Windows use their platform equivalents via platformdirs.
    """
    return Path(user_config_dir(CONFIG_APP_NAME)) / CONFIG_FILENAME


def _keys_to_dict(keys: KeyBindings) -> dict[str, str]:
    return {name: getattr(keys, name) for name in _KEY_NAMES}


def _config_to_dict(config: UserConfig) -> dict[str, Any]:
    """JSON layout of a UserConfig."""
    return {
        "version": config.version,
        "candidate_limit": _coerce_candidate_limit(config.candidate_limit),
        "empty_input_mode": config.empty_input_mode,
        "keys": {
            "picker": _keys_to_dict(config.picker_keys),
            "quick_switcher": _keys_to_dict(config.quick_switcher_keys),
        },
    }


def _safe_get(data: dict, key: str, default: Any, expected_type: type) -> Any:
    """Return ``data[key]`` if present and of ``expected_type``, else ``default``."""
    value = data.get(key, default)
    return value if isinstance(value, expected_type) else default


def _coerce_candidate_limit(value: Any) -> int:
    """Validate and clamp the configured result list size."""
    if not isinstance(value, int) or isinstance(value, bool):
        return DEFAULT_CANDIDATE_LIMIT
    return max(1, min(value, MAX_CANDIDATE_LIMIT))


def _parse_empty_input_mode(raw: Any) -> str:
    if raw is None:
        return "unread"
    if not isinstance(raw, str) or raw not in EMPTY_INPUT_MODES:
        logger.warning("Invalid empty_input_mode %r, defaulting to 'unread'", raw)
        return "unread"
    return raw


def _parse_key_bindings(raw: Any) -> KeyBindings:
    """Parse one key-binding table, falling back per key to the defaults."""
    defaults = KeyBindings()
    if not isinstance(raw, dict):
        return defaults
    parsed: dict[str, str] = {}
    for name in _KEY_NAMES:
        fallback = getattr(defaults, name)
        parsed[name] = _safe_get(raw, name, fallback, str).strip() or fallback
    return KeyBindings(**parsed)


def _dict_to_config(data: dict[str, Any]) -> UserConfig:
    """Build a UserConfig from decoded JSON, repairing invalid fields."""
    keys = _safe_get(data, "keys", {}, dict)
    return UserConfig(
        picker_keys=_parse_key_bindings(keys.get("picker")),
        quick_switcher_keys=_parse_key_bindings(keys.get("quick_switcher")),
        candidate_limit=_coerce_candidate_limit(
            data.get("candidate_limit", DEFAULT_CANDIDATE_LIMIT)
        ),
        empty_input_mode=_parse_empty_input_mode(data.get("empty_input_mode")),
        version=_safe_get(data, "version", 1, int),
    )


def load_config(config_path: Path | None = None) -> UserConfig:
    """Read picker settings, or defaults when there is nothing usable on disk.

    A missing file is normal. An unreadable or malformed one is logged and
    ignored so the pickers always start.
    """
    path = config_path or get_config_path()
    if not path.exists():
        return UserConfig()

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        logger.warning("Could not read settings from %s, using defaults: %s", path, e)
        return UserConfig()

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.warning("Settings file %s has invalid JSON, using defaults: %s", path, e)
        return UserConfig()

    if not isinstance(data, dict):
        logger.warning("Settings file %s is not a JSON object, using defaults", path)
        return UserConfig()
    return _dict_to_config(data)


def _write_atomic(path: Path, text: str) -> None:
    """Replace ``path`` with ``text`` via a sibling temp file and ``os.replace``."""
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=".config-", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(text)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def save_config(config: UserConfig, config_path: Path | None = None) -> bool:
    """Write picker settings, creating the config directory when needed.

    Returns False (and logs) instead of raising when the file cannot be written.
    """
    path = config_path or get_config_path()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        _write_atomic(path, json.dumps(_config_to_dict(config), indent=2, ensure_ascii=False))
    except OSError as e:
        logger.error("Failed to save settings to %s: %s", path, e)
        return False
    return True


__all__ = [
    "CONFIG_APP_NAME",
    "CONFIG_FILENAME",
    "get_config_path",
    "load_config",
    "save_config",
]
