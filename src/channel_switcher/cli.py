"""CLI/bootstrap helpers for the channel switcher application."""

from __future__ import annotations

import argparse
import logging
import logging.handlers
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir

from channel_switcher.action_messages import build_actionable_error
from channel_switcher.config import CONFIG_APP_NAME, load_config
from channel_switcher.models import UserConfig
from channel_switcher.snapshot import SnapshotError, load_snapshot
from channel_switcher.state import AccountSnapshot

logger = logging.getLogger(__name__)


DEBUG_LOG_NAME = "debug.log"
_DEBUG_LOG_MAX_BYTES = 2 * 1024 * 1024


def _configure_logging(debug: bool) -> None:
    """Silence logging, or with ``debug`` send everything to a rotating file.

    Log records must never reach the terminal the TUI is drawing on.
    """
    if not debug:
        logging.disable(logging.CRITICAL)
        return

    log_dir = Path(user_config_dir(CONFIG_APP_NAME))
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        log_dir / DEBUG_LOG_NAME,
        maxBytes=_DEBUG_LOG_MAX_BYTES,
        backupCount=2,
        encoding="utf-8",
    )
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)-7s %(name)s: %(message)s", datefmt="%H:%M:%S")
    )
    root = logging.getLogger()
    root.addHandler(handler)
    root.setLevel(logging.DEBUG)


def _resolve_snapshot(path: Path) -> AccountSnapshot | int:
    """Load the snapshot file. Returns the snapshot or an exit code."""
    snapshot_file = path.resolve()
    if not snapshot_file.exists():
        print(
            build_actionable_error(
                "load the account snapshot",
                why=f"{snapshot_file} does not exist",
                next_step="pass an existing JSON file with --snapshot",
            ),
            file=sys.stderr,
        )
        return 1
    if snapshot_file.is_dir():
        print(f"Error: {snapshot_file} is a directory, not a file", file=sys.stderr)
        return 1
    try:
        return load_snapshot(snapshot_file)
    except SnapshotError as e:
        print(
            build_actionable_error(
                "load the account snapshot",
                why=str(e),
                next_step="fix the file or export a fresh snapshot",
            ),
            file=sys.stderr,
        )
        return 1


def _validate_interactive_tty() -> bool:
    """Whether both ends of the terminal are interactive."""
    return bool(sys.stdin.isatty() and sys.stdout.isatty())


def main(
    argv: list[str] | None = None,
    *,
    load_config_fn: Callable[[], UserConfig] = load_config,
    resolve_snapshot_fn: Callable[[Path], AccountSnapshot | int] = _resolve_snapshot,
    configure_logging_fn: Callable[[bool], None] = _configure_logging,
    validate_interactive_tty_fn: Callable[[], bool] = _validate_interactive_tty,
    app_factory: Callable[..., Any] | None = None,
) -> int:
    """Parse arguments, load config and snapshot, then run the app. Returns an exit code."""
    parser = argparse.ArgumentParser(
        description="Jump between guild channels and direct messages in a TUI"
    )
    parser.add_argument(
        "-s",
        "--snapshot",
        type=Path,
        required=True,
        help="JSON file with the account's guilds, channels and DMs",
    )
    parser.add_argument(
        "--quick",
        action="store_true",
        help="Open the quick switcher at startup",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging to file (~/.config/channel-switcher/debug.log)",
    )
    args = parser.parse_args(argv)

    configure_logging_fn(args.debug)
    logger.debug("channel-switcher starting, snapshot=%s", args.snapshot)

    config = load_config_fn()

    snapshot = resolve_snapshot_fn(args.snapshot)
    if isinstance(snapshot, int):
        return snapshot

    if not validate_interactive_tty_fn():
        print(
            build_actionable_error(
                "start the channel switcher",
                why="stdin and stdout must be an interactive TTY",
                next_step="run channel-switcher directly in a terminal",
            ),
            file=sys.stderr,
        )
        return 2

    if app_factory is None:
        from channel_switcher.app import ChannelSwitcherApp as _ChannelSwitcherApp

        app_factory = _ChannelSwitcherApp

    app = app_factory(snapshot, config=config, open_quick_switcher=args.quick)
    app.run()
    return 0


__all__ = [
    "_configure_logging",
    "_resolve_snapshot",
    "_validate_interactive_tty",
    "main",
]
