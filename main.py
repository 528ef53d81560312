#!/usr/bin/env python3
"""Sprite Adventurer - keyboard-driven sprite animation demo.

Arrow keys run left and right, space attacks. The attack animation
always plays to its last frame before another action is accepted.
"""

import argparse
import logging
import os
import signal
import sys
from dataclasses import replace

import gi

gi.require_version("Gtk", "3.0")
from gi.repository import Gtk  # noqa: E402

from spawn_config import (  # noqa: E402
    CONFIG_FILE,
    SpawnConfig,
    SpawnConfigError,
    load_config,
)

logger = logging.getLogger("sprite-adventurer")

ASSETS_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "assets")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="sprite-adventurer",
        description="Keyboard-driven sprite animation demo",
    )
    parser.add_argument(
        "--sheet",
        type=str,
        default=None,
        help="Path to the PNG sprite sheet (default: textures/adventurer.png under assets/)",
    )
    parser.add_argument(
        "--scale",
        type=float,
        default=None,
        help="Sprite scale factor (default: 6.0)",
    )
    parser.add_argument(
        "--frame-seconds",
        type=float,
        default=None,
        help="Seconds per animation frame (default: 0.1)",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=CONFIG_FILE,
        help=f"Path to the JSON config file (default: {CONFIG_FILE})",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging to stderr",
    )
    return parser.parse_args(argv)


def setup_logging(debug: bool) -> None:
    """Configure logging to stderr."""
    level = logging.DEBUG if debug else logging.WARNING
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter("[%(levelname)s] %(name)s: %(message)s")
    )
    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(handler)


def setup_signal_handlers() -> None:
    """Register SIGINT and SIGTERM to gracefully quit GTK."""
    def handle_signal(signum: int, frame: object) -> None:
        logger.info("Received signal %d, shutting down", signum)
        Gtk.main_quit()

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)


def resolve_config(args: argparse.Namespace, data: dict) -> SpawnConfig:
    """Merge config file values with command-line overrides (flags win)."""
    config = SpawnConfig.from_dict(data)

    overrides = {}
    if args.sheet is not None:
        overrides["sheet_path"] = args.sheet
    if args.scale is not None:
        overrides["scale"] = args.scale
    if args.frame_seconds is not None:
        overrides["frame_seconds"] = args.frame_seconds
    if overrides:
        config = replace(config, **overrides)

    # Relative sheet paths are looked up next to the program, like its assets
    if not os.path.isabs(config.sheet_path) and not os.path.exists(config.sheet_path):
        config = replace(config, sheet_path=os.path.join(ASSETS_DIR, config.sheet_path))
    return config


def main() -> None:
    args = parse_args()
    setup_logging(args.debug)

    try:
        config = resolve_config(args, load_config(args.config))
    except SpawnConfigError as exc:
        print(f"Error: {exc}")
        sys.exit(1)

    logger.info(
        "Starting Sprite Adventurer: sheet=%s, scale=%.1f, frame=%.3fs",
        config.sheet_path,
        config.scale,
        config.frame_seconds,
    )

    from game_window import GameWindow
    from input_controller import KeyboardState
    from sprite_character import SpriteCharacter, load_sheet

    try:
        sheet = load_sheet(config.sheet_path, config.geometry)
        character = SpriteCharacter(config, sheet)
    except SpawnConfigError as exc:
        print(f"Error: {exc}")
        sys.exit(1)

    setup_signal_handlers()
    window = GameWindow(character, KeyboardState(config.key_bindings))
    window.show_all()

    Gtk.main()
    logger.info("Sprite Adventurer shut down")


if __name__ == "__main__":
    main()
