"""Spawn configuration for the adventurer: sheet, grid, frame ranges, keys.

Values come from built-in defaults, optionally overridden by a JSON file
in the user's config directory.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from typing import Any

from animator import DEFAULT_RANGES, Action, FrameRange, SpawnConfigError
from frame_timer import DEFAULT_FRAME_SECONDS
from input_controller import DEFAULT_KEY_BINDINGS, Key

logger = logging.getLogger(__name__)

CONFIG_DIR = os.path.join(os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~/.config")), "sprite-adventurer")
CONFIG_FILE = os.path.join(CONFIG_DIR, "config.json")

DEFAULT_SHEET = os.path.join("textures", "adventurer.png")
DEFAULT_SCALE = 6.0


@dataclass(frozen=True)
class SheetGeometry:
    """Grid layout of a sprite sheet. Cells are numbered row by row."""
    cell_width: int = 50
    cell_height: int = 37
    columns: int = 4
    rows: int = 4

    def __post_init__(self) -> None:
        for name in ("cell_width", "cell_height", "columns", "rows"):
            value = getattr(self, name)
            if not _is_int(value) or value <= 0:
                raise SpawnConfigError(f"Sheet {name} must be a positive integer, got {value!r}")

    @property
    def frame_count(self) -> int:
        return self.columns * self.rows

    def cell_origin(self, index: int) -> tuple[int, int]:
        """Top-left pixel of cell ``index``."""
        row, column = divmod(index, self.columns)
        return column * self.cell_width, row * self.cell_height


@dataclass(frozen=True)
class SpawnConfig:
    sheet_path: str = DEFAULT_SHEET
    geometry: SheetGeometry = field(default_factory=SheetGeometry)
    ranges: dict[Action, FrameRange] = field(default_factory=lambda: dict(DEFAULT_RANGES))
    scale: float = DEFAULT_SCALE
    frame_seconds: float = DEFAULT_FRAME_SECONDS
    key_bindings: dict[Key, tuple[str, ...]] = field(
        default_factory=lambda: dict(DEFAULT_KEY_BINDINGS)
    )

    def __post_init__(self) -> None:
        if self.scale <= 0:
            raise SpawnConfigError(f"Scale must be positive, got {self.scale}")
        if self.frame_seconds <= 0:
            raise SpawnConfigError(f"Frame period must be positive, got {self.frame_seconds}")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SpawnConfig:
        """Build a config from the JSON layout, falling back to defaults per key."""
        try:
            geometry = SheetGeometry(
                cell_width=data.get("cell_width", 50),
                cell_height=data.get("cell_height", 37),
                columns=data.get("columns", 4),
                rows=data.get("rows", 4),
            )
            return cls(
                sheet_path=data.get("sheet", DEFAULT_SHEET),
                geometry=geometry,
                ranges=_parse_ranges(data.get("ranges", {})),
                scale=float(data.get("scale", DEFAULT_SCALE)),
                frame_seconds=float(data.get("frame_seconds", DEFAULT_FRAME_SECONDS)),
                key_bindings=_parse_keys(data.get("keys", {})),
            )
        except SpawnConfigError:
            raise
        except (TypeError, ValueError) as exc:
            raise SpawnConfigError(f"Invalid config value: {exc}") from exc


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _parse_ranges(raw: Any) -> dict[Action, FrameRange]:
    if not isinstance(raw, dict):
        raise SpawnConfigError(f"ranges must be an object, got {raw!r}")
    ranges = dict(DEFAULT_RANGES)
    for name, bounds in raw.items():
        try:
            action = Action(name)
        except ValueError:
            raise SpawnConfigError(f"Unknown action '{name}' in ranges") from None
        if (not isinstance(bounds, (list, tuple)) or len(bounds) != 2
                or not all(_is_int(b) for b in bounds)):
            raise SpawnConfigError(f"Range for '{name}' must be [start, end], got {bounds!r}")
        ranges[action] = FrameRange(start=bounds[0], end=bounds[1])
    return ranges


def _parse_keys(raw: Any) -> dict[Key, tuple[str, ...]]:
    if not isinstance(raw, dict):
        raise SpawnConfigError(f"keys must be an object, got {raw!r}")
    bindings = dict(DEFAULT_KEY_BINDINGS)
    for name, names in raw.items():
        try:
            key = Key(name)
        except ValueError:
            raise SpawnConfigError(f"Unknown key binding '{name}'") from None
        if isinstance(names, str):
            names = [names]
        if not isinstance(names, (list, tuple)) or not all(isinstance(n, str) for n in names):
            raise SpawnConfigError(f"Binding for '{name}' must be key names, got {names!r}")
        bindings[key] = tuple(names)
    return bindings


def load_config(path: str = CONFIG_FILE) -> dict:
    try:
        with open(path) as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError):
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring config %s: top level is not an object", path)
        return {}
    return data

