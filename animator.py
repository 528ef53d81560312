"""Animation state machine for the adventurer sprite.

Maps each high-level action to a range of sprite-sheet frames and
decides which frame comes next on every animation tick.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Mapping

logger = logging.getLogger(__name__)


class SpawnConfigError(ValueError):
    """Raised when a character's spawn configuration is invalid."""


class Action(enum.Enum):
    IDLE = "idle"
    RUN = "run"
    ATTACK = "attack"


class Direction(enum.Enum):
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class FrameRange:
    """Inclusive range of sprite-sheet indices for one action."""
    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.end < 0:
            raise SpawnConfigError(
                f"Frame range [{self.start}, {self.end}] has a negative bound"
            )
        if self.start > self.end:
            raise SpawnConfigError(
                f"Frame range start {self.start} is after end {self.end}"
            )


DEFAULT_RANGES: dict[Action, FrameRange] = {
    Action.IDLE: FrameRange(start=4, end=6),
    Action.RUN: FrameRange(start=7, end=12),
    Action.ATTACK: FrameRange(start=0, end=3),
}


@dataclass
class AnimationState:
    """Current action, its frame ranges, the attack lock and the last frame.

    ``set_action`` never touches ``current_index``: the next call to
    ``advance`` sees an index outside the new range and snaps it to the
    range start.
    """
    ranges: dict[Action, FrameRange] = field(
        default_factory=lambda: dict(DEFAULT_RANGES)
    )
    current_action: Action = Action.IDLE
    locked: bool = False
    current_index: int = 0

    @classmethod
    def from_ranges(cls, ranges: Mapping[Action, FrameRange],
                    frame_count: int | None = None) -> AnimationState:
        """Build a state from a range table, validating it.

        ``frame_count`` is the number of cells in the sprite sheet; when
        given, every range must end inside it.
        """
        missing = [a.value for a in Action if a not in ranges]
        if missing:
            raise SpawnConfigError(f"Missing frame range for: {', '.join(missing)}")
        if frame_count is not None:
            for action, frame_range in ranges.items():
                if frame_range.end >= frame_count:
                    raise SpawnConfigError(
                        f"{action.value} range ends at {frame_range.end}, "
                        f"but the sheet only has {frame_count} frames"
                    )
        return cls(ranges=dict(ranges))

    @property
    def frame_range(self) -> FrameRange:
        return self.ranges[self.current_action]

    def compute_next_frame(self, current_index: int) -> int:
        """Return the frame that follows ``current_index`` for the current action.

        An index at or past the range end, or before its start, wraps to
        the start. The end frame itself is shown once per cycle.
        """
        frame_range = self.frame_range
        if current_index >= frame_range.end or current_index < frame_range.start:
            return frame_range.start
        return current_index + 1

    def advance(self) -> int:
        self.current_index = self.compute_next_frame(self.current_index)
        return self.current_index

    def is_animation_finished(self) -> bool:
        return self.current_index == self.frame_range.end

    def set_action(self, action: Action) -> None:
        if action is not self.current_action:
            logger.debug("Action %s -> %s", self.current_action.value, action.value)
        self.current_action = action

    def lock(self) -> None:
        self.locked = True

    def unlock(self) -> None:
        self.locked = False

    def is_locked(self) -> bool:
        return self.locked
