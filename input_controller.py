"""Keyboard-driven action and facing selection.

Samples the held keys once per game-loop step and decides what the
character should be doing, without interrupting a locked attack.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Iterable, Mapping, Protocol

from animator import Action, AnimationState, Direction

logger = logging.getLogger(__name__)


class Key(enum.Enum):
    ATTACK = "attack"
    MOVE_RIGHT = "move_right"
    MOVE_LEFT = "move_left"


DEFAULT_KEY_BINDINGS: dict[Key, tuple[str, ...]] = {
    Key.ATTACK: ("space",),
    Key.MOVE_RIGHT: ("Right",),
    Key.MOVE_LEFT: ("Left",),
}


class InputSource(Protocol):
    def is_pressed(self, key: Key) -> bool: ...


class CharacterProto(Protocol):
    animation: AnimationState
    facing: CharacterFacing


@dataclass
class CharacterFacing:
    direction: Direction = Direction.RIGHT

    @property
    def flip_horizontal(self) -> bool:
        # Sheet cells are drawn facing right
        return self.direction is Direction.LEFT


class KeyboardState:
    """Tracks which key names are held, as reported by the window's key events."""

    def __init__(self, bindings: Mapping[Key, Iterable[str]] | None = None) -> None:
        bindings = DEFAULT_KEY_BINDINGS if bindings is None else bindings
        self._bindings: dict[Key, frozenset[str]] = {
            key: frozenset(names) for key, names in bindings.items()
        }
        self._held: set[str] = set()

    def press(self, name: str) -> None:
        self._held.add(name)

    def release(self, name: str) -> None:
        self._held.discard(name)

    def clear(self) -> None:
        """Forget every held key, e.g. when the window loses focus."""
        self._held.clear()

    def is_pressed(self, key: Key) -> bool:
        return not self._held.isdisjoint(self._bindings.get(key, ()))


def process_input(keys: InputSource, animation: AnimationState,
                  facing: CharacterFacing) -> None:
    """Apply one input sample to a character's animation and facing.

    While an attack is locked nothing changes except releasing the lock
    once its last frame has been shown. Otherwise attack beats movement,
    right beats left, and no key at all means idle.
    """
    if animation.is_locked():
        if animation.is_animation_finished():
            animation.unlock()
            logger.debug("Animation lock released at frame %d", animation.current_index)
        return

    if keys.is_pressed(Key.ATTACK):
        animation.set_action(Action.ATTACK)
        animation.lock()
        logger.debug("Attack started, animation locked")
    elif keys.is_pressed(Key.MOVE_RIGHT):
        facing.direction = Direction.RIGHT
        animation.set_action(Action.RUN)
    elif keys.is_pressed(Key.MOVE_LEFT):
        facing.direction = Direction.LEFT
        animation.set_action(Action.RUN)
    else:
        animation.set_action(Action.IDLE)


class InputController:
    """Feeds input samples to whichever character is currently controllable."""

    def __init__(self, keys: InputSource) -> None:
        self.keys = keys

    def sample(self, character: CharacterProto | None) -> None:
        if character is None:
            logger.debug("No controllable character, skipping input sample")
            return
        process_input(self.keys, character.animation, character.facing)
