"""One step of the game loop: sample input, then advance animations.

Input is evaluated before the frame advance within a step, so an action
chosen this step is seen by this step's frame advance.
"""

from __future__ import annotations

import logging
from typing import Iterable, Protocol, Sequence

from input_controller import CharacterProto, InputController, InputSource
from sprite_character import RenderFrame

logger = logging.getLogger(__name__)


class AnimatedProto(CharacterProto, Protocol):
    controllable: bool

    def update(self, elapsed: float) -> RenderFrame | None: ...


def find_controllable(characters: Iterable[AnimatedProto]) -> AnimatedProto | None:
    """Return the first controllable character, or None if there is none."""
    for character in characters:
        if character.controllable:
            return character
    return None


class GameLoop:
    def __init__(self, characters: Sequence[AnimatedProto], keys: InputSource) -> None:
        self.characters = list(characters)
        self.input = InputController(keys)

    def step(self, elapsed: float) -> list[RenderFrame]:
        """Run input sampling then frame advance; return this step's render frames."""
        self.input.sample(find_controllable(self.characters))

        frames: list[RenderFrame] = []
        for character in self.characters:
            frame = character.update(elapsed)
            if frame is not None:
                frames.append(frame)
        return frames
