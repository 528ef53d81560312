"""
Tests for the game loop step: character lookup and the input-before-animation
evaluation order.
"""

import pytest

from animator import Action
from game_loop import GameLoop, find_controllable
from input_controller import Key, KeyboardState
from spawn_config import SpawnConfig
from sprite_character import RenderFrame, SpriteCharacter

STEP = 0.25


@pytest.fixture
def character():
    return SpriteCharacter(SpawnConfig(frame_seconds=STEP))


@pytest.fixture
def keyboard():
    return KeyboardState()


class TestFindControllable:

    def test_empty_world(self):
        assert find_controllable([]) is None

    def test_first_controllable_wins(self, character):
        other = SpriteCharacter(SpawnConfig())
        character.controllable = False

        assert find_controllable([character, other]) is other

    def test_none_controllable(self, character):
        character.controllable = False

        assert find_controllable([character]) is None


class TestStep:

    def test_empty_world_steps_safely(self, keyboard):
        keyboard.press("space")

        assert GameLoop([], keyboard).step(STEP) == []

    def test_no_frame_until_timer_fires(self, character, keyboard):
        loop = GameLoop([character], keyboard)

        assert loop.step(STEP / 2) == []

    def test_input_is_applied_before_frame_advance(self, character, keyboard):
        loop = GameLoop([character], keyboard)
        keyboard.press("Right")

        frames = loop.step(STEP)

        # Run range start, not the idle start
        assert [f.frame_index for f in frames] == [7]
        assert all(isinstance(f, RenderFrame) for f in frames)

    def test_left_run_is_flipped(self, character, keyboard):
        loop = GameLoop([character], keyboard)
        keyboard.press("Left")

        (frame,) = loop.step(STEP)

        assert frame.flip_horizontal is True

    def test_uncontrolled_character_still_animates(self, character, keyboard):
        character.controllable = False
        keyboard.press("Right")
        loop = GameLoop([character], keyboard)

        (frame,) = loop.step(STEP)

        assert character.animation.current_action is Action.IDLE
        assert frame.frame_index == 4

    def test_attack_plays_through(self, character, keyboard):
        loop = GameLoop([character], keyboard)
        keyboard.press("space")

        first = loop.step(STEP)
        keyboard.release("space")
        keyboard.press("Left")
        rest = [loop.step(STEP) for _ in range(2)]

        indices = [f.frame_index for f in first + rest[0] + rest[1]]
        assert indices == [1, 2, 3]
        assert character.animation.is_locked()
        assert character.animation.current_action is Action.ATTACK
        assert not character.facing.flip_horizontal

        # Lock released at frame 3, the new action is taken one sample later
        loop.step(STEP)
        assert not character.animation.is_locked()
        loop.step(STEP)
        assert character.animation.current_action is Action.RUN
        assert character.render_frame.frame_index == 7
        assert character.render_frame.flip_horizontal is True

    def test_keyboard_binding_drives_controller(self, character):
        keyboard = KeyboardState({Key.ATTACK: ("z",)})
        keyboard.press("z")

        GameLoop([character], keyboard).step(STEP)

        assert character.animation.current_action is Action.ATTACK
