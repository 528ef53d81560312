"""
Tests for the sprite character: frame advance gating, render frames,
sheet loading and cell drawing.
"""

import struct

import cairo
import pytest

from animator import Action, Direction
from spawn_config import SheetGeometry, SpawnConfig, SpawnConfigError
from sprite_character import RenderFrame, SpriteCharacter, load_sheet

RED = 0xFFFF0000
BLUE = 0xFF0000FF

# 2x2 pixel cells on a 4x4 grid
TINY = SheetGeometry(cell_width=2, cell_height=2, columns=4, rows=4)


def make_sheet(geometry=TINY):
    """Sheet where cell 4 is red on the left column and blue on the right."""
    surface = cairo.ImageSurface(
        cairo.FORMAT_ARGB32,
        geometry.columns * geometry.cell_width,
        geometry.rows * geometry.cell_height,
    )
    ctx = cairo.Context(surface)
    x0, y0 = geometry.cell_origin(4)
    ctx.set_source_rgb(1, 0, 0)
    ctx.rectangle(x0, y0, 1, geometry.cell_height)
    ctx.fill()
    ctx.set_source_rgb(0, 0, 1)
    ctx.rectangle(x0 + 1, y0, 1, geometry.cell_height)
    ctx.fill()
    surface.flush()
    return surface


def pixel(surface, x, y):
    surface.flush()
    data = surface.get_data()
    return struct.unpack_from("=I", data, y * surface.get_stride() + x * 4)[0]


def render(character):
    target = cairo.ImageSurface(cairo.FORMAT_ARGB32, 2, 2)
    character.draw(cairo.Context(target), 2, 2)
    return target


@pytest.fixture
def config():
    return SpawnConfig(geometry=TINY, frame_seconds=0.25, scale=2.0)


class TestFrameAdvance:

    def test_initial_state(self, config):
        character = SpriteCharacter(config)

        assert character.controllable is True
        assert character.animation.current_action is Action.IDLE
        assert character.facing.direction is Direction.RIGHT
        assert character.render_frame == RenderFrame(frame_index=0, flip_horizontal=False)

    def test_update_waits_for_timer(self, config):
        character = SpriteCharacter(config)

        assert character.update(0.125) is None
        assert character.update(0.125) == RenderFrame(frame_index=4, flip_horizontal=False)

    def test_one_frame_per_firing_tick(self, config):
        character = SpriteCharacter(config)

        frame = character.update(1.0)

        assert frame.frame_index == 4

    def test_flip_follows_facing(self, config):
        character = SpriteCharacter(config)
        character.facing.direction = Direction.LEFT

        frame = character.advance_frame()

        assert frame.flip_horizontal is True
        assert character.render_frame is frame

    def test_scaled_size(self, config):
        character = SpriteCharacter(config)

        assert (character.width, character.height) == (4, 4)

    def test_range_beyond_sheet_rejected(self):
        small = SheetGeometry(cell_width=2, cell_height=2, columns=4, rows=1)

        with pytest.raises(SpawnConfigError):
            SpriteCharacter(SpawnConfig(geometry=small))


class TestLoadSheet:

    def test_loads_png(self, tmp_path):
        path = tmp_path / "sheet.png"
        make_sheet().write_to_png(str(path))

        surface = load_sheet(str(path), TINY)

        assert (surface.get_width(), surface.get_height()) == (8, 8)

    def test_sheet_smaller_than_grid(self, tmp_path):
        path = tmp_path / "sheet.png"
        make_sheet().write_to_png(str(path))
        bigger = SheetGeometry(cell_width=4, cell_height=4, columns=4, rows=4)

        with pytest.raises(SpawnConfigError, match="grid needs"):
            load_sheet(str(path), bigger)

    def test_missing_file(self, tmp_path):
        with pytest.raises(SpawnConfigError):
            load_sheet(str(tmp_path / "missing.png"), TINY)


class TestDraw:

    def test_draws_current_cell(self, config):
        character = SpriteCharacter(config, make_sheet())
        character.advance_frame()

        target = render(character)

        assert pixel(target, 0, 0) == RED
        assert pixel(target, 1, 1) == BLUE

    def test_flipped_cell_is_mirrored(self, config):
        character = SpriteCharacter(config, make_sheet())
        character.facing.direction = Direction.LEFT
        character.advance_frame()

        target = render(character)

        assert pixel(target, 0, 0) == BLUE
        assert pixel(target, 1, 0) == RED

    def test_neighbour_cells_are_not_drawn(self, config):
        character = SpriteCharacter(config, make_sheet())
        character.animation.set_action(Action.RUN)
        character.advance_frame()

        target = render(character)

        assert character.render_frame.frame_index == 7
        assert pixel(target, 0, 0) == 0

    def test_no_sheet_draws_nothing(self, config):
        character = SpriteCharacter(config)

        target = render(character)

        assert pixel(target, 0, 0) == 0
