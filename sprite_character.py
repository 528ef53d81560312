"""Sprite-sheet character driven by the animation state machine.

Loads a grid sprite sheet (PNG) and draws the cell selected by the
current animation frame, mirrored when the character faces left.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import cairo

from animator import AnimationState, SpawnConfigError
from frame_timer import FrameTimer
from input_controller import CharacterFacing
from spawn_config import SheetGeometry, SpawnConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderFrame:
    """What the renderer needs after a frame advance."""
    frame_index: int
    flip_horizontal: bool


def load_sheet(path: str, geometry: SheetGeometry) -> cairo.ImageSurface:
    """Load a PNG sprite sheet and check it covers the declared grid."""
    try:
        surface = cairo.ImageSurface.create_from_png(path)
    except (OSError, cairo.Error) as exc:
        raise SpawnConfigError(f"Could not load sprite sheet '{path}': {exc}") from exc

    need_w = geometry.columns * geometry.cell_width
    need_h = geometry.rows * geometry.cell_height
    if surface.get_width() < need_w or surface.get_height() < need_h:
        raise SpawnConfigError(
            f"Sprite sheet '{path}' is {surface.get_width()}x{surface.get_height()}, "
            f"grid needs {need_w}x{need_h}"
        )
    logger.debug("Loaded sheet %s (%dx%d, %d frames)", path,
                 surface.get_width(), surface.get_height(), geometry.frame_count)
    return surface


class SpriteCharacter:
    """One controllable character: animation, facing and the frame timer.

    ``update`` is the frame-advance step of the game loop; input
    sampling happens separately through the input controller.
    """

    def __init__(self, config: SpawnConfig,
                 sheet: cairo.ImageSurface | None = None) -> None:
        self.config = config
        self.geometry = config.geometry
        self.sheet = sheet
        self.controllable = True

        self.animation = AnimationState.from_ranges(
            config.ranges, frame_count=config.geometry.frame_count
        )
        self.facing = CharacterFacing()
        self.timer = FrameTimer(config.frame_seconds)
        self.render_frame = RenderFrame(
            frame_index=self.animation.current_index,
            flip_horizontal=self.facing.flip_horizontal,
        )

    @property
    def width(self) -> int:
        return round(self.geometry.cell_width * self.config.scale)

    @property
    def height(self) -> int:
        return round(self.geometry.cell_height * self.config.scale)

    # ------------------------------------------------------------------
    # Frame advance
    # ------------------------------------------------------------------

    def update(self, elapsed: float) -> RenderFrame | None:
        """Tick the frame timer; advance one frame if it fired."""
        if not self.timer.tick(elapsed).just_finished():
            return None
        return self.advance_frame()

    def advance_frame(self) -> RenderFrame:
        index = self.animation.advance()
        self.render_frame = RenderFrame(
            frame_index=index,
            flip_horizontal=self.facing.flip_horizontal,
        )
        return self.render_frame

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------

    def draw(self, ctx: cairo.Context, width: int, height: int) -> None:
        if self.sheet is None:
            return
        cell_w = self.geometry.cell_width
        cell_h = self.geometry.cell_height
        x0, y0 = self.geometry.cell_origin(self.render_frame.frame_index)

        ctx.save()

        sx = width / cell_w
        sy = height / cell_h
        if self.render_frame.flip_horizontal:
            ctx.translate(width, 0)
            ctx.scale(-sx, sy)
        else:
            ctx.scale(sx, sy)

        # Only the selected cell, not its neighbours on the sheet
        ctx.rectangle(0, 0, cell_w, cell_h)
        ctx.clip()
        ctx.set_source_surface(self.sheet, -x0, -y0)
        ctx.get_source().set_filter(cairo.FILTER_NEAREST)
        ctx.paint()
        ctx.restore()
