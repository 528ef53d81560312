"""GTK3 window hosting the adventurer sprite.

Tracks held keys from key events, runs the game loop from a GLib
timeout and paints the current sprite-sheet cell with cairo.
"""

from __future__ import annotations

import logging
import time

import cairo
import gi

gi.require_version("Gtk", "3.0")
gi.require_version("Gdk", "3.0")
from gi.repository import Gdk, GLib, Gtk  # noqa: E402

from game_loop import GameLoop  # noqa: E402
from input_controller import KeyboardState  # noqa: E402
from sprite_character import SpriteCharacter  # noqa: E402

logger = logging.getLogger(__name__)

FRAME_INTERVAL_MS = 1000 // 60
BACKGROUND_RGB = (0.2, 0.2, 0.25)
QUIT_KEYS = ("Escape",)


class GameWindow(Gtk.Window):
    """Window sized to one scaled sprite cell."""

    def __init__(self, character: SpriteCharacter, keyboard: KeyboardState,
                 title: str = "Sprite Adventurer") -> None:
        super().__init__(title=title)

        self.character = character
        self.keyboard = keyboard
        self.loop = GameLoop([character], keyboard)

        self._frame_timer_id: int | None = None
        self._last_tick: float | None = None

        self._setup_window()
        self._setup_drawing()
        self._setup_input()
        self._start_timers()

    # ------------------------------------------------------------------
    # Window configuration
    # ------------------------------------------------------------------

    def _setup_window(self) -> None:
        self.set_default_size(self.character.width, self.character.height)
        self.set_resizable(False)
        self.connect("destroy", self._on_destroy)
        logger.debug("Window size %dx%d", self.character.width, self.character.height)

    def _setup_drawing(self) -> None:
        self._drawing_area = Gtk.DrawingArea()
        self._drawing_area.set_size_request(self.character.width, self.character.height)
        self._drawing_area.connect("draw", self._on_draw)
        self.add(self._drawing_area)

    def _setup_input(self) -> None:
        self.add_events(
            Gdk.EventMask.KEY_PRESS_MASK
            | Gdk.EventMask.KEY_RELEASE_MASK
            | Gdk.EventMask.FOCUS_CHANGE_MASK
        )
        self.connect("key-press-event", self._on_key_press)
        self.connect("key-release-event", self._on_key_release)
        self.connect("focus-out-event", self._on_focus_out)

    # ------------------------------------------------------------------
    # Timers
    # ------------------------------------------------------------------

    def _start_timers(self) -> None:
        self._last_tick = time.monotonic()
        self._frame_timer_id = GLib.timeout_add(FRAME_INTERVAL_MS, self._on_frame_tick)

    def _stop_timers(self) -> None:
        if self._frame_timer_id is not None:
            GLib.source_remove(self._frame_timer_id)
            self._frame_timer_id = None

    def _on_frame_tick(self) -> bool:
        now = time.monotonic()
        elapsed = now - self._last_tick if self._last_tick is not None else 0.0
        self._last_tick = now

        if self.loop.step(elapsed):
            self._drawing_area.queue_draw()
        return True

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------

    def _on_draw(self, widget: Gtk.DrawingArea, ctx: cairo.Context) -> bool:
        ctx.set_source_rgb(*BACKGROUND_RGB)
        ctx.paint()
        self.character.draw(
            ctx, widget.get_allocated_width(), widget.get_allocated_height()
        )
        return True

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def _on_key_press(self, widget: Gtk.Window, event: Gdk.EventKey) -> bool:
        name = Gdk.keyval_name(event.keyval)
        if name is None:
            return False
        if name in QUIT_KEYS:
            self.destroy()
            return True
        self.keyboard.press(name)
        return True

    def _on_key_release(self, widget: Gtk.Window, event: Gdk.EventKey) -> bool:
        name = Gdk.keyval_name(event.keyval)
        if name is not None:
            self.keyboard.release(name)
        return True

    def _on_focus_out(self, widget: Gtk.Window, event: Gdk.EventFocus) -> bool:
        # Release events are not delivered to an unfocused window
        self.keyboard.clear()
        return False

    # ------------------------------------------------------------------
    # Cleanup
    # ------------------------------------------------------------------

    def _on_destroy(self, widget: Gtk.Window) -> None:
        self._stop_timers()
        Gtk.main_quit()
