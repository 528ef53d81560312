"""Accumulating timer that gates sprite frame advances.

Decouples animation playback rate from the rate the game loop runs at.
"""

from __future__ import annotations

DEFAULT_FRAME_SECONDS = 0.1


class FrameTimer:
    """Repeating timer fed with elapsed seconds.

    Fires each time ``duration`` has passed and carries the remainder
    into the next period.
    """

    def __init__(self, duration: float = DEFAULT_FRAME_SECONDS) -> None:
        if duration <= 0:
            raise ValueError(f"Timer duration must be positive, got {duration}")
        self.duration = duration
        self._elapsed: float = 0.0
        self._just_finished = False

    def just_finished(self) -> bool:
        """True if the last ``tick`` completed at least one period."""
        return self._just_finished

    def tick(self, elapsed: float) -> FrameTimer:
        if elapsed < 0:
            raise ValueError(f"Elapsed time cannot be negative, got {elapsed}")
        self._elapsed += elapsed
        self._just_finished = self._elapsed >= self.duration
        if self._just_finished:
            self._elapsed %= self.duration
        return self
