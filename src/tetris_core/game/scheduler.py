from __future__ import annotations

import logging

from .core import TetrisGame

logger = logging.getLogger(__name__)


class FallScheduler:
    """Caller-owned gravity clock.

    Feed it elapsed milliseconds from whatever loop drives the game (a frame
    clock, an event loop timer) and it fires `tick()` whenever the game's
    current fall interval has elapsed. The interval is re-read after every
    tick, so a level-up shortens the very next wait.
    """

    def __init__(self, game: TetrisGame) -> None:
        self.game = game
        self.elapsed_ms = 0.0
        self._interval_ms = game.fall_interval_ms

    def reset(self) -> None:
        self.elapsed_ms = 0.0

    def advance(self, elapsed_ms: float) -> int:
        """Add `elapsed_ms` to the clock and return how many ticks fired."""
        if not self.game.running:
            self.elapsed_ms = 0.0
            return 0
        self.elapsed_ms += elapsed_ms
        fired = 0
        while self.game.running and self.elapsed_ms >= self.game.fall_interval_ms:
            self.elapsed_ms -= self.game.fall_interval_ms
            self.game.tick()
            fired += 1
            if self.game.fall_interval_ms != self._interval_ms:
                logger.debug("fall interval %d -> %d ms", self._interval_ms, self.game.fall_interval_ms)
                self._interval_ms = self.game.fall_interval_ms
        if not self.game.running:
            self.elapsed_ms = 0.0
        return fired
