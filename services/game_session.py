"""
Game session: wires the engine to a clock, a renderer and a display.

The session is the only place that reacts to the outside world:
  - tick events from the clock advance the engine and redraw
  - direction input is forwarded while the game is running
  - restart cancels the clock before a fresh game re-arms it
"""

import logging
from typing import Callable, Dict, Optional, Tuple

from PIL import Image

from services.frame_renderer import FrameRenderer, hud_fields

logger = logging.getLogger(__name__)


class GameSession:
    """
    Drive a GameEngine from a clock.

    Args:
        engine: the GameEngine that owns the state
        clock: object with arm(delay_ms), cancel() and is_current(event)
        renderer: FrameRenderer used to draw each snapshot
        display: optional callable receiving every rendered frame
    """

    def __init__(
        self,
        engine,
        clock,
        renderer: FrameRenderer,
        display: Optional[Callable[[Image.Image], None]] = None
    ):
        self.engine = engine
        self.clock = clock
        self.renderer = renderer
        self.display = display
        self.hud: Dict[str, str] = {}
        self.last_frame: Optional[Image.Image] = None
        self.ticks = 0

    @property
    def running(self) -> bool:
        return self.engine.running

    def start(self):
        """Start a new game. Also used for restarts."""
        self.clock.cancel()
        state = self.engine.reset()
        self.ticks = 0
        self.refresh()
        self.clock.arm(state.tick_interval_ms)

    def restart(self):
        logger.info(f"Restarting after score {self.engine.state.score}")
        self.start()

    def handle_direction(self, direction: Tuple[int, int]) -> bool:
        if not self.engine.running:
            return False
        return self.engine.set_pending_direction(direction)

    def handle_tick(self, event=None):
        """
        Advance one tick if the event belongs to the armed clock.

        Returns the TickResult, or None for a stale event.
        """
        if not self.clock.is_current(event):
            logger.debug("Ignoring stale tick event")
            return None

        result = self.engine.tick()
        self.ticks += 1
        self.refresh()

        if result.collided:
            self.clock.cancel()
        else:
            self.clock.arm(result.state.tick_interval_ms)
        return result

    def refresh(self):
        """Redraw the HUD and the board from a snapshot of the current state."""
        snapshot = self.engine.state.snapshot()
        self.hud = hud_fields(snapshot)
        self.last_frame = self.renderer.render(snapshot)
        if self.display is not None:
            self.display(self.last_frame)
