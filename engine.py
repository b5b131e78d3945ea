"""
Game engine: the single owner and mutator of a GameState.
"""

import logging
import random
from typing import NamedTuple, Optional, Tuple

from config import GameConfig
from domain import rules
from domain.game_state import GameState

logger = logging.getLogger(__name__)


class TickResult(NamedTuple):
    state: GameState
    collided: bool
    death_reason: Optional[str] = None


class GameEngine:
    """
    Owns the GameState and is its only mutator.

      - reset(): start a fresh game (also used for restarts)
      - set_pending_direction(): record input for the next tick
      - tick(): advance one cell, detecting wall/self collisions

    The engine is a two-state machine: RUNNING -> GAME_OVER via a colliding
    tick, and back to RUNNING only through reset().
    """

    def __init__(self, config: Optional[GameConfig] = None, rng: Optional[random.Random] = None):
        self.config = config or GameConfig()
        self.rng = rng or random.Random()
        self.state: Optional[GameState] = None
        self.last_death_reason: Optional[str] = None
        self.games_started = 0
        self.reset()

    @property
    def running(self) -> bool:
        return self.state is not None and self.state.running

    def reset(self) -> GameState:
        self.state = rules.new_game(
            self.config.grid_width,
            self.config.grid_height,
            self.config.initial_interval_ms,
            self.rng
        )
        self.last_death_reason = None
        self.games_started += 1
        logger.info(
            f"Game {self.games_started} started on a {self.config.grid_width}x{self.config.grid_height} grid, "
            f"apple at {self.state.apple}"
        )
        return self.state

    def set_pending_direction(self, direction: Tuple[int, int]) -> bool:
        return rules.set_pending_direction(self.state, direction)

    def tick(self) -> TickResult:
        if not self.state.running:
            return TickResult(self.state, True, self.last_death_reason)

        score_before = self.state.score
        reason = rules.tick(
            self.state,
            self.rng,
            floor_ms=self.config.min_interval_ms,
            factor=self.config.speedup_factor
        )

        if reason is not None:
            self.last_death_reason = reason
            logger.info(f"Game over ({reason}) with score {self.state.score}, level {self.state.level}")
            return TickResult(self.state, True, reason)

        if self.state.score != score_before:
            logger.debug(
                f"Level {self.state.level}: interval {self.state.tick_interval_ms:.1f}ms, "
                f"speed {self.state.speed}x, next apple at {self.state.apple}"
            )
        return TickResult(self.state, False, None)
