"""
Game configuration.

Defaults come from domain.constants; any of them can be overridden through
the environment (or a local .env file):

    SNAKE_GRID_WIDTH, SNAKE_GRID_HEIGHT
    SNAKE_INITIAL_INTERVAL_MS, SNAKE_MIN_INTERVAL_MS, SNAKE_SPEEDUP_FACTOR
    SNAKE_MAX_WINDOW_WIDTH, SNAKE_MAX_WINDOW_HEIGHT
    SNAKE_LOG_LEVEL
"""

import os
from dataclasses import dataclass, replace
from typing import Optional

from dotenv import load_dotenv

from domain.constants import (
    BACKGROUND_COLORS,
    GRID_HEIGHT,
    GRID_WIDTH,
    INITIAL_INTERVAL_MS,
    INITIAL_SNAKE_LENGTH,
    MIN_INTERVAL_MS,
    SNAKE_COLORS,
    SPEEDUP_FACTOR,
)

load_dotenv()

DEFAULT_MAX_WINDOW_WIDTH = 800
DEFAULT_MAX_WINDOW_HEIGHT = 600
DEFAULT_LOG_LEVEL = "INFO"


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}")


@dataclass(frozen=True)
class GameConfig:
    """Board size, tick timing and window limits for one game."""

    grid_width: int = GRID_WIDTH
    grid_height: int = GRID_HEIGHT
    initial_interval_ms: float = INITIAL_INTERVAL_MS
    min_interval_ms: float = MIN_INTERVAL_MS
    speedup_factor: float = SPEEDUP_FACTOR
    max_window_width: int = DEFAULT_MAX_WINDOW_WIDTH
    max_window_height: int = DEFAULT_MAX_WINDOW_HEIGHT
    log_level: str = DEFAULT_LOG_LEVEL

    def __post_init__(self):
        self.validate()

    def validate(self):
        """
        Raise ValueError for settings the engine cannot run with.

        Setup mistakes are reported here, once, rather than per tick.
        """
        if self.grid_width <= 0 or self.grid_height <= 0:
            raise ValueError(
                f"Grid dimensions must be positive, got {self.grid_width}x{self.grid_height}"
            )
        # The starting snake extends left from the centre column
        if self.grid_width // 2 < INITIAL_SNAKE_LENGTH - 1 or self.grid_width * self.grid_height <= INITIAL_SNAKE_LENGTH:
            raise ValueError(
                f"Grid {self.grid_width}x{self.grid_height} cannot hold the starting snake and an apple"
            )
        if self.initial_interval_ms <= 0:
            raise ValueError(f"Initial interval must be positive, got {self.initial_interval_ms}")
        if self.min_interval_ms <= 0:
            raise ValueError(f"Minimum interval must be positive, got {self.min_interval_ms}")
        if self.min_interval_ms > self.initial_interval_ms:
            raise ValueError(
                f"Minimum interval {self.min_interval_ms} exceeds initial interval {self.initial_interval_ms}"
            )
        if not 0 < self.speedup_factor <= 1:
            raise ValueError(f"Speed-up factor must be in (0, 1], got {self.speedup_factor}")
        if self.max_window_width <= 0 or self.max_window_height <= 0:
            raise ValueError("Window limits must be positive")
        if not SNAKE_COLORS or not BACKGROUND_COLORS:
            raise ValueError("Colour palettes must not be empty")

    def with_overrides(
        self,
        grid_width: Optional[int] = None,
        grid_height: Optional[int] = None,
        initial_interval_ms: Optional[float] = None
    ) -> "GameConfig":
        """Return a copy with any non-None argument applied (used by the CLI)."""
        changes = {}
        if grid_width is not None:
            changes['grid_width'] = grid_width
        if grid_height is not None:
            changes['grid_height'] = grid_height
        if initial_interval_ms is not None:
            changes['initial_interval_ms'] = initial_interval_ms
        return replace(self, **changes) if changes else self

    @classmethod
    def from_env(cls) -> "GameConfig":
        return cls(
            grid_width=_env_int("SNAKE_GRID_WIDTH", GRID_WIDTH),
            grid_height=_env_int("SNAKE_GRID_HEIGHT", GRID_HEIGHT),
            initial_interval_ms=_env_float("SNAKE_INITIAL_INTERVAL_MS", INITIAL_INTERVAL_MS),
            min_interval_ms=_env_float("SNAKE_MIN_INTERVAL_MS", MIN_INTERVAL_MS),
            speedup_factor=_env_float("SNAKE_SPEEDUP_FACTOR", SPEEDUP_FACTOR),
            max_window_width=_env_int("SNAKE_MAX_WINDOW_WIDTH", DEFAULT_MAX_WINDOW_WIDTH),
            max_window_height=_env_int("SNAKE_MAX_WINDOW_HEIGHT", DEFAULT_MAX_WINDOW_HEIGHT),
            log_level=os.getenv("SNAKE_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
        )
