"""
Pure game rules: every function here operates on an explicit GameState.

Nothing in this module touches the display, the clock or the keyboard, so a
whole game can be simulated deterministically by passing a seeded
``random.Random``.
"""

import math
import random
from typing import Iterable, Optional, Tuple

from .constants import (
    BACKGROUND_COLORS,
    DEATH_SELF,
    DEATH_WALL,
    DEFAULT_DIRECTION,
    INITIAL_SNAKE_LENGTH,
    MIN_INTERVAL_MS,
    SNAKE_COLORS,
    SPEED_PER_LEVEL,
    SPEEDUP_FACTOR,
    VALID_DIRECTIONS,
)
from .game_state import GameState
from .snake import Snake


def is_opposite(a: Tuple[int, int], b: Tuple[int, int]) -> bool:
    """True if direction a is the opposite of direction b."""
    return a[0] == -b[0] and a[1] == -b[1]


def next_interval(interval_ms: float, factor: float = SPEEDUP_FACTOR,
                  floor_ms: float = MIN_INTERVAL_MS) -> float:
    return max(floor_ms, interval_ms * factor)


def speed_for_level(level: int) -> int:
    """Displayed speed, rounded half-up."""
    return int(math.floor(level * SPEED_PER_LEVEL + 0.5))


def place_apple(occupied: Iterable[Tuple[int, int]], width: int, height: int,
                rng: random.Random) -> Tuple[int, int]:
    """
    Return a uniformly random cell (x, y) not in 'occupied'.

    Rejection sampling only terminates while a free cell exists; the board is
    assumed never to fill up completely.
    """
    taken = set(occupied)
    while True:
        pos = (rng.randrange(width), rng.randrange(height))
        if pos not in taken:
            return pos


def starting_snake(width: int, height: int,
                   length: int = INITIAL_SNAKE_LENGTH) -> Snake:
    """Snake centred on the board, head first, facing +x."""
    cx, cy = width // 2, height // 2
    return Snake([(cx - i, cy) for i in range(length)])


def new_game(width: int, height: int, initial_interval_ms: float,
             rng: random.Random) -> GameState:
    snake = starting_snake(width, height)
    return GameState(
        snake=snake,
        apple=place_apple(snake.positions, width, height, rng),
        width=width,
        height=height,
        tick_interval_ms=initial_interval_ms,
        direction=DEFAULT_DIRECTION,
    )


def set_pending_direction(state: GameState, direction: Tuple[int, int]) -> bool:
    """
    Record a requested direction for the next tick.

    Only directions orthogonal to the committed direction are accepted, so a
    180 degree turn into the neck (or a repeat of the current heading) is a
    no-op. Returns True if the request was recorded.
    """
    if direction not in VALID_DIRECTIONS:
        raise ValueError(f"Invalid direction: {direction!r}")
    if not state.running:
        return False
    # Among unit vectors, neither opposite nor equal means orthogonal
    if is_opposite(direction, state.direction) or direction == state.direction:
        return False
    state.pending_direction = direction
    return True


def level_up(state: GameState, floor_ms: float = MIN_INTERVAL_MS,
             factor: float = SPEEDUP_FACTOR):
    state.level += 1
    state.tick_interval_ms = next_interval(state.tick_interval_ms, factor, floor_ms)
    state.speed = speed_for_level(state.level)
    state.snake_color_index = (state.snake_color_index + 1) % len(SNAKE_COLORS)
    state.background_color_index = (state.background_color_index + 1) % len(BACKGROUND_COLORS)


def tick(state: GameState, rng: random.Random, floor_ms: float = MIN_INTERVAL_MS,
         factor: float = SPEEDUP_FACTOR) -> Optional[str]:
    """
    Advance the game by one cell.

    Returns None if the snake moved, otherwise the death reason ("wall" or
    "self"). On a collision only ``direction`` and ``running`` change.
    """
    state.direction = state.pending_direction

    hx, hy = state.snake.head
    dx, dy = state.direction
    new_head = (hx + dx, hy + dy)

    if not state.in_bounds(new_head):
        state.running = False
        return DEATH_WALL

    # The tail is still part of the body at this point
    if state.snake.occupies(new_head):
        state.running = False
        return DEATH_SELF

    state.snake.grow_to(new_head)

    if new_head == state.apple:
        state.score += 1
        state.apple = place_apple(state.snake.positions, state.width, state.height, rng)
        level_up(state, floor_ms, factor)
    else:
        state.snake.drop_tail()

    return None
