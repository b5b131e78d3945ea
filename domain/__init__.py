"""
Domain entities for the snake game engine.

This module contains the game state and rules, independent of the
display, the clock and keyboard handling.
"""

from .constants import UP, DOWN, LEFT, RIGHT, VALID_DIRECTIONS, DEFAULT_DIRECTION
from .snake import Snake
from .game_state import GameState

__all__ = [
    'UP', 'DOWN', 'LEFT', 'RIGHT', 'VALID_DIRECTIONS', 'DEFAULT_DIRECTION',
    'Snake',
    'GameState',
]
