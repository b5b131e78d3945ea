"""
GameState entity - the full state of one game, mutated once per tick.
"""

from typing import List, Tuple, Optional

from .constants import DEFAULT_DIRECTION
from .snake import Snake


class GameState:
    """
    The state of a single game.

    Attributes:
        snake: the Snake, head first
        direction: committed (dx, dy) used by the last tick
        pending_direction: direction the next tick will commit
        apple: (x, y) of the apple, never on the snake
        score: apples eaten so far
        level: starts at 1, +1 per apple
        speed: value displayed in the HUD
        tick_interval_ms: delay before the next tick
        running: False once the snake has collided
        snake_color_index, background_color_index: positions in the palettes
        width, height: board dimensions
    """

    def __init__(
        self,
        snake: Snake,
        apple: Tuple[int, int],
        width: int,
        height: int,
        tick_interval_ms: float,
        direction: Tuple[int, int] = DEFAULT_DIRECTION,
        pending_direction: Optional[Tuple[int, int]] = None,
        score: int = 0,
        level: int = 1,
        speed: int = 1,
        running: bool = True,
        snake_color_index: int = 0,
        background_color_index: int = 0
    ):
        self.snake = snake
        self.apple = apple
        self.width = width
        self.height = height
        self.tick_interval_ms = tick_interval_ms
        self.direction = direction
        self.pending_direction = direction if pending_direction is None else pending_direction
        self.score = score
        self.level = level
        self.speed = speed
        self.running = running
        self.snake_color_index = snake_color_index
        self.background_color_index = background_color_index

    @property
    def snake_positions(self) -> List[Tuple[int, int]]:
        return list(self.snake)

    def in_bounds(self, cell: Tuple[int, int]) -> bool:
        x, y = cell
        return 0 <= x < self.width and 0 <= y < self.height

    def snapshot(self) -> "GameState":
        """Return an independent copy for readers (renderer, HUD)."""
        return GameState(
            snake=self.snake.copy(),
            apple=self.apple,
            width=self.width,
            height=self.height,
            tick_interval_ms=self.tick_interval_ms,
            direction=self.direction,
            pending_direction=self.pending_direction,
            score=self.score,
            level=self.level,
            speed=self.speed,
            running=self.running,
            snake_color_index=self.snake_color_index,
            background_color_index=self.background_color_index
        )

    def print_board(self) -> str:
        """
        Returns a string representation of the board with:
        . = empty space
        A = apple
        H = snake head
        T = snake body
        Row 0 is printed first, matching screen coordinates.
        """
        board = [['.' for _ in range(self.width)] for _ in range(self.height)]

        ax, ay = self.apple
        board[ay][ax] = 'A'

        for pos_idx, (x, y) in enumerate(self.snake):
            if not self.in_bounds((x, y)):
                continue
            board[y][x] = 'H' if pos_idx == 0 else 'T'

        result = [f"{y:2d} {' '.join(board[y])}" for y in range(self.height)]
        return "\n".join(result)

    def __repr__(self):
        return (
            f"<GameState score={self.score}, level={self.level}, "
            f"running={self.running}, head={self.snake.head}, apple={self.apple}>"
        )
