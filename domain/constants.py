"""
Game constants for the snake game.
"""

# Movement directions as (dx, dy) unit vectors; y grows downwards on screen
UP = (0, -1)
DOWN = (0, 1)
LEFT = (-1, 0)
RIGHT = (1, 0)
VALID_DIRECTIONS = {UP, DOWN, LEFT, RIGHT}
DEFAULT_DIRECTION = RIGHT

# Board settings
GRID_WIDTH = 40
GRID_HEIGHT = 50
INITIAL_SNAKE_LENGTH = 3

# Timing (milliseconds between ticks)
INITIAL_INTERVAL_MS = 150
MIN_INTERVAL_MS = 50
SPEEDUP_FACTOR = 0.9

# Speed shown in the HUD is round(level * SPEED_PER_LEVEL)
SPEED_PER_LEVEL = 1.1

# Cosmetic palettes cycled on every level-up
SNAKE_COLORS = ["#34C759", "#007AFF", "#FF3B30", "#1d1d1f", "#FF2D92", "#FFCC00"]
BACKGROUND_COLORS = ["#ffffff", "#f5f5f7", "#e3f2fd"]

# Apple icon
APPLE_BODY_COLOR = "#FF3B30"
APPLE_LEAF_COLOR = "#34C759"

# Death reasons reported by the engine
DEATH_WALL = "wall"
DEATH_SELF = "self"
