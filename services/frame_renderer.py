"""
Frame Rendering Service for the Snake game

Draws a GameState snapshot to a Pillow image:
1. Background in the state's current background colour
2. Snake as one continuous rounded stroke through the segment centres,
   with a filled circle on the head
3. Apple icon (red body, green stem, green leaf) at its cell centre
4. HUD strip with score, level and speed
5. Game-over overlay when the snake has collided

The renderer keeps no per-game state; everything it needs (including the
colour cycling indices) is read from the GameState.
"""

import logging
import math
from typing import Dict, List, Tuple

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from domain.constants import (
    APPLE_BODY_COLOR,
    APPLE_LEAF_COLOR,
    BACKGROUND_COLORS,
    SNAKE_COLORS,
)
from domain.game_state import GameState

logger = logging.getLogger(__name__)

HUD_HEIGHT = 36  # Height of the HUD strip above the board, in pixels
MIN_CELL_SIZE = 1


class ColorScheme:
    """Colours that do not cycle with the level"""

    HUD_BACKGROUND = "#1d1d1f"
    HUD_TEXT = "#FFFFFF"
    HUD_LABEL = "#A1A1A6"
    OVERLAY = (0, 0, 0, 150)
    OVERLAY_TEXT = "#FFFFFF"


def hex_to_rgb(hex_color: str) -> Tuple[int, int, int]:
    """Convert hex color to RGB tuple"""
    hex_color = hex_color.lstrip('#')
    return tuple(int(hex_color[i:i+2], 16) for i in (0, 2, 4))


def cell_size_for(max_width: int, max_height: int, grid_width: int, grid_height: int) -> int:
    """
    Largest whole-pixel cell that lets the grid fit inside max_width x max_height.
    """
    cell = min(max_width // grid_width, max_height // grid_height)
    return max(MIN_CELL_SIZE, cell)


def hud_fields(state: GameState) -> Dict[str, str]:
    """Values shown by the HUD after every tick and at reset"""
    return {
        "score": str(state.score),
        "level": str(state.level),
        "speed": f"{state.speed}x",
    }


def frame_to_array(frame: Image.Image) -> np.ndarray:
    """Convert a rendered frame to an (height, width, 3) uint8 array"""
    return np.array(frame.convert('RGB'))


class FrameRenderer:
    """Render GameState snapshots for a fixed grid and cell size"""

    def __init__(self, grid_width: int, grid_height: int, cell_size: int, hud_height: int = HUD_HEIGHT):
        self.grid_width = grid_width
        self.grid_height = grid_height
        self.cell_size = cell_size
        self.hud_height = hud_height

        self.board_width = grid_width * cell_size
        self.board_height = grid_height * cell_size
        self.width = self.board_width
        self.height = self.board_height + hud_height

        # Try to load a font, fallback to default if not available
        try:
            self.font_large = ImageFont.truetype("DejaVuSans-Bold.ttf", 32)
            self.font_medium = ImageFont.truetype("DejaVuSans.ttf", 18)
            self.font_small = ImageFont.truetype("DejaVuSans.ttf", 14)
        except OSError:
            self.font_large = ImageFont.load_default()
            self.font_medium = ImageFont.load_default()
            self.font_small = ImageFont.load_default()
            logger.debug("DejaVu fonts not found, using Pillow's default font")

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)

    def cell_center(self, cell: Tuple[int, int]) -> Tuple[float, float]:
        """Pixel centre of a grid cell, board-relative offset included"""
        x, y = cell
        half = self.cell_size / 2
        return (x * self.cell_size + half, self.hud_height + y * self.cell_size + half)

    def render(self, state: GameState) -> Image.Image:
        """Render a single frame of the game"""
        background = hex_to_rgb(BACKGROUND_COLORS[state.background_color_index % len(BACKGROUND_COLORS)])
        img = Image.new('RGBA', self.size, background + (255,))
        draw = ImageDraw.Draw(img)

        self._draw_hud(draw, state)
        self._draw_snake(draw, state)
        self._draw_apple(draw, state.apple)

        if not state.running:
            img = self._draw_game_over(img, state)

        return img.convert('RGB')

    def _draw_hud(self, draw: ImageDraw.ImageDraw, state: GameState):
        draw.rectangle(
            [0, 0, self.width, self.hud_height - 1],
            fill=hex_to_rgb(ColorScheme.HUD_BACKGROUND)
        )

        fields = hud_fields(state)
        labels = [("Score", fields["score"]), ("Level", fields["level"]), ("Speed", fields["speed"])]
        column_width = self.width / len(labels)
        for i, (label, value) in enumerate(labels):
            # Dimmed "Label: " followed by the value in full brightness
            label_text = f"{label}: "
            label_bbox = draw.textbbox((0, 0), label_text, font=self.font_medium)
            value_bbox = draw.textbbox((0, 0), value, font=self.font_medium)
            label_width = label_bbox[2] - label_bbox[0]
            text_width = label_width + value_bbox[2] - value_bbox[0]
            text_height = max(label_bbox[3] - label_bbox[1], value_bbox[3] - value_bbox[1])
            x = i * column_width + (column_width - text_width) / 2
            y = (self.hud_height - text_height) / 2
            draw.text((x, y), label_text, fill=hex_to_rgb(ColorScheme.HUD_LABEL), font=self.font_medium)
            draw.text((x + label_width, y), value, fill=hex_to_rgb(ColorScheme.HUD_TEXT), font=self.font_medium)

    def _draw_snake(self, draw: ImageDraw.ImageDraw, state: GameState):
        positions = state.snake_positions
        if not positions:
            return

        color = hex_to_rgb(SNAKE_COLORS[state.snake_color_index % len(SNAKE_COLORS)])
        line_width = max(1, int(round(self.cell_size * 0.8)))
        centers = [self.cell_center(cell) for cell in positions]

        # Connected segments with rounded joints
        if len(centers) > 1:
            draw.line(centers, fill=color, width=line_width, joint="curve")

        # Round caps at both ends
        cap = line_width / 2
        for cx, cy in (centers[0], centers[-1]):
            draw.ellipse([cx - cap, cy - cap, cx + cap, cy + cap], fill=color)

        # Head
        head_x, head_y = centers[0]
        radius = self.cell_size * 0.3
        draw.ellipse(
            [head_x - radius, head_y - radius, head_x + radius, head_y + radius],
            fill=color
        )

    def _draw_apple(self, draw: ImageDraw.ImageDraw, apple: Tuple[int, int]):
        x, y = self.cell_center(apple)
        size = self.cell_size * 0.4

        # Body
        draw.ellipse([x - size, y - size, x + size, y + size], fill=hex_to_rgb(APPLE_BODY_COLOR))

        # Stem
        leaf_color = hex_to_rgb(APPLE_LEAF_COLOR)
        draw.rectangle(
            [x - size * 0.1, y - size * 0.8, x + size * 0.1, y - size * 0.5],
            fill=leaf_color
        )

        # Leaf, tilted 45 degrees
        draw.polygon(
            self._ellipse_points(x + size * 0.2, y - size * 0.6, size * 0.15, size * 0.1, math.pi / 4),
            fill=leaf_color
        )

    @staticmethod
    def _ellipse_points(cx: float, cy: float, rx: float, ry: float, rotation: float,
                        steps: int = 16) -> List[Tuple[float, float]]:
        """Outline of a rotated ellipse as a polygon"""
        cos_r, sin_r = math.cos(rotation), math.sin(rotation)
        points = []
        for i in range(steps):
            t = 2 * math.pi * i / steps
            ex, ey = rx * math.cos(t), ry * math.sin(t)
            points.append((cx + ex * cos_r - ey * sin_r, cy + ex * sin_r + ey * cos_r))
        return points

    def _draw_game_over(self, img: Image.Image, state: GameState) -> Image.Image:
        overlay = Image.new('RGBA', self.size, (0, 0, 0, 0))
        draw = ImageDraw.Draw(overlay)
        draw.rectangle([0, self.hud_height, self.width, self.height], fill=ColorScheme.OVERLAY)

        lines = [
            ("Game Over", self.font_large),
            (f"Final score: {state.score}", self.font_medium),
            ("Press R, Enter or Space to play again", self.font_small),
        ]
        center_y = self.hud_height + self.board_height / 2
        line_y = center_y - 50
        for text, font in lines:
            bbox = draw.textbbox((0, 0), text, font=font)
            text_width = bbox[2] - bbox[0]
            draw.text(
                (self.width / 2 - text_width / 2, line_y),
                text,
                fill=hex_to_rgb(ColorScheme.OVERLAY_TEXT),
                font=font
            )
            line_y += (bbox[3] - bbox[1]) + 16

        return Image.alpha_composite(img, overlay)
