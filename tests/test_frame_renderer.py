"""
Tests for the frame renderer and HUD helpers.
"""

import os
import sys
from unittest.mock import Mock

import numpy as np

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from domain import rules
from domain.constants import RIGHT, APPLE_BODY_COLOR, BACKGROUND_COLORS, SNAKE_COLORS
from domain.game_state import GameState
from domain.snake import Snake
from services.frame_renderer import (
    ColorScheme,
    FrameRenderer,
    HUD_HEIGHT,
    cell_size_for,
    frame_to_array,
    hex_to_rgb,
    hud_fields,
)

CELL = 20


def make_state(**overrides):
    params = dict(
        snake=Snake([(5, 5), (4, 5), (3, 5)]),
        apple=(8, 2),
        width=10,
        height=10,
        tick_interval_ms=150,
        direction=RIGHT,
    )
    params.update(overrides)
    return GameState(**params)


def pixel_at_cell(image, cell):
    """RGB value at the centre of a grid cell"""
    x, y = cell
    return image.getpixel((x * CELL + CELL // 2, HUD_HEIGHT + y * CELL + CELL // 2))


class TestHelpers:
    """Tests for module-level helpers."""

    def test_hex_to_rgb(self):
        """Hex strings convert to RGB tuples."""
        assert hex_to_rgb("#FF3B30") == (255, 59, 48)
        assert hex_to_rgb("ffffff") == (255, 255, 255)

    def test_cell_size_fits_both_axes(self):
        """The cell size is limited by the tighter axis."""
        assert cell_size_for(800, 600, 40, 50) == 12
        assert cell_size_for(800, 600, 10, 10) == 60

    def test_cell_size_never_below_one(self):
        """Tiny windows still get a one-pixel cell."""
        assert cell_size_for(10, 10, 40, 50) == 1

    def test_hud_fields(self):
        """HUD shows score, level and speed with an x suffix."""
        state = make_state(score=3, level=4, speed=4)
        assert hud_fields(state) == {"score": "3", "level": "4", "speed": "4x"}


class TestFrameRenderer:
    """Tests for FrameRenderer.render()."""

    def test_frame_size_includes_hud(self):
        """The frame is the board plus the HUD strip."""
        renderer = FrameRenderer(10, 10, CELL)
        image = renderer.render(make_state())
        assert image.size == (200, 200 + HUD_HEIGHT)
        assert image.mode == "RGB"

    def test_background_uses_state_colour(self):
        """Empty cells are filled with the current background colour."""
        renderer = FrameRenderer(10, 10, CELL)

        image = renderer.render(make_state())
        assert pixel_at_cell(image, (0, 9)) == hex_to_rgb(BACKGROUND_COLORS[0])

        image = renderer.render(make_state(background_color_index=2))
        assert pixel_at_cell(image, (0, 9)) == hex_to_rgb(BACKGROUND_COLORS[2])

    def test_snake_drawn_in_current_colour(self):
        """Head and body centres use the current snake colour."""
        renderer = FrameRenderer(10, 10, CELL)
        state = make_state(snake_color_index=1)

        image = renderer.render(state)

        expected = hex_to_rgb(SNAKE_COLORS[1])
        assert pixel_at_cell(image, (5, 5)) == expected
        assert pixel_at_cell(image, (4, 5)) == expected
        assert pixel_at_cell(image, (3, 5)) == expected

    def test_snake_joint_is_filled(self):
        """A turning snake is drawn as one connected stroke."""
        renderer = FrameRenderer(10, 10, CELL)
        state = make_state(snake=Snake([(5, 3), (5, 4), (5, 5), (4, 5)]))

        image = renderer.render(state)

        expected = hex_to_rgb(SNAKE_COLORS[0])
        for cell in [(5, 3), (5, 4), (5, 5), (4, 5)]:
            assert pixel_at_cell(image, cell) == expected

    def test_apple_body_is_red(self):
        """The apple's centre is the red body colour."""
        renderer = FrameRenderer(10, 10, CELL)
        image = renderer.render(make_state())
        assert pixel_at_cell(image, (8, 2)) == hex_to_rgb(APPLE_BODY_COLOR)

    def test_render_does_not_mutate_state(self):
        """Rendering is a pure read."""
        renderer = FrameRenderer(10, 10, CELL)
        state = make_state()
        before = (state.snake_positions, state.apple, state.score, state.snake_color_index)

        renderer.render(state)

        assert (state.snake_positions, state.apple, state.score, state.snake_color_index) == before

    def test_colours_follow_level_up(self):
        """After a level-up the next frame uses the next palette entries."""
        renderer = FrameRenderer(10, 10, CELL)
        state = make_state()
        rules.level_up(state)

        image = renderer.render(state)

        assert pixel_at_cell(image, (0, 9)) == hex_to_rgb(BACKGROUND_COLORS[1])
        assert pixel_at_cell(image, (5, 5)) == hex_to_rgb(SNAKE_COLORS[1])

    def test_game_over_overlay_darkens_board(self):
        """A finished game is drawn under a dark overlay."""
        renderer = FrameRenderer(10, 10, CELL)
        image = renderer.render(make_state(running=False))

        r, g, b = pixel_at_cell(image, (0, 9))
        assert max(r, g, b) < 200

    def test_frame_to_array(self):
        """Frames convert to (height, width, 3) arrays."""
        renderer = FrameRenderer(10, 10, CELL)
        array = frame_to_array(renderer.render(make_state()))
        assert isinstance(array, np.ndarray)
        assert array.shape == (200 + HUD_HEIGHT, 200, 3)
        assert array.dtype == np.uint8

    def test_hud_labels_dimmed_and_values_bright(self):
        """Each HUD field draws its label in the label colour, then its value in the text colour."""
        renderer = FrameRenderer(10, 10, CELL)
        draw = Mock()
        draw.textbbox.return_value = (0, 0, 10, 10)

        renderer._draw_hud(draw, make_state(score=4))

        drawn = [(c.args[1], c.kwargs["fill"]) for c in draw.text.call_args_list]
        label = hex_to_rgb(ColorScheme.HUD_LABEL)
        text = hex_to_rgb(ColorScheme.HUD_TEXT)
        assert drawn == [
            ("Score: ", label), ("4", text),
            ("Level: ", label), ("1", text),
            ("Speed: ", label), ("1x", text),
        ]
        # The value starts where the label ends
        label_x = draw.text.call_args_list[0].args[0][0]
        value_x = draw.text.call_args_list[1].args[0][0]
        assert value_x == label_x + 10
