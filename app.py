"""
pygame front end: window, keyboard input and the event loop.

Controls
- Arrow keys / WASD: move
- R: restart
- Enter / Space: play again after a game over
- Esc or window close: quit
"""

import logging
import random
from typing import Optional

import pygame

from config import GameConfig
from domain.constants import UP, DOWN, LEFT, RIGHT
from engine import GameEngine
from services.frame_renderer import FrameRenderer, HUD_HEIGHT, cell_size_for, frame_to_array
from services.game_clock import PygameTickTimer, TICK_EVENT
from services.game_session import GameSession

logger = logging.getLogger(__name__)

WINDOW_TITLE = "Snake - Arrow keys/WASD | R: Restart | Esc: Quit"

KEY_DIRECTIONS = {
    pygame.K_UP: UP,
    pygame.K_w: UP,
    pygame.K_DOWN: DOWN,
    pygame.K_s: DOWN,
    pygame.K_LEFT: LEFT,
    pygame.K_a: LEFT,
    pygame.K_RIGHT: RIGHT,
    pygame.K_d: RIGHT,
}
PLAY_AGAIN_KEYS = {pygame.K_RETURN, pygame.K_KP_ENTER, pygame.K_SPACE}


def handle_key(session: GameSession, key: int) -> bool:
    """
    Apply one key press to the session.

    Returns False when the player asked to quit.
    """
    if key == pygame.K_ESCAPE:
        return False

    if key in KEY_DIRECTIONS:
        session.handle_direction(KEY_DIRECTIONS[key])
    elif key == pygame.K_r:
        session.restart()
    elif key in PLAY_AGAIN_KEYS and not session.running:
        session.restart()
    return True


def build_session(config: GameConfig, rng: Optional[random.Random] = None, display=None,
                  clock: Optional[PygameTickTimer] = None) -> GameSession:
    cell_size = cell_size_for(
        config.max_window_width,
        config.max_window_height - HUD_HEIGHT,
        config.grid_width,
        config.grid_height
    )
    renderer = FrameRenderer(config.grid_width, config.grid_height, cell_size)
    engine = GameEngine(config, rng)
    return GameSession(engine, clock or PygameTickTimer(), renderer, display)


def run_app(config: GameConfig, rng: Optional[random.Random] = None):
    pygame.init()
    try:
        session = build_session(config, rng)
        screen = pygame.display.set_mode(session.renderer.size)
        pygame.display.set_caption(WINDOW_TITLE)

        def show(frame):
            surface = pygame.surfarray.make_surface(frame_to_array(frame).swapaxes(0, 1))
            screen.blit(surface, (0, 0))
            pygame.display.flip()

        session.display = show
        session.start()
        logger.info(f"Window {session.renderer.width}x{session.renderer.height}, cell {session.renderer.cell_size}px")

        running = True
        while running:
            event = pygame.event.wait()
            if event.type == pygame.QUIT:
                running = False
            elif event.type == session.clock.event_type:
                session.handle_tick(event)
            elif event.type == pygame.KEYDOWN:
                running = handle_key(session, event.key)
            elif event.type == pygame.WINDOWEXPOSED and session.last_frame is not None:
                show(session.last_frame)
    finally:
        pygame.time.set_timer(TICK_EVENT, 0)
        pygame.quit()
