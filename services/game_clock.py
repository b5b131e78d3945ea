"""
Self-rescheduling tick timer backed by pygame's event queue.

Each call to arm() schedules exactly one tick event after the given delay.
The session re-arms it after every tick with the current interval, so a
level-up takes effect on the very next delay. Every armed timer carries a
generation number; cancel() bumps it, which makes any tick event that was
already queued for an old game stale.
"""

import logging

import pygame

logger = logging.getLogger(__name__)

TICK_EVENT = pygame.USEREVENT + 1


class PygameTickTimer:
    """One-shot, cancellable pygame timer used as the game clock"""

    def __init__(self, event_type: int = TICK_EVENT):
        self.event_type = event_type
        self.generation = 0
        self.armed = False

    def arm(self, delay_ms: float):
        """Schedule the next tick, replacing any timer that is still pending."""
        self.cancel()
        self.generation += 1
        delay = max(1, int(round(delay_ms)))
        event = pygame.event.Event(self.event_type, generation=self.generation)
        pygame.time.set_timer(event, delay, loops=1)
        self.armed = True
        logger.debug(f"Tick {self.generation} armed in {delay}ms")

    def cancel(self):
        """Disarm the timer and drop tick events already in the queue."""
        pygame.time.set_timer(self.event_type, 0)
        pygame.event.clear(self.event_type)
        if self.armed:
            self.generation += 1
        self.armed = False

    def is_current(self, event) -> bool:
        return self.armed and getattr(event, "generation", None) == self.generation
