"""
controller.py — Controller layer.

Responsibilities:
  - Own the pygame event loop.
  - Translate raw keyboard events into model commands.
  - Drive the game loop: feed elapsed time to the model, ask the view to render.
  - Know nothing about rendering details (that's the View's job).
  - Know nothing about game rules (that's the Model's job).

The controller is the only layer that imports pygame directly for events.
"""

import logging
import sys

import pygame

from .config import WIDTH, HEIGHT, FPS
from .model import Direction, GameModel
from .score_store import HighScoreStore
from .view import GameView

logger = logging.getLogger(__name__)

DIRECTION_KEYS = {
    pygame.K_LEFT:  Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
    pygame.K_UP:    Direction.UP,
    pygame.K_DOWN:  Direction.DOWN,
    pygame.K_a:     Direction.LEFT,
    pygame.K_d:     Direction.RIGHT,
    pygame.K_w:     Direction.UP,
    pygame.K_s:     Direction.DOWN,
}

DIFFICULTY_KEYS = {
    pygame.K_1: "normal",
    pygame.K_2: "medium",
    pygame.K_3: "hard",
    pygame.K_n: "normal",
    pygame.K_m: "medium",
    pygame.K_h: "hard",
}

START_KEYS = (pygame.K_RETURN, pygame.K_SPACE)
QUIT_KEYS = (pygame.K_ESCAPE, pygame.K_q)


class GameController:
    """
    Owns the main loop.
    Glues Model <-> View without them knowing about each other.
    """

    def __init__(self, model: GameModel = None):
        pygame.init()
        self.screen = pygame.display.set_mode((WIDTH, HEIGHT))
        pygame.display.set_caption("Snake")
        self.clock = pygame.time.Clock()
        self.model = model or GameModel(store=HighScoreStore())
        self.view = GameView(self.screen)

    # ── Public entry point ────────────────────────────────────────
    def run(self) -> None:
        """Start and run the game loop until the player quits."""
        logger.info("Entering main loop at %d FPS.", FPS)
        while True:
            dt = self.clock.tick(FPS)
            self._handle_events()
            self.model.update(dt)
            self.view.render(self.model.frame())

    # ── Event dispatch ────────────────────────────────────────────
    def _handle_events(self) -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._quit()
            elif event.type == pygame.KEYDOWN:
                self.handle_key(event.key)

    def handle_key(self, key: int) -> None:
        if key in QUIT_KEYS:
            self._quit()
        elif key in DIRECTION_KEYS:
            self.model.change_direction(DIRECTION_KEYS[key])
        elif key in START_KEYS:
            self.model.start()
        elif key in DIFFICULTY_KEYS:
            # the model refuses this mid-run
            self.model.set_difficulty(DIFFICULTY_KEYS[key])

    # ── Utilities ─────────────────────────────────────────────────
    @staticmethod
    def _quit() -> None:
        logger.info("Quitting.")
        pygame.quit()
        sys.exit()
