"""
model.py — Model layer.

Owns ALL game state and rules. Zero rendering, zero input handling.
Exposes a clean API for the Controller to read/write.

Classes:
    Direction       — immutable (dx, dy) value object with a name
    Frame           — read-only snapshot handed to the view
    GameOverResult  — final score + whether it beat the stored best
    GameModel       — snake, food, obstacles, score, difficulty, tick loop
"""

from __future__ import annotations

import logging
import random
from collections import deque
from dataclasses import dataclass
from itertools import islice
from typing import Optional, Union

from .config import (
    COLS, ROWS,
    DIFFICULTIES, DEFAULT_DIFFICULTY,
    START_SNAKE, START_DIRECTION,
    SCORE_PER_FOOD, SPEEDUP_EVERY, SPEEDUP_STEP_MS, MIN_INTERVAL_MS,
    EXCLUSION_RADIUS, MAX_SPAWN_ATTEMPTS,
    STATE_IDLE, STATE_PLAYING, STATE_OVER,
    MSG_IDLE, MSG_GAME_OVER, MSG_NEW_HIGH_SCORE,
)
from .scheduler import StepScheduler
from .score_store import empty_scores

logger = logging.getLogger(__name__)

Cell = tuple[int, int]


# ─────────────────────────── Direction ───────────────────────────
class Direction:
    """Immutable 2-D unit direction."""
    LEFT  = None  # filled below after class definition
    RIGHT = None
    UP    = None
    DOWN  = None

    def __init__(self, x: int, y: int, name: str):
        self.x = x
        self.y = y
        self.name = name

    def is_opposite(self, other: "Direction") -> bool:
        return self.x == -other.x and self.y == -other.y

    @property
    def opposite(self) -> "Direction":
        return BY_NAME[_OPPOSITES[self.name]]

    @staticmethod
    def parse(value: Union["Direction", str]) -> "Direction":
        """Accept a Direction or one of 'up', 'down', 'left', 'right'."""
        if isinstance(value, Direction):
            return value
        try:
            return BY_NAME[str(value).lower()]
        except KeyError:
            raise ValueError(f"unknown direction: {value!r}") from None

    def __eq__(self, other):
        return isinstance(other, Direction) and self.x == other.x and self.y == other.y

    def __hash__(self):
        return hash((self.x, self.y))

    def __repr__(self):
        return f"Direction.{self.name.upper()}"


Direction.LEFT  = Direction(-1,  0, "left")
Direction.RIGHT = Direction( 1,  0, "right")
Direction.UP    = Direction( 0, -1, "up")
Direction.DOWN  = Direction( 0,  1, "down")
ALL_DIRS = [Direction.RIGHT, Direction.LEFT, Direction.DOWN, Direction.UP]
BY_NAME = {d.name: d for d in ALL_DIRS}
_OPPOSITES = {"up": "down", "down": "up", "left": "right", "right": "left"}


# ──────────────────────────── Results ────────────────────────────
@dataclass(frozen=True)
class Frame:
    """Everything a renderer needs for one picture of the game."""
    snake: tuple[Cell, ...]
    food: Optional[Cell]
    obstacles: frozenset[Cell]
    score: int
    running: bool
    message: str
    difficulty: str
    high_score: int
    interval_ms: int
    direction: str


@dataclass(frozen=True)
class GameOverResult:
    score: int
    new_high_score: bool


# ─────────────────────────── GameModel ───────────────────────────
class GameModel:
    """
    Top-level model. Owns all game state.

    The controller feeds elapsed time through update(); every tick that
    comes due runs tick(). Input goes through change_direction(),
    set_difficulty() and start(). The view only ever sees frame().
    """

    def __init__(self, store=None, rng: Optional[random.Random] = None,
                 cols: int = COLS, rows: int = ROWS):
        if not all(0 <= x < cols and 0 <= y < rows for x, y in START_SNAKE):
            raise ValueError(f"a {cols}x{rows} grid cannot hold the starting snake")
        self.cols = cols
        self.rows = rows
        self._store = store
        self._rng = rng or random.Random()
        self._scheduler = StepScheduler()

        self.difficulty: str = DEFAULT_DIFFICULTY
        self.state: str = STATE_IDLE
        self.message: str = MSG_IDLE
        self.snake: deque[Cell] = deque()
        self.direction: Direction = Direction.parse(START_DIRECTION)
        self.food: Optional[Cell] = None
        self.obstacles: set[Cell] = set()
        self.score: int = 0
        self.interval_ms: int = DIFFICULTIES[self.difficulty]["interval_ms"]

        self.high_scores = empty_scores()
        if store is not None:
            self.high_scores.update(store.load())

    # ── Accessors ────────────────────────────────────────────────
    @property
    def running(self) -> bool:
        return self.state == STATE_PLAYING

    @property
    def high_score(self) -> int:
        """Best score for the selected difficulty."""
        return self.high_scores.get(self.difficulty, 0)

    @property
    def head(self) -> Cell:
        return self.snake[0]

    @property
    def diff_config(self) -> dict:
        return DIFFICULTIES[self.difficulty]

    def frame(self) -> Frame:
        return Frame(
            snake=tuple(self.snake),
            food=self.food,
            obstacles=frozenset(self.obstacles),
            score=self.score,
            running=self.running,
            message=self.message,
            difficulty=self.difficulty,
            high_score=self.high_score,
            interval_ms=self.interval_ms,
            direction=self.direction.name,
        )

    # ── Public API ───────────────────────────────────────────────
    def set_difficulty(self, name: str) -> bool:
        """Select a difficulty for the next run. Ignored mid-run."""
        if self.running:
            logger.debug("difficulty change to %r ignored while running", name)
            return False
        if name not in DIFFICULTIES:
            logger.debug("unknown difficulty %r ignored", name)
            return False
        self.difficulty = name
        return True

    def change_direction(self, value: Union[Direction, str]) -> bool:
        """
        Steer the snake from the next tick on.

        Only a reversal of the current direction is refused; the latest
        accepted request before a tick is the one that applies.
        """
        new_dir = Direction.parse(value)
        if new_dir.is_opposite(self.direction):
            return False
        self.direction = new_dir
        return True

    def start(self) -> None:
        if self.running:
            return
        self.snake = deque(START_SNAKE)
        self.direction = Direction.parse(START_DIRECTION)
        self.score = 0
        self.interval_ms = self.diff_config["interval_ms"]
        self.obstacles = self._place_obstacles(self.diff_config["obstacles"])
        self.food = self._spawn_food()
        self.state = STATE_PLAYING
        self.message = ""
        self._scheduler.start(self.interval_ms)
        logger.info("Game started on %s (%d ms, %d obstacles).",
                    self.difficulty, self.interval_ms, len(self.obstacles))

    def update(self, dt_ms: float) -> None:
        """Advance the clock by dt_ms and run every tick that came due."""
        self._scheduler.advance(dt_ms)
        while self.running and self._scheduler.due():
            self.tick()

    def tick(self) -> None:
        """One simulation step."""
        if not self.running:
            return

        hx, hy = self.head
        new_head = (hx + self.direction.x, hy + self.direction.y)
        self.snake.appendleft(new_head)

        if self._collides(new_head):
            self.game_over()
            return

        if new_head == self.food:
            self._eat()
        else:
            self.snake.pop()

    def game_over(self) -> GameOverResult:
        self._scheduler.stop()
        self.state = STATE_OVER

        new_best = self.score > self.high_score
        if new_best:
            self.high_scores[self.difficulty] = self.score
            if self._store is not None:
                self._store.save(dict(self.high_scores))
            self.message = MSG_NEW_HIGH_SCORE.format(score=self.score)
        else:
            self.message = MSG_GAME_OVER.format(score=self.score)
        logger.info("Game over on %s with %d points%s.", self.difficulty, self.score,
                    " (new high score)" if new_best else "")
        return GameOverResult(score=self.score, new_high_score=new_best)

    # ── Private helpers ──────────────────────────────────────────
    def _in_bounds(self, cell: Cell) -> bool:
        x, y = cell
        return 0 <= x < self.cols and 0 <= y < self.rows

    def _collides(self, head: Cell) -> bool:
        if not self._in_bounds(head):
            return True
        if head in islice(self.snake, 1, None):
            return True
        return head in self.obstacles

    def _eat(self) -> None:
        self.score += SCORE_PER_FOOD
        self.food = self._spawn_food()
        if self.score % SPEEDUP_EVERY == 0 and self.interval_ms > MIN_INTERVAL_MS:
            self.interval_ms -= SPEEDUP_STEP_MS
            self._scheduler.start(self.interval_ms)
            logger.debug("speed up: tick interval now %d ms", self.interval_ms)

    def _exclusion_zone(self) -> set[Cell]:
        sx, sy = START_SNAKE[0]
        reach = EXCLUSION_RADIUS - 1
        return {
            (x, y)
            for x in range(sx - reach, sx + reach + 1)
            for y in range(sy - reach, sy + reach + 1)
        }

    def _place_obstacles(self, count: int) -> set[Cell]:
        obstacles: set[Cell] = set()
        forbidden = set(START_SNAKE) | self._exclusion_zone()
        for _ in range(count):
            cell = self._random_free_cell(forbidden | obstacles)
            if cell is None:
                logger.warning("Board full: placed %d of %d obstacles.", len(obstacles), count)
                break
            obstacles.add(cell)
        return obstacles

    def _spawn_food(self) -> Optional[Cell]:
        cell = self._random_free_cell(set(self.snake) | self.obstacles)
        if cell is None:
            logger.warning("No free cell left for food.")
        return cell

    def _random_free_cell(self, blocked: set[Cell]) -> Optional[Cell]:
        """Rejection-sample a cell outside ``blocked``; enumerate if unlucky."""
        for _ in range(MAX_SPAWN_ATTEMPTS):
            pos = (self._rng.randrange(self.cols), self._rng.randrange(self.rows))
            if pos not in blocked:
                return pos

        free = [
            (x, y)
            for x in range(self.cols)
            for y in range(self.rows)
            if (x, y) not in blocked
        ]
        if not free:
            return None
        return self._rng.choice(free)
