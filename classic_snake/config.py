"""
config.py — Shared constants for the entire application.
No logic, no imports from internal modules.
"""

import os

# ── Window & Grid ─────────────────────────────────────────────────
BOARD_PX        = 400
CELL            = 20
COLS            = BOARD_PX // CELL
ROWS            = BOARD_PX // CELL
PANEL_H         = 56
MARGIN          = 12
WIDTH           = BOARD_PX + MARGIN * 2
HEIGHT          = PANEL_H + BOARD_PX + MARGIN * 2
OFFSET_X        = MARGIN
OFFSET_Y        = PANEL_H + MARGIN
FPS             = 60

# ── Colors ────────────────────────────────────────────────────────
BG           = (18,  18,  30)
GRID_COL     = (255, 255, 255)
SNAKE_HEAD   = (71,  118, 230)
SNAKE_TAIL   = (142, 84,  233)
FOOD_COL     = (255, 77,  77)
OBSTACLE_COL = (85,  85,  85)
OBSTACLE_X   = (34,  34,  34)
UI_COL       = (170, 170, 200)
TEXT_COL     = (255, 255, 255)
ALERT_COL    = (255, 85,  85)
PANEL_BG     = (24,  24,  40)
CARD_BG      = (40,  40,  60)
BORDER_COL   = (48,  48,  88)

# ── Gameplay ──────────────────────────────────────────────────────
START_SNAKE       = ((5, 10), (4, 10), (3, 10))
START_DIRECTION   = "right"
SCORE_PER_FOOD    = 10
SPEEDUP_EVERY     = 50       # score milestone that shortens the interval
SPEEDUP_STEP_MS   = 5
MIN_INTERVAL_MS   = 50
EXCLUSION_RADIUS  = 3        # obstacles keep |dx| >= 3 or |dy| >= 3 from the start cell
MAX_SPAWN_ATTEMPTS = 10_000

DEFAULT_DIFFICULTY = "normal"
DIFFICULTIES = {
    "normal": {"label": "NORMAL", "interval_ms": 100, "obstacles": 0},
    "medium": {"label": "MEDIUM", "interval_ms": 80,  "obstacles": 3},
    "hard":   {"label": "HARD",   "interval_ms": 60,  "obstacles": 6},
}

# ── Game States ───────────────────────────────────────────────────
STATE_IDLE    = "idle"
STATE_PLAYING = "playing"
STATE_OVER    = "over"

# ── Messages ──────────────────────────────────────────────────────
MSG_IDLE           = "Press Start to Play"
MSG_GAME_OVER      = "Game Over! Score: {score}. Press Start to Play Again"
MSG_NEW_HIGH_SCORE = "New High Score: {score}! Press Start to Play Again"

# ── Environment ───────────────────────────────────────────────────
HIGHSCORE_FILE = os.getenv(
    "SNAKE_HIGHSCORE_FILE",
    os.path.join(os.path.expanduser("~"), ".classic_snake", "snakeHighScores.json"),
)
LOG_LEVEL = os.getenv("SNAKE_LOG_LEVEL", "INFO").upper()
