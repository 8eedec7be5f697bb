"""
view.py — View layer.

Draws one Frame per call. Reads nothing but the Frame it is handed and
never touches the model.

  - Pre-rendered grid surface (drawn once, blitted every frame)
  - Snake colour fades from head to tail, head gets a highlight stripe
  - Obstacles drawn as crossed blocks
  - Pulsing food dot
  - HUD panel: score, best for the difficulty, difficulty pips
  - Message card whenever the game is not running

Public API:
    GameView(screen)    — bind to a pygame surface
    view.render(frame)  — draw the current frame
"""

import math
import pygame

from .config import (
    WIDTH, PANEL_H, BOARD_PX,
    OFFSET_X, OFFSET_Y, CELL, COLS, ROWS,
    BG, GRID_COL, SNAKE_HEAD, SNAKE_TAIL, FOOD_COL,
    OBSTACLE_COL, OBSTACLE_X, UI_COL, TEXT_COL, ALERT_COL,
    PANEL_BG, CARD_BG, BORDER_COL,
    DIFFICULTIES,
)
from .model import Frame, BY_NAME


# ─────────────────────── colour helpers ──────────────────────────
def _lerp_color(c1: tuple, c2: tuple, t: float) -> tuple:
    t = max(0.0, min(1.0, t))
    return tuple(int(c1[i] + (c2[i] - c1[i]) * t) for i in range(3))


def _with_alpha(color: tuple, alpha: int) -> tuple:
    return (*color[:3], max(0, min(255, alpha)))


def _brighten(color: tuple, factor: float) -> tuple:
    return tuple(min(255, int(c * factor)) for c in color[:3])


def _cell_rect(x: int, y: int, inset: int = 0) -> pygame.Rect:
    return pygame.Rect(
        OFFSET_X + x * CELL + inset,
        OFFSET_Y + y * CELL + inset,
        CELL - inset * 2,
        CELL - inset * 2,
    )


# ─────────────────────────── GameView ────────────────────────────
class GameView:
    """Renders the complete game frame from a model Frame."""

    def __init__(self, screen: pygame.Surface):
        self.screen = screen
        self._init_fonts()
        self._build_static_surfaces()
        self._anim_tick: int = 0

    # ── Main entry ───────────────────────────────────────────────
    def render(self, frame: Frame) -> None:
        self._anim_tick += 1

        self.screen.fill(BG)
        self.screen.blit(self._grid_surf, (OFFSET_X, OFFSET_Y))

        for x, y in frame.obstacles:
            self._draw_obstacle(x, y)
        if frame.food is not None:
            self._draw_food(frame.food)
        self._draw_snake(frame)

        pygame.draw.rect(self.screen, BORDER_COL,
                         (OFFSET_X - 1, OFFSET_Y - 1, BOARD_PX + 2, BOARD_PX + 2), 1)
        self._draw_panel(frame)

        if not frame.running:
            self._draw_message_card(frame)

        pygame.display.flip()

    # ── Static surface pre-builds ─────────────────────────────────
    def _build_static_surfaces(self) -> None:
        self._grid_surf = pygame.Surface((BOARD_PX, BOARD_PX), pygame.SRCALPHA)
        self._grid_surf.fill((71, 118, 230, 8))
        for x in range(COLS + 1):
            pygame.draw.line(self._grid_surf, _with_alpha(GRID_COL, 26),
                             (x * CELL, 0), (x * CELL, BOARD_PX))
        for y in range(ROWS + 1):
            pygame.draw.line(self._grid_surf, _with_alpha(GRID_COL, 26),
                             (0, y * CELL), (BOARD_PX, y * CELL))

    # ── Board content ────────────────────────────────────────────
    def _draw_obstacle(self, x: int, y: int) -> None:
        rect = _cell_rect(x, y, inset=2)
        pygame.draw.rect(self.screen, OBSTACLE_COL, rect)
        pygame.draw.line(self.screen, OBSTACLE_X,
                         (rect.left + 3, rect.top + 3), (rect.right - 4, rect.bottom - 4), 2)
        pygame.draw.line(self.screen, OBSTACLE_X,
                         (rect.right - 4, rect.top + 3), (rect.left + 3, rect.bottom - 4), 2)

    def _draw_food(self, food: tuple) -> None:
        pulse = 0.9 + 0.1 * math.sin(self._anim_tick * 0.08)
        r = max(2, int((CELL / 2 - 1) * pulse))
        cx = OFFSET_X + food[0] * CELL + CELL // 2
        cy = OFFSET_Y + food[1] * CELL + CELL // 2
        pygame.draw.circle(self.screen, FOOD_COL, (cx, cy), r)
        pygame.draw.circle(self.screen, _brighten(FOOD_COL, 1.4),
                           (cx - r // 3, cy - r // 3), max(1, r // 3))

    def _draw_snake(self, frame: Frame) -> None:
        length = len(frame.snake)
        for i, (sx, sy) in enumerate(frame.snake):
            t = i / max(length - 1, 1)
            color = _lerp_color(SNAKE_HEAD, SNAKE_TAIL, t)
            rect = _cell_rect(sx, sy, inset=0 if i == 0 else 1)
            radius = 8 if i == 0 else 6
            pygame.draw.rect(self.screen, color, rect, border_radius=radius)

            if i == 0:
                hi = pygame.Rect(rect.x + 3, rect.y + 3, rect.w - 6, max(2, rect.h // 4))
                pygame.draw.rect(self.screen, _brighten(color, 1.5), hi, border_radius=2)

        if frame.snake:
            self._draw_eyes(frame.snake[0], frame.direction)

    def _draw_eyes(self, head: tuple, direction: str) -> None:
        d = BY_NAME[direction]
        cx = OFFSET_X + head[0] * CELL + CELL // 2
        cy = OFFSET_Y + head[1] * CELL + CELL // 2
        px, py = -d.y, d.x  # perpendicular
        for sign in (+1, -1):
            ex = int(cx + d.x * 4 + sign * px * 4)
            ey = int(cy + d.y * 4 + sign * py * 4)
            pygame.draw.circle(self.screen, (235, 235, 235), (ex, ey), 2)

    # ── HUD Panel ─────────────────────────────────────────────────
    def _draw_panel(self, frame: Frame) -> None:
        pygame.draw.rect(self.screen, PANEL_BG, (0, 0, WIDTH, PANEL_H))
        pygame.draw.line(self.screen, BORDER_COL, (0, PANEL_H - 1), (WIDTH, PANEL_H - 1), 1)

        self.screen.blit(self.font_small.render("SCORE", True, UI_COL), (16, 8))
        self.screen.blit(self.font_big.render(str(frame.score), True, TEXT_COL), (16, 24))

        best = self.font_small.render("BEST", True, UI_COL)
        self.screen.blit(best, best.get_rect(topright=(WIDTH - 16, 8)))
        best_val = self.font_big.render(str(frame.high_score), True, TEXT_COL)
        self.screen.blit(best_val, best_val.get_rect(topright=(WIDTH - 16, 24)))

        self._draw_difficulty_pips(WIDTH // 2, 12, frame.difficulty)
        label = DIFFICULTIES[frame.difficulty]["label"]
        diff_surf = self.font_small.render(label, True, SNAKE_HEAD)
        self.screen.blit(diff_surf, diff_surf.get_rect(center=(WIDTH // 2, 34)))

    def _draw_difficulty_pips(self, cx: int, y: int, active: str) -> None:
        """One pip per difficulty, the selected one lit."""
        spacing = 14
        names = list(DIFFICULTIES)
        sx = cx - ((len(names) - 1) * spacing) // 2
        pip_colors = [(0, 200, 100), (255, 200, 0), (255, 51, 102)]
        for i, name in enumerate(names):
            px = sx + i * spacing
            if name == active:
                c = pip_colors[i % len(pip_colors)]
                pygame.draw.circle(self.screen, c, (px, y), 4)
            else:
                pygame.draw.circle(self.screen, _lerp_color(UI_COL, BG, 0.3), (px, y), 2)

    # ── Message card ─────────────────────────────────────────────
    def _draw_message_card(self, frame: Frame) -> None:
        shade = pygame.Surface((BOARD_PX, BOARD_PX), pygame.SRCALPHA)
        shade.fill((0, 0, 0, 178))
        self.screen.blit(shade, (OFFSET_X, OFFSET_Y))

        finished = bool(frame.snake)  # idle screen has no snake yet
        card_h = 170 if finished else 110
        card_w = int(BOARD_PX * 0.85)
        card = pygame.Rect(0, 0, card_w, card_h)
        card.center = (OFFSET_X + BOARD_PX // 2, OFFSET_Y + BOARD_PX // 2)

        bg = pygame.Surface(card.size, pygame.SRCALPHA)
        pygame.draw.rect(bg, _with_alpha(CARD_BG, 218), bg.get_rect(), border_radius=15)
        self.screen.blit(bg, card.topleft)
        pygame.draw.rect(self.screen, _lerp_color(CARD_BG, ALERT_COL, 0.6), card, 2,
                         border_radius=15)

        cy = card.top + 22
        if finished:
            pulse = 0.85 + 0.15 * math.sin(self._anim_tick * 0.05)
            cy = self._draw_text_line("GAME OVER", _brighten(ALERT_COL, pulse), cy, self.font_title)
            cy = self._draw_text_line(f"Your Score: {frame.score}", TEXT_COL, cy, self.font_med)
            cy = self._draw_text_line(frame.message, UI_COL, cy + 4, self.font_tiny)
        else:
            cy = self._draw_text_line(frame.message, TEXT_COL, cy + 8, self.font_med)
        self._draw_text_line("ENTER start  ·  1/2/3 difficulty  ·  ARROWS move",
                             _lerp_color(UI_COL, BG, 0.25), card.bottom - 22, self.font_tiny)

    def _draw_text_line(self, text: str, color: tuple,
                        cy: int, font: pygame.font.Font) -> int:
        if not text:
            return cy + 10
        surf = font.render(text, True, color)
        self.screen.blit(surf, surf.get_rect(center=(OFFSET_X + BOARD_PX // 2, cy)))
        return cy + surf.get_height() + 8

    # ── Font init ─────────────────────────────────────────────────
    def _init_fonts(self) -> None:
        specs = [
            ("font_title", "poppins", 28, True),
            ("font_big",   "poppins", 22, True),
            ("font_med",   "poppins", 18, False),
            ("font_small", "poppins", 12, True),
            ("font_tiny",  "poppins", 11, False),
        ]
        for attr, name, size, bold in specs:
            try:
                setattr(self, attr, pygame.font.SysFont(name, size, bold=bold))
            except Exception:
                setattr(self, attr, pygame.font.SysFont(None, size))
