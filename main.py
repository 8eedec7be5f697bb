"""
main.py — Entry point.

Run with:
    python main.py

Requires:
    pip install pygame

Environment:
    SNAKE_HIGHSCORE_FILE   where best scores are kept (JSON)
    SNAKE_LOG_LEVEL        DEBUG, INFO, WARNING, ... (default INFO)
"""

import logging

from classic_snake.config import LOG_LEVEL
from classic_snake.controller import GameController


def main() -> None:
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    GameController().run()


if __name__ == "__main__":
    main()
