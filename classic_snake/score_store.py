"""
score_store.py — Best score per difficulty, persisted as JSON.

The file holds a single object, e.g. ``{"normal": 120, "medium": 40, "hard": 0}``.
Anything unreadable is treated as "no previous high scores": the player
never sees a storage failure, it only shows up in the log.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Dict, Iterable, Mapping, Optional

from .config import DIFFICULTIES, HIGHSCORE_FILE

logger = logging.getLogger(__name__)


def empty_scores(difficulties: Iterable[str] = DIFFICULTIES) -> Dict[str, int]:
    return {name: 0 for name in difficulties}


def _coerce_score(value) -> int:
    # bool is an int subclass; true/false in the file is not a score
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        return 0
    return value


class HighScoreStore:
    """Reads and writes the high-score mapping at ``path``."""

    def __init__(self, path: Optional[str] = None):
        self.path = path or HIGHSCORE_FILE

    def load(self) -> Dict[str, int]:
        """Return a score for every known difficulty; zeros on any failure."""
        scores = empty_scores()
        if not os.path.exists(self.path):
            logger.info("No high score file at %s, starting fresh.", self.path)
            return scores

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Could not read high scores from %s: %s", self.path, e)
            return scores

        if not isinstance(data, dict):
            logger.warning("Ignoring high score file %s: expected an object, got %s",
                           self.path, type(data).__name__)
            return scores

        for name in scores:
            scores[name] = _coerce_score(data.get(name, 0))
        logger.info("High scores loaded from %s.", self.path)
        return scores

    def save(self, scores: Mapping[str, int]) -> None:
        try:
            directory = os.path.dirname(self.path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(dict(scores), f, indent=4)
            logger.info("High scores saved to %s.", self.path)
        except OSError as e:
            logger.error("Error saving high scores to %s: %s", self.path, e)
