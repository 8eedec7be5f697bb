import random

import pytest

from classic_snake.model import GameModel
from classic_snake.score_store import HighScoreStore


class MemoryStore:
    """Score store double that records every save."""

    def __init__(self, scores=None):
        self.scores = dict(scores or {})
        self.saved = []

    def load(self):
        return dict(self.scores)

    def save(self, scores):
        self.scores = dict(scores)
        self.saved.append(dict(scores))


@pytest.fixture
def make_store():
    return MemoryStore


@pytest.fixture
def store(make_store):
    return make_store()


@pytest.fixture
def model(store):
    return GameModel(store=store, rng=random.Random(1234))


@pytest.fixture
def score_file(tmp_path):
    return tmp_path / "scores" / "snakeHighScores.json"


@pytest.fixture
def file_store(score_file):
    return HighScoreStore(str(score_file))
