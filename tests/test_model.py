import random
from collections import deque

import pytest

from classic_snake.config import (
    START_SNAKE, MSG_IDLE, MSG_GAME_OVER, MSG_NEW_HIGH_SCORE,
    STATE_OVER, STATE_PLAYING,
)
from classic_snake.model import ALL_DIRS, Direction, GameModel

FAR_AWAY = (19, 0)


def in_start_zone(cell):
    return abs(cell[0] - 5) < 3 and abs(cell[1] - 10) < 3


def steer_until_moving(model, direction):
    """From the start position, turn so the last move was ``direction``."""
    if direction == Direction.LEFT:
        model.change_direction(Direction.UP)
        model.tick()
    if direction != Direction.RIGHT:
        assert model.change_direction(direction)
    model.tick()
    assert model.running


# ── Lifecycle ─────────────────────────────────────────────────────
def test_idle_frame_before_first_start(model):
    frame = model.frame()
    assert not frame.running
    assert frame.message == MSG_IDLE
    assert frame.snake == ()
    assert frame.score == 0
    assert frame.difficulty == "normal"


def test_start_resets_to_canonical_state(model):
    model.start()
    assert list(model.snake) == [(5, 10), (4, 10), (3, 10)]
    assert model.direction == Direction.RIGHT
    assert model.score == 0
    assert model.interval_ms == 100
    assert model.obstacles == set()
    assert model.food not in model.snake
    assert model.running
    assert model.state == STATE_PLAYING


def test_start_while_running_is_a_noop(model):
    model.start()
    model.food = FAR_AWAY
    model.tick()
    model.tick()
    before = list(model.snake)
    model.start()
    assert list(model.snake) == before
    assert model.food == FAR_AWAY


def test_restart_after_game_over_resets_score_and_snake(model):
    model.start()
    model.food = (6, 10)
    model.tick()
    model.snake = deque([(19, 3), (18, 3), (17, 3), (16, 3)])
    model.tick()
    assert not model.running
    assert model.score == 10

    model.start()
    assert model.score == 0
    assert list(model.snake) == list(START_SNAKE)
    assert model.direction == Direction.RIGHT
    assert model.running


def test_tick_is_ignored_when_idle(model):
    model.tick()
    assert model.frame().snake == ()


def test_grid_must_fit_starting_snake():
    with pytest.raises(ValueError):
        GameModel(cols=8, rows=8)


# ── Direction ─────────────────────────────────────────────────────
@pytest.mark.parametrize("direction", ALL_DIRS, ids=lambda d: d.name)
def test_reversal_after_moving_is_rejected(model, direction):
    model.start()
    model.food = FAR_AWAY
    steer_until_moving(model, direction)

    assert not model.change_direction(direction.opposite)
    assert model.direction == direction


def test_turn_after_turn_is_accepted(model):
    model.start()
    assert model.change_direction("up")
    assert model.change_direction("left")
    assert model.direction == Direction.LEFT


def test_two_quick_turns_end_in_self_collision(model):
    model.start()
    model.food = FAR_AWAY
    model.change_direction("up")
    model.change_direction("left")

    model.tick()

    # head went from (5, 10) straight back onto (4, 10)
    assert not model.running
    assert model.state == STATE_OVER


def test_reversal_of_pending_direction_is_rejected(model):
    model.start()
    assert model.change_direction("up")
    assert not model.change_direction("down")
    assert model.direction == Direction.UP


def test_latest_request_before_tick_wins(model):
    model.start()
    model.food = FAR_AWAY
    model.change_direction("up")
    model.change_direction("down")  # rejected, reversal of pending
    model.change_direction("right")
    model.tick()
    assert model.head == (6, 10)


def test_current_direction_is_accepted(model):
    model.start()
    assert model.change_direction(Direction.RIGHT)


def test_unknown_direction_name_raises(model):
    with pytest.raises(ValueError):
        model.change_direction("sideways")


def test_direction_parse_and_opposites():
    assert Direction.parse("UP") is Direction.UP
    for d in ALL_DIRS:
        assert d.is_opposite(d.opposite)
        assert not d.is_opposite(d)


# ── Movement & eating ─────────────────────────────────────────────
def test_tick_without_food_moves_one_cell(model):
    model.start()
    model.food = FAR_AWAY
    model.change_direction("down")
    length = len(model.snake)
    hx, hy = model.head

    model.tick()

    assert len(model.snake) == length
    assert model.head == (hx, hy + 1)
    assert list(model.snake) == [(5, 11), (5, 10), (4, 10)]


def test_eating_food_grows_and_scores(model):
    model.start()
    model.food = (6, 10)

    model.tick()

    assert list(model.snake) == [(6, 10), (5, 10), (4, 10), (3, 10)]
    assert model.score == 10
    assert model.food is not None
    assert model.food != (6, 10)
    assert model.food not in model.snake
    assert model.food not in model.obstacles


def test_eating_repeatedly_adds_ten_each_time(model):
    model.start()
    for expected in (10, 20, 30):
        length = len(model.snake)
        hx, hy = model.head
        model.food = (hx + 1, hy)
        model.tick()
        assert len(model.snake) == length + 1
        assert model.score == expected


# ── Collisions ────────────────────────────────────────────────────
def test_leaving_the_grid_ends_the_game(model, store):
    model.start()
    model.snake = deque([(0, 10), (1, 10), (2, 10)])
    model.direction = Direction.LEFT
    model.food = FAR_AWAY

    model.tick()

    assert not model.running
    assert model.state == STATE_OVER
    assert model.message == MSG_GAME_OVER.format(score=0)
    assert store.saved == []


def test_collision_that_beats_the_best_saves_a_new_high_score(model, store):
    model.start()
    model.score = 30
    model.snake = deque([(0, 10), (1, 10), (2, 10)])
    model.direction = Direction.LEFT
    model.food = FAR_AWAY

    model.tick()

    assert not model.running
    assert model.high_score == 30
    assert store.saved == [{"normal": 30, "medium": 0, "hard": 0}]
    assert model.message == MSG_NEW_HIGH_SCORE.format(score=30)


def test_running_into_own_tail_ends_the_game(model):
    model.start()
    model.food = FAR_AWAY
    # the tail cell still counts: the head is added before the tail leaves
    model.snake = deque([(5, 5), (6, 5), (6, 6), (5, 6)])
    model.direction = Direction.DOWN

    model.tick()

    assert not model.running


def test_hitting_an_obstacle_ends_the_game(model):
    model.start()
    model.food = FAR_AWAY
    model.obstacles = {(6, 10)}

    model.tick()

    assert not model.running


# ── Game over & high scores ───────────────────────────────────────
def test_game_over_with_new_high_score_saves(model, store):
    model.start()
    model.score = 30
    result = model.game_over()

    assert result.score == 30
    assert result.new_high_score
    assert model.high_scores["normal"] == 30
    assert store.saved == [{"normal": 30, "medium": 0, "hard": 0}]
    assert model.message == MSG_NEW_HIGH_SCORE.format(score=30)


def test_matching_high_score_is_not_a_new_record(make_store):
    store = make_store({"normal": 50})
    model = GameModel(store=store, rng=random.Random(7))
    model.start()
    model.score = 50

    result = model.game_over()

    assert not result.new_high_score
    assert store.saved == []
    assert model.message == MSG_GAME_OVER.format(score=50)


def test_high_score_is_tracked_per_difficulty(make_store):
    store = make_store({"normal": 10, "hard": 90})
    model = GameModel(store=store, rng=random.Random(7))
    assert model.high_score == 10

    assert model.set_difficulty("hard")
    assert model.high_score == 90
    assert model.frame().high_score == 90

    model.start()
    model.score = 60
    model.game_over()
    assert store.saved == []
    assert model.high_scores == {"normal": 10, "medium": 0, "hard": 90}


def test_missing_store_entries_default_to_zero(make_store):
    model = GameModel(store=make_store({}), rng=random.Random(3))
    assert model.high_scores == {"normal": 0, "medium": 0, "hard": 0}


# ── Difficulty ────────────────────────────────────────────────────
@pytest.mark.parametrize("seed", range(25))
def test_hard_places_six_obstacles_outside_start_zone(seed):
    model = GameModel(rng=random.Random(seed))
    model.set_difficulty("hard")
    model.start()

    assert len(model.obstacles) == 6
    assert model.interval_ms == 60
    for cell in model.obstacles:
        assert not in_start_zone(cell)
        assert cell not in START_SNAKE
        assert 0 <= cell[0] < 20 and 0 <= cell[1] < 20
    assert model.food not in model.obstacles


def test_medium_places_three_obstacles(model):
    model.set_difficulty("medium")
    model.start()
    assert len(model.obstacles) == 3
    assert model.interval_ms == 80


def test_difficulty_cannot_change_mid_run(model):
    model.start()
    assert not model.set_difficulty("hard")
    assert model.difficulty == "normal"


def test_unknown_difficulty_is_ignored(model):
    assert not model.set_difficulty("nightmare")
    assert model.difficulty == "normal"


def test_difficulty_can_change_after_game_over(model):
    model.start()
    model.game_over()
    assert model.set_difficulty("medium")
    model.start()
    assert len(model.obstacles) == 3


# ── Speed ─────────────────────────────────────────────────────────
def test_fifty_point_milestone_speeds_up_and_restarts_schedule(model):
    model.start()
    model.score = 40
    model.food = (6, 10)

    model.tick()

    assert model.score == 50
    assert model.interval_ms == 95
    assert model.frame().interval_ms == 95

    model.food = FAR_AWAY
    model.update(94)
    assert model.head == (6, 10)
    model.update(1)
    assert model.head == (7, 10)


def test_non_milestone_score_keeps_interval(model):
    model.start()
    model.food = (6, 10)
    model.tick()
    assert model.interval_ms == 100


def test_interval_never_drops_below_floor(model):
    model.set_difficulty("hard")
    model.start()
    model.interval_ms = 50
    model.score = 90
    hx, hy = model.head
    model.food = (hx + 1, hy)

    model.tick()

    assert model.score == 100
    assert model.interval_ms == 50


# ── Scheduling through update() ───────────────────────────────────
def test_update_runs_every_due_tick(model):
    model.start()
    model.food = FAR_AWAY
    model.update(99)
    assert model.head == (5, 10)
    model.update(151)
    assert model.head == (7, 10)


def test_update_stops_at_game_over(model):
    model.start()
    model.food = FAR_AWAY
    model.snake = deque([(18, 10), (17, 10), (16, 10)])

    model.update(1000)

    assert not model.running
    frozen = model.frame().snake
    model.update(1000)
    assert model.frame().snake == frozen


def test_update_does_nothing_before_start(model):
    model.update(1000)
    assert not model.running
    assert model.frame().snake == ()


# ── Spawning ──────────────────────────────────────────────────────
def test_food_never_lands_on_snake_or_obstacles_on_crowded_board(model):
    model.start()
    cells = [(x, y) for y in range(20) for x in range(20)]
    model.snake = deque(cells[:300])
    model.obstacles = set(cells[300:390])
    free = set(cells[390:])

    for _ in range(200):
        assert model._spawn_food() in free


def test_food_on_full_board_is_none(model):
    model.start()
    cells = [(x, y) for y in range(20) for x in range(20)]
    model.snake = deque(cells)
    assert model._spawn_food() is None


def test_obstacles_stop_when_board_is_full():
    model = GameModel(rng=random.Random(5), cols=10, rows=12)
    # 200 obstacles cannot fit on a 10x12 board
    placed = model._place_obstacles(200)
    assert len(placed) < 200
    for cell in placed:
        assert not in_start_zone(cell)


# ── Frame snapshot ────────────────────────────────────────────────
def test_frame_is_a_detached_snapshot(model):
    model.start()
    model.food = FAR_AWAY
    frame = model.frame()
    model.tick()

    assert frame.snake == START_SNAKE
    assert frame.running
    assert frame.direction == "right"
    with pytest.raises(AttributeError):
        frame.score = 99
