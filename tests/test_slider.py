import random

import pytest

from threes.components.bag import Bag
from threes.components.direction import Direction
from threes.components.piece import Piece
from threes.systems.score import compute_score, piece_points
from threes.systems.slider import Slider
from tests.helpers import board_from_values

EMPTY_ROW = [None, None, None, None]


def make_slider(rows, seed=0):
    rng = random.Random(seed)
    return Slider(board_from_values(rows), Bag(rng=rng), rng=rng)


def test_slide_left_merges_threes_and_spawns_on_the_right():
    slider = make_slider([[3, 3, None, None], EMPTY_ROW, EMPTY_ROW, EMPTY_ROW])
    upcoming = slider.bag.peek()

    result = slider.slide(Direction.LEFT)

    values = slider.board.values()
    assert values[0][0] == 6
    assert values[0][1] is None
    assert result.moved
    assert result.spawned is not None
    assert result.spawned.position == (0, 3)
    assert result.spawned.value == upcoming.value
    assert values[0][3] == upcoming.value
    assert [m.value for m in result.merges] == [6]
    assert result.merges[0].position == (0, 0)
    occupied = [(r, c) for r in range(4) for c in range(4) if values[r][c] is not None]
    assert occupied == [(0, 0), (0, 3)]
    assert compute_score(slider.board) == 9 + piece_points(upcoming.value)


def test_pieces_move_one_step_per_slide():
    slider = make_slider([[None, None, None, None], [1, None, None, None], [2, None, None, None], EMPTY_ROW])
    slider.slide(Direction.UP)
    column = [row[0] for row in slider.board.values()]
    # 1 and 2 both shift up a row; they are not adjacent to each other's destination yet.
    assert column[:3] == [1, 2, None]
    assert column[3] is not None


def test_run_of_equal_pieces_cascades_from_the_front():
    slider = make_slider([[3, None, None, None], [3, None, None, None], [3, None, None, None], EMPTY_ROW])
    result = slider.slide(Direction.UP)
    column = [row[0] for row in slider.board.values()]
    assert column[:3] == [6, 3, None]
    assert result.spawned.position == (3, 0)


def test_blocked_slide_changes_nothing():
    rows = [
        [3, 6, 3, 6],
        [6, 3, 6, 3],
        [None, None, None, None],
        [None, None, None, None],
    ]
    slider = make_slider(rows)
    before = slider.board.values()
    pool_before = list(slider.bag.pool)

    result = slider.slide(Direction.UP)

    assert not result.moved
    assert result.merges == []
    assert slider.board.values() == before
    assert slider.bag.pool == pool_before
    assert slider.lifted == set()


def test_spawn_lands_in_a_lifted_row_on_the_far_edge():
    slider = make_slider([[1, None, 2, None], EMPTY_ROW, EMPTY_ROW, EMPTY_ROW], seed=3)
    result = slider.slide(Direction.DOWN)
    values = slider.board.values()
    assert values[1][0] == 1 and values[1][2] == 2
    assert result.spawned.position in {(0, 0), (0, 2)}
    row, col = result.spawned.position
    assert values[row][col] == result.spawned.value


def test_slide_right_moves_toward_right_edge():
    slider = make_slider([EMPTY_ROW, [None, 2, 1, None], EMPTY_ROW, EMPTY_ROW])
    result = slider.slide(Direction.RIGHT)
    values = slider.board.values()
    # The 1 advances first, then the 2 follows into the vacated cell.
    assert values[1][3] == 1
    assert values[1][2] == 2
    assert result.spawned.position == (1, 0)


def test_partners_merge_regardless_of_order():
    slider = make_slider([EMPTY_ROW, [None, None, 2, 1], EMPTY_ROW, EMPTY_ROW])
    result = slider.slide(Direction.RIGHT)
    assert slider.board.values()[1][3] == 3
    assert result.merges[0].position == (1, 3)


def test_merges_feed_bag_escalation():
    slider = make_slider([[24, None, None, None], [24, None, None, None], EMPTY_ROW, EMPTY_ROW])
    result = slider.slide(Direction.UP)
    assert slider.board.values()[0][0] == 48
    assert result.escalations == [48]
    assert slider.bag.max_value == 48
    assert 6 in slider.bag.extra_values()


def test_capped_pieces_do_not_merge():
    rows = [[48, None, None, None], [48, None, None, None], EMPTY_ROW, EMPTY_ROW]
    rng = random.Random(0)
    board = board_from_values(rows, max_value=48)
    slider = Slider(board, Bag(rng=rng, max_piece_value=48), rng=rng)
    assert not slider.can_move(Direction.UP)
    assert slider.can_move(Direction.RIGHT)


class ExplodingBag:
    extras: list = []

    def notify_merged(self, value):
        return None

    def next(self):
        raise RuntimeError("bag is broken")


def test_board_is_rotated_back_when_a_slide_fails():
    board = board_from_values([EMPTY_ROW, EMPTY_ROW, [3, None, None, None], [None, None, None, 6]])
    slider = Slider(board, ExplodingBag(), rng=random.Random(0))
    with pytest.raises(RuntimeError):
        slider.slide(Direction.RIGHT)
    values = board.values()
    assert values[2][1] == 3
    assert values[3][3] == 6


def test_can_move_per_direction_without_mutating():
    slider = make_slider([[3, None, None, None], EMPTY_ROW, EMPTY_ROW, EMPTY_ROW])
    before = slider.board.values()
    assert not slider.can_move(Direction.UP)
    assert not slider.can_move(Direction.LEFT)
    assert slider.can_move(Direction.DOWN)
    assert slider.can_move(Direction.RIGHT)
    assert slider.board.values() == before
    assert not slider.no_moves_remain()


def test_full_board_of_ones_has_no_moves():
    slider = make_slider([[1] * 4 for _ in range(4)])
    assert slider.no_moves_remain()


def test_checkerboard_without_partners_has_no_moves():
    slider = make_slider([
        [3, 6, 3, 6],
        [6, 3, 6, 3],
        [3, 6, 3, 6],
        [6, 3, 6, 3],
    ])
    assert all(not slider.can_move(direction) for direction in Direction)
    assert slider.no_moves_remain()


def test_single_partner_pair_keeps_game_alive():
    slider = make_slider([
        [3, 6, 3, 6],
        [6, 3, 6, 3],
        [3, 6, 3, 6],
        [6, 3, 1, 2],
    ])
    assert not slider.can_move(Direction.UP)
    assert not slider.can_move(Direction.DOWN)
    assert slider.can_move(Direction.LEFT)
    assert slider.can_move(Direction.RIGHT)
    assert not slider.no_moves_remain()


def test_maxed_board_is_terminal():
    rng = random.Random(0)
    board = board_from_values([[6144] * 4 for _ in range(4)])
    slider = Slider(board, Bag(rng=rng), rng=rng)
    assert slider.no_moves_remain()
    assert Piece(6144).merges(None)
