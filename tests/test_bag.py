import random
from collections import Counter

from threes.components.bag import Bag
from threes.components.piece import Piece


def test_fresh_pool_has_six_base_pieces_plus_three_extras():
    bag = Bag(rng=random.Random(0))
    values = [piece.value for piece in bag.pool]
    assert len(values) == 9
    counts = Counter(values)
    for value in (1, 2, 3):
        assert counts[value] >= 2
    assert set(values) <= {1, 2, 3}


def test_peek_matches_next_and_does_not_consume():
    bag = Bag(rng=random.Random(1))
    upcoming = bag.peek()
    assert bag.peek() is upcoming
    assert bag.next() is upcoming
    assert len(bag.pool) == 8


def test_pool_refills_when_exhausted():
    bag = Bag(rng=random.Random(2))
    first_round = bag.take(9)
    assert len(first_round) == 9
    assert bag.pool == []
    piece = bag.next()
    assert isinstance(piece, Piece)
    assert len(bag.pool) == 8


def test_take_draws_in_order():
    bag = Bag(rng=random.Random(3))
    expected = list(bag.pool[:4])
    assert bag.take(4) == expected


def test_low_merges_do_not_escalate():
    bag = Bag(rng=random.Random(4))
    assert bag.notify_merged(3) is None
    assert bag.notify_merged(24) is None
    assert bag.max_value == 24
    assert bag.extra_values() == [1, 1, 2, 2, 3, 3]


def test_values_below_max_are_ignored():
    bag = Bag(rng=random.Random(5))
    bag.notify_merged(96)
    extras_after = bag.extra_values()
    assert bag.notify_merged(48) is None
    assert bag.max_value == 96
    assert bag.extra_values() == extras_after


def test_reaching_48_adds_a_six_to_the_extras():
    bag = Bag(rng=random.Random(6))
    extra = bag.notify_merged(48)
    assert extra is not None and extra.value == 6
    assert bag.max_value == 48
    assert bag.extra_values().count(6) == 1
    bag.notify_merged(96)
    assert 12 in bag.extra_values()


def test_repeating_the_maximum_escalates_again():
    bag = Bag(rng=random.Random(7))
    bag.notify_merged(48)
    bag.notify_merged(48)
    assert bag.extra_values().count(6) == 2


def test_spawns_stay_low_before_escalation():
    bag = Bag(rng=random.Random(8))
    drawn = {piece.value for piece in bag.take(300)}
    assert drawn <= {1, 2, 3}


def test_bonus_pieces_appear_after_escalation():
    bag = Bag(rng=random.Random(9))
    bag.notify_merged(48)
    drawn = [piece.value for piece in bag.take(9 * 60)]
    assert 6 in drawn
    assert set(drawn) <= {1, 2, 3, 6}


def test_bag_pieces_carry_configured_cap():
    bag = Bag(rng=random.Random(10), max_piece_value=96)
    assert all(piece.max_value == 96 for piece in bag.take(12))
