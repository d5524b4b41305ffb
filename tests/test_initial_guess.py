import random
from collections import Counter

import pytest

from initial_guess import build_initial_guess, rebalance, singles_and_pairs
from scoring import score_treats, treat_size_counts


def test_singles_and_pairs():
    singles, pairs = singles_and_pairs(treat_size_counts([1, 1, 1, 1, 1, 2, 2, 3]))
    assert singles == [1, 3]
    assert pairs == [1, 1, 2]


def test_rebalance_breaks_largest_pairs_first():
    singles, pairs = [1, 3], [1, 1, 2]
    rebalance(singles, pairs)
    assert singles == [1, 3, 2, 2]
    assert pairs == [1, 1]


def test_rebalance_leaves_more_singles_than_pairs():
    singles, pairs = singles_and_pairs(treat_size_counts([1, 1, 2, 2, 3, 3, 4, 4]))
    rebalance(singles, pairs)
    assert len(singles) > len(pairs)


def test_guess_for_sample_input():
    guess = build_initial_guess(treat_size_counts([1, 1, 1, 1, 1, 2, 2, 3]))
    assert guess.treats == [2, 1, 1, 2, 1, 1, 1, 3]
    assert guess.happiness == 3


def test_guess_breaks_pair_without_larger_single():
    # The pair of 3s has no larger single left, so it is split into singles
    guess = build_initial_guess(treat_size_counts([1, 1, 2, 3, 3, 3, 3]))
    assert guess.treats == [2, 1, 1, 3, 3, 3, 3]
    assert guess.happiness == 1


def test_guess_with_only_pairs():
    guess = build_initial_guess(treat_size_counts([1, 1, 2, 2]))
    assert guess.treats == [2, 1, 1, 2]
    assert guess.happiness == 2


def test_guess_with_distinct_sizes_keeps_input_order():
    guess = build_initial_guess(treat_size_counts([3, 1, 2]))
    assert guess.treats == [1, 2, 3]
    assert guess.happiness == 0


@pytest.mark.parametrize("seed", range(20))
def test_guess_is_scored_permutation(seed):
    rng = random.Random(seed)
    treats = [rng.randint(1, 7) for _ in range(rng.randint(1, 16))]
    guess = build_initial_guess(treat_size_counts(treats))

    assert Counter(guess.treats) == Counter(treats)
    assert guess.happiness == score_treats(guess.treats)
