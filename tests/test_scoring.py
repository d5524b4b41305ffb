import numpy as np
import pytest

from scoring import (
    HAPPINESS_TABLE,
    Lineup,
    happiness_delta,
    happiness_delta_jit,
    lineup_from_treats,
    recipient_moods,
    score_treats,
    score_treats_jit,
    treat_size_counts,
)
from validation import REFERENCE_SCORES


def test_table_matches_transition_cases():
    assert list(HAPPINESS_TABLE) == [-1, -1, 0, -1, 0, 1, 0, 1, 1]

    # last > second_last
    assert happiness_delta_jit(1, 2, 1) == -1
    assert happiness_delta_jit(1, 2, 2) == -1
    assert happiness_delta_jit(1, 2, 3) == 0
    # last == second_last
    assert happiness_delta_jit(2, 2, 1) == -1
    assert happiness_delta_jit(2, 2, 2) == 0
    assert happiness_delta_jit(2, 2, 3) == 1
    # last < second_last
    assert happiness_delta_jit(3, 2, 1) == 0
    assert happiness_delta_jit(3, 2, 2) == 1
    assert happiness_delta_jit(3, 2, 3) == 1


def test_first_treat_makes_recipient_happy():
    lineup = Lineup()
    lineup.add_treat(5)
    assert lineup.happiness == 1
    assert lineup.treats == [5]
    assert len(lineup) == 1


@pytest.mark.parametrize("pair", [(1, 2), (2, 1), (3, 3)])
def test_two_treats_score_zero(pair):
    lineup = lineup_from_treats(pair)
    assert lineup.happiness == 0


@pytest.mark.parametrize("treats, expected", REFERENCE_SCORES)
def test_reference_scores(treats, expected):
    assert score_treats(treats) == expected


@pytest.mark.parametrize("treats, expected", REFERENCE_SCORES)
def test_compiled_score_matches(treats, expected):
    assert score_treats_jit(np.array(treats, dtype=np.int64)) == expected


def test_compiled_score_of_empty_lineup():
    assert score_treats_jit(np.array([], dtype=np.int64)) == 0


@pytest.mark.parametrize("treats", [
    [1], [1, 2], [2, 2], [3, 2, 2, 3, 1, 3, 4], [2, 1, 1, 2, 1, 1, 1, 3],
    [5, 5, 1, 5, 1, 1, 7], [4, 3, 2, 1, 2, 3, 4],
])
def test_moods_sum_to_score(treats):
    assert sum(recipient_moods(treats)) == score_treats(treats)


def test_moods_per_recipient():
    # happy, neutral, neutral, happy, unhappy, neutral, happy
    assert recipient_moods([3, 2, 2, 3, 1, 3, 4]) == [1, 0, 0, 1, -1, 0, 1]


def test_copy_is_independent():
    lineup = lineup_from_treats([1, 2])
    branch = lineup.copy()
    branch.add_treat(1)

    assert lineup.treats == [1, 2]
    assert lineup.happiness == 0
    assert branch.treats == [1, 2, 1]
    assert branch.happiness == -1


def test_add_treat_stores_plain_ints():
    lineup = Lineup()
    lineup.add_treat(np.int64(3))
    assert type(lineup.treats[0]) is int


def test_treat_size_counts():
    counts = treat_size_counts([1, 1, 1, 1, 1, 2, 2, 3])
    assert list(counts) == [0, 5, 2, 1]


def test_treat_size_counts_fills_absent_sizes():
    counts = treat_size_counts([4, 1, 4])
    assert list(counts) == [0, 1, 0, 0, 2]
    assert counts.sum() == 3


@pytest.mark.parametrize("treats", [[], [0, 1], [-2], [1.5, 2]])
def test_treat_size_counts_rejects_invalid_input(treats):
    with pytest.raises(ValueError):
        treat_size_counts(treats)


@pytest.mark.parametrize("second_last", [1, 2, 3])
@pytest.mark.parametrize("last", [1, 2, 3])
@pytest.mark.parametrize("to_add", [1, 2, 3])
def test_python_delta_matches_compiled(second_last, last, to_add):
    delta = happiness_delta(second_last, last, to_add)
    assert type(delta) is int
    assert delta == happiness_delta_jit(second_last, last, to_add)
