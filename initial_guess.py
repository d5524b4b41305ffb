# initial_guess.py
"""
Initial lineup heuristic for seeding branch-and-bound pruning.

The search can only prune a branch once it knows a score to beat, so a good
complete lineup built up front makes the search much faster. The heuristic
aims for the pattern  big, small, small, big, small, small, ...  where each
pair of equal treats sits between two larger singles: the single is happy
and the pair is neutral.

The quality of the guess changes running time only. Any valid lineup keeps
the search exact.
"""

import numpy as np
from typing import List, Tuple

from scoring import Lineup

def singles_and_pairs(counts: np.ndarray) -> Tuple[List[int], List[int]]:
    """
    Split the treat multiset into pairs of equal treats and leftover singles.

    A size with count c contributes c // 2 entries to pairs and c % 2
    entries to singles. Both lists come out in increasing size order.

    Args:
        counts: Treat counts per size

    Returns:
        Tuple of (singles, pairs)
    """
    singles = []
    pairs = []

    for size, count in enumerate(counts):
        count = int(count)
        pairs.extend([size] * (count // 2))
        if count % 2 == 1:
            singles.append(size)

    return singles, pairs

def rebalance(singles: List[int], pairs: List[int]) -> None:
    """Break up the largest pairs until singles outnumber pairs (in place)."""
    while len(pairs) >= len(singles):
        largest = pairs.pop()
        singles.append(largest)
        singles.append(largest)

def _smallest_single_above(singles: List[int], value: int) -> int:
    """Index of the smallest single strictly greater than value, or -1."""
    best_index = -1
    for i, single in enumerate(singles):
        if single > value and (best_index < 0 or single < singles[best_index]):
            best_index = i
    return best_index

def build_initial_guess(counts: np.ndarray) -> Lineup:
    """
    Construct a reasonably good complete lineup without searching.

    Args:
        counts: Treat counts per size (as returned by treat_size_counts)

    Returns:
        Complete Lineup holding every treat, scored through add_treat()
    """
    singles, pairs = singles_and_pairs(counts)
    rebalance(singles, pairs)

    lineup = Lineup()
    while pairs:
        next_pair = pairs[0]
        i = _smallest_single_above(singles, next_pair)

        if i >= 0:
            lineup.add_treat(singles.pop(i))
            pairs.pop(0)
            lineup.add_treat(next_pair)
            lineup.add_treat(next_pair)
        else:
            # No single is big enough: break the largest pair into singles
            largest_pair = pairs.pop()
            j = 0
            while j < len(singles) and singles[j] >= largest_pair:
                j += 1
            singles.insert(j, largest_pair)
            singles.insert(j + 1, largest_pair)

    for single in singles:
        lineup.add_treat(single)

    return lineup
