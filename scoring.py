# scoring.py
"""
Happiness scoring for treat lineups.

A lineup is scored incrementally: every treat appended to the end of the
line changes the total by an amount that depends only on the last three
treats. The per-transition deltas live in HAPPINESS_TABLE, which is the
single source of truth for the score model. Everything else (the search,
the initial guess, validation, display) goes through Lineup.add_treat()
or the compiled score_treats_jit().

Boundary rules:
- one treat:  happiness 1 (a lone recipient is happy)
- two treats: happiness 0 (one happy and one unhappy, or two neutral)

Equivalently, each recipient is happy (+1) when its treat is strictly larger
than all of its neighbours' treats, unhappy (-1) when strictly smaller than
all of them, and neutral (0) otherwise. recipient_moods() computes that
view directly and is used to cross-check the incremental score.
"""

import numpy as np
from numba import jit
from typing import List, Optional, Sequence

#-----------------------------------------------------------------------------
# Score table
#-----------------------------------------------------------------------------
# Index = 3 * relation(last, second_last) + relation(to_add, last)
#   relation(last, second_last): last > second_last -> 0, == -> 1, < -> 2
#   relation(to_add, last):      last > to_add -> 0, == -> 1, < -> 2
HAPPINESS_TABLE = np.array([-1, -1, 0, -1, 0, 1, 0, 1, 1], dtype=np.int64)

HAPPY = 1
NEUTRAL = 0
UNHAPPY = -1

# Plain-int copy for per-append lookups outside compiled code
_DELTAS = HAPPINESS_TABLE.tolist()

def happiness_delta(second_last: int, last: int, to_add: int) -> int:
    """Score change from appending to_add after (second_last, last)."""
    if last > second_last:
        index = 0
    elif last == second_last:
        index = 3
    else:
        index = 6

    if last == to_add:
        index += 1
    elif last < to_add:
        index += 2

    return _DELTAS[index]

#-----------------------------------------------------------------------------
# JIT-compiled core calculations
#-----------------------------------------------------------------------------
@jit(nopython=True)
def happiness_delta_jit(second_last: int, last: int, to_add: int) -> int:
    """Score change from appending to_add after (second_last, last)."""
    if last > second_last:
        index = 0
    elif last == second_last:
        index = 3
    else:
        index = 6

    if last == to_add:
        index += 1
    elif last < to_add:
        index += 2

    return HAPPINESS_TABLE[index]

@jit(nopython=True)
def score_treats_jit(treats: np.ndarray) -> int:
    """
    JIT-compiled score of a complete sequence, in the given order.

    Returns:
        Happiness of the lineup (0 for an empty array)
    """
    n = len(treats)
    if n == 0:
        return 0
    if n == 1:
        return 1

    happiness = 0
    for i in range(2, n):
        happiness += happiness_delta_jit(treats[i - 2], treats[i - 1], treats[i])
    return happiness

#-----------------------------------------------------------------------------
# Core data structures
#-----------------------------------------------------------------------------
class Lineup:
    """
    Treats handed out so far, in order, with the running happiness score.

    The only mutator is add_treat(). Search branches never share a Lineup;
    they work on copy() instead.
    """

    __slots__ = ('treats', 'happiness')

    def __init__(self, treats: Optional[List[int]] = None, happiness: int = 0):
        self.treats = list(treats) if treats else []
        self.happiness = happiness

    def add_treat(self, to_add: int) -> None:
        """Append a treat and update the happiness score."""
        to_add = int(to_add)
        self.treats.append(to_add)
        length = len(self.treats)

        if length == 1:
            self.happiness = 1
        elif length == 2:
            self.happiness = 0
        else:
            self.happiness += happiness_delta(self.treats[-3], self.treats[-2], to_add)

    def copy(self) -> 'Lineup':
        return Lineup(self.treats, self.happiness)

    def __len__(self) -> int:
        return len(self.treats)

    def __repr__(self) -> str:
        return f"Lineup(happiness={self.happiness}, treats={self.treats})"

def score_treats(treats: Sequence[int]) -> int:
    """Score a sequence in the given order (no reordering)."""
    lineup = Lineup()
    for treat in treats:
        lineup.add_treat(treat)
    return lineup.happiness

def lineup_from_treats(treats: Sequence[int]) -> Lineup:
    """Build a Lineup by appending each treat in order."""
    lineup = Lineup()
    for treat in treats:
        lineup.add_treat(treat)
    return lineup

def recipient_moods(treats: Sequence[int]) -> List[int]:
    """
    Classify every recipient as HAPPY, NEUTRAL or UNHAPPY.

    A recipient is happy if its treat is strictly larger than every
    neighbour's, unhappy if strictly smaller than every neighbour's.
    A lone recipient has no neighbours and counts as happy.

    Args:
        treats: Treat sizes in lineup order

    Returns:
        One mood per recipient; sum(moods) == score_treats(treats)
    """
    n = len(treats)
    if n == 1:
        return [HAPPY]

    moods = []
    for i, treat in enumerate(treats):
        neighbours = []
        if i > 0:
            neighbours.append(treats[i - 1])
        if i < n - 1:
            neighbours.append(treats[i + 1])

        if all(treat > other for other in neighbours):
            moods.append(HAPPY)
        elif all(treat < other for other in neighbours):
            moods.append(UNHAPPY)
        else:
            moods.append(NEUTRAL)
    return moods

#-----------------------------------------------------------------------------
# Multiset encoding
#-----------------------------------------------------------------------------
def treat_size_counts(treats: Sequence[int]) -> np.ndarray:
    """
    Convert a list of treat sizes into counts per size.

    Index i of the result holds the number of treats of size i, for every
    i from 0 up to and including the largest size. Index 0 is always 0.

    Args:
        treats: Non-empty sequence of positive integer sizes

    Returns:
        Integer array of length max(treats) + 1

    Raises:
        ValueError: If treats is empty or holds a non-positive/non-integer size
    """
    if len(treats) == 0:
        raise ValueError("Cannot count treat sizes of an empty lineup")

    sizes = np.asarray(treats)
    if not np.issubdtype(sizes.dtype, np.integer):
        raise ValueError(f"Treat sizes must be integers, got {list(treats)}")
    if sizes.min() < 1:
        raise ValueError(f"Treat sizes must be positive, got {sizes.min()}")

    return np.bincount(sizes.astype(np.int64))
