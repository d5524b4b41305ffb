# search.py
"""
Search algorithms for treat lineup optimization.

Consolidates all search logic including:
- Branch-and-bound over the remaining treat multiset
- Upper bound on the happiness the remaining treats can still add
- Exhaustive enumeration of distinct orderings (ground truth for validation)
- The solve() entry point with the single-size shortcut

Usage:
    score, ordering = solve([1, 1, 1, 1, 1, 2, 2, 3])

    # With statistics and a progress bar
    lineup, stats = solve_lineup(treats, progress_bar=True, verbose=True)

    # Exhaustive enumeration (small inputs only)
    lineup, stats = search_lineup(treats, search_mode='exhaustive')
"""

import sys
import time
import numpy as np
from math import factorial
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple
from tqdm import tqdm

from scoring import Lineup, lineup_from_treats, score_treats_jit, treat_size_counts
from initial_guess import build_initial_guess

# Extra stack frames kept free above the deepest recursion (one frame per treat)
RECURSION_HEADROOM = 200

@dataclass
class SearchStats:
    """Statistics tracking for search process."""
    nodes_processed: int = 0
    nodes_pruned: int = 0
    solutions_found: int = 0
    elapsed_time: float = 0.0
    initial_guess_score: Optional[int] = None
    single_size_shortcut: bool = False

    @property
    def pruning_rate(self) -> float:
        """Percentage of generated branches that were pruned."""
        generated = self.nodes_processed + self.nodes_pruned
        return 100.0 * self.nodes_pruned / generated if generated > 0 else 0.0

#-----------------------------------------------------------------------------
# Search space
#-----------------------------------------------------------------------------
def count_distinct_orderings(counts: np.ndarray) -> int:
    """Number of distinct orderings of the multiset: n! / prod(c_i!)."""
    total = factorial(int(np.sum(counts)))
    for count in counts:
        total //= factorial(int(count))
    return total

def distinct_permutations(counts: np.ndarray) -> Iterator[List[int]]:
    """
    Yield every distinct ordering of the multiset in lexicographic order.

    Args:
        counts: Treat counts per size

    Yields:
        Lists of treat sizes
    """
    remaining = [int(count) for count in counts]
    n_treats = sum(remaining)
    prefix = []

    def extend():
        if len(prefix) == n_treats:
            yield list(prefix)
            return
        for size, count in enumerate(remaining):
            if count == 0:
                continue
            remaining[size] -= 1
            prefix.append(size)
            yield from extend()
            prefix.pop()
            remaining[size] += 1

    yield from extend()

def unbounded_guess(n_treats: int) -> Lineup:
    """Placeholder bound below any reachable score, for searching without a guess."""
    return Lineup(happiness=-n_treats)

def _ensure_recursion_limit(n_treats: int) -> None:
    required = n_treats + RECURSION_HEADROOM
    if sys.getrecursionlimit() < required:
        sys.setrecursionlimit(required)

#-----------------------------------------------------------------------------
# Branch-and-bound search
#-----------------------------------------------------------------------------
def permutation_search(take_from: np.ndarray, lineup: Lineup, guess: Lineup,
                       stats: Optional[SearchStats] = None,
                       pbar: Optional[tqdm] = None,
                       progress_interval: int = 10000) -> Lineup:
    """
    Best complete lineup reachable by extending lineup with the remaining treats.

    Branches are explored in increasing treat size, depth first. A branch is
    pruned when even the most optimistic remaining play cannot beat the best
    lineup known in this frame. Every child search gets the same guess this
    frame received as its bound, so the tie among optimal orderings that is
    returned depends only on the seed. Every branch gets its own copies of
    the counts and the lineup.

    Args:
        take_from: Remaining treat counts per size
        lineup: Treats handed out so far
        guess: Bound to beat; returned unchanged if nothing scores higher
        stats: Optional statistics to update
        pbar: Optional progress bar, advanced every progress_interval nodes
        progress_interval: Nodes between progress bar updates

    Returns:
        Best complete Lineup found (or guess)
    """
    if stats is not None:
        stats.nodes_processed += 1
        if pbar is not None and stats.nodes_processed % progress_interval == 0:
            pbar.update(progress_interval)

    available = np.flatnonzero(take_from)
    if len(available) == 0:
        if stats is not None and lineup.happiness > guess.happiness:
            stats.solutions_found += 1
        return lineup

    best_lineup = guess

    # Happiness grows by at most 1 every 3 treats
    numbers_left = int(take_from.sum()) - 1
    max_add = numbers_left // 3 + 1

    for size in available:
        take_from_copy = take_from.copy()
        candidate = lineup.copy()
        candidate.add_treat(size)
        take_from_copy[size] -= 1

        if candidate.happiness + max_add <= best_lineup.happiness:
            if stats is not None:
                stats.nodes_pruned += 1
            continue

        result = permutation_search(take_from_copy, candidate, guess,
                                    stats, pbar, progress_interval)
        if result.happiness > best_lineup.happiness:
            best_lineup = result

    return best_lineup

def branch_and_bound_search(counts: np.ndarray, guess: Lineup,
                            progress_bar: bool = False,
                            progress_interval: int = 10000,
                            verbose: bool = False) -> Tuple[Lineup, SearchStats]:
    """
    Run permutation_search from an empty lineup with timing and progress.

    Args:
        counts: Treat counts per size
        guess: Initial bound (a complete lineup or unbounded_guess())
        progress_bar: Whether to show a tqdm node counter
        progress_interval: Nodes between progress bar updates
        verbose: Whether to print search statistics

    Returns:
        Tuple of (best_lineup, search_stats)
    """
    stats = SearchStats()
    if guess.treats:
        stats.initial_guess_score = guess.happiness

    _ensure_recursion_limit(int(np.sum(counts)))

    start_time = time.time()
    with tqdm(desc="Searching", unit=" nodes", disable=not progress_bar) as pbar:
        best = permutation_search(counts, Lineup(), guess, stats, pbar, progress_interval)

        remaining = stats.nodes_processed % progress_interval
        if remaining > 0:
            pbar.update(remaining)
    stats.elapsed_time = time.time() - start_time

    if verbose:
        print(f"\nSearch completed in {stats.elapsed_time:.2f}s")
        print(f"Nodes processed: {stats.nodes_processed:,}")
        print(f"Nodes pruned: {stats.nodes_pruned:,}")
        print(f"Improvements over bound: {stats.solutions_found:,}")
        if stats.nodes_processed > 0:
            print(f"Pruning efficiency: {stats.pruning_rate:.1f}%")

    return best, stats

#-----------------------------------------------------------------------------
# Exhaustive search
#-----------------------------------------------------------------------------
def exhaustive_search(treats: Sequence[int], progress_bar: bool = False,
                      verbose: bool = False) -> Tuple[Lineup, SearchStats]:
    """
    Score every distinct ordering and keep the first best one.

    Slower than branch-and-bound but free of pruning logic, so it is the
    reference the validation suite compares against.

    Args:
        treats: Treat sizes
        progress_bar: Whether to show progress bar
        verbose: Whether to show detailed output

    Returns:
        Tuple of (best_lineup, search_stats)
    """
    counts = treat_size_counts(treats)
    n_orderings = count_distinct_orderings(counts)
    stats = SearchStats()

    best_treats = None
    best_score = None

    start_time = time.time()
    for ordering in tqdm(distinct_permutations(counts), total=n_orderings,
                         desc="Enumerating", unit=" lineups", disable=not progress_bar):
        stats.nodes_processed += 1
        score = int(score_treats_jit(np.array(ordering, dtype=np.int64)))
        if best_score is None or score > best_score:
            stats.solutions_found += 1
            best_score = score
            best_treats = ordering
    stats.elapsed_time = time.time() - start_time

    if verbose:
        print(f"\nEnumeration completed in {stats.elapsed_time:.2f}s")
        print(f"Lineups scored: {stats.nodes_processed:,}")

    return lineup_from_treats(best_treats), stats

#-----------------------------------------------------------------------------
# Entry points
#-----------------------------------------------------------------------------
def solve_lineup(treats: Sequence[int], use_initial_guess: bool = True,
                 skip_single_size: bool = True, progress_bar: bool = False,
                 progress_interval: int = 10000,
                 verbose: bool = False) -> Tuple[Lineup, SearchStats]:
    """
    Find a lineup of all treats with maximum happiness.

    Args:
        treats: Non-empty sequence of positive treat sizes
        use_initial_guess: Seed the bound with the heuristic lineup
        skip_single_size: Skip the search when only one treat size is present
        progress_bar: Whether to show a tqdm node counter
        progress_interval: Nodes between progress bar updates
        verbose: Whether to print search statistics

    Returns:
        Tuple of (best_lineup, search_stats)

    Raises:
        ValueError: If treats is empty or holds non-positive sizes
    """
    counts = treat_size_counts(treats)

    if skip_single_size and np.count_nonzero(counts) == 1:
        size = int(np.flatnonzero(counts)[0])
        lineup = Lineup()
        for _ in range(int(counts[size])):
            lineup.add_treat(size)
        if verbose:
            print(f"Single treat size ({size}): no search needed")
        return lineup, SearchStats(single_size_shortcut=True)

    if use_initial_guess:
        guess = build_initial_guess(counts)
        if verbose:
            print(f"Initial guess: happiness {guess.happiness} {guess.treats}")
    else:
        guess = unbounded_guess(len(treats))

    return branch_and_bound_search(counts, guess, progress_bar, progress_interval, verbose)

def search_lineup(treats: Sequence[int], search_mode: str = 'branch-bound',
                  progress_bar: bool = False, verbose: bool = False,
                  **kwargs) -> Tuple[Lineup, SearchStats]:
    """
    Lineup search with selectable algorithm.

    Args:
        treats: Treat sizes
        search_mode: 'branch-bound' (fast) or 'exhaustive' (complete enumeration)
        progress_bar: Whether to show progress bar
        verbose: Whether to show detailed output
        **kwargs: Passed through to solve_lineup() in branch-bound mode

    Returns:
        Tuple of (best_lineup, search_stats)
    """
    if search_mode == 'exhaustive':
        return exhaustive_search(treats, progress_bar, verbose)
    elif search_mode == 'branch-bound':
        return solve_lineup(treats, progress_bar=progress_bar, verbose=verbose, **kwargs)
    else:
        raise ValueError(f"Unknown search mode: {search_mode}. Use 'branch-bound' or 'exhaustive'")

def solve(treats: Sequence[int]) -> Tuple[int, List[int]]:
    """
    Optimal happiness and one lineup achieving it.

    Args:
        treats: Non-empty sequence of positive treat sizes

    Returns:
        Tuple of (score, ordering)
    """
    lineup, _ = solve_lineup(treats)
    return lineup.happiness, list(lineup.treats)
