# display.py
"""
Display, visualization, and output formatting for lineup optimization.
"""

import csv
import os
from datetime import datetime
from typing import List, Optional, Sequence
import numpy as np

from config import Config
from scoring import Lineup, recipient_moods, HAPPY, UNHAPPY
from search import SearchStats, count_distinct_orderings

MOOD_MARKERS = {HAPPY: '+', UNHAPPY: '-'}

#-----------------------------------------------------------------------------
# Lineup visualization
#-----------------------------------------------------------------------------
def format_lineup(treats: Sequence[int], title: str = "Lineup") -> str:
    """
    Render a lineup as a boxed ASCII table.

    One column per recipient: the treat size on top and the mood marker
    below ('+' happy, '=' neutral, '-' unhappy).
    """
    treats = list(treats)
    moods = recipient_moods(treats) if treats else []
    width = max([3] + [len(str(treat)) for treat in treats])

    sizes = [f"{treat:^{width}}" for treat in treats]
    markers = [f"{MOOD_MARKERS.get(mood, '='):^{width}}" for mood in moods]

    inner = len(' │ '.join(sizes)) + 2 if treats else 2
    inner = max(inner, len(title) + 10)
    lines = [
        "╭" + "─" * inner + "╮",
        "│" + f" Lineup: {title}".ljust(inner) + "│",
        "├" + "─" * inner + "┤",
        "│" + f" {' │ '.join(sizes)} ".ljust(inner) + "│",
        "│" + f" {' │ '.join(markers)} ".ljust(inner) + "│",
        "╰" + "─" * inner + "╯",
    ]
    return '\n'.join(lines)

def visualize_lineup(treats: Sequence[int], title: str = "Lineup") -> None:
    """Print ASCII visual representation of a lineup."""
    print(format_lineup(treats, title))

#-----------------------------------------------------------------------------
# Headers and summaries
#-----------------------------------------------------------------------------
def print_optimization_header(config: Config) -> None:
    """Print the run header."""
    print("=" * 60)
    print("Treat Lineup Optimization (branch-and-bound)")
    print("=" * 60)
    if config.visualization.verbose_output:
        print(f"  Started: {datetime.now():%Y-%m-%d %H:%M:%S}")

def print_problem_summary(counts: np.ndarray) -> None:
    """Print size of the treat multiset and of its search space."""
    n_treats = int(np.sum(counts))
    sizes = np.flatnonzero(counts)

    print(f"\nProblem Summary:")
    print(f"  Treats: {n_treats}")
    print(f"  Distinct sizes ({len(sizes)}): "
          + ', '.join(f"{size}x{counts[size]}" for size in sizes))
    print(f"  Distinct orderings: {count_distinct_orderings(counts):,}")

def print_solution(lineup: Lineup, stats: SearchStats, verbose: bool = False) -> None:
    """
    Print the best lineup and search statistics.

    Args:
        lineup: Best lineup found
        stats: Statistics of the search that found it
        verbose: Whether to show per-recipient moods
    """
    print(f"\nBest happiness: {lineup.happiness}")
    print(f"  Lineup: {lineup.treats}")

    if stats.single_size_shortcut:
        print(f"  (single treat size, search skipped)")
    elif stats.initial_guess_score is not None:
        print(f"  Initial guess happiness: {stats.initial_guess_score}")

    if verbose:
        moods = recipient_moods(lineup.treats)
        print(f"  Happy: {moods.count(HAPPY)}, "
              f"neutral: {len(moods) - moods.count(HAPPY) - moods.count(UNHAPPY)}, "
              f"unhappy: {moods.count(UNHAPPY)}")

    print_search_statistics(stats)

def print_search_statistics(stats: SearchStats) -> None:
    """Print optimization progress statistics."""
    print(f"\nOptimization Statistics:")
    print(f"  Nodes processed: {stats.nodes_processed:,}")
    print(f"  Nodes pruned: {stats.nodes_pruned:,}")
    print(f"  Improvements over bound: {stats.solutions_found:,}")
    print(f"  Elapsed time: {stats.elapsed_time:.2f}s")

    if stats.nodes_processed > 0:
        print(f"  Pruning efficiency: {stats.pruning_rate:.1f}%")

#-----------------------------------------------------------------------------
# CSV output
#-----------------------------------------------------------------------------
def save_results_to_csv(lineup: Lineup, stats: SearchStats, treats: Sequence[int],
                        results_folder: str, timestamp: Optional[str] = None) -> str:
    """
    Save the best lineup and its search statistics to a CSV file.

    Args:
        lineup: Best lineup found
        stats: Search statistics
        treats: Input treats (as given)
        results_folder: Directory for result files (created if missing)
        timestamp: Suffix for the file name (defaults to the current time)

    Returns:
        Path of the written file
    """
    os.makedirs(results_folder, exist_ok=True)
    timestamp = timestamp or datetime.now().strftime("%Y%m%d_%H%M%S")
    output_path = os.path.join(results_folder, f"lineup_results_{timestamp}.csv")

    moods = recipient_moods(lineup.treats)
    header = ['input_treats', 'n_treats', 'happiness', 'lineup', 'moods',
              'initial_guess_happiness', 'nodes_processed', 'nodes_pruned',
              'elapsed_time']
    row = [
        ' '.join(str(t) for t in treats),
        len(lineup.treats),
        lineup.happiness,
        ' '.join(str(t) for t in lineup.treats),
        ''.join(MOOD_MARKERS.get(mood, '=') for mood in moods),
        '' if stats.initial_guess_score is None else stats.initial_guess_score,
        stats.nodes_processed,
        stats.nodes_pruned,
        f"{stats.elapsed_time:.6f}",
    ]

    with open(output_path, 'w', newline='') as f:
        writer = csv.writer(f)
        writer.writerow(header)
        writer.writerow(row)

    return output_path

def format_moods(treats: Sequence[int]) -> List[str]:
    """Mood marker per recipient, for tabular output."""
    return [MOOD_MARKERS.get(mood, '=') for mood in recipient_moods(list(treats))]
