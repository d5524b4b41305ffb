#!/usr/bin/env python3
"""
Benchmark the lineup search on reference inputs.

Runs each input with and without the initial guess and reports the guess
quality, the optimum, node counts and timing. Running time varies by orders
of magnitude with the input: repeated sizes and a close initial guess make
pruning effective, while all-distinct sizes defeat it.

Usage:
``python3 run_benchmarks.py``                        # quick inputs
``python3 run_benchmarks.py --include-slow``         # adds inputs taking seconds to minutes
``python3 run_benchmarks.py --output output/benchmarks.csv``
"""

import argparse
import sys
import time
from typing import List, Optional, Tuple

import numpy as np
import pandas as pd
from tqdm import tqdm

from scoring import treat_size_counts
from search import solve_lineup
from display import format_moods

# (name, treats, known optimum or None)
BENCHMARKS = [
    ("sample", [1, 1, 1, 1, 1, 2, 2, 3], 3),
    ("example 1", [1, 2, 2, 3, 3, 3, 4], 2),
    ("challenge 1", [1, 1, 2, 3, 3, 3, 3, 4, 5, 5], 4),
    ("challenge 2", [1, 1, 2, 2, 3, 4, 4, 5, 5, 5, 6, 6], 4),
    ("fourteen treats", [1, 1, 1, 2, 2, 2, 2, 3, 3, 3, 3, 4, 4, 5], 5),
    ("all distinct 1-7", list(range(1, 8)), None),
]

SLOW_BENCHMARKS = [
    ("seventeen treats", [1, 1, 1, 2, 2, 2, 2, 3, 3, 3, 3, 4, 4, 5, 5, 6, 7], 6),
    ("poor guess", [1, 1, 1, 2, 2, 2, 2, 3, 3, 3, 3, 4, 4, 5, 5, 6, 7, 8], 6),
    ("all distinct 1-9", list(range(1, 10)), None),
]

# Runs without the initial guess are only practical for short inputs
MAX_UNGUESSED_TREATS = 12

def run_benchmark(name: str, treats: List[int], expected: Optional[int],
                  use_initial_guess: bool) -> dict:
    """Solve one input and return a result row."""
    counts = treat_size_counts(treats)

    start_time = time.time()
    lineup, stats = solve_lineup(treats, use_initial_guess=use_initial_guess)
    elapsed_time = time.time() - start_time

    return {
        'name': name,
        'initial_guess': use_initial_guess,
        'n_treats': len(treats),
        'distinct_sizes': int(np.count_nonzero(counts)),
        'guess_happiness': stats.initial_guess_score,
        'happiness': lineup.happiness,
        'expected': expected,
        'correct': expected is None or lineup.happiness == expected,
        'nodes_processed': stats.nodes_processed,
        'nodes_pruned': stats.nodes_pruned,
        'pruning_rate': round(stats.pruning_rate, 1),
        'seconds': round(elapsed_time, 3),
        'lineup': ' '.join(str(t) for t in lineup.treats),
        'moods': ''.join(format_moods(lineup.treats)),
    }

def run_benchmarks(benchmarks: List[Tuple[str, List[int], Optional[int]]],
                   compare_guess: bool = True, progress_bar: bool = True) -> pd.DataFrame:
    """
    Run every benchmark and collect the results.

    Args:
        benchmarks: (name, treats, expected optimum) tuples
        compare_guess: Also run short inputs without the initial guess
        progress_bar: Whether to show progress bar

    Returns:
        DataFrame with one row per run
    """
    runs = []
    for bench in benchmarks:
        runs.append((bench, True))
        if compare_guess and len(bench[1]) <= MAX_UNGUESSED_TREATS:
            runs.append((bench, False))

    rows = []
    for (name, treats, expected), use_guess in tqdm(runs, desc="Benchmarks",
                                                    disable=not progress_bar):
        rows.append(run_benchmark(name, treats, expected, use_guess))

    return pd.DataFrame(rows)

def print_benchmark_summary(df: pd.DataFrame) -> None:
    """Print the results table and a short summary."""
    columns = ['name', 'initial_guess', 'n_treats', 'distinct_sizes', 'guess_happiness',
               'happiness', 'nodes_processed', 'pruning_rate', 'seconds']
    print(f"\n{'='*100}")
    print("LINEUP SEARCH BENCHMARKS")
    print(f"{'='*100}")
    print(df[columns].to_string(index=False))

    with_guess = df[df['initial_guess']]
    without_guess = df[~df['initial_guess']]
    if not without_guess.empty:
        merged = with_guess.merge(without_guess, on='name', suffixes=('_guess', '_none'))
        speedup = merged['nodes_processed_none'] / merged['nodes_processed_guess'].clip(lower=1)
        print(f"\nNode reduction from initial guess: "
              f"median {speedup.median():.1f}x, max {speedup.max():.1f}x")

    failures = df[~df['correct']]
    if failures.empty:
        print("\nAll known optima reproduced.")
    else:
        print(f"\n{len(failures)} run(s) missed the known optimum:")
        print(failures[['name', 'initial_guess', 'happiness', 'expected']].to_string(index=False))

def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description='Benchmark the treat lineup search.')
    parser.add_argument('--include-slow', action='store_true',
                        help='Include inputs that take seconds to minutes')
    parser.add_argument('--guess-only', action='store_true',
                        help='Skip the runs without an initial guess')
    parser.add_argument('--output', type=str, default=None,
                        help='Write results to this CSV file')
    args = parser.parse_args(argv)

    benchmarks = BENCHMARKS + (SLOW_BENCHMARKS if args.include_slow else [])
    df = run_benchmarks(benchmarks, compare_guess=not args.guess_only)
    print_benchmark_summary(df)

    if args.output:
        df.to_csv(args.output, index=False)
        print(f"\nResults saved to: {args.output}")

    return 0 if df['correct'].all() else 1

if __name__ == "__main__":
    sys.exit(main())
