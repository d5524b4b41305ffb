# optimize_lineup.py
"""
Treat lineup optimization software

Finds the order in which to hand out a collection of treats to a line of
recipients so that total happiness is maximal. Each recipient is happy when
its treat is bigger than its neighbours', unhappy when smaller than both.
The search is an exact branch-and-bound over the treat multiset, seeded with
a heuristic lineup.

Usage:
    # Treats from the command line
    python optimize_lineup.py --treats 1 1 1 1 1 2 2 3

    # Treats from a file (whitespace- or comma-separated integers)
    python optimize_lineup.py --treats-file input/treats.txt --progress

    # Treats from config.yaml, with validation and detailed output
    python optimize_lineup.py --config config.yaml --validate --verbose

"""

import argparse
import re
import sys
import time
from typing import List, Optional

from config import Config, load_config, default_config, print_config_summary, validate_treats
from scoring import treat_size_counts
from search import search_lineup
from display import (print_optimization_header, print_problem_summary, print_solution,
                     visualize_lineup, save_results_to_csv)
from validation import run_validation_suite

#-----------------------------------------------------------------------------
# Input handling
#-----------------------------------------------------------------------------
def read_treats_file(path: str) -> List[int]:
    """
    Read treat sizes from a text file.

    Args:
        path: File holding integers separated by whitespace and/or commas

    Returns:
        List of treat sizes

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If a token is not an integer
    """
    with open(path, 'r') as f:
        tokens = [token for token in re.split(r'[\s,]+', f.read()) if token]

    try:
        return [int(token) for token in tokens]
    except ValueError as e:
        raise ValueError(f"Invalid treat size in {path}: {e}")

def resolve_treats(args: argparse.Namespace, config: Config) -> List[int]:
    """Pick the treats from --treats, --treats-file, or the config (in that order)."""
    if args.treats:
        treats = list(args.treats)
    elif args.treats_file:
        treats = read_treats_file(args.treats_file)
    else:
        treats = list(config.problem.treats)

    if not treats:
        raise ValueError("No treats given: use --treats, --treats-file, or problem.treats in the config")
    validate_treats(treats)
    return treats

def resolve_config(config_path: Optional[str]) -> Config:
    """Load the config file, or fall back to defaults when none was requested."""
    if config_path is None:
        try:
            return load_config("config.yaml")
        except FileNotFoundError:
            return default_config()
    return load_config(config_path)

#-----------------------------------------------------------------------------
# Optimization
#-----------------------------------------------------------------------------
def run_optimization(config: Config, treats: List[int], search_mode: str = 'branch-bound',
                     verbose: bool = False, save: bool = False) -> int:
    """
    Solve one treat lineup and display the result.

    Args:
        config: Configuration object
        treats: Treat sizes to hand out
        search_mode: 'branch-bound' or 'exhaustive'
        verbose: Whether to show detailed output
        save: Whether to write the result to CSV

    Returns:
        Best happiness found
    """
    print_optimization_header(config)
    if verbose:
        print_config_summary(config)
    print_problem_summary(treat_size_counts(treats))

    print(f"\nSearching ({search_mode})...")
    start_time = time.time()

    search = config.search
    if search_mode == 'exhaustive':
        lineup, stats = search_lineup(treats, search_mode, search.show_progress_bar, verbose)
    else:
        lineup, stats = search_lineup(
            treats, search_mode, search.show_progress_bar, verbose,
            use_initial_guess=search.use_initial_guess,
            skip_single_size=search.skip_single_size,
            progress_interval=search.progress_interval)

    elapsed_time = time.time() - start_time

    print_solution(lineup, stats, verbose)
    if config.visualization.print_lineup:
        print()
        visualize_lineup(lineup.treats, f"happiness {lineup.happiness}")

    if save or config.output.save_results:
        csv_path = save_results_to_csv(lineup, stats, treats, config.output.results_folder)
        print(f"\nResults saved to: {csv_path}")

    print(f"\nTotal time: {elapsed_time:.2f}s")
    return lineup.happiness

#-----------------------------------------------------------------------------
# Command-line interface
#-----------------------------------------------------------------------------
def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='Find the treat lineup with maximum happiness.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Solve the sample input
  python optimize_lineup.py --treats 1 1 1 1 1 2 2 3

  # Larger input with a progress bar and search statistics
  python optimize_lineup.py --treats 1 1 1 2 2 2 2 3 3 3 3 4 4 5 5 6 7 --progress --verbose

  # Compare against exhaustive enumeration
  python optimize_lineup.py --treats 1 2 2 3 3 3 4 --search-mode exhaustive

  # Validate first, then solve the treats in config.yaml and save the result
  python optimize_lineup.py --config config.yaml --validate --save
        """
    )

    # Input options
    parser.add_argument('--config', type=str, default=None,
                        help='Path to configuration file (default: config.yaml if present)')
    parser.add_argument('--treats', type=int, nargs='+', default=None,
                        help='Treat sizes (positive integers)')
    parser.add_argument('--treats-file', type=str, default=None,
                        help='File of treat sizes separated by whitespace or commas')

    # Search options
    parser.add_argument('--search-mode', choices=['branch-bound', 'exhaustive'],
                        default='branch-bound',
                        help='Search algorithm (default: branch-bound)')
    parser.add_argument('--no-guess', action='store_true',
                        help='Search without the initial guess bound')
    parser.add_argument('--progress', action='store_true',
                        help='Show a progress bar')

    # Output options
    parser.add_argument('--verbose', action='store_true',
                        help='Show detailed output')
    parser.add_argument('--save', action='store_true',
                        help='Save the result to CSV')

    # Validation options
    parser.add_argument('--validate', action='store_true',
                        help='Run validation suite before optimization')
    parser.add_argument('--quick', action='store_true',
                        help='Use the quick validation suite (with --validate)')

    return parser.parse_args(argv)

def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_arguments(argv)

    try:
        config = resolve_config(args.config)
        treats = resolve_treats(args, config)
    except (ValueError, FileNotFoundError) as e:
        print(f"Error: {e}")
        return 1

    if args.no_guess:
        config.search.use_initial_guess = False
    if args.progress:
        config.search.show_progress_bar = True
    verbose = args.verbose or config.visualization.verbose_output

    if args.validate:
        print("🧪 Running validation suite...")
        if not run_validation_suite(config, quick=args.quick):
            print("❌ Validation failed. Please fix issues before running optimization.")
            return 1
        print("✅ Validation passed!\n")

    run_optimization(config, treats, args.search_mode, verbose, args.save)
    return 0

if __name__ == "__main__":
    sys.exit(main())
