# validation.py
"""
Validation for the treat lineup optimizer.

This module consolidates all validation logic including:
- Scoring consistency (incremental vs. compiled vs. per-recipient moods)
- Reference score and solve cases
- Initial guess validity
- Branch-and-bound optimality against exhaustive enumeration
"""

import random
import numpy as np
from collections import Counter
from typing import Dict, List, Optional
from dataclasses import dataclass

from config import Config
from scoring import score_treats, score_treats_jit, recipient_moods, treat_size_counts
from initial_guess import build_initial_guess
from search import solve_lineup, exhaustive_search

# (sequence, happiness when handed out in exactly this order)
REFERENCE_SCORES = [
    ([1, 2, 1, 2, 1, 3, 1, 1], 0),
    ([1, 2, 2, 3, 3, 3, 4], 0),
    ([1, 1, 1, 1, 1, 2, 2, 3], 1),
    ([3, 2, 2, 3, 1, 3, 4], 2),
    ([2, 1, 1, 2, 1, 1, 1, 3], 3),
    ([1, 2, 3, 4, 5], 0),
    ([1, 1, 1, 1], 0),
    ([5, 4, 3, 2, 1], 0),
    ([1], 1),
    ([1, 2], 0),
    ([2, 2], 0),
]

# (treats, best achievable happiness)
REFERENCE_SOLUTIONS = [
    ([1, 1, 1, 1, 1, 2, 2, 3], 3),
    ([1, 2, 2, 3, 3, 3, 4], 2),
    ([1, 1, 2, 3, 3, 3, 3, 4, 5, 5], 4),
    ([1, 1, 2, 2, 3, 4, 4, 5, 5, 5, 6, 6], 4),
    ([1, 2, 3, 4, 5], 1),
    ([1, 1, 1, 1], 0),
    ([1, 1, 2, 3, 4], 2),
    ([1, 1, 1, 2, 2, 2, 2, 3, 3, 4], 3),
    ([1, 1, 1, 2, 2, 2, 2, 3, 3, 3, 3, 4, 4, 5], 5),
    ([1, 1, 2, 3, 4, 4], 2),
]

#-----------------------------------------------------------------------------
# Validation result classes
#-----------------------------------------------------------------------------
@dataclass
class ValidationResult:
    """Result of a single validation test."""
    test_name: str
    passed: bool
    message: str
    details: Optional[Dict] = None

    def __str__(self) -> str:
        status = "✅ PASS" if self.passed else "❌ FAIL"
        return f"{status}: {self.test_name} - {self.message}"

@dataclass
class ValidationSuite:
    """Results from a complete validation suite."""
    results: List[ValidationResult]

    @property
    def all_passed(self) -> bool:
        return all(result.passed for result in self.results)

    @property
    def passed_count(self) -> int:
        return sum(1 for result in self.results if result.passed)

    @property
    def failed_count(self) -> int:
        return sum(1 for result in self.results if not result.passed)

    def print_summary(self):
        """Print validation summary."""
        print(f"\nValidation Summary: {self.passed_count}/{len(self.results)} tests passed")

        for result in self.results:
            print(f"  {result}")
            if result.details and not result.passed:
                for key, value in result.details.items():
                    print(f"    {key}: {value}")

        if self.all_passed:
            print("\n🎉 All validation tests passed!")
        else:
            print(f"\n⚠️  {self.failed_count} test(s) failed - review results above")

def random_treats(rng: random.Random, max_items: int, max_size: int = 5) -> List[int]:
    """Random non-empty treat multiset with at most max_items treats."""
    n_items = rng.randint(1, max_items)
    return [rng.randint(1, max_size) for _ in range(n_items)]

#-----------------------------------------------------------------------------
# Core validation functions
#-----------------------------------------------------------------------------
def check_scoring_consistency(n_tests: int = 100, max_items: int = 12,
                              seed: int = 42) -> ValidationResult:
    """
    Check that the incremental, compiled and per-recipient scores agree.

    Args:
        n_tests: Number of random sequences to test
        max_items: Longest sequence to generate
        seed: Random seed for reproducible tests

    Returns:
        ValidationResult with test outcome
    """
    try:
        rng = random.Random(seed)
        mismatches = []

        for _ in range(n_tests):
            treats = random_treats(rng, max_items)
            incremental = score_treats(treats)
            compiled = int(score_treats_jit(np.array(treats, dtype=np.int64)))
            mood_total = sum(recipient_moods(treats))

            if not incremental == compiled == mood_total:
                mismatches.append((treats, incremental, compiled, mood_total))

        passed = not mismatches
        message = f"Tested {n_tests} random lineups, {len(mismatches)} mismatches found"
        return ValidationResult("Scoring Consistency", passed, message,
                                {"first_mismatch": mismatches[0]} if mismatches else None)

    except Exception as e:
        return ValidationResult("Scoring Consistency", False, f"Error: {e}")

def check_reference_scores() -> ValidationResult:
    """Score the reference sequences in their given order."""
    try:
        failures = []
        for treats, expected in REFERENCE_SCORES:
            actual = score_treats(treats)
            if actual != expected:
                failures.append(f"{treats}: expected {expected}, got {actual}")

        passed = not failures
        message = f"{len(REFERENCE_SCORES) - len(failures)}/{len(REFERENCE_SCORES)} reference scores match"
        return ValidationResult("Reference Scores", passed, message,
                                {"failures": failures} if failures else None)

    except Exception as e:
        return ValidationResult("Reference Scores", False, f"Error: {e}")

def check_reference_solutions(quick: bool = False) -> ValidationResult:
    """Solve the reference inputs and compare against known optima."""
    try:
        cases = REFERENCE_SOLUTIONS
        if quick:
            cases = [case for case in cases if len(case[0]) <= 10]

        failures = []
        for treats, expected in cases:
            lineup, _ = solve_lineup(treats)
            if lineup.happiness != expected:
                failures.append(f"{treats}: expected {expected}, got {lineup.happiness}")
            elif Counter(lineup.treats) != Counter(treats):
                failures.append(f"{treats}: lineup {lineup.treats} is not a permutation")

        passed = not failures
        message = f"{len(cases) - len(failures)}/{len(cases)} reference inputs solved optimally"
        return ValidationResult("Reference Solutions", passed, message,
                                {"failures": failures} if failures else None)

    except Exception as e:
        return ValidationResult("Reference Solutions", False, f"Error: {e}")

def check_initial_guess_validity(n_tests: int = 100, max_items: int = 14,
                                 seed: int = 42) -> ValidationResult:
    """Check that the initial guess is a permutation with an exact score."""
    try:
        rng = random.Random(seed)
        failures = []

        for _ in range(n_tests):
            treats = random_treats(rng, max_items, max_size=7)
            guess = build_initial_guess(treat_size_counts(treats))

            if Counter(guess.treats) != Counter(treats):
                failures.append(f"{treats}: guess {guess.treats} is not a permutation")
            elif guess.happiness != score_treats(guess.treats):
                failures.append(f"{treats}: guess happiness {guess.happiness} "
                                f"!= rescored {score_treats(guess.treats)}")

        passed = not failures
        message = f"Tested {n_tests} random multisets, {len(failures)} invalid guesses"
        return ValidationResult("Initial Guess Validity", passed, message,
                                {"failures": failures[:5]} if failures else None)

    except Exception as e:
        return ValidationResult("Initial Guess Validity", False, f"Error: {e}")

def check_optimality(n_tests: int = 25, max_items: int = 8,
                     seed: int = 42) -> ValidationResult:
    """
    Compare branch-and-bound against exhaustive enumeration.

    Every branch-and-bound lineup must be a permutation of its input, must
    rescore to its reported happiness, and must match the exhaustive optimum.

    Args:
        n_tests: Number of random multisets to test
        max_items: Largest multiset to generate
        seed: Random seed for reproducible tests

    Returns:
        ValidationResult with test outcome
    """
    try:
        rng = random.Random(seed)
        failures = []
        nodes_bb = 0
        nodes_ex = 0

        for _ in range(n_tests):
            treats = random_treats(rng, max_items)
            bb_lineup, bb_stats = solve_lineup(treats)
            ex_lineup, ex_stats = exhaustive_search(treats)
            nodes_bb += bb_stats.nodes_processed
            nodes_ex += ex_stats.nodes_processed

            if bb_lineup.happiness != ex_lineup.happiness:
                failures.append(f"{treats}: branch-and-bound {bb_lineup.happiness}, "
                                f"exhaustive {ex_lineup.happiness}")
            elif Counter(bb_lineup.treats) != Counter(treats):
                failures.append(f"{treats}: lineup {bb_lineup.treats} is not a permutation")
            elif score_treats(bb_lineup.treats) != bb_lineup.happiness:
                failures.append(f"{treats}: lineup {bb_lineup.treats} rescored differently")

        passed = not failures
        message = f"Tested {n_tests} random multisets, {len(failures)} disagreements"
        return ValidationResult("Branch-and-Bound Optimality", passed, message,
                                {"failures": failures[:5],
                                 "bb_nodes": nodes_bb, "exhaustive_lineups": nodes_ex})

    except Exception as e:
        return ValidationResult("Branch-and-Bound Optimality", False, f"Error: {e}")

#-----------------------------------------------------------------------------
# Suite runner
#-----------------------------------------------------------------------------
def run_validation_suite(config: Config, quick: bool = False) -> bool:
    """
    Run all validation checks and print a summary.

    Args:
        config: Configuration object (validation section)
        quick: Skip the slower reference inputs and use fewer random tests

    Returns:
        True if every check passed
    """
    settings = config.validation
    n_random = settings.n_random_tests if not quick else min(settings.n_random_tests, 5)

    print("Running validation suite...")
    results = [
        check_scoring_consistency(seed=settings.random_seed),
        check_reference_scores(),
        check_reference_solutions(quick=quick),
        check_initial_guess_validity(seed=settings.random_seed),
        check_optimality(n_random, settings.max_exhaustive_items, settings.random_seed),
    ]

    suite = ValidationSuite(results)
    suite.print_summary()
    return suite.all_passed
