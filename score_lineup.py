# score_lineup.py
"""
Lineup score calculator: scores treats in exactly the given order.

Example usage:
    python score_lineup.py --treats 3 2 2 3 1 3 4
    python score_lineup.py --treats 2 1 1 2 1 1 1 3 --details --show
"""

import argparse
import sys
from typing import List, Optional

from config import validate_treats
from scoring import lineup_from_treats, recipient_moods, HAPPY, NEUTRAL, UNHAPPY
from display import visualize_lineup, MOOD_MARKERS

MOOD_NAMES = {HAPPY: 'happy', NEUTRAL: 'neutral', UNHAPPY: 'unhappy'}

def print_detailed_breakdown(treats: List[int]) -> None:
    """Print recipient-by-recipient mood breakdown."""
    print(f"\nDetailed Recipient Breakdown:")
    print(f"  {'#':<4} | {'Treat':<5} | {'Mood':<8} | {'Running':<7}")
    print(f"  {'-'*4}-+-{'-'*5}-+-{'-'*8}-+-{'-'*7}")

    moods = recipient_moods(treats)
    running = 0
    for i, (treat, mood) in enumerate(zip(treats, moods), 1):
        running += mood
        label = f"{MOOD_NAMES[mood]} {MOOD_MARKERS.get(mood, '=')}"
        print(f"  {i:<4} | {treat:<5} | {label:<8} | {running:<7}")

def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Calculate the happiness of a treat lineup in the given order.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Basic scoring
  python score_lineup.py --treats 1 2 1 2 1 3 1 1

  # With per-recipient breakdown and ASCII lineup
  python score_lineup.py --treats 3 2 2 3 1 3 4 --details --show
        """
    )
    parser.add_argument('--treats', type=int, nargs='+', required=True,
                        help='Treat sizes in lineup order')
    parser.add_argument('--details', action='store_true',
                        help='Show per-recipient moods')
    parser.add_argument('--show', action='store_true',
                        help='Print the lineup as ASCII art')
    args = parser.parse_args(argv)

    try:
        validate_treats(args.treats)
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    lineup = lineup_from_treats(args.treats)
    print(f"Happiness: {lineup.happiness}")

    if args.details:
        print_detailed_breakdown(lineup.treats)
    if args.show:
        print()
        visualize_lineup(lineup.treats, f"happiness {lineup.happiness}")

    return 0

if __name__ == "__main__":
    sys.exit(main())
