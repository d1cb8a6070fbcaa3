#!/usr/bin/env python3
"""Solve a Countdown numbers round from the command line."""

import argparse
import logging
import sys

import yaml
from dotenv import load_dotenv

from .config.config import Config
from .games.solver import CountdownSolver

logger = logging.getLogger(__name__)


def non_negative_int(text):
    value = int(text)
    if value < 0:
        raise argparse.ArgumentTypeError(f"must not be negative, got {value}")
    return value


def parse_arguments(argv=None):
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(
        description='Find every way to reach the target with the given numbers')

    parser.add_argument('target', type=int, nargs='?',
                        help='Number to reach (default: the configured round)')
    parser.add_argument('numbers', type=int, nargs='*',
                        help='Available numbers, each usable once')
    parser.add_argument('--limit', '-n', type=non_negative_int, default=None,
                        help='Print at most this many solutions')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Enable verbose logging')

    return parser.parse_args(argv)


def main(argv=None) -> int:
    load_dotenv()
    args = parse_arguments(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s %(levelname)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    try:
        if args.target is None:
            rules = Config(require_token=False).rules
            target, numbers = rules.default_target, rules.default_numbers
        else:
            target, numbers = args.target, args.numbers
        solutions = CountdownSolver().solve(target, numbers)
    except (ValueError, yaml.YAMLError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    print("Numbers:")
    print('  '.join(str(n) for n in numbers))
    print(f"Target: {target}")
    print()

    print("Solutions:")
    shown = solutions if args.limit is None else solutions[:args.limit]
    for solution in shown:
        print(solution)
    print(f"There are {len(solutions)} 'distinct' solutions")
    return 0


if __name__ == "__main__":
    sys.exit(main())
