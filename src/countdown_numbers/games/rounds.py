"""Random rounds: the drawn numbers and the target."""

import random
from typing import List, Optional, Tuple

from ..config.config import GameRules


def generate_numbers(rules: GameRules,
                     rng: Optional[random.Random] = None) -> Tuple[List[int], List[int], List[int]]:
    """
    Draw the numbers for a round.

    Large numbers are drawn without repetition, small ones may repeat.

    Returns:
        Tuple of (all_numbers, large_numbers, small_numbers)
    """
    rng = rng or random.Random()
    large = rng.sample(rules.large_numbers, rules.num_large)
    small = rng.choices(rules.small_numbers, k=rules.num_small)
    return large + small, large, small


def generate_target(rules: GameRules, rng: Optional[random.Random] = None) -> int:
    """Draw a random target number."""
    rng = rng or random.Random()
    return rng.randint(rules.target_min, rules.target_max)
