import random

from .config import SCORE_TABLE, NOISE_SPAN
from .filters import FILTERS


def score(numbers, filter_config, rng=None):
    """Random base in [0, NOISE_SPAN) plus reward/penalty for each enabled filter."""
    rng = rng or random
    total = rng.random() * NOISE_SPAN
    for name, check in FILTERS.items():
        if not filter_config.get(name):
            continue
        reward, penalty = SCORE_TABLE[name]
        total += reward if check(numbers) else penalty
    return total
