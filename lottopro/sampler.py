import bisect, logging, random

from .config import (TOTAL_BALLS, SELECT_COUNT, MAX_DISCARDS, BASE_WEIGHT, CENTER_RANGE, CENTER_BONUS,
                     HOT_NUMBERS, HOT_BONUS, COLD_NUMBERS, COLD_PENALTY, WEIGHT_NOISE, WEIGHT_FLOOR)

log = logging.getLogger(__name__)

UNIFORM = "uniform"
WEIGHTED = "weighted"


# ---------- Weight table ----------
class WeightTable:
    """Read-only per-ball weights with a precomputed cumulative wheel."""

    def __init__(self, weights):
        self._weights = tuple(float(w) for w in weights)
        if any(w <= 0 for w in self._weights):
            raise ValueError("weights must be positive")
        running, cumulative = 0.0, []
        for w in self._weights:
            running += w; cumulative.append(running)
        self._cumulative = tuple(cumulative)

    def __len__(self): return len(self._weights)

    def __getitem__(self, ball):
        if not 1 <= ball <= len(self._weights):
            raise KeyError(ball)
        return self._weights[ball - 1]

    def items(self):
        return [(i, w) for i, w in enumerate(self._weights, start=1)]

    @property
    def total(self): return self._cumulative[-1]

    def pick(self, rng=None):
        # Roulette wheel over the full table: first ball whose cumulative weight reaches the draw.
        rng = rng or random
        r = rng.random() * self.total
        idx = bisect.bisect_left(self._cumulative, r)
        return min(idx, len(self._weights) - 1) + 1


def base_weight(ball):
    w = BASE_WEIGHT
    if CENTER_RANGE[0] <= ball <= CENTER_RANGE[1]: w += CENTER_BONUS
    if ball in HOT_NUMBERS: w += HOT_BONUS
    if ball in COLD_NUMBERS: w -= COLD_PENALTY
    return w


def build_weight_table(rng=None, max_n=TOTAL_BALLS):
    rng = rng or random
    weights = []
    for ball in range(1, max_n + 1):
        noise = rng.random() * 2 * WEIGHT_NOISE - WEIGHT_NOISE
        weights.append(max(WEIGHT_FLOOR, base_weight(ball) + noise))
    return WeightTable(weights)


_weight_table = None

def get_weight_table():
    global _weight_table
    if _weight_table is None:
        _weight_table = build_weight_table()
        log.debug("Built weight table (total=%.3f)", _weight_table.total)
    return _weight_table


# ---------- Sampling ----------
def sample(max_n=TOTAL_BALLS, count=SELECT_COUNT, mode=UNIFORM, fixed=(), excluded=(), rng=None, weights=None):
    """Draw `count` distinct balls from 1..max_n.

    Fixed numbers seed the pick, excluded and repeated draws are thrown away.
    Returns a sorted tuple, or None once MAX_DISCARDS draws have been rejected.
    """
    rng = rng or random
    if mode == WEIGHTED:
        table = weights or get_weight_table()
        draw = lambda: table.pick(rng)
    elif mode == UNIFORM:
        draw = lambda: rng.randint(1, max_n)
    else:
        raise ValueError(f"unknown sampling mode: {mode!r}")

    excluded = set(excluded)
    picks = set(fixed)
    discards = 0
    while len(picks) < count:
        n = draw()
        if n in picks or n in excluded:
            discards += 1
            if discards >= MAX_DISCARDS:
                log.debug("Sampler exhausted after %d discards (have %s)", discards, sorted(picks))
                return None
            continue
        picks.add(n)
    return tuple(sorted(picks))


def mode_for(weighted):
    return WEIGHTED if weighted else UNIFORM
