from __future__ import annotations

import logging, math, random, re
from dataclasses import dataclass
from typing import Optional, Tuple

from .config import TOTAL_BALLS, SELECT_COUNT, MAX_FIXED, BATCH_SIZE, PHASES
from .sampler import sample, mode_for
from .scorer import score

log = logging.getLogger(__name__)

OK = "ok"
NOT_FOUND = "not_found"
CONFIG_ERROR = "config_error"

# Config error reasons
DUPLICATE_FIXED = "duplicate_fixed"
FIXED_EXCLUDED = "fixed_excluded"
TOO_MANY_FIXED = "too_many_fixed"
FIXED_OUT_OF_RANGE = "fixed_out_of_range"

REASON_TEXT = {
    DUPLICATE_FIXED: "Fixed numbers must be different from each other.",
    FIXED_EXCLUDED: "A fixed number is also in the exclusion list.",
    TOO_MANY_FIXED: f"At most {MAX_FIXED} fixed numbers are allowed.",
    FIXED_OUT_OF_RANGE: f"Fixed numbers must be between 1 and {TOTAL_BALLS}.",
}


@dataclass(frozen=True)
class ScoredCandidate:
    numbers: Tuple[int, ...]
    score: float

    @property
    def display_score(self): return math.floor(self.score)


@dataclass(frozen=True)
class Progress:
    processed: int
    total: int
    percent: int
    phase: str
    best: Optional[ScoredCandidate] = None


@dataclass(frozen=True)
class SearchOutcome:
    status: str
    best: Optional[ScoredCandidate] = None
    reason: Optional[str] = None
    processed: int = 0
    successes: int = 0
    cancelled: bool = False

    @property
    def ok(self): return self.status == OK

    @property
    def message(self):
        if self.status == CONFIG_ERROR:
            return REASON_TEXT.get(self.reason, self.reason)
        if self.cancelled and self.best is None:
            return "Cancelled before any candidate was scored."
        if self.status == NOT_FOUND:
            return "No combination matched the current settings. Try relaxing the filters."
        return ""


# ---------- Input ----------
def parse_numbers(text):
    """Comma separated integers; anything that is not a number is dropped."""
    out = []
    for tok in (text or "").split(","):
        tok = tok.strip()
        if re.fullmatch(r"[+-]?\d+", tok):
            out.append(int(tok))
    return out


def validate(fixed, excluded):
    """Reason code for an unusable fixed/excluded pair, or None."""
    fixed = list(fixed)
    if len(fixed) > MAX_FIXED:
        return TOO_MANY_FIXED
    if len(set(fixed)) != len(fixed):
        return DUPLICATE_FIXED
    if any(not 1 <= n <= TOTAL_BALLS for n in fixed):
        return FIXED_OUT_OF_RANGE
    if set(fixed) & set(excluded):
        return FIXED_EXCLUDED
    return None


def phase_label(fraction):
    label = PHASES[0][1]
    for threshold, text in PHASES[1:]:
        if fraction > threshold:
            label = text
    return label


# ---------- Loop ----------
def iter_search(total_draws, filter_config, fixed=(), excluded=(), weighted=False,
                batch_size=BATCH_SIZE, rng=None, cancel=None):
    """Run the best-of-N search in batches, yielding a Progress after each one.

    The generator's return value (StopIteration.value) is the final SearchOutcome.
    Inputs are assumed to be validated; see run_search.
    """
    rng = rng or random
    mode = mode_for(weighted)
    fixed, excluded = tuple(fixed), frozenset(excluded)
    best = None
    processed = successes = 0
    cancelled = False

    while processed < total_draws:
        if cancel is not None and cancel.is_set():
            cancelled = True
            log.info("Search cancelled after %d/%d draws", processed, total_draws)
            break
        end = min(processed + batch_size, total_draws)
        for _ in range(processed, end):
            numbers = sample(TOTAL_BALLS, SELECT_COUNT, mode, fixed, excluded, rng)
            if numbers is None:
                continue
            successes += 1
            s = score(numbers, filter_config, rng)
            if best is None or s > best.score:
                best = ScoredCandidate(numbers, s)
        processed = end
        fraction = processed / total_draws
        percent = min(100, round(fraction * 100))
        log.debug("Batch done: %d/%d (%d%%)", processed, total_draws, percent)
        yield Progress(processed, total_draws, percent, phase_label(fraction), best)

    if best is None:
        return SearchOutcome(NOT_FOUND, processed=processed, successes=0, cancelled=cancelled)
    return SearchOutcome(OK, best, processed=processed, successes=successes, cancelled=cancelled)


def run_search(total_draws, filter_config, fixed=(), excluded=(), weighted=False,
               batch_size=BATCH_SIZE, rng=None, progress_cb=None, cancel=None):
    reason = validate(fixed, excluded)
    if reason:
        log.info("Rejected run: %s (fixed=%s excluded=%s)", reason, list(fixed), sorted(excluded))
        return SearchOutcome(CONFIG_ERROR, reason=reason)

    gen = iter_search(total_draws, filter_config, fixed, excluded, weighted, batch_size, rng, cancel)
    while True:
        try:
            progress = next(gen)
        except StopIteration as stop:
            outcome = stop.value
            break
        if progress_cb: progress_cb(progress)

    if outcome.ok:
        log.info("Best of %d draws (%d usable): %s score=%.2f", outcome.processed, outcome.successes,
                 "-".join(map(str, outcome.best.numbers)), outcome.best.score)
    else:
        log.info("No candidate found in %d draws", outcome.processed)
    return outcome
