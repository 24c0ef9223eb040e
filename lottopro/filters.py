from itertools import combinations

SUM_RANGE = (120, 170)
MIN_AC = 7
BANDS = [(1, 15), (16, 30), (31, 45)]
BAND_LIMIT = 4
LOW_MAX = 22   # 1-22 low, 23-45 high


# ---------- Metrics ----------
def ac_value(numbers):
    diffs = {abs(a - b) for a, b in combinations(numbers, 2)}
    return len(diffs) - (len(numbers) - 1)

def odd_even(numbers):
    odds = sum(1 for n in numbers if n % 2 == 1)
    return odds, len(numbers) - odds

def low_high(numbers):
    lows = sum(1 for n in numbers if n <= LOW_MAX)
    return lows, len(numbers) - lows

def band_counts(numbers):
    return [sum(1 for n in numbers if lo <= n <= hi) for lo, hi in BANDS]


# ---------- Filters ----------
def check_sum(numbers):
    return SUM_RANGE[0] <= sum(numbers) <= SUM_RANGE[1]

def check_ac(numbers):
    return ac_value(numbers) >= MIN_AC

def check_mirror(numbers):
    # At least two numbers share a last digit (3, 13, 23 ...)
    return len({n % 10 for n in numbers}) < len(numbers)

def check_matrix(numbers):
    return all(c <= BAND_LIMIT for c in band_counts(numbers))

def check_exclusion(numbers, excluded):
    return not (set(numbers) & set(excluded))


FILTERS = {
    "sum": check_sum,
    "ac": check_ac,
    "mirror": check_mirror,
    "matrix": check_matrix,
}

FILTER_LABELS = {
    "sum": "Sum 120-170",
    "ac": "AC >= 7",
    "mirror": "Mirror digits",
    "matrix": "Matrix balance",
}


def evaluate(numbers, filter_config=None):
    """Pass/fail for every filter, or only the enabled ones when a config is given."""
    names = [k for k in FILTERS if filter_config is None or filter_config.get(k)]
    return {name: FILTERS[name](numbers) for name in names}


def describe(numbers):
    odds, evens = odd_even(numbers)
    lows, highs = low_high(numbers)
    return {
        "sum": sum(numbers),
        "ac": ac_value(numbers),
        "odd_even": f"{odds}:{evens}",
        "low_high": f"{lows}:{highs}",
    }
